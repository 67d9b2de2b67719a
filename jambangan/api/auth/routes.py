"""
Authentication Routes
"""

from flask import Blueprint, request, jsonify, current_app, g
from flask_jwt_extended import get_jwt, set_access_cookies, unset_jwt_cookies
from sqlalchemy.exc import SQLAlchemyError
from extensions import db, limiter
from jambangan.models.user import User
from jambangan.services.token_service import TokenService
from jambangan.utils.decorators import user_required

auth_bp = Blueprint('auth', __name__)

LOGIN_FAILED_MESSAGE = 'Incorrect username or password.'


@auth_bp.route('/', methods=['GET'])
@user_required()
def whoami():
    """Return the identity carried by the session token"""
    return jsonify({
        'status': 'Success',
        'id': g.user_id,
        'name': g.user_name,
        'level': g.user_level
    }), 200


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(lambda: current_app.config.get('LOGIN_RATE_LIMIT', '50 per hour'))
def login():
    """Login user"""
    data = request.get_json(silent=True) or request.form.to_dict()
    if not isinstance(data, dict):
        return jsonify({'message': 'Username and password are required'}), 400

    username = data.get('username')
    password = data.get('password')

    # Validate required fields
    if not username or not password:
        return jsonify({'message': 'Username and password are required'}), 400

    if not isinstance(username, str) or not isinstance(password, str):
        return jsonify({'message': 'Username and password must be strings'}), 400

    try:
        user = User.query.filter_by(username=username).first()

        # Case-sensitive match even on collations that ignore case
        if not user or user.username != username or not user.check_password(password):
            current_app.logger.info(f'Failed login attempt for {username!r}')
            return jsonify({'message': LOGIN_FAILED_MESSAGE}), 401

        token = TokenService.issue(user)

        user.is_active = True
        db.session.commit()

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Login error: {str(e)}')
        return jsonify({'message': 'Server Error'}), 500

    current_app.logger.info(f'User {user.username} logged in')

    resp = jsonify({
        'status': 'Success',
        'level': user.level,
        'token': token
    })
    set_access_cookies(resp, token)
    return resp, 200


@auth_bp.route('/logout', methods=['GET'])
@user_required()
def logout():
    """Mark the account offline, revoke the token and clear the cookie"""
    try:
        user = db.session.get(User, g.user_id)

        if not user:
            return jsonify({'message': 'User not found'}), 404

        user.is_active = False

        if current_app.config.get('JWT_REVOKE_ON_LOGOUT', True):
            TokenService.revoke(get_jwt())

        db.session.commit()

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Logout error: {str(e)}')
        return jsonify({'message': 'Server Error'}), 500

    current_app.logger.info(f'User {user.username} logged out')

    resp = jsonify({'status': 'Success'})
    unset_jwt_cookies(resp)
    return resp, 200
