"""
Users Blueprint
Account management, admin only
"""

from flask import Blueprint, jsonify, request, current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from jambangan.models.user import User, UserRole
from jambangan.models.complaint import Complaint
from extensions import db
from jambangan.utils.decorators import admin_required

users_bp = Blueprint('users', __name__)

DUPLICATE_USERNAME_MESSAGE = 'Username already exists. Choose a different username.'


def _has_string_fields(data, *keys):
    """True when data is an object and each given key is absent or a string"""
    if not isinstance(data, dict):
        return False
    return all(data.get(key) is None or isinstance(data.get(key), str) for key in keys)


def _parse_bool(value):
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


@users_bp.route('', methods=['GET'])
@admin_required()
def get_users():
    """Get all users"""
    users = User.query.order_by(User.id).all()
    return jsonify([user.to_dict() for user in users]), 200


@users_bp.route('/<int:user_id>', methods=['GET'])
@admin_required()
def get_user(user_id):
    """Get one user"""
    user = db.session.get(User, user_id)

    if not user:
        return jsonify({'message': 'User not found'}), 404

    return jsonify(user.to_dict()), 200


@users_bp.route('/<int:user_id>/hasposts', methods=['GET'])
@admin_required()
def has_posts(user_id):
    """Tell whether a user has submitted any complaint"""
    post_count = Complaint.query.filter_by(user_id=user_id).count()
    return jsonify({'hasPosts': post_count > 0}), 200


@users_bp.route('', methods=['POST'])
@admin_required()
def create_user():
    """Create a user"""
    data = request.get_json(silent=True) or {}

    if not _has_string_fields(data, 'username', 'password', 'level'):
        return jsonify({'message': 'Username, password and level must be strings'}), 400

    username = (data.get('username') or '').strip()
    password = data.get('password')
    level = data.get('level') or UserRole.USER.value

    if not username or not password:
        return jsonify({'message': 'Username and password are required'}), 400

    if level not in {role.value for role in UserRole}:
        return jsonify({'message': 'Level must be Admin or User'}), 400

    try:
        # Check if the username already exists
        if User.query.filter_by(username=username).first():
            return jsonify({'message': DUPLICATE_USERNAME_MESSAGE}), 400

        user = User(
            username=username,
            password=password,
            level=level,
            is_active=_parse_bool(data.get('is_active', data.get('aktif')))
        )
        db.session.add(user)
        db.session.commit()

    except IntegrityError:
        # Lost a race against a concurrent insert of the same username
        db.session.rollback()
        return jsonify({'message': DUPLICATE_USERNAME_MESSAGE}), 400
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Create user error: {str(e)}')
        return jsonify({'message': 'Server error'}), 500

    return jsonify({'message': 'User created successfully', 'user': user.to_dict()}), 201


@users_bp.route('/<int:user_id>', methods=['PUT'])
@admin_required()
def update_user(user_id):
    """Update username and, if given, password"""
    data = request.get_json(silent=True) or {}

    if not _has_string_fields(data, 'username', 'password'):
        return jsonify({'message': 'Username and password must be strings'}), 400

    username = (data.get('username') or '').strip()
    password = data.get('password')

    try:
        user = db.session.get(User, user_id)

        if not user:
            return jsonify({'message': 'User not found'}), 404

        if username:
            # Check if the username is taken by someone else
            existing = User.query.filter(User.username == username, User.id != user_id).first()
            if existing:
                return jsonify({'message': DUPLICATE_USERNAME_MESSAGE}), 400
            user.username = username

        # Re-hash only when a new password is provided
        if password:
            user.set_password(password)

        db.session.commit()

    except IntegrityError:
        db.session.rollback()
        return jsonify({'message': DUPLICATE_USERNAME_MESSAGE}), 400
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error updating user: {str(e)}')
        return jsonify({'message': 'Server Error'}), 500

    return jsonify({'message': 'User updated successfully'}), 200


@users_bp.route('/<int:user_id>', methods=['DELETE'])
@admin_required()
def delete_user(user_id):
    """Delete a user together with their complaints"""
    try:
        user = db.session.get(User, user_id)

        if not user:
            return jsonify({'message': 'User not found'}), 404

        db.session.delete(user)
        db.session.commit()

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error deleting user: {str(e)}')
        return jsonify({'message': 'Server Error'}), 500

    current_app.logger.info(f'Deleted user {user_id}')
    return jsonify({'message': 'User deleted successfully'}), 200
