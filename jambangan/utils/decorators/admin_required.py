from functools import wraps

from flask import jsonify

from jambangan.models.user import UserRole
from jambangan.utils.decorators.user_required import load_identity


def admin_required():
    """Same as user_required, plus 403 unless the token carries the Admin role"""
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            identity = load_identity()
            if identity['level'] != UserRole.ADMIN.value:
                return jsonify({'message': 'Access denied. Admin privileges required'}), 403
            return fn(*args, **kwargs)
        return decorator
    return wrapper
