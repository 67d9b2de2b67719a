from functools import wraps

from flask import g
from flask_jwt_extended import get_jwt, verify_jwt_in_request

from jambangan.services.token_service import TokenService


def load_identity():
    """Verify the token cookie and expose its identity on flask.g"""
    verify_jwt_in_request()
    identity = TokenService.identity_from_claims(get_jwt())
    g.user_id = identity['id']
    g.user_name = identity['name']
    g.user_level = identity['level']
    return identity


def user_required():
    """Reject requests without a valid, unrevoked, unexpired token cookie"""
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            load_identity()
            return fn(*args, **kwargs)
        return decorator
    return wrapper
