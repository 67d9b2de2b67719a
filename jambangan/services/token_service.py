"""
Session Token Service
Issues and verifies the signed session token carried in the "token" cookie
"""

from datetime import datetime, timezone

from flask import current_app, jsonify
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import DecodeError, PyJWTError

TOKEN_REQUIRED_MESSAGE = 'Token is required, please provide a token'
TOKEN_INVALID_MESSAGE = 'Token has expired or is invalid'


class TokenService:
    """Service for the signed, time-limited session token"""

    @staticmethod
    def signing_keys():
        return current_app.config.get('JWT_SIGNING_KEYS') or {}

    @staticmethod
    def active_key_id():
        return current_app.config.get('JWT_ACTIVE_KEY_ID')

    @staticmethod
    def issue(user, expires_delta=None):
        """
        Issue a token for an account

        Args:
            user: User row
            expires_delta: Override for JWT_ACCESS_TOKEN_EXPIRES

        Returns:
            Encoded token carrying the account id, display name and role
        """
        return create_access_token(
            identity=str(user.id),
            additional_claims={'name': user.username, 'level': user.level},
            additional_headers={'kid': TokenService.active_key_id()},
            expires_delta=expires_delta
        )

    @staticmethod
    def verify(token):
        """
        Verify a token outside of a request

        Returns:
            {'id', 'name', 'level'} or None for any malformed, expired,
            badly signed or revoked token
        """
        from jambangan.models.token_blocklist import TokenBlocklist

        if not token:
            return None
        try:
            claims = decode_token(token)
        except (JWTExtendedException, PyJWTError):
            return None

        if TokenBlocklist.is_revoked(claims.get('jti')):
            return None

        return TokenService.identity_from_claims(claims)

    @staticmethod
    def identity_from_claims(claims):
        return {
            'id': int(claims['sub']),
            'name': claims.get('name'),
            'level': claims.get('level'),
        }

    @staticmethod
    def revoke(claims):
        """Blocklist a token until its natural expiry; caller commits"""
        from jambangan.models.token_blocklist import TokenBlocklist

        expires_at = datetime.fromtimestamp(claims['exp'], timezone.utc).replace(tzinfo=None)
        TokenBlocklist.revoke(claims['jti'], expires_at)


def register_jwt_callbacks(jwt):
    """Wire key rotation, revocation and uniform 401 bodies into the JWT manager"""

    @jwt.encode_key_loader
    def encode_key(identity):
        keys = TokenService.signing_keys()
        return keys[TokenService.active_key_id()]

    @jwt.decode_key_loader
    def decode_key(jwt_header, jwt_payload):
        key = TokenService.signing_keys().get(jwt_header.get('kid'))
        if key is None:
            raise DecodeError('Unknown signing key')
        return key

    @jwt.token_in_blocklist_loader
    def token_revoked(jwt_header, jwt_payload):
        from jambangan.models.token_blocklist import TokenBlocklist
        return TokenBlocklist.is_revoked(jwt_payload['jti'])

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({'message': TOKEN_REQUIRED_MESSAGE}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({'message': TOKEN_INVALID_MESSAGE}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({'message': TOKEN_INVALID_MESSAGE}), 401

    @jwt.revoked_token_loader
    def revoked_token(jwt_header, jwt_payload):
        return jsonify({'message': TOKEN_INVALID_MESSAGE}), 401
