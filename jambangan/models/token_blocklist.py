"""
Token Blocklist Model
"""

from extensions import db
from datetime import datetime


class TokenBlocklist(db.Model):
    """Access tokens revoked before their natural expiry"""

    __tablename__ = 'token_blocklist'

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(64), unique=True, nullable=False, index=True)
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    @staticmethod
    def is_revoked(jti):
        """Check whether a token id has been revoked"""
        return db.session.query(TokenBlocklist.id).filter_by(jti=jti).first() is not None

    @staticmethod
    def revoke(jti, expires_at):
        """Add a token id to the blocklist; caller commits"""
        if not TokenBlocklist.is_revoked(jti):
            db.session.add(TokenBlocklist(jti=jti, expires_at=expires_at))

    @staticmethod
    def prune_expired(now=None):
        """Delete entries whose token has expired anyway"""
        now = now or datetime.utcnow()
        deleted = TokenBlocklist.query.filter(TokenBlocklist.expires_at < now).delete()
        db.session.commit()
        return deleted

    def __repr__(self):
        return f'<TokenBlocklist {self.jti[:10]}...>'
