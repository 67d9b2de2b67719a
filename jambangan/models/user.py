"""
User Model
"""

from extensions import db, bcrypt
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """User roles enum"""
    USER = 'User'
    ADMIN = 'Admin'


class User(db.Model):
    """Account used to log in, either an ordinary citizen or an admin"""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Role and status
    level = db.Column(db.String(20), default=UserRole.USER.value, nullable=False)
    is_active = db.Column(db.Boolean, default=False, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    complaints = db.relationship('Complaint', backref='user', cascade='all, delete-orphan')

    def __init__(self, username, password, level=UserRole.USER.value, **kwargs):
        """Initialize user with hashed password"""
        self.username = username
        self.set_password(password)
        self.level = UserRole(level).value

        # Handle optional fields
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Verify password against hash"""
        return bcrypt.check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.level == UserRole.ADMIN.value

    def to_dict(self):
        """Convert user to dictionary"""
        return {
            'id': self.id,
            'username': self.username,
            'level': self.level,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<User {self.username}>'
