"""
UMKM Post Model
"""

from extensions import db
from datetime import datetime
from jambangan.services.storage_service import ImageStorage


class UmkmPost(db.Model):
    """Small-business listing, hidden from the public until approved"""

    __tablename__ = 'umkm_posts'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(100))
    address = db.Column(db.String(255))
    image = db.Column(db.String(255), nullable=False)
    is_approved = db.Column(db.Boolean, default=False, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __init__(self, **kwargs):
        """Initialize listing, always unapproved"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
        self.is_approved = False

    def set_approval(self, approved):
        """Set the moderation flag; repeating a transition changes nothing"""
        self.is_approved = bool(approved)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'category': self.category,
            'address': self.address,
            'image': self.image,
            'image_url': ImageStorage.resolve_url(self.image),
            'isApproved': self.is_approved,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<UmkmPost {self.title}>'
