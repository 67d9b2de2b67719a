"""
Complaint Response Model
"""

from extensions import db
from jambangan.services.storage_service import ImageStorage
from jambangan.utils.clock import format_date


class ComplaintResponse(db.Model):
    """Reply to a complaint, optionally carrying a photo"""

    __tablename__ = 'complaint_responses'

    id = db.Column(db.Integer, primary_key=True)
    complaint_id = db.Column(db.Integer, db.ForeignKey('complaints.id', ondelete='CASCADE'),
                             nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    image = db.Column(db.String(255), nullable=True)
    date = db.Column(db.DateTime, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'complaint_id': self.complaint_id,
            'text': self.text,
            'image': self.image,
            'image_url': ImageStorage.resolve_url(self.image),
            'date_responses': format_date(self.date),
        }

    def __repr__(self):
        return f'<ComplaintResponse {self.id} for {self.complaint_id}>'
