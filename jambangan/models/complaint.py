from extensions import db
from jambangan.services.storage_service import ImageStorage
from jambangan.utils.clock import format_date

WAITING_STATUS = 'Menunggu Respon'


class Complaint(db.Model):
    __tablename__ = 'complaints'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(100), nullable=False)
    address = db.Column(db.String(255))
    image = db.Column(db.String(255), nullable=False)
    date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.String(50), default=WAITING_STATUS, nullable=False)
    note = db.Column(db.Text, nullable=True)

    responses = db.relationship('ComplaintResponse', backref='complaint', cascade='all, delete-orphan')
    map_annotation = db.relationship('MapAnnotation', backref='complaint', uselist=False,
                                     cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'idcomplaint': self.id,
            'iduser': self.user_id,
            'text': self.text,
            'type': self.type,
            'address': self.address,
            'image': self.image,
            'image_url': ImageStorage.resolve_url(self.image),
            'date': format_date(self.date),
            'status': self.status,
            'note': self.note,
        }
