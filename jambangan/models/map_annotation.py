"""
Map Annotation Model
"""

import json

from extensions import db


class MapAnnotation(db.Model):
    """Geometry and popup label shown on the complaint map"""

    __tablename__ = 'maps'

    id = db.Column(db.Integer, primary_key=True)
    complaint_id = db.Column(db.Integer, db.ForeignKey('complaints.id', ondelete='CASCADE'),
                             unique=True, nullable=False)
    popup_content = db.Column(db.Text)
    coordinates = db.Column(db.Text, nullable=True)  # JSON-encoded geometry

    @staticmethod
    def encode_geometry(raw):
        """
        Normalize submitted geometry into its stored form

        Args:
            raw: JSON string from a form field, or an already-decoded structure

        Returns:
            Compact JSON string, or None when nothing was submitted

        Raises:
            ValueError: if a string is not valid JSON
        """
        if isinstance(raw, str):
            raw = json.loads(raw) if raw.strip() else None
        if raw is None:
            return None
        return json.dumps(raw, separators=(',', ':'))

    @property
    def geometry(self):
        if not self.coordinates:
            return None
        return json.loads(self.coordinates)

    def to_dict(self):
        return {
            'id': self.id,
            'complaint_id': self.complaint_id,
            'popup_content': self.popup_content,
            'coordinates': self.geometry,
        }

    def to_marker(self):
        return {
            'coordinates': self.geometry,
            'popup_content': self.popup_content,
        }
