from flask import Blueprint, jsonify, g
from jambangan.models.complaint import Complaint
from jambangan.models.map_annotation import MapAnnotation
from jambangan.utils.decorators import user_required
from extensions import db

maps_bp = Blueprint('maps', __name__)


def _markers(annotations):
    """Decode geometry per row, skipping rows that have none"""
    return [annotation.to_marker() for annotation in annotations if annotation.coordinates]


@maps_bp.route('', methods=['GET'])
def get_maps():
    """Get every map row"""
    annotations = MapAnnotation.query.order_by(MapAnnotation.id).all()
    return jsonify({'mapsData': [annotation.to_dict() for annotation in annotations]}), 200


@maps_bp.route('/all', methods=['GET'])
def get_all_coordinates():
    """Get markers for every complaint"""
    annotations = MapAnnotation.query.order_by(MapAnnotation.id).all()
    return jsonify({'coordinates': _markers(annotations)}), 200


@maps_bp.route('/user/<int:user_id>', methods=['GET'])
@user_required()
def get_user_coordinates(user_id):
    """Get markers for the caller's own complaints; the path id is not trusted"""
    annotations = db.session.query(MapAnnotation) \
        .join(Complaint, MapAnnotation.complaint_id == Complaint.id) \
        .filter(Complaint.user_id == g.user_id) \
        .order_by(MapAnnotation.id).all()
    return jsonify({'coordinates': _markers(annotations)}), 200
