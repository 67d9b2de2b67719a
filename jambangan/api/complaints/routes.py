"""
Complaint Routes
Complaints, their responses and the map annotation written alongside each one
"""

from flask import Blueprint, request, jsonify, current_app, g
from sqlalchemy.exc import SQLAlchemyError
from jambangan.models.complaint import Complaint, WAITING_STATUS
from jambangan.models.complaint_response import ComplaintResponse
from jambangan.models.map_annotation import MapAnnotation
from jambangan.models.user import User
from jambangan.services.storage_service import ImageStorage
from jambangan.utils.clock import local_now
from jambangan.utils.decorators import user_required, admin_required
from extensions import db

complaints_bp = Blueprint('complaints', __name__)


def _joined_complaints(user_id=None):
    """Complaints joined with the submitter's username"""
    query = db.session.query(Complaint, User.username).join(User, Complaint.user_id == User.id)
    if user_id is not None:
        query = query.filter(Complaint.user_id == user_id)

    results = []
    for complaint, username in query.order_by(Complaint.id).all():
        data = complaint.to_dict()
        data['username'] = username
        results.append(data)
    return results


@complaints_bp.route('/complaints', methods=['GET'])
@admin_required()
def get_complaints():
    """Get every complaint (admin only)"""
    return jsonify(_joined_complaints()), 200


@complaints_bp.route('/complaints/user/<int:user_id>', methods=['GET'])
@user_required()
def get_user_complaints(user_id):
    """Get complaints submitted by one user"""
    return jsonify(_joined_complaints(user_id)), 200


@complaints_bp.route('/complaints/<int:complaint_id>', methods=['GET'])
@user_required()
def get_complaint(complaint_id):
    """Get single complaint by ID"""
    complaint = db.session.get(Complaint, complaint_id)

    if not complaint:
        return jsonify({'message': 'Complaint not found'}), 404

    return jsonify(complaint.to_dict()), 200


@complaints_bp.route('/complaints', methods=['POST'])
@user_required()
def submit_complaint():
    """Submit a complaint with its photo and map annotation"""
    file = request.files.get('image')

    if not file or file.filename == '':
        return jsonify({'message': 'Image is required'}), 400

    if not ImageStorage.allowed_file(file.filename):
        return jsonify({'message': 'Image must be a png, jpg, jpeg or gif file'}), 400

    form = request.form
    text = (form.get('text') or '').strip()
    complaint_type = (form.get('type') or '').strip()

    if not text or not complaint_type:
        return jsonify({'message': 'Text and type are required'}), 400

    try:
        coordinates = MapAnnotation.encode_geometry(form.get('coordinates'))
    except ValueError:
        return jsonify({'message': 'Coordinates must be valid JSON'}), 400

    image_ref = ImageStorage.upload(file, folder='complaints')
    if not image_ref:
        return jsonify({'message': 'Failed to upload image'}), 500

    complaint = Complaint(
        user_id=g.user_id,
        text=text,
        type=complaint_type,
        address=form.get('address', form.get('alamat')),
        image=image_ref,
        date=local_now(),
        status=form.get('status') or WAITING_STATUS,
        note=form.get('note', form.get('keterangan')),
    )
    complaint.map_annotation = MapAnnotation(
        popup_content=form.get('popup_content'),
        coordinates=coordinates,
    )

    # Complaint and map row are committed together or not at all
    try:
        db.session.add(complaint)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        ImageStorage.delete(image_ref)
        current_app.logger.error(f'Error inserting complaint: {str(e)}')
        return jsonify({'message': 'Server error'}), 500

    return jsonify({
        'message': 'Complaint and map data submitted successfully',
        'lastInsertId': complaint.id
    }), 201


@complaints_bp.route('/complaint_responses', methods=['GET'])
@admin_required()
def get_all_responses():
    """Get every complaint response (admin only)"""
    responses = ComplaintResponse.query.order_by(ComplaintResponse.id).all()
    return jsonify({'responses': [response.to_dict() for response in responses]}), 200


@complaints_bp.route('/complaints/<int:complaint_id>/responses', methods=['GET'])
@user_required()
def get_responses(complaint_id):
    """Get responses for one complaint"""
    responses = ComplaintResponse.query.filter_by(complaint_id=complaint_id) \
        .order_by(ComplaintResponse.id).all()
    return jsonify({'responses': [response.to_dict() for response in responses]}), 200


@complaints_bp.route('/complaints/<int:complaint_id>/responses', methods=['POST'])
@user_required()
def create_response(complaint_id):
    """Respond to a complaint, optionally moving it to a new status"""
    text = (request.form.get('text') or '').strip()
    status = (request.form.get('status') or '').strip()
    file = request.files.get('image_url')

    if not text:
        return jsonify({'message': 'Text is required'}), 400

    if file and file.filename and not ImageStorage.allowed_file(file.filename):
        return jsonify({'message': 'Image must be a png, jpg, jpeg or gif file'}), 400

    complaint = db.session.get(Complaint, complaint_id)
    if not complaint:
        return jsonify({'message': 'Complaint not found'}), 404

    image_ref = None
    if file and file.filename:
        image_ref = ImageStorage.upload(file, folder='responses')
        if not image_ref:
            return jsonify({'message': 'Failed to upload image'}), 500

    response = ComplaintResponse(
        complaint_id=complaint.id,
        text=text,
        image=image_ref,
        date=local_now(),
    )

    # Response row and status change share one transaction
    try:
        db.session.add(response)
        if status:
            complaint.status = status
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        ImageStorage.delete(image_ref)
        current_app.logger.error(f'Error inserting response: {str(e)}')
        return jsonify({'message': 'Server error'}), 500

    if status:
        return jsonify({'message': 'Response and status updated successfully', 'id': response.id}), 201
    return jsonify({'message': 'Response added successfully', 'id': response.id}), 201
