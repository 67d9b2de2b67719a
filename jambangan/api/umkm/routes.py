"""
UMKM Routes
Business listings, moderated before they appear on the public pages
"""

from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from jambangan.models.umkm_post import UmkmPost
from jambangan.services.storage_service import ImageStorage
from jambangan.utils.decorators import user_required, admin_required

umkm_bp = Blueprint('umkm', __name__)

EDITABLE_FIELDS = ['title', 'content', 'address', 'category']

# Field names still sent by older frontends
FIELD_ALIASES = {'title': 'judul', 'address': 'alamat', 'category': 'kategori'}
REQUIRED_FIELDS = ['title', 'content']


def _submitted_fields(form):
    """Editable fields present in the form, under their current or older name"""
    data = {}
    for field in EDITABLE_FIELDS:
        for name in (field, FIELD_ALIASES.get(field)):
            if name and name in form:
                data[field] = (form.get(name) or '').strip()
                break
    return data


@umkm_bp.route('/umkm/posts', methods=['GET'])
@user_required()
def get_posts():
    """Get every listing, approved or not"""
    posts = UmkmPost.query.order_by(UmkmPost.id).all()
    return jsonify([post.to_dict() for post in posts]), 200


@umkm_bp.route('/umkm/<int:post_id>', methods=['GET'])
def get_post(post_id):
    """Get single listing by ID"""
    post = db.session.get(UmkmPost, post_id)

    if not post:
        return jsonify({'message': 'UMKM not found'}), 404

    return jsonify(post.to_dict()), 200


@umkm_bp.route('/posts', methods=['POST'])
@user_required()
def create_post():
    """Submit a listing for review"""
    file = request.files.get('image')

    if not file or file.filename == '':
        return jsonify({'message': 'Image is required'}), 400

    if not ImageStorage.allowed_file(file.filename):
        return jsonify({'message': 'Image must be a png, jpg, jpeg or gif file'}), 400

    data = _submitted_fields(request.form)

    if not all(data.get(field) for field in REQUIRED_FIELDS):
        return jsonify({'message': 'Title and content are required'}), 400

    image_ref = ImageStorage.upload(file, folder='umkm')
    if not image_ref:
        return jsonify({'message': 'Failed to upload image'}), 500

    try:
        post = UmkmPost(image=image_ref, **data)
        db.session.add(post)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        ImageStorage.delete(image_ref)
        current_app.logger.error(f'Error inserting post: {str(e)}')
        return jsonify({'message': 'Server Error'}), 500

    return jsonify({'message': 'Posts submitted for review', 'id': post.id}), 201


@umkm_bp.route('/umkm/posts/<int:post_id>', methods=['PUT'])
@admin_required()
def update_post(post_id):
    """Update a listing, replacing the image only when a new one is uploaded"""
    post = db.session.get(UmkmPost, post_id)

    if not post:
        return jsonify({'message': 'Post not found'}), 404

    file = request.files.get('image')
    if file and file.filename and not ImageStorage.allowed_file(file.filename):
        return jsonify({'message': 'Image must be a png, jpg, jpeg or gif file'}), 400

    data = _submitted_fields(request.form)
    if any(field in data and not data[field] for field in REQUIRED_FIELDS):
        return jsonify({'message': 'Title and content cannot be empty'}), 400

    old_image = None
    new_image = None
    if file and file.filename:
        new_image = ImageStorage.upload(file, folder='umkm')
        if not new_image:
            return jsonify({'message': 'Failed to upload image'}), 500
        old_image = post.image
        post.image = new_image

    for field, value in data.items():
        setattr(post, field, value)

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        ImageStorage.delete(new_image)
        current_app.logger.error(f'Error updating post: {str(e)}')
        return jsonify({'message': 'Server Error'}), 500

    if old_image:
        ImageStorage.delete(old_image)

    return jsonify({'message': 'Post Updated Successfully', 'post': post.to_dict()}), 200


@umkm_bp.route('/umkm/<int:post_id>', methods=['DELETE'])
@admin_required()
def delete_post(post_id):
    """Delete a listing"""
    post = db.session.get(UmkmPost, post_id)

    if not post:
        return jsonify({'message': 'Post not found'}), 404

    image_ref = post.image
    try:
        db.session.delete(post)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error deleting post: {str(e)}')
        return jsonify({'message': 'Server Error'}), 500

    ImageStorage.delete(image_ref)
    return jsonify({'message': 'Posts deleted successfully'}), 200


def _set_approval(post_id, approved, message):
    post = db.session.get(UmkmPost, post_id)

    if not post:
        return jsonify({'message': 'Post not found'}), 404

    try:
        post.set_approval(approved)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error moderating post {post_id}: {str(e)}')
        return jsonify({'message': 'Server Error'}), 500

    current_app.logger.info(f'Post {post_id} approval set to {approved}')
    return jsonify({'message': message, 'isApproved': post.is_approved}), 200


@umkm_bp.route('/umkm/posts/<int:post_id>/approve', methods=['PATCH'])
@admin_required()
def approve_post(post_id):
    """Make a listing public"""
    return _set_approval(post_id, True, 'Post approved succesfully')


@umkm_bp.route('/umkm/posts/<int:post_id>/take-down', methods=['PATCH'])
@admin_required()
def take_down_post(post_id):
    """Hide a listing from the public pages"""
    return _set_approval(post_id, False, 'Post taken down successfully')


@umkm_bp.route('/public/posts', methods=['GET'])
def get_public_posts():
    """Get approved listings"""
    posts = UmkmPost.query.filter_by(is_approved=True).order_by(UmkmPost.id).all()
    return jsonify([post.to_dict() for post in posts]), 200


@umkm_bp.route('/public/posts/<int:post_id>', methods=['GET'])
def get_public_post(post_id):
    """Get one approved listing"""
    post = UmkmPost.query.filter_by(id=post_id, is_approved=True).first()

    if not post:
        return jsonify({'message': 'Post not found'}), 404

    return jsonify(post.to_dict()), 200
