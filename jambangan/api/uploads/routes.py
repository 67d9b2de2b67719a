"""
Uploaded Image Routes
"""

from flask import Blueprint, current_app, redirect, send_from_directory
from jambangan.services.storage_service import ImageStorage, S3Backend

uploads_bp = Blueprint('uploads', __name__)


@uploads_bp.route('/<path:filename>', methods=['GET'])
def serve_upload(filename):
    """Serve a stored image by its reference"""
    if ImageStorage.backend() is S3Backend:
        return redirect(S3Backend.url_for(filename))

    # send_from_directory rejects paths that escape UPLOAD_FOLDER
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
