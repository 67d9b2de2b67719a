"""
Uploads Blueprint
"""

from flask import Blueprint
from jambangan.api.uploads.routes import uploads_bp

__all__ = ['uploads_bp']
