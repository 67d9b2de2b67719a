"""
API Package
"""

# Import all blueprints for easy access
from jambangan.api.auth import auth_bp
from jambangan.api.users import users_bp
from jambangan.api.complaints import complaints_bp
from jambangan.api.maps import maps_bp
from jambangan.api.reports import reports_bp
from jambangan.api.umkm import umkm_bp
from jambangan.api.uploads import uploads_bp

__all__ = [
    'auth_bp',
    'users_bp',
    'complaints_bp',
    'maps_bp',
    'reports_bp',
    'umkm_bp',
    'uploads_bp',
]
