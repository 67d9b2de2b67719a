"""
Authentication Blueprint
"""

from flask import Blueprint
from jambangan.api.auth.routes import auth_bp

__all__ = ['auth_bp']
