"""
Users Blueprint
"""

from flask import Blueprint
from jambangan.api.users.routes import users_bp

__all__ = ['users_bp']
