"""
Maps Blueprint
"""

from flask import Blueprint
from jambangan.api.maps.routes import maps_bp

__all__ = ['maps_bp']
