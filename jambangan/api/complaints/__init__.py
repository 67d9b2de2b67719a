"""
Complaints Blueprint
"""

from flask import Blueprint
from jambangan.api.complaints.routes import complaints_bp

__all__ = ['complaints_bp']
