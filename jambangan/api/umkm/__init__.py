"""
UMKM Blueprint
"""

from flask import Blueprint
from jambangan.api.umkm.routes import umkm_bp

__all__ = ['umkm_bp']
