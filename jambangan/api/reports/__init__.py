"""
Report Data Blueprint
"""

from flask import Blueprint
from jambangan.api.reports.routes import reports_bp

__all__ = ['reports_bp']
