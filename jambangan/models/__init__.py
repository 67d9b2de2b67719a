"""
Models package initialization
Import all models here for easy access
"""

from jambangan.models.user import User, UserRole
from jambangan.models.complaint import Complaint, WAITING_STATUS
from jambangan.models.complaint_response import ComplaintResponse
from jambangan.models.map_annotation import MapAnnotation
from jambangan.models.umkm_post import UmkmPost
from jambangan.models.token_blocklist import TokenBlocklist

__all__ = [
    'User',
    'UserRole',
    'Complaint',
    'WAITING_STATUS',
    'ComplaintResponse',
    'MapAnnotation',
    'UmkmPost',
    'TokenBlocklist',
]
