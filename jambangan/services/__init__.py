"""
Services Package
Business logic and external service integrations
"""

from jambangan.services.storage_service import ImageStorage
from jambangan.services.token_service import TokenService

__all__ = [
    'ImageStorage',
    'TokenService',
]
