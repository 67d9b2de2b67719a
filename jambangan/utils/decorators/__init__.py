"""
Route guards built on the session token
"""

from jambangan.utils.decorators.user_required import user_required
from jambangan.utils.decorators.admin_required import admin_required

__all__ = ['user_required', 'admin_required']
