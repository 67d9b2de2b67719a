"""
Server-local time helpers
"""

from datetime import datetime

import pytz
from flask import current_app

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def local_now():
    """Current wall-clock time in the configured timezone, stored naive"""
    tz = pytz.timezone(current_app.config.get('APP_TIMEZONE', 'Asia/Jakarta'))
    return datetime.now(tz).replace(tzinfo=None, microsecond=0)


def format_date(value):
    return value.strftime(DATE_FORMAT) if value else None
