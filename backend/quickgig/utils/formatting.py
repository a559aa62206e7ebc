"""
Response formatting helpers shared by the services.
"""
from datetime import datetime

# SQLite's CURRENT_TIMESTAMP text form.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(value):
    """Render a stored timestamp the way the store writes it (UTC, no 'T')."""
    if isinstance(value, datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    return value
