from sqlalchemy import Column, DateTime, String
from datetime import datetime
import pytz


def now_ist():
    return datetime.now(pytz.timezone('Asia/Kolkata'))


class TimestampMixin:
    """Mixin that provides created/updated timestamps and user info.

    Every batch-related table carries these. Timestamps are stored in the
    Asia/Kolkata timezone.
    """
    created_at = Column(DateTime(timezone=True), default=now_ist)
    updated_at = Column(DateTime(timezone=True), onupdate=now_ist)
    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)
