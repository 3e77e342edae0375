"""
Generic serialization helpers.
No business logic here, only formatting utilities.
"""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the way timestamps are stored"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_offset(value: Optional[datetime]) -> Optional[datetime]:
    """Attach an explicit UTC offset to a naive stored timestamp"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
