"""Time utilities for UTC timestamp formatting."""

from datetime import datetime, timezone


def to_utc_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with Z suffix.
    
    Naive datetimes are treated as UTC.
    
    Args:
        dt: Datetime object
        
    Returns:
        ISO 8601 UTC timestamp ending with 'Z' (e.g., '2025-12-23T00:27:07Z')
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.isoformat().replace('+00:00', 'Z')


def parse_utc(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp (with or without 'Z') into an aware datetime.
    
    Raises:
        ValueError: If value is not ISO 8601
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
