"""도메인 시간 유틸리티."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """timezone-aware UTC 현재 시각."""
    return datetime.now(timezone.utc)
