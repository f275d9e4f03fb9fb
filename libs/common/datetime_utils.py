"""UTC clock helpers.

Timestamps are stored timezone-aware; event registration windows compare
calendar dates in UTC.

Usage:
    from libs.common.datetime_utils import utc_now

    reviewed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    request.reviewed_at = utc_now()
"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()
