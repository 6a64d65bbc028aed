"""UTC Clock - the only source of the current date.

Invariants:
    - Read once per request and passed into the core explicitly
    - Overridden through FastAPI dependency_overrides in tests
"""

from datetime import date, datetime, timezone


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()
