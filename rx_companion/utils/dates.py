# rx_companion/utils/dates.py
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from rx_companion.core.app_config import DEFAULT_TIMEZONE

def today_local(tz: Optional[str] = None) -> date:
    return datetime.now(ZoneInfo(tz or DEFAULT_TIMEZONE)).date()

def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None

def days_until(value: Optional[str], today: date) -> Optional[int]:
    """Whole days from `today` to an ISO date, None when the date is missing/unreadable."""
    target = parse_iso_date(value)
    if target is None:
        return None
    return (target - today).days

def add_days(start: date, days: int) -> date:
    return start + timedelta(days=days)

