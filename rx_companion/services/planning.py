import re
from typing import List, Optional, Tuple

from rx_companion.schemas.models import Bucket

_CODE_TO_COUNT = {"OD": 1, "QD": 1, "BID": 2, "BD": 2, "TID": 3, "QID": 4}

_WORD_TO_COUNT = [
    ("once", 1), ("one time", 1),
    ("twice", 2), ("two times", 2),
    ("thrice", 3), ("three times", 3),
    ("four times", 4),
]

# "3", "3회", "1일 3회", "하루 2회", "3x", "3 times a day"
_COUNT_RE = re.compile(r"(\d+)\s*(?:회|번|x|times?)\b|^\s*(\d+)\s*$", re.IGNORECASE)
_KOREAN_DAY_PREFIX_RE = re.compile(r"(?:1일|하루)\s*")
# 1-0-1 style morning-noon-night markers
_PATTERN_RE = re.compile(r"\b([01])-([01])-([01])(?:-([01]))?\b")


def daily_count(freq_raw: str) -> Optional[int]:
    """How many doses per day a prescription frequency text means, None if unreadable."""
    f = (freq_raw or "").strip()
    if not f:
        return None

    code = f.upper().replace(".", "")
    if code in _CODE_TO_COUNT:
        return _CODE_TO_COUNT[code]

    m = _PATTERN_RE.search(f)
    if m:
        total = sum(int(x) for x in m.groups() if x is not None)
        return total or None

    low = _KOREAN_DAY_PREFIX_RE.sub("", f.lower())
    m = _COUNT_RE.search(low)
    if m:
        n = int(m.group(1) or m.group(2))
        return n if 1 <= n <= 6 else None

    for word, n in _WORD_TO_COUNT:
        if word in low:
            return n
    return None


def suggest_times_for_count(count: Optional[int]) -> List[Tuple[Bucket, str]]:
    if count == 1:
        return [("MORNING", "08:00")]
    if count == 2:
        return [("MORNING", "08:00"), ("NIGHT", "20:00")]
    if count == 3:
        return [("MORNING", "08:00"), ("AFTERNOON", "13:00"), ("NIGHT", "19:00")]
    if count == 4:
        return [("MORNING", "08:00"), ("AFTERNOON", "12:00"), ("AFTERNOON", "17:00"), ("NIGHT", "21:00")]
    return []  # unknown => safer to avoid fixed reminders


def suggest_times(freq_raw: str) -> List[str]:
    return [hhmm for _, hhmm in suggest_times_for_count(daily_count(freq_raw))]


def bucket_for_time(hhmm: str) -> Bucket:
    try:
        hour = int(hhmm.split(":")[0])
    except (ValueError, IndexError):
        return "MORNING"
    if hour < 12:
        return "MORNING"
    if hour < 18:
        return "AFTERNOON"
    return "NIGHT"


def parse_days(total_days: str) -> Optional[int]:
    """'7', '7일', '7 days' -> 7. Same 1..365 bounds as duration_days on plans."""
    m = re.search(r"\d+", total_days or "")
    if not m:
        return None
    d = int(m.group(0))
    return d if 1 <= d <= 365 else None
