# justyou/services/activities.py
from collections import Counter
from datetime import date
from typing import Any, Dict, Iterable, Optional

MINUTES_PER_DAY = 24 * 60


def today() -> str:
    return date.today().isoformat()


def _minutes(hhmm: str) -> int:
    hours, mins = hhmm.split(":")
    return int(hours) * 60 + int(mins)


def minutes_between(start: str, end: str) -> int:
    """Minutes from start to end ("HH:MM"); an earlier end means the next day."""
    return (_minutes(end) - _minutes(start)) % MINUTES_PER_DAY


def resolve_time_spent(time_spent: Optional[int], start: Optional[str], end: Optional[str]) -> int:
    if start and end:
        return minutes_between(start, end)
    return time_spent or 0


def format_minutes(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m" if hours > 0 else f"{mins}m"


def summarize(activities: Iterable[Dict[str, Any]], day: str) -> Dict[str, Any]:
    todays = [a for a in activities if a.get("date") == day]
    total = sum(int(a.get("timeSpent") or 0) for a in todays)
    return {
        "date": day,
        "totalMinutes": total,
        "totalFormatted": format_minutes(total),
        "count": len(todays),
        "byType": dict(Counter(a.get("type") for a in todays)),
        "byStatus": dict(Counter(a.get("status") for a in todays)),
    }
