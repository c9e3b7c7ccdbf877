"""Clock arithmetic and per-category duration policy.

Every function here is total: malformed input degrades to a default, never raises.
"""

import re

from voyage.engine.config import Settings, get_settings
from voyage.engine.models.activity import Activity
from voyage.engine.models.common import Category

MINUTES_PER_DAY = 24 * 60

_HOURS_RE = re.compile(r"(\d+)\s*(h|hr|hour)", re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d+)\s*(m|min|minute)", re.IGNORECASE)
_BARE_NUMBER_RE = re.compile(r"^\d+$")

# Fixed schedule cost of each category, in minutes.
# None marks categories whose duration comes from transport_detail.duration.
DURATION_BY_CATEGORY: dict[Category, int | None] = {
    Category.note: 0,
    Category.expense: 0,
    Category.flight: 0,  # Arrival instant; elapsed time lives on the following process card
    Category.process: None,
    Category.transport: None,
    Category.food: 60,
    Category.cafe: 45,
    Category.sightseeing: 90,
    Category.shopping: 120,
    Category.relax: 60,
    Category.hotel: 30,  # Check-in buffer only
    Category.bar: 60,
    Category.culture: 60,
    Category.activity: 60,
    Category.commute: 60,
    Category.gift: 60,
    Category.tickets: 60,
    Category.snacks: 60,
    Category.health: 60,
    Category.other: 60,
}


def _leading_int(text: str) -> int:
    match = re.match(r"\s*(\d+)", text)
    return int(match.group(1)) if match else 0


def time_to_minutes(value: str | None) -> int:
    """Convert "HH:MM" to minutes since midnight.

    Missing or unreadable components count as zero, so "" and "garbage" both
    read as 00:00 and "9" reads as 09:00.
    """
    if not value:
        return 0
    hours, _, rest = value.partition(":")
    minutes = rest.partition(":")[0]
    return _leading_int(hours) * 60 + _leading_int(minutes)


def minutes_to_time(total_minutes: int) -> str:
    """Format an unbounded minute count as zero-padded 24h "HH:MM".

    The value is reduced modulo one day first, so 1500 becomes "01:00" and
    -30 becomes "23:30".
    """
    minutes = total_minutes % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_duration(text: str | int | None) -> int:
    """Parse free-text durations such as "1 h 30 min", "45 min" or "20".

    Hour and minute components are matched independently; a bare number is
    minutes. Anything else contributes 0.
    """
    if text is None:
        return 0
    if isinstance(text, int) and not isinstance(text, bool):
        return max(text, 0)
    text = str(text)

    total = 0
    hours = _HOURS_RE.search(text)
    minutes = _MINUTES_RE.search(text)
    if hours:
        total += int(hours.group(1)) * 60
    if minutes:
        total += int(minutes.group(1))
    if not hours and not minutes and _BARE_NUMBER_RE.match(text.strip()):
        total += int(text.strip())
    return total


def activity_duration(activity: Activity, settings: Settings | None = None) -> int:
    """Minutes the activity advances the running clock."""
    settings = settings or get_settings()
    fixed = DURATION_BY_CATEGORY.get(activity.category, DURATION_BY_CATEGORY[Category.other])
    if fixed is not None:
        return fixed

    detail = activity.transport_detail
    if activity.category == Category.process:
        raw = detail.duration if detail and detail.duration.strip() else None
        return parse_duration(raw or settings.process_default_duration)

    # transport: zero-length legs would be invisible on the timeline
    duration = parse_duration(detail.duration if detail else None)
    return duration or settings.transport_fallback_min
