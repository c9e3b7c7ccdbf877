"""Structural edits to days and trips.

Every edit builds a new Day that shares untouched activities with the old one,
then recalculates it exactly once before returning, so no caller ever observes
a day whose times are stale. Inputs are never mutated.

Indices refer to the day as the caller last observed it (i.e. recalculated).
Out-of-range indices are caller bugs and raise IndexError.
"""

from voyage.engine.config import Settings
from voyage.engine.ledger.validation import verify_money_conservation
from voyage.engine.models.activity import Activity, Day, Trip
from voyage.engine.models.common import Category
from voyage.engine.models.edits import EditResult
from voyage.engine.timeline.durations import activity_duration, minutes_to_time, time_to_minutes
from voyage.engine.timeline.recalc import recalc_day
from voyage.engine.utils.metrics import PrometheusEngineMetrics


def _check_index(activities: list[Activity], index: int, *, inclusive_end: bool = False) -> None:
    upper = len(activities) if inclusive_end else len(activities) - 1
    if index < 0 or index > upper:
        raise IndexError(f"activity index {index} out of range 0..{upper}")


def _check_day_index(trip: Trip, index: int) -> None:
    if index < 0 or index >= len(trip.days):
        raise IndexError(f"day index {index} out of range 0..{len(trip.days) - 1}")


def _with_activities(day: Day, activities: list[Activity], settings: Settings | None) -> Day:
    return recalc_day(day.model_copy(update={"activities": activities}), settings)


def insert_activity(
    day: Day, index: int, activity: Activity, settings: Settings | None = None
) -> Day:
    """Insert an activity before position index (len(activities) appends)."""
    activities = list(day.activities)
    _check_index(activities, index, inclusive_end=True)
    activities.insert(index, activity)
    return _with_activities(day, activities, settings)


def add_activity_sorted(day: Day, activity: Activity, settings: Settings | None = None) -> Day:
    """Append an activity, then order the day by its current "HH:MM" times.

    The sort is stable, so activities sharing a time keep their relative order.
    """
    activities = sorted([*day.activities, activity], key=lambda a: a.time)
    return _with_activities(day, activities, settings)


def delete_activity(day: Day, index: int, settings: Settings | None = None) -> Day:
    """Remove the activity at index.

    Removing an opening flight also removes the process card that follows it,
    so the day never starts with a process card.
    """
    activities = list(day.activities)
    _check_index(activities, index)
    removed = activities.pop(index)
    if (
        index == 0
        and removed.category == Category.flight
        and activities
        and activities[0].category == Category.process
    ):
        del activities[0]
    return _with_activities(day, activities, settings)


def move_activity(
    day: Day, source: int, destination: int, settings: Settings | None = None
) -> Day:
    """Move an activity within a day (drag-reorder)."""
    activities = list(day.activities)
    _check_index(activities, source)
    moved = activities.pop(source)
    _check_index(activities, destination, inclusive_end=True)
    activities.insert(destination, moved)
    return _with_activities(day, activities, settings)


def move_between_days(
    trip: Trip,
    source_day: int,
    source: int,
    destination_day: int,
    destination: int,
    settings: Settings | None = None,
) -> Trip:
    """Move an activity from one day to another; both days are recalculated."""
    _check_day_index(trip, source_day)
    _check_day_index(trip, destination_day)
    if source_day == destination_day:
        days = list(trip.days)
        days[source_day] = move_activity(days[source_day], source, destination, settings)
        return trip.model_copy(update={"days": days})

    days = list(trip.days)
    source_activities = list(days[source_day].activities)
    _check_index(source_activities, source)
    moved = source_activities.pop(source)

    destination_activities = list(days[destination_day].activities)
    _check_index(destination_activities, destination, inclusive_end=True)
    destination_activities.insert(destination, moved)

    days[source_day] = _with_activities(days[source_day], source_activities, settings)
    days[destination_day] = _with_activities(
        days[destination_day], destination_activities, settings
    )
    return trip.model_copy(update={"days": days})


def update_activity(
    day: Day, index: int, activity: Activity, settings: Settings | None = None
) -> EditResult:
    """Replace the activity at index.

    Money-conservation problems in the new activity do not block the edit;
    they come back as violations for the caller to prompt on.
    """
    activities = list(day.activities)
    _check_index(activities, index)
    violations = verify_money_conservation(activity, settings, PrometheusEngineMetrics())
    activities[index] = activity
    return EditResult(day=_with_activities(day, activities, settings), violations=violations)


def retime_activity(day: Day, index: int, time: str, settings: Settings | None = None) -> Day:
    """Pin the activity at index to a user-chosen time.

    Only the first activity's time is ground truth, so editing a later
    activity moves the anchor instead: the anchor becomes the requested time
    minus the durations of everything scheduled before it.
    """
    activities = list(day.activities)
    _check_index(activities, index)

    target = time_to_minutes(time)
    elapsed = sum(activity_duration(activity, settings) for activity in activities[:index])
    activities[0] = activities[0].model_copy(update={"time": minutes_to_time(target - elapsed)})
    return _with_activities(day, activities, settings)
