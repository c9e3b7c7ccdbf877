"""Timeline recalculation: derived-card injection and forward time propagation.

Takes:
- A Day whose first activity carries the anchor time

Produces:
- A new Day with system cards injected and every later time derived from the
  anchor plus the durations of the activities before it

The input Day is never mutated; activities whose time does not change are
shared by reference with the output.
"""

from voyage.engine.config import Settings, get_settings
from voyage.engine.hooks import EngineLogger, EngineMetrics, RecalcOutcome
from voyage.engine.models.activity import Activity, Day, TransportDetail, Trip
from voyage.engine.models.common import Category, TransportMode
from voyage.engine.timeline.durations import (
    MINUTES_PER_DAY,
    activity_duration,
    minutes_to_time,
    time_to_minutes,
)
from voyage.engine.utils.logging import StructuredEngineLogger
from voyage.engine.utils.metrics import PrometheusEngineMetrics

PROCESS_TITLE = "Immigration & baggage"
PROCESS_DESCRIPTION = "Allow time for immigration and baggage claim."
PROCESS_LOCATION = "Airport"
PROCESS_INSTRUCTION = "Arrival formalities"

GAP_TITLE = "Transfer (estimated)"
GAP_DESCRIPTION = "Added automatically, tap to edit."
GAP_INSTRUCTION = "Head to the next stop"


def make_process_card(arrival: Activity, settings: Settings | None = None) -> Activity:
    """Build the immigration card that follows an arrival flight.

    Its time is provisional; forward propagation overwrites it.
    """
    settings = settings or get_settings()
    return Activity(
        time=arrival.time,
        category=Category.process,
        title=PROCESS_TITLE,
        description=PROCESS_DESCRIPTION,
        location=PROCESS_LOCATION,
        cost=0,
        transport_detail=TransportDetail(
            mode=TransportMode.walk,
            duration=settings.process_default_duration,
            instruction=PROCESS_INSTRUCTION,
        ),
    )


def make_gap_connector(previous: Activity, settings: Settings | None = None) -> Activity:
    """Build the estimated transfer placed between two stay activities."""
    settings = settings or get_settings()
    return Activity(
        time=previous.time,
        category=Category.transport,
        title=GAP_TITLE,
        description=GAP_DESCRIPTION,
        cost=0,
        transport_detail=TransportDetail(
            mode=TransportMode.walk,
            duration=settings.gap_connector_duration,
            instruction=GAP_INSTRUCTION,
        ),
    )


def ensure_arrival_process(
    activities: list[Activity], settings: Settings | None = None
) -> list[Activity]:
    """Insert a process card at index 1 when the day opens with a flight.

    Returns the input list itself when nothing needs inserting, so a day that
    already has its process card is left alone.
    """
    if not activities or activities[0].category != Category.flight:
        return activities
    if len(activities) > 1 and activities[1].category == Category.process:
        return activities
    return [activities[0], make_process_card(activities[0], settings), *activities[1:]]


def ensure_gap_connectors(
    activities: list[Activity], settings: Settings | None = None
) -> list[Activity]:
    """Insert an estimated transfer between every pair of adjacent stay activities."""
    if len(activities) < 2:
        return activities

    result: list[Activity] = []
    for current, following in zip(activities, activities[1:]):
        result.append(current)
        if current.category.is_stay and following.category.is_stay:
            result.append(make_gap_connector(current, settings))
    result.append(activities[-1])

    if len(result) == len(activities):
        return activities
    return result


def clock_offsets(day: Day, settings: Settings | None = None) -> list[int]:
    """Unbounded start minute of each activity, propagated from the anchor.

    Unlike the displayed "HH:MM" values these are not reduced modulo a day,
    so callers can tell which activities spill into the next calendar day.
    """
    if not day.activities:
        return []
    settings = settings or get_settings()

    offsets: list[int] = []
    clock = time_to_minutes(day.activities[0].time)
    for activity in day.activities:
        offsets.append(clock)
        clock += activity_duration(activity, settings)
    return offsets


def rolls_past_midnight(day: Day, settings: Settings | None = None) -> bool:
    """Whether any activity starts on the following calendar day."""
    return any(offset >= MINUTES_PER_DAY for offset in clock_offsets(day, settings))


class TimelineEngine:
    """Recomputes a day's schedule from its anchor time."""

    def __init__(
        self,
        settings: Settings | None = None,
        metrics: EngineMetrics | None = None,
        logger: EngineLogger | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            settings: Engine settings (optional, defaults to get_settings())
            metrics: Metrics recorder (optional, defaults to no-op)
            logger: Structured logger (optional, defaults to no-op)
        """
        self._settings = settings
        self._metrics = metrics or EngineMetrics()
        self._logger = logger or EngineLogger()

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def recalc_day(self, day: Day) -> Day:
        """Inject derived cards, then propagate times forward from activity 0.

        Never raises on malformed times or durations; an empty day is returned
        unchanged.
        """
        if not day.activities:
            return day

        settings = self.settings
        injected: list[str] = []

        activities = ensure_arrival_process(day.activities, settings)
        if activities is not day.activities:
            injected.append(Category.process.value)

        if settings.insert_gap_connectors:
            before = len(activities)
            activities = ensure_gap_connectors(activities, settings)
            injected.extend([Category.transport.value] * (len(activities) - before))

        first = activities[0]
        clock = time_to_minutes(first.time) + activity_duration(first, settings)
        result = [first]
        latest_start = time_to_minutes(first.time)

        for activity in activities[1:]:
            latest_start = clock
            derived = minutes_to_time(clock)
            if activity.time != derived:
                activity = activity.model_copy(update={"time": derived})
            result.append(activity)
            clock += activity_duration(activity, settings)

        outcome = RecalcOutcome(
            day_number=day.day_number,
            activities_in=len(day.activities),
            activities_out=len(result),
            injected=injected,
            end_offset_min=clock,
            rolled_past_midnight=latest_start >= MINUTES_PER_DAY,
        )
        self._metrics.record_recalc(outcome)
        self._logger.log_recalc(outcome)

        return day.model_copy(update={"activities": result})

    def recalc_trip(self, trip: Trip) -> Trip:
        """Recalculate every day of a trip."""
        return trip.model_copy(update={"days": [self.recalc_day(day) for day in trip.days]})


def default_timeline_engine(settings: Settings | None = None) -> TimelineEngine:
    """Engine wired to structured logging and Prometheus metrics."""
    return TimelineEngine(
        settings=settings,
        metrics=PrometheusEngineMetrics(),
        logger=StructuredEngineLogger(),
    )


def recalc_day(day: Day, settings: Settings | None = None) -> Day:
    """Recalculate one day with the default engine."""
    return default_timeline_engine(settings).recalc_day(day)


def recalc_trip(trip: Trip, settings: Settings | None = None) -> Trip:
    """Recalculate every day of a trip with the default engine."""
    return default_timeline_engine(settings).recalc_trip(trip)
