"""Tests for day recalculation: injection, anchoring and forward propagation."""

import random

from voyage.engine.config import Settings
from voyage.engine.hooks import EngineLogger, EngineMetrics, RecalcOutcome
from voyage.engine.models import Activity, Category, Day, TransportDetail, Trip
from voyage.engine.timeline.durations import (
    MINUTES_PER_DAY,
    activity_duration,
    time_to_minutes,
)
from voyage.engine.timeline.recalc import (
    PROCESS_TITLE,
    TimelineEngine,
    clock_offsets,
    ensure_arrival_process,
    ensure_gap_connectors,
    recalc_day,
    recalc_trip,
    rolls_past_midnight,
)

CATEGORIES = list(Category)
DURATION_TEXTS = ["1 h 30 min", "45 min", "20", "garbage", "", "2 h", "0"]


def generate_day(n: int, seed: int = 42) -> Day:
    """Generate a day of n random activities with a fixed seed."""
    rng = random.Random(seed)
    activities = []
    for i in range(n):
        category = rng.choice(CATEGORIES)
        detail = None
        if category in (Category.transport, Category.process) and rng.random() < 0.8:
            detail = TransportDetail(duration=rng.choice(DURATION_TEXTS))
        activities.append(
            Activity(
                id=f"act_{i}",
                time=f"{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}",
                category=category,
                transport_detail=detail,
            )
        )
    return Day(day_number=1, activities=activities)


class RecordingMetrics(EngineMetrics):
    """Metrics double that keeps every outcome."""

    def __init__(self) -> None:
        self.outcomes: list[RecalcOutcome] = []

    def record_recalc(self, outcome: RecalcOutcome) -> None:
        self.outcomes.append(outcome)


# Injection


def test_flight_first_injects_process_card(settings: Settings) -> None:
    """Test that an arrival flight gets a process card at index 1."""
    day = Day(
        activities=[
            Activity(time="14:00", category=Category.flight),
            Activity(category=Category.sightseeing),
        ]
    )

    result = recalc_day(day, settings)

    assert len(result.activities) == 3
    process = result.activities[1]
    assert process.category == Category.process
    assert process.title == PROCESS_TITLE
    assert activity_duration(process, settings) == 60
    assert process.time == "14:00"
    assert result.activities[2].time == "15:00"


def test_existing_process_card_is_not_duplicated(settings: Settings) -> None:
    """Test that no insertion happens when a process card already follows the flight."""
    day = Day(
        activities=[
            Activity(time="14:00", category=Category.flight),
            Activity(
                category=Category.process, transport_detail=TransportDetail(duration="45 min")
            ),
            Activity(category=Category.sightseeing),
        ]
    )

    result = recalc_day(day, settings)

    assert len(result.activities) == 3
    assert [a.category for a in result.activities] == [
        Category.flight,
        Category.process,
        Category.sightseeing,
    ]
    assert result.activities[2].time == "14:45"


def test_lone_flight_gets_process_card(settings: Settings) -> None:
    """Test that a day holding only a flight still gets its process card."""
    day = Day(activities=[Activity(time="08:10", category=Category.flight)])

    result = recalc_day(day, settings)

    assert [a.category for a in result.activities] == [Category.flight, Category.process]
    assert result.activities[1].time == "08:10"


def test_flight_later_in_day_does_not_inject(settings: Settings) -> None:
    """Test that only a flight at index 0 triggers injection."""
    day = Day(
        activities=[
            Activity(time="09:00", category=Category.food),
            Activity(category=Category.flight),
            Activity(category=Category.sightseeing),
        ]
    )

    result = recalc_day(day, settings)

    assert len(result.activities) == 3
    assert result.activities[2].time == "10:00"


def test_ensure_arrival_process_returns_same_list_when_unchanged() -> None:
    """Test that an already-correct list is returned as-is."""
    activities = [Activity(time="09:00", category=Category.food)]
    assert ensure_arrival_process(activities) is activities
    assert ensure_arrival_process([]) == []


# Anchoring and propagation


def test_arrival_day_times(arrival_day: Day, settings: Settings) -> None:
    """Test full forward propagation through a realistic arrival day."""
    result = recalc_day(arrival_day, settings)

    assert [(a.category, a.time) for a in result.activities] == [
        (Category.flight, "14:00"),
        (Category.process, "14:00"),
        (Category.sightseeing, "15:00"),
        (Category.transport, "16:30"),
        (Category.hotel, "17:45"),
    ]


def test_only_anchor_time_is_trusted(settings: Settings) -> None:
    """Test that user-entered times after index 0 are overwritten."""
    day = Day(
        activities=[
            Activity(time="10:00", category=Category.cafe),
            Activity(time="23:00", category=Category.note),
            Activity(time="01:00", category=Category.shopping),
            Activity(time="05:00", category=Category.food),
        ]
    )

    result = recalc_day(day, settings)

    assert [a.time for a in result.activities] == ["10:00", "10:45", "10:45", "12:45"]


def test_malformed_anchor_reads_as_midnight(settings: Settings) -> None:
    """Test that an unreadable anchor degrades to 00:00 and is kept verbatim."""
    day = Day(
        activities=[
            Activity(time="soon", category=Category.food),
            Activity(category=Category.food),
        ]
    )

    result = recalc_day(day, settings)

    assert result.activities[0].time == "soon"
    assert result.activities[1].time == "01:00"


def test_empty_day_is_returned_unchanged(settings: Settings) -> None:
    """Test that an empty day passes through untouched."""
    day = Day(day_number=3, activities=[])
    assert recalc_day(day, settings) is day


def test_schedule_wraps_past_midnight(settings: Settings) -> None:
    """Test that times wrap modulo 24h without advancing the date."""
    day = Day(
        activities=[
            Activity(time="22:30", category=Category.shopping),
            Activity(category=Category.sightseeing),
            Activity(category=Category.food),
        ]
    )

    result = recalc_day(day, settings)

    assert [a.time for a in result.activities] == ["22:30", "00:30", "02:00"]
    assert clock_offsets(result, settings) == [1350, 1470, 1560]
    assert rolls_past_midnight(result, settings)


def test_same_day_schedule_does_not_roll(arrival_day: Day, settings: Settings) -> None:
    """Test the rollover check on an ordinary day."""
    assert not rolls_past_midnight(recalc_day(arrival_day, settings), settings)
    assert clock_offsets(Day(), settings) == []


def test_input_day_is_not_mutated(arrival_day: Day, settings: Settings) -> None:
    """Test that recalculation works on a new value."""
    before = arrival_day.model_dump()

    recalc_day(arrival_day, settings)

    assert arrival_day.model_dump() == before


def test_unchanged_activities_are_shared(settings: Settings) -> None:
    """Test that activities whose time is already right are reused by reference."""
    day = recalc_day(generate_day(8, seed=7), settings)

    again = recalc_day(day, settings)

    assert all(new is old for new, old in zip(again.activities, day.activities))


# Properties


def test_property_idempotence() -> None:
    """Test recalc(recalc(day)) == recalc(day) across seeds."""
    settings = Settings(_env_file=None)
    for seed in [1, 10, 100, 999, 12345]:
        once = recalc_day(generate_day(10, seed=seed), settings)
        twice = recalc_day(once, settings)
        assert twice == once, f"Seed {seed}: recalculation is not idempotent"


def test_property_anchor_preservation() -> None:
    """Test that activity 0 keeps its time across seeds."""
    settings = Settings(_env_file=None)
    for seed in [2, 20, 200, 2000]:
        day = generate_day(6, seed=seed)
        result = recalc_day(day, settings)
        assert result.activities[0].time == day.activities[0].time


def test_property_monotonic_propagation() -> None:
    """Test each time equals the previous time plus the previous duration, mod 24h."""
    settings = Settings(_env_file=None)
    for seed in [3, 30, 300, 3000, 30000]:
        result = recalc_day(generate_day(12, seed=seed), settings)
        for previous, current in zip(result.activities, result.activities[1:]):
            expected = (
                time_to_minutes(previous.time) + activity_duration(previous, settings)
            ) % MINUTES_PER_DAY
            assert time_to_minutes(current.time) == expected, f"Seed {seed}"


def test_property_count_grows_by_at_most_one() -> None:
    """Test that only the arrival injection can change the count by default."""
    settings = Settings(_env_file=None)
    for seed in range(20):
        day = generate_day(5, seed=seed)
        result = recalc_day(day, settings)
        assert len(result.activities) - len(day.activities) in (0, 1)
        original_ids = [a.id for a in day.activities]
        kept_ids = [a.id for a in result.activities if a.id in set(original_ids)]
        assert kept_ids == original_ids


# Gap connectors


def test_gap_connectors_off_by_default(settings: Settings) -> None:
    """Test that adjacent stays are left alone under default settings."""
    day = Day(
        activities=[
            Activity(time="09:00", category=Category.food),
            Activity(category=Category.sightseeing),
        ]
    )
    assert len(recalc_day(day, settings).activities) == 2


def test_gap_connectors_fill_between_stays() -> None:
    """Test that enabled gap connectors add a 15 minute transfer between stays."""
    settings = Settings(_env_file=None, insert_gap_connectors=True)
    day = Day(
        activities=[
            Activity(time="09:00", category=Category.food),
            Activity(category=Category.sightseeing),
            Activity(category=Category.note),
            Activity(category=Category.hotel),
        ]
    )

    result = recalc_day(day, settings)

    assert [(a.category, a.time) for a in result.activities] == [
        (Category.food, "09:00"),
        (Category.transport, "10:00"),
        (Category.sightseeing, "10:15"),
        (Category.note, "11:45"),
        (Category.hotel, "11:45"),
    ]
    assert recalc_day(result, settings) == result


def test_ensure_gap_connectors_returns_same_list_when_unchanged() -> None:
    """Test that lists without adjacent stays come back unchanged."""
    activities = [
        Activity(category=Category.food),
        Activity(category=Category.transport),
        Activity(category=Category.food),
    ]
    assert ensure_gap_connectors(activities) is activities


# Engine wiring


def test_engine_reports_outcome(arrival_day: Day, settings: Settings) -> None:
    """Test that the engine reports injections to its metrics hook."""
    metrics = RecordingMetrics()
    engine = TimelineEngine(settings=settings, metrics=metrics, logger=EngineLogger())

    engine.recalc_day(arrival_day)

    assert len(metrics.outcomes) == 1
    outcome = metrics.outcomes[0]
    assert outcome.activities_in == 4
    assert outcome.activities_out == 5
    assert outcome.injected == ["process"]
    assert outcome.end_offset_min == time_to_minutes("18:15")
    assert outcome.rolled_past_midnight is False


def test_recalc_trip_recalculates_every_day(arrival_day: Day, settings: Settings) -> None:
    """Test trip-wide recalculation."""
    second = Day(
        day_number=2,
        activities=[
            Activity(time="08:00", category=Category.food),
            Activity(time="08:00", category=Category.cafe),
        ],
    )
    trip = Trip(days=[arrival_day, second])

    result = recalc_trip(trip, settings)

    assert len(result.days[0].activities) == 5
    assert result.days[1].activities[1].time == "09:00"
