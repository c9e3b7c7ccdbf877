"""Shared pytest fixtures for all test suites."""

import pytest

from voyage.engine.config import Settings
from voyage.engine.models import Activity, Category, Day, Member, TransportDetail


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment's .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def members() -> list[Member]:
    """Host plus two companions."""
    return [
        Member(id="me", name="Host", is_host=True),
        Member(id="a", name="Alice"),
        Member(id="b", name="Bob"),
    ]


@pytest.fixture
def arrival_day() -> Day:
    """Day that opens with an arrival flight and no process card yet."""
    return Day(
        day_number=1,
        activities=[
            Activity(id="flight", time="14:00", category=Category.flight, title="Land at NRT"),
            Activity(id="temple", category=Category.sightseeing, title="Senso-ji"),
            Activity(
                id="train",
                category=Category.transport,
                title="Train to hotel",
                transport_detail=TransportDetail(mode="train", duration="1 h 15 min"),
            ),
            Activity(id="hotel", category=Category.hotel, title="Check in"),
        ],
    )
