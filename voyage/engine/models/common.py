"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model whose wire form uses camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Category(str, Enum):
    """Semantic tag of an activity."""

    sightseeing = "sightseeing"
    food = "food"
    cafe = "cafe"
    shopping = "shopping"
    relax = "relax"
    bar = "bar"
    culture = "culture"
    activity = "activity"
    hotel = "hotel"
    transport = "transport"
    flight = "flight"
    process = "process"
    note = "note"
    expense = "expense"
    commute = "commute"
    gift = "gift"
    tickets = "tickets"
    snacks = "snacks"
    health = "health"
    other = "other"

    @property
    def is_system(self) -> bool:
        """System-derived categories are rendered as connectors, not content cards."""
        return self in SYSTEM_CATEGORIES

    @property
    def is_stay(self) -> bool:
        """Stay categories occupy a place; two in a row need a transfer between them."""
        return self in STAY_CATEGORIES

    @classmethod
    def coerce(cls, value: object) -> "Category":
        """Map any wire value onto the closed set, falling back to other."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.other
        return cls.other


SYSTEM_CATEGORIES = frozenset(
    {Category.transport, Category.flight, Category.process, Category.note}
)

STAY_CATEGORIES = frozenset(
    {
        Category.sightseeing,
        Category.food,
        Category.cafe,
        Category.shopping,
        Category.relax,
        Category.bar,
        Category.culture,
        Category.activity,
        Category.hotel,
        Category.other,
    }
)


class TransportMode(str, Enum):
    """Transport mode of a transit leg."""

    bus = "bus"
    train = "train"
    subway = "subway"
    walk = "walk"
    taxi = "taxi"
    car = "car"
    tram = "tram"
    flight = "flight"
