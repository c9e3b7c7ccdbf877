"""Itinerary value types - activities, days, members and trips."""

import datetime as dt
from typing import Any
from uuid import uuid4

from pydantic import AliasChoices, Field, field_validator

from voyage.engine.config import Settings, get_settings
from voyage.engine.models.common import Category, TransportMode, WireModel

# Raw money as it arrives on the wire: bare number or decorated string
RawMoney = int | float | str


def new_id() -> str:
    """Fresh stable identity for a newly created value."""
    return uuid4().hex


class TransportDetail(WireModel):
    """Leg details for transport, process and flight activities."""

    mode: TransportMode = TransportMode.walk
    duration: str = ""  # Free text, e.g. "1 h 30 min"
    from_station: str | None = None
    to_station: str | None = None
    instruction: str | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def coerce_mode(cls, v: Any) -> Any:
        """Unknown modes degrade to walk."""
        if isinstance(v, str) and v.strip().lower() in TransportMode.__members__:
            return v.strip().lower()
        if isinstance(v, TransportMode):
            return v
        return TransportMode.walk

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, v: Any) -> str:
        """Accept bare numbers and missing values."""
        if v is None:
            return ""
        return str(v)


class ExpenseItem(WireModel):
    """Line item subdividing an activity's cost."""

    id: str = Field(default_factory=new_id)
    name: str = ""
    amount: RawMoney = 0
    assigned_to: list[str] = Field(default_factory=list)  # Empty means all members


class Activity(WireModel):
    """Single scheduled unit within a day."""

    id: str = Field(default_factory=new_id)
    time: str = ""  # "HH:MM"; ground truth only for the first activity of a day
    category: Category = Field(
        default=Category.other, validation_alias=AliasChoices("category", "type")
    )
    title: str = ""
    description: str = ""
    location: str = ""
    cost: RawMoney | None = None
    payer: str | None = None
    split_with: list[str] | None = None
    items: list[ExpenseItem] = Field(default_factory=list)
    transport_detail: TransportDetail | None = None

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Category:
        """Unknown or missing categories become other."""
        return Category.coerce(v)

    @field_validator("time", "title", "description", "location", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Treat null free-text fields as empty."""
        return "" if v is None else v

    @field_validator("items", mode="before")
    @classmethod
    def none_to_empty_items(cls, v: Any) -> Any:
        """Treat null item lists as empty."""
        return [] if v is None else v


class Day(WireModel):
    """One day of a trip; activity order is the schedule."""

    day_number: int = Field(
        default=1, validation_alias=AliasChoices("dayNumber", "day_number", "day")
    )
    date: dt.date | None = None
    activities: list[Activity] = Field(default_factory=list)


class Member(WireModel):
    """Trip member who can pay for or share costs."""

    id: str
    name: str = ""
    is_host: bool = False


def find_reference_member_id(members: list[Member], settings: Settings | None = None) -> str:
    """Pick the settlement reference point among trip members.

    The flagged host wins; otherwise a member carrying the default id; otherwise
    the configured default id itself.
    """
    settings = settings or get_settings()
    for member in members:
        if member.is_host:
            return member.id
    for member in members:
        if member.id == settings.default_reference_member_id:
            return member.id
    return settings.default_reference_member_id


class Trip(WireModel):
    """A trip: members plus an ordered list of days."""

    id: str = Field(default_factory=new_id)
    destination: str = ""
    start_date: dt.date | None = None
    currency: str = Field(default_factory=lambda: get_settings().default_currency)
    members: list[Member] = Field(default_factory=list)
    days: list[Day] = Field(default_factory=list)

    def reference_member_id(self, settings: Settings | None = None) -> str:
        """Member id that settlement balances are relative to."""
        return find_reference_member_id(self.members, settings)

    def date_for(self, day: Day) -> dt.date | None:
        """Calendar date of a day, derived from start_date when not explicit."""
        if day.date is not None:
            return day.date
        if self.start_date is None:
            return None
        return self.start_date + dt.timedelta(days=day.day_number - 1)

    def activities(self) -> list[Activity]:
        """All activities of the trip in schedule order."""
        return [activity for day in self.days for activity in day.activities]
