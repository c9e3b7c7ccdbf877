"""Ledger result models - category totals and host-relative settlement."""

from decimal import Decimal

from pydantic import BaseModel, Field

from voyage.engine.models.common import Category


class CategoryTotals(BaseModel):
    """Spend aggregated over a set of activities."""

    total: Decimal = Decimal(0)
    by_category: dict[Category, Decimal] = Field(default_factory=dict)
    # Categories seen at all, including those with no positive spend
    present_categories: set[Category] = Field(default_factory=set)


class Transfer(BaseModel):
    """Directed payment that settles one member against the reference member."""

    from_member_id: str
    to_member_id: str
    amount: int  # Rounded to whole currency units for display


class SettlementReport(BaseModel):
    """Everything a cost summary view needs, computed once."""

    trip_id: str
    destination: str
    currency: str
    reference_member_id: str
    totals: CategoryTotals
    balances: dict[str, Decimal]  # member_id -> signed, unrounded; > 0 owes the reference
    transfers: list[Transfer]
