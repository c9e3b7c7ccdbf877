"""Models package - re-exports for convenience."""

from voyage.engine.models.activity import (
    Activity,
    Day,
    ExpenseItem,
    Member,
    RawMoney,
    TransportDetail,
    Trip,
    find_reference_member_id,
    new_id,
)
from voyage.engine.models.common import (
    STAY_CATEGORIES,
    SYSTEM_CATEGORIES,
    Category,
    TransportMode,
    WireModel,
)
from voyage.engine.models.edits import EditResult
from voyage.engine.models.ledger import CategoryTotals, SettlementReport, Transfer
from voyage.engine.models.violations import Violation, ViolationKind, ViolationSeverity

__all__ = [
    # Common
    "WireModel",
    "Category",
    "TransportMode",
    "SYSTEM_CATEGORIES",
    "STAY_CATEGORIES",
    # Itinerary
    "Activity",
    "Day",
    "ExpenseItem",
    "Member",
    "TransportDetail",
    "Trip",
    "RawMoney",
    "new_id",
    "find_reference_member_id",
    # Ledger
    "CategoryTotals",
    "Transfer",
    "SettlementReport",
    # Violations
    "Violation",
    "ViolationKind",
    "ViolationSeverity",
    # Edits
    "EditResult",
]
