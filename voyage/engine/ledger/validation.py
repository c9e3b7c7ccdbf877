"""Write-time ledger checks."""

from collections.abc import Sequence
from decimal import Decimal

from voyage.engine.config import Settings, get_settings
from voyage.engine.hooks import EngineMetrics
from voyage.engine.ledger.costs import parse_cost
from voyage.engine.models.activity import Activity, ExpenseItem, Trip
from voyage.engine.models.violations import Violation, ViolationKind, ViolationSeverity


def items_total(items: Sequence[ExpenseItem]) -> Decimal:
    """Sum of parsed item amounts."""
    return sum((parse_cost(item.amount) for item in items), Decimal(0))


def apply_items(activity: Activity, items: Sequence[ExpenseItem]) -> Activity:
    """Replace an activity's items and set its cost to their sum.

    Edits made through this helper satisfy money conservation by construction.
    """
    items = list(items)
    if not items:
        return activity.model_copy(update={"items": []})
    total = items_total(items)
    cost: int | float = int(total) if total == total.to_integral_value() else float(total)
    return activity.model_copy(update={"items": items, "cost": cost})


def verify_money_conservation(
    activity: Activity,
    settings: Settings | None = None,
    metrics: EngineMetrics | None = None,
) -> list[Violation]:
    """Check that itemized amounts add up to the declared cost.

    Args:
        activity: Activity being written
        settings: Engine settings for the comparison tolerance
        metrics: Metrics recorder (optional, defaults to no-op)

    Returns:
        Empty list, or a single ADVISORY violation the caller should prompt on
    """
    if not activity.items:
        return []

    settings = settings or get_settings()
    cost = parse_cost(activity.cost)
    total = items_total(activity.items)
    difference = total - cost

    if abs(difference) <= Decimal(str(settings.money_tolerance)):
        return []

    (metrics or EngineMetrics()).inc_violation("ITEMS_SUM_MISMATCH")
    return [
        Violation(
            kind=ViolationKind.MONEY_CONSERVATION,
            code="ITEMS_SUM_MISMATCH",
            message="Itemized amounts do not add up to the activity cost.",
            severity=ViolationSeverity.ADVISORY,
            affected_activity_ids=[activity.id],
            details={
                "cost": str(cost),
                "items_total": str(total),
                "difference": str(difference),
                "num_items": len(activity.items),
            },
        )
    ]


def verify_trip_ledger(
    trip: Trip,
    settings: Settings | None = None,
    metrics: EngineMetrics | None = None,
) -> list[Violation]:
    """Run the money-conservation check over every activity of a trip."""
    violations: list[Violation] = []
    for activity in trip.activities():
        violations.extend(verify_money_conservation(activity, settings, metrics))
    return violations
