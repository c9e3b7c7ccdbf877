"""Category-wise spend aggregation."""

from collections.abc import Iterable

from voyage.engine.ledger.costs import parse_cost
from voyage.engine.models.activity import Activity, Trip
from voyage.engine.models.ledger import CategoryTotals


def aggregate(activities: Iterable[Activity]) -> CategoryTotals:
    """Sum strictly positive costs into a total and a per-category map.

    Categories with no positive spend are left out of by_category but still
    recorded in present_categories.
    """
    totals = CategoryTotals()
    for activity in activities:
        totals.present_categories.add(activity.category)
        cost = parse_cost(activity.cost)
        if cost <= 0:
            continue
        totals.total += cost
        totals.by_category[activity.category] = (
            totals.by_category.get(activity.category, 0) + cost
        )
    return totals


def aggregate_trip(trip: Trip) -> CategoryTotals:
    """Aggregate spend over every day of a trip."""
    return aggregate(trip.activities())
