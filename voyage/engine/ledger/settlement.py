"""Host-relative settlement of shared costs.

Balances are kept relative to a single reference member (the trip host):

- A positive balance means the member owes the reference member.
- A negative balance means the reference member owes that member.

Debts between two non-reference members are not tracked. Balances are
accumulated unrounded; rounding belongs to the presentation helpers in
voyage.engine.ledger.report.
"""

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from voyage.engine.config import Settings
from voyage.engine.hooks import EngineLogger, EngineMetrics
from voyage.engine.ledger.costs import parse_cost
from voyage.engine.models.activity import Activity, Member, Trip, find_reference_member_id
from voyage.engine.utils.logging import StructuredEngineLogger
from voyage.engine.utils.metrics import PrometheusEngineMetrics

logger = logging.getLogger(__name__)


def resolve_splitters(assigned: Sequence[str] | None, members: Sequence[Member]) -> list[str]:
    """Explicit splitters, or every current member when none are given."""
    if assigned:
        return list(assigned)
    return [member.id for member in members]


def charges(activity: Activity, members: Sequence[Member]) -> list[tuple[Decimal, list[str]]]:
    """Break an activity's cost into (amount, splitters) pairs.

    Itemized activities yield one pair per item, each split among its own
    assignees; otherwise the whole cost is split once among split_with.
    """
    if activity.items:
        return [
            (parse_cost(item.amount), resolve_splitters(item.assigned_to, members))
            for item in activity.items
        ]
    return [(parse_cost(activity.cost), resolve_splitters(activity.split_with, members))]


def split_summary(activity: Activity, members: Sequence[Member]) -> dict[str, Decimal]:
    """Each member's share of one activity, payer included."""
    summary: dict[str, Decimal] = {}
    for amount, splitters in charges(activity, members):
        if amount <= 0 or not splitters:
            continue
        share = amount / len(splitters)
        for member_id in splitters:
            summary[member_id] = summary.get(member_id, Decimal(0)) + share
    return summary


class LedgerEngine:
    """Computes host-relative balances from payer/splitter relationships."""

    def __init__(
        self,
        metrics: EngineMetrics | None = None,
        logger: EngineLogger | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            metrics: Metrics recorder (optional, defaults to no-op)
            logger: Structured logger (optional, defaults to no-op)
        """
        self._metrics = metrics or EngineMetrics()
        self._logger = logger or EngineLogger()

    def settle(
        self,
        activities: Iterable[Activity],
        members: Sequence[Member],
        reference_member_id: str,
    ) -> dict[str, Decimal]:
        """Net balance of every member against the reference member.

        Args:
            activities: Activities to settle, any order
            members: Current trip members; also the default splitter set
            reference_member_id: Member balances are relative to; default payer

        Returns:
            member_id -> signed unrounded balance, only for members touched
        """
        known = {member.id for member in members} | {reference_member_id}
        balances: dict[str, Decimal] = {}
        seen = 0
        skipped = 0

        for activity in activities:
            seen += 1
            if parse_cost(activity.cost) <= 0:
                continue

            payer = activity.payer or reference_member_id
            if payer not in known:
                logger.debug(f"[settle] unknown payer {payer!r} on activity {activity.id}")
                skipped += 1
                continue

            for amount, splitters in charges(activity, members):
                if amount <= 0 or not splitters:
                    continue
                share = amount / len(splitters)

                for member_id in splitters:
                    if member_id == payer:
                        continue
                    if member_id not in known:
                        skipped += 1
                        continue
                    if payer == reference_member_id:
                        balances[member_id] = balances.get(member_id, Decimal(0)) + share
                    elif member_id == reference_member_id:
                        balances[payer] = balances.get(payer, Decimal(0)) - share

        self._metrics.inc_settlement(seen)
        self._logger.log_settlement(reference_member_id, seen, len(balances), skipped)
        return balances

    def settle_trip(self, trip: Trip, settings: Settings | None = None) -> dict[str, Decimal]:
        """Settle every activity of a trip against its reference member."""
        return self.settle(trip.activities(), trip.members, trip.reference_member_id(settings))


def default_ledger_engine() -> LedgerEngine:
    """Engine wired to structured logging and Prometheus metrics."""
    return LedgerEngine(metrics=PrometheusEngineMetrics(), logger=StructuredEngineLogger())


def settle(
    activities: Iterable[Activity],
    members: Sequence[Member],
    reference_member_id: str | None = None,
    settings: Settings | None = None,
) -> dict[str, Decimal]:
    """Settle with the default engine; the reference defaults to the host."""
    if reference_member_id is None:
        reference_member_id = find_reference_member_id(list(members), settings)
    return default_ledger_engine().settle(activities, members, reference_member_id)


def settle_trip(trip: Trip, settings: Settings | None = None) -> dict[str, Decimal]:
    """Settle a whole trip with the default engine."""
    return default_ledger_engine().settle_trip(trip, settings)
