"""Prometheus metrics for timeline and ledger engines."""

from prometheus_client import Counter, Histogram

from voyage.engine.hooks import RecalcOutcome

# Timeline metrics
timeline_recalcs_total = Counter(
    "timeline_recalcs_total",
    "Total day recalculations",
)

timeline_injected_cards_total = Counter(
    "timeline_injected_cards_total",
    "Total system-injected activities",
    ["category"],
)

timeline_midnight_rollovers_total = Counter(
    "timeline_midnight_rollovers_total",
    "Total recalculations whose schedule rolled past midnight",
)

timeline_day_activities = Histogram(
    "timeline_day_activities",
    "Activities per recalculated day",
    buckets=[1, 2, 4, 8, 12, 16, 24, 32, 64],
)

# Ledger metrics
ledger_settlements_total = Counter(
    "ledger_settlements_total",
    "Total settlement computations",
)

ledger_violations_total = Counter(
    "ledger_violations_total",
    "Total ledger violations raised at write time",
    ["code"],
)


class PrometheusEngineMetrics:
    """Prometheus-based engine metrics implementation."""

    def record_recalc(self, outcome: RecalcOutcome) -> None:
        """Record a day recalculation."""
        timeline_recalcs_total.inc()
        timeline_day_activities.observe(outcome.activities_out)
        for category in outcome.injected:
            timeline_injected_cards_total.labels(category=category).inc()
        if outcome.rolled_past_midnight:
            timeline_midnight_rollovers_total.inc()

    def inc_settlement(self, activities: int) -> None:
        """Record a settlement computation."""
        ledger_settlements_total.inc()

    def inc_violation(self, code: str) -> None:
        """Increment ledger violation counter."""
        ledger_violations_total.labels(code=code).inc()
