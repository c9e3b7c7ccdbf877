"""No-op observability interfaces injected into the engines.

Concrete implementations live in voyage.engine.utils.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RecalcOutcome:
    """Summary of one day recalculation, for logging and metrics."""

    day_number: int
    activities_in: int
    activities_out: int
    injected: list[str] = field(default_factory=list)  # Category values of injected cards
    end_offset_min: int = 0  # Unbounded clock after the last activity
    rolled_past_midnight: bool = False


# Metrics interface (to be implemented by actual metrics system)
class EngineMetrics:
    """Interface for engine metrics."""

    def record_recalc(self, outcome: RecalcOutcome) -> None:
        """Record a day recalculation."""
        pass

    def inc_settlement(self, activities: int) -> None:
        """Record a settlement computation."""
        pass

    def inc_violation(self, code: str) -> None:
        """Increment ledger violation counter."""
        pass


# Logging interface
class EngineLogger:
    """Interface for structured logging."""

    def log_recalc(self, outcome: RecalcOutcome) -> None:
        """Log a day recalculation."""
        pass

    def log_settlement(
        self,
        reference_member_id: str,
        activities: int,
        balances: int,
        skipped: int = 0,
    ) -> None:
        """Log a settlement computation."""
        pass
