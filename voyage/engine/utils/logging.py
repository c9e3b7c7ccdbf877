"""Structured logging for engine runs."""

import logging
from typing import Any

from voyage.engine.hooks import RecalcOutcome

logger = logging.getLogger(__name__)


class StructuredEngineLogger:
    """Structured logger for timeline and ledger computations."""

    def log_recalc(self, outcome: RecalcOutcome) -> None:
        """Log day recalculation with structured data."""
        log_data: dict[str, Any] = {
            "day_number": outcome.day_number,
            "activities_in": outcome.activities_in,
            "activities_out": outcome.activities_out,
            "injected": list(outcome.injected),
            "end_offset_min": outcome.end_offset_min,
        }

        log_msg = f"Timeline recalculated: day {outcome.day_number}"

        if outcome.rolled_past_midnight:
            log_data["rolled_past_midnight"] = True
            logger.warning(
                f"{log_msg} - schedule rolls past midnight", extra={"structured": log_data}
            )
        else:
            logger.info(log_msg, extra={"structured": log_data})

    def log_settlement(
        self,
        reference_member_id: str,
        activities: int,
        balances: int,
        skipped: int = 0,
    ) -> None:
        """Log settlement computation with structured data."""
        log_data: dict[str, Any] = {
            "reference_member_id": reference_member_id,
            "activities": activities,
            "balances": balances,
        }

        if skipped:
            log_data["skipped_shares"] = skipped

        logger.info(
            f"Settlement computed against {reference_member_id}", extra={"structured": log_data}
        )
