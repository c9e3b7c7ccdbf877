"""Violation models - ledger problems surfaced at the point of write."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# JSON-serializable value types for violation details
JsonValue = str | int | float | bool | None | dict[str, Any] | list[Any]


class ViolationSeverity(str, Enum):
    """Severity levels for ledger violations; ledger checks never block a write."""

    ADVISORY = "advisory"


class ViolationKind(str, Enum):
    """Categories of ledger checks."""

    MONEY_CONSERVATION = "money_conservation"


class Violation(BaseModel):
    """A recoverable ledger problem the caller should prompt the user about.

    Violations never stop an edit; they travel alongside the edited value so
    the presentation layer can ask for a correction.
    """

    kind: ViolationKind
    code: str  # Machine-usable short code, e.g., "ITEMS_SUM_MISMATCH"
    message: str  # Human-readable description (1-2 sentences)
    severity: ViolationSeverity
    affected_activity_ids: list[str]
    details: dict[str, JsonValue] = Field(default_factory=dict)
