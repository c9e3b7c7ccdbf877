"""Edit result models."""

from pydantic import BaseModel, Field

from voyage.engine.models.activity import Day
from voyage.engine.models.violations import Violation


class EditResult(BaseModel):
    """Recalculated day plus any warnings raised while writing the edit."""

    day: Day
    violations: list[Violation] = Field(default_factory=list)
