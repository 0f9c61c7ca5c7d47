"""
PersistResult model summarising one outcome group written to disk (ephemeral).
"""

from pathlib import Path

from pydantic import BaseModel, Field


class PersistResult(BaseModel):
    """
    What a writer did with one outcome group.

    Attributes:
        outcome: Outcome name the group was routed to
        directory: Destination directory
        written: Files written, in record order
        errors: One message per record that could not be written
    """

    outcome: str
    directory: Path
    written: list[Path] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def written_count(self) -> int:
        return len(self.written)

    @property
    def error_count(self) -> int:
        return len(self.errors)
