"""
Outcome model representing the terminal state a record is routed to.
"""

from pydantic import BaseModel, Field


class Outcome(BaseModel):
    """
    A named terminal classification (a "relationship") for processed records.

    Outcomes compare and hash by value, so ``Outcome(name="success")`` and
    ``SUCCESS`` are interchangeable.
    """

    name: str = Field(..., min_length=1)
    description: str = ""

    class Config:
        frozen = True

    def __str__(self) -> str:
        return self.name


SUCCESS = Outcome(
    name="success",
    description="Records that were successfully processed by the transform",
)

FAILURE = Outcome(
    name="failure",
    description="Records that the transform could not process",
)

DEFAULT_OUTCOMES: tuple[Outcome, ...] = (SUCCESS, FAILURE)
