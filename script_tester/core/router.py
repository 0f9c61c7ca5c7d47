"""
Read-side view of a completed transform run, grouped by outcome.
"""

from typing import Iterable

from script_tester.core.models import Outcome, Record


class OutcomeRouter:
    """
    Partitions processed records by outcome.

    Groups keep the order records were transferred in. The router performs
    no logic of its own: it is built once from the session's post-run state
    and never changes afterwards.
    """

    def __init__(self, outcomes: Iterable[Outcome], routed: Iterable[tuple[Outcome, Record]] = ()):
        """
        Initialize the router.

        Args:
            outcomes: Every outcome the transform declared
            routed: (outcome, record) pairs in transfer order
        """
        self._outcomes: dict[str, Outcome] = {}
        self._groups: dict[str, tuple[Record, ...]] = {}

        for outcome in outcomes:
            self._outcomes.setdefault(outcome.name, outcome)

        grouped: dict[str, list[Record]] = {name: [] for name in self._outcomes}
        for outcome, record in routed:
            self._outcomes.setdefault(outcome.name, outcome)
            grouped.setdefault(outcome.name, []).append(record)

        self._groups = {name: tuple(records) for name, records in grouped.items()}

    def records_for(self, outcome: Outcome | str) -> list[Record]:
        """
        Records routed to ``outcome``, in transfer order.

        Args:
            outcome: Outcome or outcome name

        Returns:
            A new list on every call; empty when nothing reached the outcome
        """
        name = outcome if isinstance(outcome, str) else outcome.name
        return list(self._groups.get(name, ()))

    def outcomes(self) -> list[Outcome]:
        """Declared outcomes, plus any others records were routed to."""
        return list(self._outcomes.values())

    def counts(self) -> dict[str, int]:
        """Number of records per outcome name."""
        return {name: len(records) for name, records in self._groups.items()}

    def __len__(self) -> int:
        return sum(len(records) for records in self._groups.values())

    def __repr__(self) -> str:
        return f"OutcomeRouter({self.counts()})"
