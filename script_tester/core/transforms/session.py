"""
Process session handed to transforms while a run executes.

The session owns the queue of submitted records and tracks, per record id,
the current version of every record a transform has taken from the queue.
Records are frozen, so every modification returns a new version that
replaces the previous one; using an older version is an error.
"""

from collections import deque
from typing import Iterable, Mapping

from script_tester.core.errors import TransformExecutionError
from script_tester.core.models import SUCCESS, Outcome, Record
from script_tester.core.router import OutcomeRouter


class ProcessSession:
    """
    Queue plus bookkeeping for one transform run.

    Usage inside a transform:
        record = session.get()
        if record is None:
            return
        record = session.put_attribute(record, "checked", "true")
        session.transfer(record, REL_SUCCESS)
    """

    def __init__(self, records: Iterable[Record], outcomes: Iterable[Outcome]):
        """
        Initialize session.

        Args:
            records: Submitted records, in submission order
            outcomes: Outcomes the transform may route to
        """
        self._queue: deque[Record] = deque(records)
        self._outcomes: dict[str, Outcome] = {outcome.name: outcome for outcome in outcomes}
        self._active: dict[str, Record] = {}
        self._transferred: set[str] = set()
        self._routed: list[tuple[Outcome, Record]] = []
        self.submitted = len(self._queue)

    # ------------------------------------------------------------------
    # Queue access
    # ------------------------------------------------------------------

    def get(self) -> Record | None:
        """Take the next queued record, or None when the queue is empty."""
        if not self._queue:
            return None
        record = self._queue.popleft()
        self._active[record.record_id] = record
        return record

    def get_batch(self, max_records: int = 100) -> list[Record]:
        """Take up to ``max_records`` queued records."""
        batch = []
        while len(batch) < max_records:
            record = self.get()
            if record is None:
                break
            batch.append(record)
        return batch

    @property
    def queue_size(self) -> int:
        return len(self._queue)

    # ------------------------------------------------------------------
    # Content and attributes
    # ------------------------------------------------------------------

    def read(self, record: Record) -> bytes:
        """Raw content of the current version of ``record``."""
        self._require_active(record)
        return record.content

    def write(self, record: Record, content: bytes | str) -> Record:
        """Replace content; returns the new version."""
        self._require_active(record)
        if isinstance(content, str):
            content = content.encode("utf-8")
        return self._replace(record.with_content(content))

    def put_attribute(self, record: Record, key: str, value: str) -> Record:
        """Set one attribute; returns the new version."""
        return self.put_all_attributes(record, {key: value})

    def put_all_attributes(self, record: Record, attributes: Mapping[str, str]) -> Record:
        """Merge attributes over the existing ones; returns the new version."""
        self._require_active(record)
        merged = dict(record.attributes)
        merged.update({str(k): str(v) for k, v in attributes.items()})
        return self._replace(record.with_attributes(merged))

    def remove_attribute(self, record: Record, key: str) -> Record:
        """Drop one attribute if present; returns the new version."""
        self._require_active(record)
        remaining = {k: v for k, v in record.attributes.items() if k != key}
        return self._replace(record.with_attributes(remaining))

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def transfer(self, record: Record, outcome: Outcome | str = SUCCESS) -> None:
        """
        Route the current version of ``record`` to ``outcome``.

        A copy is routed; changing ``record`` afterwards has no effect.

        Raises:
            TransformExecutionError: If the outcome is undeclared, the record
                was already transferred, or ``record`` is a stale version
        """
        resolved = self._resolve_outcome(outcome)
        self._require_active(record)
        del self._active[record.record_id]
        self._transferred.add(record.record_id)
        self._routed.append((resolved, record.model_copy(deep=True)))

    def unrouted(self) -> list[Record]:
        """Records that have not reached an outcome: taken but not transferred, then still queued."""
        return list(self._active.values()) + list(self._queue)

    def router(self) -> OutcomeRouter:
        """Read-side view of everything transferred so far."""
        return OutcomeRouter(self._outcomes.values(), self._routed)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve_outcome(self, outcome: Outcome | str) -> Outcome:
        name = outcome if isinstance(outcome, str) else getattr(outcome, "name", None)
        if name not in self._outcomes:
            declared = ", ".join(sorted(self._outcomes))
            raise TransformExecutionError(f"Unknown outcome '{name}'; declared outcomes: {declared}")
        return self._outcomes[name]

    def _require_active(self, record: Record) -> None:
        record_id = getattr(record, "record_id", None)
        if record_id in self._transferred:
            raise TransformExecutionError(f"{record} has already been transferred")
        current = self._active.get(record_id)
        if current is None:
            raise TransformExecutionError(f"{record!s} was not obtained from this session")
        if current is not record:
            raise TransformExecutionError(
                f"{record} is not the most recent version; use the record returned by the last modification"
            )

    def _replace(self, record: Record) -> Record:
        self._active[record.record_id] = record
        return record
