"""
Base transform interface for all dialects.

All transforms inherit from Transform and implement setup() and
on_trigger(). run() is shared: it owns the session, the trigger loop and
the check that every record reached an outcome.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterable, Iterator

from script_tester.core.errors import TransformExecutionError, TransformSetupError
from script_tester.core.models import DEFAULT_OUTCOMES, Outcome, Record, RunConfiguration
from script_tester.core.router import OutcomeRouter
from script_tester.core.transforms.session import ProcessSession
from script_tester.observability.logger import get_logger


logger = get_logger(__name__)


class Transform(ABC):
    """
    Abstract base class for transform dialects.

    A transform is set up once from the RunConfiguration, then triggered
    once per submitted record (at least once, even for an empty batch).
    Each trigger may take records from the session, rewrite them and
    transfer them to an outcome.
    """

    #: Outcomes records may be transferred to
    outcomes: tuple[Outcome, ...] = DEFAULT_OUTCOMES

    def __init__(self):
        self._ready = False

    @property
    @abstractmethod
    def dialect(self) -> str:
        """Return the dialect identifier."""
        pass

    @abstractmethod
    def setup(self, config: RunConfiguration) -> None:
        """
        Prepare the transform before any record is read.

        Args:
            config: The run configuration

        Raises:
            TransformSetupError: If the configuration is rejected
        """
        pass

    @abstractmethod
    def on_trigger(self, session: ProcessSession) -> None:
        """
        Process queued records.

        Args:
            session: Session holding the queued records
        """
        pass

    @contextmanager
    def runtime(self, config: RunConfiguration) -> Iterator[None]:
        """Environment held for the duration of the trigger loop."""
        yield

    def prepare(self, config: RunConfiguration) -> None:
        """
        Run setup() once, normalising every failure to TransformSetupError.
        """
        if self._ready:
            return
        try:
            self.setup(config)
        except TransformSetupError:
            raise
        except Exception as e:
            raise TransformSetupError(f"{self.dialect} transform rejected its configuration: {e}") from e
        self._ready = True
        logger.debug(f"{self.dialect} transform ready", extra={"script": str(config.script_path)})

    def run(self, records: Iterable[Record], config: RunConfiguration) -> OutcomeRouter:
        """
        Execute the transform over a batch of records.

        A batch of more than one record triggers the transform once per
        record within a single run; zero or one record triggers it once.

        Args:
            records: Records to submit, in order
            config: The run configuration

        Returns:
            OutcomeRouter over the transferred records

        Raises:
            TransformSetupError: If setup fails
            TransformExecutionError: If a trigger raises, or any record is
                left without an outcome
        """
        self.prepare(config)

        session = ProcessSession(records, self.outcomes)
        iterations = session.submitted if session.submitted > 1 else 1

        with self.runtime(config):
            for iteration in range(1, iterations + 1):
                try:
                    self.on_trigger(session)
                except TransformExecutionError:
                    raise
                except Exception as e:
                    raise TransformExecutionError(
                        f"{self.dialect} transform failed on trigger {iteration} of {iterations}: "
                        f"{type(e).__name__}: {e}"
                    ) from e

        unrouted = session.unrouted()
        if unrouted:
            raise TransformExecutionError(
                f"{len(unrouted)} of {session.submitted} records were not transferred to any outcome: "
                + ", ".join(str(record) for record in unrouted)
            )

        return session.router()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(dialect={self.dialect})"
