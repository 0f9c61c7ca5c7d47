"""
Script pipeline orchestration.

Coordinates the flow: validate → load → transform → route → report/persist
"""

import sys
from typing import Any, BinaryIO, TextIO

from script_tester.batch.readers import AttributeLoader, RecordSource, read_stdin
from script_tester.batch.writers import AttributeWriter, PersistenceWriter, ReportWriter
from script_tester.core.errors import ScriptTesterError
from script_tester.core.models import FAILURE, SUCCESS, PersistResult, Record, RunConfiguration
from script_tester.core.router import OutcomeRouter
from script_tester.core.transforms import Transform, create_transform
from script_tester.observability import metrics
from script_tester.observability.logger import get_logger, log_operation
from script_tester.utils.validation import require_directory, require_file


logger = get_logger(__name__)

SCRIPT_NOT_FOUND_EXIT_CODE = 2


class ScriptPipeline:
    """
    Runs one batch of records through one transform.

    Flow:
    1. Validate every configured path and set up the transform
    2. Load the attribute file
    3. Read records from the input directory or stdin
    4. Run the transform once over the whole batch
    5. Report and persist the success group, then the failure group
    6. Write attribute documents for every outcome (when configured)

    Configuration errors are raised from steps 1-2, before any record is
    read. An unreadable input file or stream fails step 3 (InputReadError).
    """

    def __init__(
        self,
        config: RunConfiguration,
        transform: Transform | None = None,
        stdin: BinaryIO | None = None,
        report_stream: TextIO | None = None,
    ):
        """
        Initialize script pipeline.

        Args:
            config: Immutable run configuration
            transform: Transform to run (defaults to the config's dialect)
            stdin: Binary input stream used when no input directory is set
            report_stream: Destination for reports (defaults to stdout)
        """
        self.config = config
        self.transform = transform or create_transform(config.dialect)
        self.stdin = stdin

        self.attribute_loader = AttributeLoader()
        self.report_writer = ReportWriter(report_stream)
        self.persistence_writer = PersistenceWriter()
        self.attribute_writer = AttributeWriter()

    def validate(self) -> dict[str, str]:
        """
        Check every configured path and prepare the transform.

        Returns:
            Attributes loaded from the attribute file

        Raises:
            NotFoundError, NotDirectoryError, ReadError, TransformSetupError
        """
        config = self.config
        require_file(config.script_path, "Script file", SCRIPT_NOT_FOUND_EXIT_CODE)
        self.transform.prepare(config)

        attributes = self.attribute_loader.load(config.attribute_file)

        if config.input_dir is not None:
            require_directory(config.input_dir, "Input file directory")
        for label, path in config.output_dirs().items():
            require_directory(path, label)

        return attributes

    def load_records(self, attributes: dict[str, str]) -> list[Record]:
        """
        Read the input batch.

        Args:
            attributes: Attributes merged into every record

        Returns:
            Records in submission order
        """
        source = RecordSource(attributes)
        if self.config.input_dir is not None:
            label = "directory"
            records = list(source.load_from_directory(self.config.input_dir))
        else:
            label = "stdin"
            stream = self.stdin if self.stdin is not None else sys.stdin.buffer
            records = source.load_from_stream(read_stdin(stream))

        metrics.increment_counter(metrics.records_loaded_total, len(records), source=label)
        logger.info(f"Submitting {len(records)} records from {label}", extra={"source": label, "count": len(records)})
        return records

    def execute(self) -> dict[str, Any]:
        """
        Run the complete pipeline.

        Returns:
            Dictionary with processing results:
            - total_records: Records submitted to the transform
            - routed: Record count per outcome name
            - written: Files written per output kind and outcome
            - write_errors: Per-record write errors

        Raises:
            ScriptTesterError: Any fatal error; nothing is persisted when it is
                raised before the transform runs
        """
        try:
            with log_operation("Validating configuration", logger=logger):
                attributes = self.validate()

            records = self.load_records(attributes)

            with log_operation("Running transform", logger=logger, dialect=self.transform.dialect):
                with metrics.track_duration(metrics.run_duration_seconds, dialect=self.transform.dialect):
                    router = self.transform.run(records, self.config)
        except ScriptTesterError:
            metrics.increment_counter(metrics.runs_total, status="failure")
            raise

        counts = router.counts()
        metrics.record_routing(counts)
        logger.info(f"Transform routed {len(router)} records: {counts}", extra={"routed": counts})

        results = self.emit(router)
        metrics.increment_counter(metrics.runs_total, status="success")

        return {
            "total_records": len(records),
            "routed": counts,
            "written": {key: result.written_count for key, result in results.items()},
            "write_errors": [error for result in results.values() for error in result.errors],
        }

    def emit(self, router: OutcomeRouter) -> dict[str, PersistResult]:
        """
        Report and persist outcome groups as configured.

        Args:
            router: Post-run view of the transform

        Returns:
            PersistResult per "<kind>:<outcome>" key
        """
        config = self.config
        results: dict[str, PersistResult] = {}

        groups = (
            (SUCCESS, config.report_success, config.success_dir),
            (FAILURE, config.report_failure, config.failure_dir),
        )
        for outcome, report, directory in groups:
            records = router.records_for(outcome)
            if report:
                self.report_writer.report(
                    outcome,
                    records,
                    include_attributes=config.include_attributes,
                    include_content=config.include_content,
                )
            if directory is not None:
                results[f"content:{outcome.name}"] = self.persistence_writer.persist(outcome, records, directory)

        if config.attributes_dir is not None:
            for outcome in router.outcomes():
                results[f"attributes:{outcome.name}"] = self.attribute_writer.write(
                    outcome, router.records_for(outcome), config.attributes_dir
                )

        return results
