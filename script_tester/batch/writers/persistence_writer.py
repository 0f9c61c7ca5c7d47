"""
Persistence writer for record content.

Writes each record routed to an outcome as a file named after its
``filename`` attribute. A record that cannot be written is logged and
skipped; the rest of the group is still written.
"""

from pathlib import Path
from typing import Iterable

from script_tester.batch.readers import FILENAME_ATTRIBUTE
from script_tester.core.errors import PerRecordWriteError
from script_tester.core.models import Outcome, PersistResult, Record
from script_tester.observability import metrics
from script_tester.observability.logger import get_logger
from script_tester.utils.validation import ValidationError, validate_output_filename


logger = get_logger(__name__)


class PersistenceWriter:
    """
    Writes raw record content into an existing output directory.
    """

    def persist(self, outcome: Outcome | str, records: Iterable[Record], directory: str | Path) -> PersistResult:
        """
        Write every record of one outcome group.

        Existing files with the same name are overwritten. The directory
        must already exist; it is validated before the run starts.

        Args:
            outcome: Outcome the records were routed to
            records: Records in transfer order
            directory: Destination directory

        Returns:
            PersistResult listing written files and per-record errors
        """
        name = outcome if isinstance(outcome, str) else outcome.name
        result = PersistResult(outcome=name, directory=Path(directory))

        for record in records:
            try:
                destination = self.write_record(record, result.directory)
            except PerRecordWriteError as e:
                logger.error(
                    f"Error writing {record} for relationship {name}: {e.message}",
                    extra={"outcome": name, "record_id": record.record_id, "destination": e.destination},
                )
                result.errors.append(str(e))
                continue
            result.written.append(destination)

        metrics.record_persistence(name, result.written_count, result.error_count)
        return result

    def write_record(self, record: Record, directory: Path) -> Path:
        """
        Write one record's content to ``directory/<filename>``.

        Raises:
            PerRecordWriteError: If the filename is missing or unsafe, or the
                write fails
        """
        try:
            filename = validate_output_filename(record.attributes.get(FILENAME_ATTRIBUTE))
        except ValidationError as e:
            raise PerRecordWriteError(record.record_id, None, str(e)) from e

        destination = directory / filename
        logger.info(
            f"Writing {record} into {destination}",
            extra={"record_id": record.record_id, "destination": str(destination)},
        )
        try:
            destination.write_bytes(record.content)
        except OSError as e:
            raise PerRecordWriteError(record.record_id, str(destination), str(e)) from e
        return destination
