"""
Attribute writer: one JSON metadata document per processed record.
"""

from datetime import datetime
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel

from script_tester.batch.readers import FILENAME_ATTRIBUTE
from script_tester.core.errors import PerRecordWriteError
from script_tester.core.models import Outcome, PersistResult, Record
from script_tester.observability.logger import get_logger
from script_tester.utils.validation import ValidationError, validate_output_filename


logger = get_logger(__name__)


class AttributeDocument(BaseModel):
    """Serialized form of a processed record's metadata."""

    record_id: str
    outcome: str
    entry_date: datetime
    lineage_start_date: datetime
    file_size: int
    attributes: dict[str, str]

    @classmethod
    def from_record(cls, record: Record, outcome: str) -> "AttributeDocument":
        return cls(
            record_id=record.record_id,
            outcome=outcome,
            entry_date=record.entry_date,
            lineage_start_date=record.lineage_start_date,
            file_size=record.size,
            attributes=dict(record.attributes),
        )


class AttributeWriter:
    """
    Writes ``<filename>.json`` (or ``<record_id>.json`` for records without
    a usable filename) for every record of an outcome group.
    """

    def write(self, outcome: Outcome | str, records: Iterable[Record], directory: str | Path) -> PersistResult:
        """
        Write attribute documents for one outcome group.

        Args:
            outcome: Outcome the records were routed to
            records: Records in transfer order
            directory: Existing destination directory

        Returns:
            PersistResult listing written files and per-record errors
        """
        name = outcome if isinstance(outcome, str) else outcome.name
        result = PersistResult(outcome=name, directory=Path(directory))

        for record in records:
            destination = result.directory / f"{self._stem(record)}.json"
            document = AttributeDocument.from_record(record, name)
            try:
                destination.write_text(document.model_dump_json(indent=2), encoding="utf-8")
            except OSError as e:
                error = PerRecordWriteError(record.record_id, str(destination), str(e))
                logger.error(
                    f"Error writing attributes of {record}: {e}",
                    extra={"outcome": name, "record_id": record.record_id},
                )
                result.errors.append(str(error))
                continue
            result.written.append(destination)

        return result

    @staticmethod
    def _stem(record: Record) -> str:
        try:
            return validate_output_filename(record.attributes.get(FILENAME_ATTRIBUTE))
        except ValidationError:
            return record.record_id
