"""
Human-readable reports of the records routed to one outcome.
"""

import sys
from datetime import datetime
from typing import Iterable, TextIO

from script_tester.core.models import Outcome, Record


DASHED_LINE = "-" * 57


class ReportWriter:
    """
    Renders records to the report stream (stdout by default).

    Layout per record, when attributes are requested:

        Record <id>
        ---------------------------------------------------------
        Record Attributes
        Key: 'entryDate'
        	Value: '...'
        ...
        Record Attribute Map Content
        Key: 'filename'
        	Value: 'x.txt'
        ---------------------------------------------------------

    followed by the decoded content when requested, and a blank line. The
    group ends with ``Records transferred to <outcome>: <n>``.
    """

    def __init__(self, stream: TextIO | None = None):
        """
        Initialize report writer.

        Args:
            stream: Destination; resolved to sys.stdout at write time when None
        """
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def report(
        self,
        outcome: Outcome | str,
        records: Iterable[Record],
        include_attributes: bool = False,
        include_content: bool = False,
    ) -> int:
        """
        Write the report for one outcome group.

        Args:
            outcome: Outcome the records were routed to
            records: Records in transfer order
            include_attributes: Render the metadata block
            include_content: Render the decoded content

        Returns:
            Number of records reported
        """
        count = 0
        for record in records:
            count += 1
            blocks = []
            if include_attributes:
                blocks.append(self.render_attributes(record))
            if include_content:
                blocks.append(record.text())
            if blocks:
                self.stream.write("\n".join(blocks) + "\n\n")

        name = outcome if isinstance(outcome, str) else outcome.name
        self.stream.write(f"Records transferred to {name}: {count}\n\n")
        self.stream.flush()
        return count

    def render_attributes(self, record: Record) -> str:
        """Metadata block for one record, without a trailing newline."""
        lines = [
            f"Record {record.record_id}",
            DASHED_LINE,
            "Record Attributes",
            *_key_value("entryDate", _format_date(record.entry_date)),
            *_key_value("lineageStartDate", _format_date(record.lineage_start_date)),
            *_key_value("fileSize", record.size),
            "Record Attribute Map Content",
        ]
        for key, value in record.attributes.items():
            lines.extend(_key_value(key, value))
        lines.append(DASHED_LINE)
        return "\n".join(lines)


def _key_value(key: str, value: object) -> list[str]:
    return [f"Key: '{key}'", f"\tValue: '{value}'"]


def _format_date(value: datetime) -> str:
    return value.isoformat(sep=" ", timespec="milliseconds")
