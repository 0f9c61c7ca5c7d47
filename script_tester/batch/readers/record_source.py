"""
Record sources: standard input and directory trees.
"""

import os
import select
import stat
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterator, Mapping

from script_tester.core.errors import InputReadError
from script_tester.core.models import Record
from script_tester.observability.logger import get_logger
from script_tester.utils.validation import require_directory


logger = get_logger(__name__)

FILENAME_ATTRIBUTE = "filename"

# Grace period for a pipe whose writer has not produced anything yet
STDIN_WAIT_SECONDS = 0.2


class RecordSource:
    """
    Builds input records from a byte stream or a directory tree.

    Attributes loaded from a property file are merged into every record
    first; per-record attributes (``filename``) are applied afterwards and
    win on key collision.
    """

    def __init__(self, attributes: Mapping[str, str] | None = None):
        """
        Initialize record source.

        Args:
            attributes: Attributes merged into every record produced
        """
        self.attributes = dict(attributes or {})

    def load_from_stream(self, data: bytes) -> list[Record]:
        """
        Build records from one buffered read of a stream.

        Args:
            data: Everything that was available on the stream

        Returns:
            A single record, or no records when ``data`` is empty
        """
        if not data:
            logger.debug("No input available on stream, submitting an empty batch")
            return []
        return [self._new_record(bytes(data), dict(self.attributes))]

    def load_from_directory(self, path: str | Path) -> Iterator[Record]:
        """
        Lazily yield one record per regular file under ``path``.

        The directory is checked eagerly, before the first record is
        requested. Directories and symlinks to non-files are skipped;
        directory symlinks are not followed. Siblings are visited in sorted
        order.

        Args:
            path: Root directory to walk

        Returns:
            A non-restartable iterator of records

        Raises:
            NotFoundError: If the directory does not exist
            NotDirectoryError: If the path is not a directory
            InputReadError: If a file cannot be read (raised while iterating)
        """
        root = require_directory(path, "Input file directory")
        return self._walk(root)

    def _walk(self, root: Path) -> Iterator[Record]:
        for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
            dirnames.sort()
            for name in sorted(filenames):
                file_path = Path(dirpath) / name
                if not file_path.is_file():
                    logger.debug(f"Skipping non-regular entry: {file_path}")
                    continue
                yield self._record_for_file(file_path)

    def _record_for_file(self, file_path: Path) -> Record:
        attributes = dict(self.attributes)
        attributes[FILENAME_ATTRIBUTE] = file_path.name
        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise InputReadError(file_path, e) from e
        return self._new_record(content, attributes)

    @staticmethod
    def _new_record(content: bytes, attributes: dict[str, str]) -> Record:
        # A new record's lineage starts when it enters the pipeline
        now = datetime.utcnow()
        return Record(content=content, attributes=attributes, entry_date=now, lineage_start_date=now)


def read_stdin(stream: BinaryIO, wait_seconds: float = STDIN_WAIT_SECONDS) -> bytes:
    """
    Read the bytes available on a binary stream.

    An interactive terminal is treated as "no input" so the harness never
    blocks waiting for keyboard input. A pipe, FIFO or socket with nothing
    to read within ``wait_seconds`` is also "no input", even when its writer
    keeps it open. A pipe is read until it reaches end of file or stays
    silent for ``wait_seconds``; other streams are read to end of file.

    Args:
        stream: Binary stream, usually ``sys.stdin.buffer``
        wait_seconds: How long a pipe may stay silent before it counts as empty

    Returns:
        The bytes read, possibly empty

    Raises:
        InputReadError: If reading fails
    """
    isatty = getattr(stream, "isatty", None)
    if isatty is not None and isatty():
        return b""

    try:
        if _is_pipe(stream):
            return _read_available(stream.fileno(), wait_seconds)
        return stream.read() or b""
    except OSError as e:
        raise InputReadError("<stdin>", e) from e


def _read_available(fd: int, wait_seconds: float) -> bytes:
    chunks = []
    while True:
        ready, _, _ = select.select([fd], [], [], wait_seconds)
        if not ready:
            if not chunks:
                logger.debug(f"Nothing available on stdin after {wait_seconds}s")
            break
        chunk = os.read(fd, 65536)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def _is_pipe(stream: BinaryIO) -> bool:
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (AttributeError, OSError, ValueError):
        return False
    return stat.S_ISFIFO(mode) or stat.S_ISSOCK(mode)
