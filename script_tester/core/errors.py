"""
Error taxonomy for the script tester.

Every fatal error carries the process exit code the CLI reports for it.
PerRecordWriteError is the only recoverable kind: writers log and collect it
instead of aborting the run.
"""

from pathlib import Path


class ScriptTesterError(Exception):
    """Base class for fatal errors. Subclasses set exit_code."""

    exit_code = 1

    def __init__(self, message: str, exit_code: int | None = None):
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code
        super().__init__(message)


class UsageError(ScriptTesterError):
    """Raised for missing or malformed command-line arguments."""

    exit_code = 1


class NotFoundError(ScriptTesterError):
    """Raised when a configured path does not exist."""

    exit_code = 3

    def __init__(self, label: str, path: str | Path, exit_code: int | None = None):
        self.label = label
        self.path = str(path)
        super().__init__(f"{label} does not exist: {path}", exit_code)


class NotDirectoryError(ScriptTesterError):
    """Raised when a configured path exists but is not a directory."""

    exit_code = 4

    def __init__(self, label: str, path: str | Path):
        self.label = label
        self.path = str(path)
        super().__init__(f"{label} is not a directory: {path}")


class ReadError(ScriptTesterError):
    """Raised when the attribute file exists but cannot be read or parsed."""

    exit_code = 5

    def __init__(self, path: str | Path, cause: Exception):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Could not read properties file: {path}, reason: {cause}")


class InputReadError(ScriptTesterError):
    """Raised when an input record (a file or stdin) cannot be read."""

    exit_code = 8

    def __init__(self, path: str | Path, cause: Exception):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Could not read input: {path}, reason: {cause}")


class TransformSetupError(ScriptTesterError):
    """Raised when a transform rejects its configuration before any record is processed."""

    exit_code = 6


class TransformExecutionError(ScriptTesterError):
    """Raised when a transform fails mid-run or leaves a record without an outcome."""

    exit_code = 7


class PerRecordWriteError(Exception):
    """A single record could not be written. Never aborts the batch."""

    def __init__(self, record_id: str, destination: str | None, message: str):
        self.record_id = record_id
        self.destination = destination
        self.message = message
        super().__init__(f"[{record_id}] {destination or '<unresolved>'}: {message}")
