"""
Input validation utilities for the script tester.

Provides the eager path checks run before any record is read, and the
filename checks that keep persisted records inside their output directory.
"""

from pathlib import Path

from script_tester.core.errors import NotDirectoryError, NotFoundError


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def require_directory(path: str | Path, label: str) -> Path:
    """
    Ensure a configured path exists and is a directory.

    Directories are never created implicitly.

    Args:
        path: The configured directory
        label: Human-readable name used in error messages

    Returns:
        The path as a Path

    Raises:
        NotFoundError: If the path does not exist (exit code 3)
        NotDirectoryError: If the path exists but is not a directory (exit code 4)

    Examples:
        >>> require_directory("/tmp", "Input file directory")
        PosixPath('/tmp')
        >>> require_directory("/does/not/exist", "Input file directory")  # doctest: +SKIP
        NotFoundError: Input file directory does not exist: /does/not/exist
    """
    directory = Path(path)
    if not directory.exists():
        raise NotFoundError(label, directory)
    if not directory.is_dir():
        raise NotDirectoryError(label, directory)
    return directory


def require_file(path: str | Path, label: str, exit_code: int) -> Path:
    """
    Ensure a configured file exists.

    Args:
        path: The configured file
        label: Human-readable name used in error messages
        exit_code: Exit code reported when the file is missing

    Returns:
        The path as a Path

    Raises:
        NotFoundError: If the path does not exist
    """
    file_path = Path(path)
    if not file_path.exists():
        raise NotFoundError(label, file_path, exit_code=exit_code)
    return file_path


def validate_output_filename(filename: str | None, field_name: str = "filename") -> str:
    """
    Validate a filename taken from a record attribute.

    The name must resolve to a direct child of the output directory.

    Args:
        filename: The attribute value to validate
        field_name: Name of the attribute (for error messages)

    Returns:
        The validated filename

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_output_filename("a.txt")
        'a.txt'
        >>> validate_output_filename("../etc/passwd")  # doctest: +SKIP
        ValidationError: filename must not contain path separators
        >>> validate_output_filename(None)  # doctest: +SKIP
        ValidationError: record has no 'filename' attribute
    """
    if filename is None:
        raise ValidationError(f"record has no '{field_name}' attribute")

    if not isinstance(filename, str) or not filename.strip():
        raise ValidationError(f"{field_name} must be a non-empty string")

    if "\x00" in filename:
        raise ValidationError(f"{field_name} contains null bytes")

    if "/" in filename or "\\" in filename:
        raise ValidationError(f"{field_name} must not contain path separators: '{filename}'")

    if filename in (".", ".."):
        raise ValidationError(f"{field_name} must not be a relative directory reference: '{filename}'")

    # Linux NAME_MAX
    if len(filename.encode("utf-8")) > 255:
        raise ValidationError(f"{field_name} exceeds maximum length of 255 bytes")

    return filename
