"""
Attribute loader for flat key/value property files.

Parses the java.util.Properties line format so attribute files shared with
the original tooling keep working:

```properties
# comment
! also a comment
source.system = crm
owner: data-team
region eu-west-1
description = first line \\
              continued
```
"""

from pathlib import Path

from script_tester.core.errors import NotFoundError, ReadError
from script_tester.observability.logger import get_logger


logger = get_logger(__name__)

ATTRIBUTE_FILE_EXIT_CODE = 5

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"


class AttributeLoader:
    """
    Loads the attribute map merged into every input record.
    """

    def load(self, path: str | Path | None) -> dict[str, str]:
        """
        Parse a property file into an attribute map.

        Args:
            path: Property file path; empty or None means "no attributes"

        Returns:
            Attribute map in file order (later duplicate keys win)

        Raises:
            NotFoundError: If a non-empty path does not exist (exit code 5)
            ReadError: If the file cannot be read or decoded (exit code 5)
        """
        if path is None or str(path) == "":
            return {}

        file_path = Path(path)
        if not file_path.exists():
            raise NotFoundError("Attribute file", file_path, exit_code=ATTRIBUTE_FILE_EXIT_CODE)

        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(file_path, e) from e

        try:
            attributes = parse_properties(text)
        except ValueError as e:
            raise ReadError(file_path, e) from e

        logger.debug(f"Loaded {len(attributes)} attributes from {file_path}")
        return attributes


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse property-file text into an ordered dict.

    Args:
        text: File contents

    Returns:
        Mapping of keys to values

    Raises:
        ValueError: If a unicode escape is malformed
    """
    properties: dict[str, str] = {}
    for logical_line in _logical_lines(text):
        key, value = _split_key_value(logical_line)
        properties[_unescape(key)] = _unescape(value)
    return properties


def _logical_lines(text: str):
    """Join continuation lines and drop blanks and comments."""
    pending = ""
    continuing = False
    for raw in text.splitlines():
        line = raw.lstrip(_WHITESPACE)
        if not continuing:
            if not line or line[0] in "#!":
                continue
        if _ends_with_continuation(line):
            pending += line[:-1]
            continuing = True
            continue
        pending += line
        continuing = False
        yield pending
        pending = ""
    if pending:
        yield pending


def _ends_with_continuation(line: str) -> bool:
    # An odd number of trailing backslashes escapes the line break
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_key_value(line: str) -> tuple[str, str]:
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(value: str) -> str:
    if "\\" not in value:
        return value

    out = []
    index = 0
    length = len(value)
    while index < length:
        char = value[index]
        if char != "\\" or index + 1 >= length:
            out.append(char)
            index += 1
            continue

        escaped = value[index + 1]
        if escaped == "u":
            digits = value[index + 2:index + 6]
            if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                raise ValueError(f"Malformed \\uxxxx encoding: '\\u{digits}'")
            out.append(chr(int(digits, 16)))
            index += 6
            continue

        out.append(_ESCAPES.get(escaped, escaped))
        index += 2
    return "".join(out)
