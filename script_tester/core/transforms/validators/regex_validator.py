"""
RegexValidator - the field must match a regular expression.
"""

import re
from typing import Any

from .base_validator import BaseValidator

_FLAG_NAMES = {
    "ignorecase": re.IGNORECASE,
    "multiline": re.MULTILINE,
    "dotall": re.DOTALL,
}


class RegexValidator(BaseValidator):
    """
    Parameters:
    - pattern: regular expression, matched from the start of the value
    - flags: optional list of flag names (ignorecase, multiline, dotall)
    - full_match: require the whole value to match (default False)

    Absent fields pass; combine with required_field to demand presence.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        pattern = self.parameters.get("pattern")
        if not pattern or not isinstance(pattern, str):
            raise ValueError("regex rule requires a 'pattern' string")

        flags = 0
        for flag_name in self.parameters.get("flags", []) or []:
            flag = _FLAG_NAMES.get(str(flag_name).lower())
            if flag is None:
                raise ValueError(f"Unknown regex flag: {flag_name}")
            flags |= flag

        try:
            self.pattern = re.compile(pattern, flags)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {e}")

        self.full_match = bool(self.parameters.get("full_match", False))

    def validate(self, value: Any, payload: dict[str, Any]) -> None:
        if value is None:
            return

        text = value if isinstance(value, str) else str(value)
        matcher = self.pattern.fullmatch if self.full_match else self.pattern.match
        if not matcher(text):
            shown = text if len(text) <= 60 else text[:57] + "..."
            raise self.violation(f"value '{shown}' does not match pattern '{self.pattern.pattern}'")

    @property
    def rule_type(self) -> str:
        return "regex"
