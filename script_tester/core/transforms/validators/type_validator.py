"""
TypeValidator - the field must be convertible to an expected type.
"""

from typing import Any

from .base_validator import BaseValidator


class TypeValidator(BaseValidator):
    """
    Checks that a value is, or can be parsed as, the expected type.

    Supported types: int/integer, float/decimal/double, bool/boolean,
    str/string.
    """

    TYPE_MAPPING = {
        "integer": int,
        "int": int,
        "decimal": float,
        "float": float,
        "double": float,
        "string": str,
        "str": str,
        "boolean": bool,
        "bool": bool,
    }

    TRUE_VALUES = ("true", "1", "yes")
    FALSE_VALUES = ("false", "0", "no")

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        expected_type = self.parameters.get("expected_type")
        if not expected_type:
            raise ValueError("type_check rule requires 'expected_type'")

        self.expected_type = self.TYPE_MAPPING.get(str(expected_type).lower())
        if self.expected_type is None:
            raise ValueError(f"Unsupported type: {expected_type}")

    def validate(self, value: Any, payload: dict[str, Any]) -> None:
        if value is None:
            return

        if isinstance(value, self.expected_type) and not (
            self.expected_type is int and isinstance(value, bool)
        ):
            return

        try:
            self.parse(value)
        except (ValueError, TypeError) as e:
            raise self.violation(f"cannot parse {value!r} as {self.expected_type.__name__}: {e}")

    def parse(self, value: Any) -> Any:
        """
        Convert ``value`` to the expected type.

        Raises:
            ValueError: If the value cannot be converted
        """
        if self.expected_type is bool:
            lowered = str(value).strip().lower()
            if lowered in self.TRUE_VALUES:
                return True
            if lowered in self.FALSE_VALUES:
                return False
            raise ValueError(f"'{value}' is not a boolean")

        if self.expected_type is int and isinstance(value, str):
            return int(value.strip())

        return self.expected_type(value)

    @property
    def rule_type(self) -> str:
        return "type_check"
