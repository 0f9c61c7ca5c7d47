"""
RangeValidator - numeric fields must fall within bounds.
"""

from typing import Any

from .base_validator import BaseValidator


class RangeValidator(BaseValidator):
    """
    Parameters (at least one required):
    - min / max: inclusive bounds
    - min_exclusive / max_exclusive: exclusive bounds

    Attribute values are strings, so numeric text is converted before the
    comparison; text that is not a number fails the rule.
    """

    BOUNDS = ("min", "max", "min_exclusive", "max_exclusive")

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        self.min_value = self.parameters.get("min")
        self.max_value = self.parameters.get("max")
        self.min_exclusive = self.parameters.get("min_exclusive")
        self.max_exclusive = self.parameters.get("max_exclusive")

        if all(self.parameters.get(bound) is None for bound in self.BOUNDS):
            raise ValueError("range rule requires at least one of: " + ", ".join(self.BOUNDS))

    def validate(self, value: Any, payload: dict[str, Any]) -> None:
        if value is None:
            return

        number = self._as_number(value)

        if self.min_value is not None and number < self.min_value:
            raise self.violation(f"value {number} is less than minimum {self.min_value}")
        if self.min_exclusive is not None and number <= self.min_exclusive:
            raise self.violation(f"value {number} must be greater than {self.min_exclusive}")
        if self.max_value is not None and number > self.max_value:
            raise self.violation(f"value {number} exceeds maximum {self.max_value}")
        if self.max_exclusive is not None and number >= self.max_exclusive:
            raise self.violation(f"value {number} must be less than {self.max_exclusive}")

    def _as_number(self, value: Any) -> int | float:
        if isinstance(value, bool):
            raise self.violation("value must be numeric, got bool")
        if isinstance(value, int | float):
            return value
        try:
            text = str(value).strip()
            return int(text) if text.lstrip("+-").isdigit() else float(text)
        except ValueError:
            raise self.violation(f"value '{value}' is not numeric")

    @property
    def rule_type(self) -> str:
        return "range"
