"""
RequiredFieldValidator - the field must be present and non-blank.
"""

from typing import Any

from .base_validator import BaseValidator


class RequiredFieldValidator(BaseValidator):
    """
    Fails when the field is absent from the payload, or blank unless
    ``allow_empty_string`` is set.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.allow_empty_string = bool(self.parameters.get("allow_empty_string", False))

    def validate(self, value: Any, payload: dict[str, Any]) -> None:
        if self.field_name not in payload or value is None:
            raise self.violation("field is missing from record")

        if not self.allow_empty_string and isinstance(value, str) and value.strip() == "":
            raise self.violation("field value is blank")

    @property
    def rule_type(self) -> str:
        return "required_field"
