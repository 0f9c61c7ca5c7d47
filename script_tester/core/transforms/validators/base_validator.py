"""
Base validator interface for rule-dialect checks.

Each validator checks one payload field of a record: an attribute, or one
of the derived fields ``fileSize`` and ``content``.
"""

from abc import ABC, abstractmethod
from typing import Any


class RuleViolation(Exception):
    """Raised when a record does not satisfy a rule."""

    def __init__(self, rule_type: str, field_name: str, message: str):
        self.rule_type = rule_type
        self.field_name = field_name
        self.message = message
        super().__init__(f"[{rule_type}] {field_name}: {message}")


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    Parameters are checked at construction so a bad rule file is rejected
    during transform setup, before any record is read.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        """
        Initialize validator.

        Args:
            field_name: Payload field to check
            parameters: Rule-specific parameters (e.g., min/max for range)
        """
        self.field_name = field_name
        self.parameters = parameters or {}

    @abstractmethod
    def validate(self, value: Any, payload: dict[str, Any]) -> None:
        """
        Check a value against this rule.

        Args:
            value: The field value, None when the field is absent
            payload: Every field of the record, for context-dependent rules

        Raises:
            RuleViolation: If the check fails
        """
        pass

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""
        pass

    def violation(self, message: str) -> RuleViolation:
        return RuleViolation(self.rule_type, self.field_name, message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, params={self.parameters})"
