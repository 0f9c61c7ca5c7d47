"""
Rule engine for evaluating routing rules against record payloads.
"""

from typing import Any

from pydantic import BaseModel, Field

from script_tester.core.models import Record
from script_tester.core.transforms.rule_config import RuleSet
from script_tester.core.transforms.validators import (
    BaseValidator,
    RangeValidator,
    RegexValidator,
    RequiredFieldValidator,
    RuleViolation,
    TypeValidator,
)

CONTENT_FIELD = "content"
SIZE_FIELD = "fileSize"


class RuleEvaluation(BaseModel):
    """
    Outcome of evaluating one record (ephemeral).

    Attributes:
        record_id: Which record was evaluated
        passed: No error-severity rule failed
        passed_rules: Rules that succeeded
        failed_rules: Error-severity rules that failed
        warnings: Warning-severity rules that failed
        messages: One message per failed or warned rule
    """

    record_id: str
    passed: bool
    passed_rules: list[str] = Field(default_factory=list)
    failed_rules: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    messages: list[str] = Field(default_factory=list)


class RuleEngine:
    """
    Applies a RuleSet to records in rule order, collecting every failure.
    """

    VALIDATOR_REGISTRY = {
        "required_field": RequiredFieldValidator,
        "type_check": TypeValidator,
        "range": RangeValidator,
        "regex": RegexValidator,
    }

    def __init__(self, rule_set: RuleSet):
        """
        Initialize the rule engine.

        Args:
            rule_set: Parsed rules

        Raises:
            ValueError: If a rule has an unknown type or bad parameters
        """
        self.rule_set = rule_set
        self.validators: list[tuple[str, str, BaseValidator]] = []
        self._build_validators()

    def _build_validators(self) -> None:
        for rule in self.rule_set.rules:
            if not rule.enabled:
                continue

            validator_class = self.VALIDATOR_REGISTRY.get(rule.rule_type)
            if not validator_class:
                raise ValueError(f"Unknown rule type: {rule.rule_type}")

            try:
                validator = validator_class(rule.field_name, rule.parameters)
            except ValueError as e:
                raise ValueError(f"Failed to create validator for rule '{rule.rule_name}': {e}")
            self.validators.append((rule.rule_name, rule.severity, validator))

    @staticmethod
    def payload_for(record: Record) -> dict[str, Any]:
        """Fields visible to rules: every attribute, plus fileSize and content."""
        payload: dict[str, Any] = dict(record.attributes)
        payload[SIZE_FIELD] = record.size
        payload[CONTENT_FIELD] = record.text()
        return payload

    def evaluate(self, record: Record) -> RuleEvaluation:
        """
        Evaluate a record against all enabled rules.

        Args:
            record: The record to evaluate

        Returns:
            RuleEvaluation with pass/fail status and per-rule details
        """
        payload = self.payload_for(record)
        passed_rules: list[str] = []
        failed_rules: list[str] = []
        warnings: list[str] = []
        messages: list[str] = []

        for rule_name, severity, validator in self.validators:
            try:
                validator.validate(payload.get(validator.field_name), payload)
                passed_rules.append(rule_name)
            except RuleViolation as violation:
                messages.append(f"{rule_name}: {violation.message}")
                if severity == "error":
                    failed_rules.append(rule_name)
                else:
                    warnings.append(rule_name)

        return RuleEvaluation(
            record_id=record.record_id,
            passed=not failed_rules,
            passed_rules=passed_rules,
            failed_rules=failed_rules,
            warnings=warnings,
            messages=messages,
        )

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule counts by type and severity
        """
        by_type: dict[str, int] = {}
        by_severity: dict[str, int] = {}
        for _, severity, validator in self.validators:
            by_type[validator.rule_type] = by_type.get(validator.rule_type, 0) + 1
            by_severity[severity] = by_severity.get(severity, 0) + 1
        return {
            "total_rules": len(self.validators),
            "rules_by_type": by_type,
            "rules_by_severity": by_severity,
        }
