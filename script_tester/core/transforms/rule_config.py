"""
Rule configuration management for the rule dialect.

Loads routing rules from YAML files.
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field


class RuleDefinition(BaseModel):
    """
    One check applied to one payload field.

    Attributes:
        rule_name: Name reported in ``rule.failures`` / ``rule.warnings``
        rule_type: required_field, type_check, range or regex
        field_name: Attribute name, ``fileSize`` or ``content``
        parameters: Rule-specific parameters
        severity: "error" routes to failure, "warning" only annotates
        enabled: Disabled rules are ignored
    """

    rule_name: str = Field(..., min_length=1)
    rule_type: Literal["required_field", "type_check", "range", "regex"]
    field_name: str = Field(..., min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)
    severity: Literal["error", "warning"] = "error"
    enabled: bool = True


class RuleSet(BaseModel):
    """
    Parsed rule file.

    Attributes:
        rules: Rule definitions in file order
        attributes: Attributes stamped on every routed record
    """

    rules: list[RuleDefinition] = Field(default_factory=list)
    attributes: dict[str, str] = Field(default_factory=dict)


class RuleConfigLoader:
    """
    Loads routing rules from YAML configuration files.

    Expected YAML format:
    ```yaml
    rules:
      filename:
        - type: required_field
        - type: regex
          params:
            pattern: "^[a-z0-9_]+\\.txt$"

      fileSize:
        - type: range
          params:
            min: 1
            max: 1048576

      priority:
        - type: type_check
          params:
            expected_type: int
          severity: warning

    attributes:
      rules.checked: "true"
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load(self) -> RuleSet:
        """
        Load and parse the rule file.

        Returns:
            RuleSet with rules in file order

        Raises:
            ValueError: If YAML is invalid or missing required fields
        """
        with open(self.config_path, encoding="utf-8") as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}")

        if not isinstance(config, dict) or "rules" not in config:
            raise ValueError("Configuration file must contain 'rules' section")

        field_rules = config["rules"] or {}
        if not isinstance(field_rules, dict):
            raise ValueError("'rules' must map field names to rule lists")

        rules = []
        for field_name, field_rule_list in field_rules.items():
            if not isinstance(field_rule_list, list):
                raise ValueError(f"Rules for field '{field_name}' must be a list")

            for idx, rule_def in enumerate(field_rule_list):
                rules.append(self._parse_rule(str(field_name), rule_def, idx))

        attributes = config.get("attributes") or {}
        if not isinstance(attributes, dict):
            raise ValueError("'attributes' must be a mapping of names to values")

        return RuleSet(
            rules=rules,
            attributes={str(k): str(v) for k, v in attributes.items()},
        )

    def _parse_rule(self, field_name: str, rule_def: Any, idx: int) -> RuleDefinition:
        """
        Parse a single rule definition.

        Args:
            field_name: The field this rule applies to
            rule_def: The rule definition from YAML
            idx: Index of this rule for the field (for naming)

        Returns:
            Parsed RuleDefinition

        Raises:
            ValueError: If rule definition is invalid
        """
        if not isinstance(rule_def, dict) or "type" not in rule_def:
            raise ValueError(f"Rule for field '{field_name}' is missing 'type'")

        rule_type = rule_def["type"]
        rule_name = rule_def.get("name", f"{field_name}_{rule_type}_{idx}")
        parameters = rule_def.get("params", rule_def.get("parameters", {})) or {}

        severity = rule_def.get("severity", "error")
        if severity not in ("error", "warning"):
            raise ValueError(f"Invalid severity '{severity}' for rule '{rule_name}'. Must be 'error' or 'warning'")

        return RuleDefinition(
            rule_name=rule_name,
            rule_type=rule_type,
            field_name=field_name,
            parameters=parameters,
            severity=severity,
            enabled=rule_def.get("enabled", True),
        )
