"""
Transform dialects and the session contract they run against.
"""

from .base import Transform
from .python_script import PythonScriptTransform
from .registry import DEFAULT_DIALECT, DIALECTS, EXTENSION_DIALECTS, create_transform, dialect_for
from .rule_config import RuleConfigLoader, RuleDefinition, RuleSet
from .rule_engine import RuleEngine, RuleEvaluation
from .rule_transform import RuleTransform
from .session import ProcessSession

__all__ = [
    "Transform",
    "ProcessSession",
    "PythonScriptTransform",
    "RuleTransform",
    "RuleEngine",
    "RuleEvaluation",
    "RuleConfigLoader",
    "RuleDefinition",
    "RuleSet",
    "DIALECTS",
    "EXTENSION_DIALECTS",
    "DEFAULT_DIALECT",
    "dialect_for",
    "create_transform",
]
