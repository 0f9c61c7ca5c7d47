"""
Static mapping from script file extension to transform dialect.
"""

from pathlib import Path

from script_tester.core.transforms.base import Transform
from script_tester.core.transforms.python_script import PythonScriptTransform
from script_tester.core.transforms.rule_transform import RuleTransform


DIALECTS: dict[str, type[Transform]] = {
    "python": PythonScriptTransform,
    "rules": RuleTransform,
}

EXTENSION_DIALECTS: dict[str, str] = {
    "py": "python",
    "yaml": "rules",
    "yml": "rules",
}

DEFAULT_DIALECT = "python"


def dialect_for(script_path: str | Path) -> str:
    """
    Select the dialect for a script from its extension.

    Unrecognised or missing extensions fall back to DEFAULT_DIALECT.
    """
    extension = Path(script_path).suffix.lstrip(".").lower()
    return EXTENSION_DIALECTS.get(extension, DEFAULT_DIALECT)


def create_transform(dialect: str) -> Transform:
    """
    Instantiate the transform for a dialect.

    Raises:
        ValueError: If the dialect is not registered
    """
    transform_class = DIALECTS.get(dialect)
    if transform_class is None:
        raise ValueError(f"Unknown transform dialect: {dialect}")
    return transform_class()
