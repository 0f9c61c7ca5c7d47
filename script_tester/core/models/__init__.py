"""
Core data models for the script tester.

All models use Pydantic for runtime validation and type safety.
"""

from .outcome import DEFAULT_OUTCOMES, FAILURE, SUCCESS, Outcome
from .persist_result import PersistResult
from .record import Record
from .run_configuration import RunConfiguration, parse_module_paths

__all__ = [
    "Record",
    "Outcome",
    "SUCCESS",
    "FAILURE",
    "DEFAULT_OUTCOMES",
    "RunConfiguration",
    "PersistResult",
    "parse_module_paths",
]
