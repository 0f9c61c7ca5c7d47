"""
Record sources and attribute loading.
"""

from .attribute_loader import AttributeLoader, parse_properties
from .record_source import FILENAME_ATTRIBUTE, RecordSource, read_stdin

__all__ = [
    "RecordSource",
    "AttributeLoader",
    "FILENAME_ATTRIBUTE",
    "parse_properties",
    "read_stdin",
]
