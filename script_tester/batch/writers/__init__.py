"""
Outcome writers: reports, record content and attribute documents.
"""

from .attribute_writer import AttributeDocument, AttributeWriter
from .persistence_writer import PersistenceWriter
from .report_writer import DASHED_LINE, ReportWriter

__all__ = [
    "ReportWriter",
    "PersistenceWriter",
    "AttributeWriter",
    "AttributeDocument",
    "DASHED_LINE",
]
