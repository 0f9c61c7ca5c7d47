"""
Batch orchestration: record sources, the pipeline, and outcome writers.
"""

from .pipeline import ScriptPipeline
from .readers import AttributeLoader, RecordSource
from .writers import AttributeWriter, PersistenceWriter, ReportWriter

__all__ = [
    "ScriptPipeline",
    "RecordSource",
    "AttributeLoader",
    "ReportWriter",
    "PersistenceWriter",
    "AttributeWriter",
]
