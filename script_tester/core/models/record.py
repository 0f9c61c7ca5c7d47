"""
Record model representing a single unit of data moving through the pipeline.
"""

from datetime import datetime
from typing import Mapping
from uuid import uuid4

from pydantic import BaseModel, Field, computed_field


class Record(BaseModel):
    """
    A single unit of data submitted to a transform (ephemeral, one run only).

    Records are frozen. A transform that rewrites content or attributes derives
    a new version with the same record_id; the session tracks which version is
    current.

    Attributes:
        record_id: Identifier shared by every version of the record
        content: Raw byte content
        attributes: String key/value metadata (AttributeSet)
        entry_date: When the record entered the pipeline
        lineage_start_date: When the record's lineage began
        size: Derived from the content length
    """

    record_id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    content: bytes = b""
    attributes: dict[str, str] = Field(default_factory=dict)
    entry_date: datetime = Field(default_factory=datetime.utcnow)
    lineage_start_date: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "record_id": "5b0c7c0e-8d8e-4a55-9d3f-2d0f5c1f7a11",
                "content": "hello",
                "attributes": {
                    "filename": "x.txt",
                    "source.system": "crm"
                },
                "entry_date": "2025-11-17T09:30:00",
                "lineage_start_date": "2025-11-17T09:30:00"
            }
        }

    @computed_field
    @property
    def size(self) -> int:
        return len(self.content)

    def with_content(self, content: bytes) -> "Record":
        """Return a new version of this record carrying ``content``."""
        return self.model_copy(update={"content": bytes(content)})

    def with_attributes(self, attributes: Mapping[str, str]) -> "Record":
        """Return a new version of this record whose attribute map is ``attributes``."""
        return self.model_copy(update={"attributes": {str(k): str(v) for k, v in attributes.items()}})

    def text(self, encoding: str = "utf-8") -> str:
        """Content decoded as text; undecodable bytes are replaced."""
        return self.content.decode(encoding, errors="replace")

    def __str__(self) -> str:
        return f"Record[id={self.record_id}, size={self.size}, filename={self.attributes.get('filename')}]"
