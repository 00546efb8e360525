"""
Context domain model.

A context is a named collection of documents owned by the external registry.

Dependencies: pydantic
System role: Context record returned by the ContextRepository
"""

from pydantic import BaseModel, Field


class ContextRecord(BaseModel):
    """Context registry entry."""

    id: int = Field(description="Context identifier from the external registry")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="Free-text description")
    share_point_url: str | None = Field(
        default=None,
        description="Document library URL used when citing sources",
    )

    def source_url(self) -> str:
        """URL cited for documents in this context."""
        return self.share_point_url or f"uploaded-files-{self.id}"
