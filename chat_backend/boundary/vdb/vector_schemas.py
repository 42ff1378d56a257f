"""
Vector database schemas.

Pydantic models exchanged between the knowledge service and the vector
collection adapters.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class VectorMatch(BaseModel):
    """Single result from a similarity query."""

    id: str = Field(description="Point identifier")
    score: float = Field(description="Cosine similarity (higher is closer)")
    payload: dict[str, Any] = Field(default_factory=dict, description="Stored metadata")


class CollectionInfo(BaseModel):
    """Shape of an existing collection."""

    name: str
    dimension: int
    distance: str = "cosine"
