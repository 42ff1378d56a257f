"""
Knowledge base models and schemas.

Search results returned by the knowledge service and the HTTP contracts
for adding, searching and deleting documents.

Dependencies: pydantic
System role: Knowledge API contracts
"""

from pydantic import BaseModel, Field


class KnowledgeSearchResult(BaseModel):
    """Single knowledge hit with its relevance score."""

    document_id: str
    content: str
    relevance_score: float
    file_name: str | None = None
    category: str | None = None
    added_at: str | None = None


class AddDocumentRequest(BaseModel):
    """Request schema for storing a document."""

    content: str = Field(min_length=1)
    file_name: str | None = None
    category: str | None = None


class AddDocumentResponse(BaseModel):
    """Response schema after a document is stored."""

    document_id: str
    message: str = "Document added successfully"


class SearchRequest(BaseModel):
    """Request schema for knowledge search."""

    query: str = Field(min_length=1, description="Search text, or '*' to match everything")
    max_results: int = Field(default=5, ge=1, le=100)
    relevance_threshold: float | None = Field(default=None, ge=0.0, le=1.0)


class SearchResponse(BaseModel):
    """Response schema for knowledge search."""

    query: str
    results: list[KnowledgeSearchResult]
    total_results: int


class DocumentListResponse(BaseModel):
    """Identifiers of every stored document."""

    document_ids: list[str]
    total: int
