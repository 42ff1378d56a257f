"""
Knowledge base API endpoints.

Routes:
- POST /knowledge/documents - Embed and store a document
- GET /knowledge/documents - List stored documents (capped by max_results)
- GET /knowledge/documents/ids - List stored document ids
- DELETE /knowledge/documents/{id} - Delete a document (idempotent)
- POST /knowledge/search - Similarity search with relevance threshold

Dependencies: chat_backend.application.services.knowledge_service, chat_backend.models.knowledge
System role: Knowledge store HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from chat_backend.application.services.knowledge_service import WILDCARD_QUERY, KnowledgeService
from chat_backend.api.deps import get_knowledge_service
from chat_backend.core.exceptions import (
    DimensionMismatchError,
    EmbeddingError,
    VectorStoreError,
)
from chat_backend.models.knowledge import (
    AddDocumentRequest,
    AddDocumentResponse,
    DocumentListResponse,
    SearchRequest,
    SearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


@router.post("/documents", response_model=AddDocumentResponse, status_code=201)
async def add_document(
    request: AddDocumentRequest,
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> AddDocumentResponse:
    """
    Embed and store a document.

    Raises:
        HTTPException(422): Embedding length does not match the collection
        HTTPException(502): Embedding or vector store failure
    """
    try:
        document_id = await knowledge_service.add_document(
            request.content,
            file_name=request.file_name,
            category=request.category,
        )
    except DimensionMismatchError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except (EmbeddingError, VectorStoreError) as e:
        logger.error(f"{__name__}:add_document - {type(e).__name__}: {e}")
        raise HTTPException(status_code=502, detail=e.message)
    return AddDocumentResponse(document_id=document_id)


@router.get("/documents", response_model=SearchResponse)
async def list_documents(
    max_results: int = Query(default=100, ge=1, le=1000),
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> SearchResponse:
    """List stored documents with their text and metadata, up to max_results."""
    try:
        results = await knowledge_service.search(WILDCARD_QUERY, max_results=max_results)
    except (EmbeddingError, VectorStoreError) as e:
        logger.error(f"{__name__}:list_documents - {type(e).__name__}: {e}")
        raise HTTPException(status_code=502, detail=e.message)
    return SearchResponse(query=WILDCARD_QUERY, results=results, total_results=len(results))


@router.get("/documents/ids", response_model=DocumentListResponse)
async def list_document_ids(
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> DocumentListResponse:
    """List identifiers of every stored document."""
    try:
        document_ids = await knowledge_service.list_document_ids()
    except VectorStoreError as e:
        logger.error(f"{__name__}:list_document_ids - {type(e).__name__}: {e}")
        raise HTTPException(status_code=502, detail=e.message)
    return DocumentListResponse(document_ids=document_ids, total=len(document_ids))


@router.delete("/documents/{document_id}", status_code=204)
async def delete_document(
    document_id: str,
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> None:
    """Delete a document; unknown ids succeed."""
    try:
        await knowledge_service.delete_document(document_id)
    except VectorStoreError as e:
        logger.error(f"{__name__}:delete_document - {type(e).__name__}: {e}")
        raise HTTPException(status_code=502, detail=e.message)


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> SearchResponse:
    """
    Search the knowledge base.

    The query "*" returns up to max_results documents regardless of relevance.
    """
    try:
        results = await knowledge_service.search(
            request.query,
            max_results=request.max_results,
            relevance_threshold=request.relevance_threshold,
        )
    except (EmbeddingError, VectorStoreError) as e:
        logger.error(f"{__name__}:search - {type(e).__name__}: {e}")
        raise HTTPException(status_code=502, detail=e.message)
    return SearchResponse(query=request.query, results=results, total_results=len(results))
