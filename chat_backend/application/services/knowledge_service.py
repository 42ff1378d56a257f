"""
Knowledge service.

Composes the embedding client and the vector collection into
add/search/delete document operations with relevance thresholding.

Dependencies: chat_backend.boundary.vdb, chat_backend.models.knowledge
System role: Knowledge store use cases (also backs the knowledge search tool)
"""

import logging
import uuid
from datetime import datetime, timezone

from chat_backend.boundary.vdb.embedding_client import EmbeddingClient
from chat_backend.boundary.vdb.vector_collection import VectorCollection
from chat_backend.core.exceptions import DimensionMismatchError, EmbeddingError
from chat_backend.models.knowledge import KnowledgeSearchResult

logger = logging.getLogger(__name__)

# A query of exactly this token lists everything (threshold 0).
WILDCARD_QUERY = "*"
DEFAULT_RELEVANCE_THRESHOLD = 0.6
DEFAULT_MAX_RESULTS = 5


class KnowledgeService:
    """Knowledge store backed by a cosine vector collection."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        collection: VectorCollection,
        vector_size: int,
        default_threshold: float = DEFAULT_RELEVANCE_THRESHOLD,
    ) -> None:
        """
        Args:
            embedding_client: Produces document and query vectors
            collection: Vector collection holding the documents
            vector_size: Dimensionality the collection is (or will be) created with
            default_threshold: Relevance cut-off when the caller supplies none
        """
        self.embedding_client = embedding_client
        self.collection = collection
        self.vector_size = vector_size
        self.default_threshold = default_threshold

    async def initialize(self, recreate: bool = False) -> None:
        """
        Ensure the collection exists with the configured size and cosine distance.

        Must only run at process startup: recreation races with concurrent
        add/search traffic.

        Args:
            recreate: Drop an existing collection first (destroys all documents)
        """
        info = await self.collection.get_collection_info()

        if info is not None and recreate:
            logger.warning(
                f"{__name__}:initialize - Recreating collection {self.collection.name}"
            )
            await self.collection.delete_collection()
            info = None

        if info is None:
            await self.collection.create_collection(self.vector_size)
            logger.info(
                f"{__name__}:initialize - Created collection {self.collection.name} "
                f"(vector_size={self.vector_size}, distance=cosine)"
            )
            return

        if info.dimension != self.vector_size:
            # Existing data is never silently dropped; writes will fail the dimension check.
            logger.error(
                f"{__name__}:initialize - Collection {self.collection.name} has dimension "
                f"{info.dimension} but {self.vector_size} is configured; "
                f"restart with recreate_on_init to rebuild it"
            )
        else:
            logger.info(f"{__name__}:initialize - Collection {self.collection.name} ready")

    async def add_document(
        self,
        text: str,
        file_name: str | None = None,
        category: str | None = None,
    ) -> str:
        """
        Embed and store a document under a fresh identifier.

        Args:
            text: Raw document text
            file_name: Optional source file name
            category: Optional category label

        Returns:
            str: Generated document id

        Raises:
            EmbeddingError: If embedding fails or returns an empty vector
            DimensionMismatchError: If the vector length differs from the collection size
        """
        document_id = str(uuid.uuid4())
        payload = {
            "text": text,
            "fileName": file_name,
            "category": category,
            "contentLength": len(text),
            "storedAt": datetime.now(timezone.utc).isoformat(),
        }

        vector = await self.embedding_client.embed(text)
        if not vector:
            raise EmbeddingError("Failed to generate embedding", document_id=document_id)
        if len(vector) != self.vector_size:
            raise DimensionMismatchError(
                expected=self.vector_size,
                actual=len(vector),
                document_id=document_id,
            )

        await self.collection.upsert(document_id, vector, payload)
        logger.info(
            f"{__name__}:add_document - Stored document",
            extra={"document_id": document_id, "content_length": len(text)},
        )
        return document_id

    async def search(
        self,
        query: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        relevance_threshold: float | None = None,
    ) -> list[KnowledgeSearchResult]:
        """
        Rank documents by similarity to the query.

        The literal query "*" uses threshold 0 when none is supplied, so
        it returns up to max_results documents regardless of relevance.

        Returns:
            Results best first, each with relevance_score >= threshold
        """
        if relevance_threshold is None:
            relevance_threshold = 0.0 if query == WILDCARD_QUERY else self.default_threshold

        vector = await self.embedding_client.embed(query)
        matches = await self.collection.similarity_search(
            vector,
            limit=max_results,
            min_score=relevance_threshold,
        )

        results = [
            KnowledgeSearchResult(
                document_id=match.id,
                content=str(match.payload.get("text", "")),
                relevance_score=match.score,
                file_name=match.payload.get("fileName"),
                category=match.payload.get("category"),
                added_at=match.payload.get("storedAt"),
            )
            for match in matches
            if match.score >= relevance_threshold
        ]

        logger.info(
            f"{__name__}:search - Found {len(results)} results",
            extra={
                "query_length": len(query),
                "max_results": max_results,
                "threshold": relevance_threshold,
            },
        )
        return results

    async def delete_document(self, document_id: str) -> None:
        """Remove a document; deleting an unknown id is a no-op."""
        await self.collection.delete(document_id)
        logger.info(
            f"{__name__}:delete_document - Deleted document",
            extra={"document_id": document_id},
        )

    async def list_document_ids(self) -> list[str]:
        """Identifiers of every stored document (explicit alternative to the '*' query)."""
        return await self.collection.list_ids()
