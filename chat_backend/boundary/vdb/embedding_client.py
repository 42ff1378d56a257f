"""
Embedding client.

Thin async facade over a LangChain Embeddings model that turns any
provider failure or empty result into EmbeddingError.

Dependencies: langchain_core
System role: Embedding Client used by the knowledge service
"""

import logging

from langchain_core.embeddings import Embeddings

from chat_backend.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Produces one vector per text using the configured embedding model."""

    def __init__(self, embeddings: Embeddings) -> None:
        """
        Args:
            embeddings: Any LangChain Embeddings implementation
        """
        self._embeddings = embeddings

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Raises:
            EmbeddingError: If the provider fails or returns an empty vector
        """
        try:
            vector = await self._embeddings.aembed_query(text)
        except Exception as e:
            logger.error(f"{__name__}:embed - Provider failed: {type(e).__name__}: {e}")
            raise EmbeddingError(
                f"Failed to generate embedding: {e}",
                details={"text_length": len(text)},
            ) from e

        if not vector:
            raise EmbeddingError(
                "Failed to generate embedding: empty vector returned",
                details={"text_length": len(text)},
            )
        return [float(v) for v in vector]
