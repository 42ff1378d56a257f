"""
Vector store factory for selecting between FAISS (dev) and S3 Vectors (prod).

Driven by VECTOR_STORE_STORE_TYPE. Both adapters satisfy VectorCollection.

Dependencies: chat_backend.boundary.vdb, chat_backend.configs
System role: Vector store and embedding client instantiation
"""

import logging

from chat_backend.boundary.vdb.embedding_client import EmbeddingClient
from chat_backend.boundary.vdb.faiss_collection import FaissCollection
from chat_backend.boundary.vdb.s3_vectors_collection import S3VectorsCollection
from chat_backend.boundary.vdb.vector_collection import VectorCollection
from chat_backend.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_vector_collection(config: VectorStoreSettings) -> VectorCollection:
    """
    Build the knowledge collection adapter for the configured backend.

    Raises:
        ValueError: If store_type is not 'faiss' or 's3'
    """
    store_type = config.store_type.lower()

    if store_type == "faiss":
        logger.info(
            f"{__name__}:get_vector_collection - Creating FAISS collection (local dev mode)"
        )
        return FaissCollection(
            name=config.collection_name,
            persist_dir=config.faiss_index_dir,
        )

    if store_type == "s3":
        logger.info(
            f"{__name__}:get_vector_collection - Creating S3 Vectors collection (production mode)"
        )
        return S3VectorsCollection(
            vectors_bucket=config.vectors_bucket,
            name=config.collection_name,
            region=config.aws_region,
        )

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'faiss' (dev) or 's3' (production)."
    )


def get_embedding_client(config: VectorStoreSettings) -> EmbeddingClient:
    """Build the embedding client producing vectors of the collection's size."""
    from chat_backend.boundary.vdb.embeddings_wrapper import FixedDimensionEmbeddings

    return EmbeddingClient(
        FixedDimensionEmbeddings(
            model=config.embedding_model,
            output_dimensionality=config.vector_size,
        )
    )
