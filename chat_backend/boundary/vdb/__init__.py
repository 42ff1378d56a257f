"""
Vector database boundary layer.

Provides the knowledge collection adapters and the embedding client.
- FaissCollection: Local development collection
- S3VectorsCollection: Production S3 Vectors collection
- EmbeddingClient: Text-to-vector facade over LangChain embeddings

Dependencies: boto3, faiss-cpu, langchain_core
System role: Vector store adapter for knowledge retrieval
"""

from chat_backend.boundary.vdb.embedding_client import EmbeddingClient
from chat_backend.boundary.vdb.vector_collection import VectorCollection
from chat_backend.boundary.vdb.vector_schemas import CollectionInfo, VectorMatch

__all__ = [
    "CollectionInfo",
    "EmbeddingClient",
    "VectorCollection",
    "VectorMatch",
]
