"""
Vector store configuration settings.

Knowledge collection layout (name, dimensionality, distance) and the
backend selection between local FAISS and Amazon S3 Vectors.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for the knowledge store
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from chat_backend.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (FAISS for dev, S3 Vectors for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="faiss",
        description="Vector store type: 'faiss' for local dev, 's3' for production",
    )
    collection_name: str = Field(
        default="knowledge_base",
        description="Collection (S3 Vectors index) holding knowledge documents",
    )
    vector_size: int = Field(
        default=384,
        description="Embedding dimensionality the collection is created with",
    )
    recreate_on_init: bool = Field(
        default=False,
        description="Drop and recreate the collection at startup (destroys data)",
    )

    vectors_bucket: str = Field(
        default="chat-backend-dev-vectors",
        description="S3 Vectors bucket name",
    )
    aws_region: str = Field(default="ap-southeast-2", description="AWS region for S3 Vectors")
    faiss_index_dir: str = Field(
        default="/tmp/.faiss_index",
        description="Directory used to persist the local FAISS collection",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )

    default_max_results: int = Field(default=5, description="Default number of search results")
    default_threshold: float = Field(
        default=0.6,
        description="Minimum relevance score for knowledge search (0.0-1.0)",
    )
