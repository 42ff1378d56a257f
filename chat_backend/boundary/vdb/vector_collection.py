"""
Vector collection contract.

Both the production (S3 Vectors) and local (FAISS) adapters implement
this protocol so the knowledge service never depends on a backend.

Dependencies: typing
System role: Vector Store interface
"""

from typing import Any, Protocol

from chat_backend.boundary.vdb.vector_schemas import CollectionInfo, VectorMatch


class VectorCollection(Protocol):
    """Cosine-distance collection of (id, vector, payload) points."""

    name: str

    async def collection_exists(self) -> bool:
        ...

    async def get_collection_info(self) -> CollectionInfo | None:
        ...

    async def create_collection(self, vector_size: int) -> None:
        ...

    async def delete_collection(self) -> None:
        ...

    async def upsert(self, id: str, vector: list[float], payload: dict[str, Any]) -> None:
        ...

    async def similarity_search(
        self,
        vector: list[float],
        limit: int,
        min_score: float = 0.0,
    ) -> list[VectorMatch]:
        ...

    async def delete(self, id: str) -> None:
        ...

    async def list_ids(self) -> list[str]:
        ...
