"""
FAISS collection for local development.

Same contract as S3VectorsCollection, held in memory and optionally
persisted to disk. Vectors are L2-normalised and searched with inner
product, which equals cosine similarity.

Dependencies: faiss-cpu, numpy
System role: Local vector store for development and tests
"""

import json
import logging
from pathlib import Path
from typing import Any

import faiss
import numpy as np

from chat_backend.boundary.vdb.vector_schemas import CollectionInfo, VectorMatch
from chat_backend.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class FaissCollection:
    """
    VectorCollection backed by a faiss IndexIDMap2 over IndexFlatIP.

    String point ids are mapped to sequential int64 faiss ids. Every
    method body is synchronous, so calls are atomic on the event loop.
    """

    def __init__(self, name: str = "knowledge_base", persist_dir: str | Path | None = None) -> None:
        """
        Args:
            name: Collection name (file stem when persisted)
            persist_dir: Directory to save/load the index; None keeps it in memory
        """
        self.name = name
        self._persist_dir = Path(persist_dir) if persist_dir else None
        self._index: faiss.IndexIDMap2 | None = None
        self._dimension: int | None = None
        self._int_ids: dict[str, int] = {}
        self._payloads: dict[str, dict[str, Any]] = {}
        self._next_int_id = 0

        if self._persist_dir:
            self._load()

    @property
    def _index_path(self) -> Path:
        return self._persist_dir / f"{self.name}.faiss"

    @property
    def _meta_path(self) -> Path:
        return self._persist_dir / f"{self.name}.json"

    def _load(self) -> None:
        if not (self._index_path.exists() and self._meta_path.exists()):
            return
        self._index = faiss.read_index(str(self._index_path))
        meta = json.loads(self._meta_path.read_text(encoding="utf-8"))
        self._dimension = meta["dimension"]
        self._int_ids = meta["int_ids"]
        self._payloads = meta["payloads"]
        self._next_int_id = meta["next_int_id"]
        logger.info(
            f"{__name__}:_load - Loaded {len(self._payloads)} points from {self._index_path}"
        )

    def _save(self) -> None:
        if not self._persist_dir:
            return
        self._persist_dir.mkdir(parents=True, exist_ok=True)
        if self._index is None:
            self._index_path.unlink(missing_ok=True)
            self._meta_path.unlink(missing_ok=True)
            return
        faiss.write_index(self._index, str(self._index_path))
        self._meta_path.write_text(
            json.dumps(
                {
                    "dimension": self._dimension,
                    "int_ids": self._int_ids,
                    "payloads": self._payloads,
                    "next_int_id": self._next_int_id,
                }
            ),
            encoding="utf-8",
        )

    def _require_index(self, operation: str) -> faiss.IndexIDMap2:
        if self._index is None:
            raise VectorStoreError(
                message=f"Collection {self.name} does not exist",
                operation=operation,
            )
        return self._index

    def _normalise(self, vector: list[float]) -> np.ndarray:
        array = np.asarray([vector], dtype=np.float32)
        faiss.normalize_L2(array)
        return array

    async def get_collection_info(self) -> CollectionInfo | None:
        if self._index is None:
            return None
        return CollectionInfo(name=self.name, dimension=self._dimension)

    async def collection_exists(self) -> bool:
        return self._index is not None

    async def create_collection(self, vector_size: int) -> None:
        self._index = faiss.IndexIDMap2(faiss.IndexFlatIP(vector_size))
        self._dimension = vector_size
        self._int_ids = {}
        self._payloads = {}
        self._next_int_id = 0
        self._save()
        logger.info(
            f"{__name__}:create_collection - Created collection {self.name} (dimension={vector_size})"
        )

    async def delete_collection(self) -> None:
        self._index = None
        self._dimension = None
        self._int_ids = {}
        self._payloads = {}
        self._save()
        logger.warning(f"{__name__}:delete_collection - Deleted collection {self.name}")

    async def upsert(self, id: str, vector: list[float], payload: dict[str, Any]) -> None:
        index = self._require_index("upsert")
        if len(vector) != self._dimension:
            raise VectorStoreError(
                message=f"Vector length {len(vector)} does not match collection dimension {self._dimension}",
                operation="upsert",
            )

        if id in self._int_ids:
            index.remove_ids(np.asarray([self._int_ids[id]], dtype=np.int64))
            int_id = self._int_ids[id]
        else:
            int_id = self._next_int_id
            self._next_int_id += 1

        index.add_with_ids(self._normalise(vector), np.asarray([int_id], dtype=np.int64))
        self._int_ids[id] = int_id
        self._payloads[id] = dict(payload)
        self._save()

    async def similarity_search(
        self,
        vector: list[float],
        limit: int,
        min_score: float = 0.0,
    ) -> list[VectorMatch]:
        index = self._require_index("query")
        if index.ntotal == 0 or limit <= 0:
            return []

        scores, int_ids = index.search(self._normalise(vector), min(limit, index.ntotal))
        by_int_id = {int_id: point_id for point_id, int_id in self._int_ids.items()}

        matches = []
        for score, int_id in zip(scores[0], int_ids[0]):
            if int_id == -1 or float(score) < min_score:
                continue
            point_id = by_int_id[int(int_id)]
            matches.append(
                VectorMatch(id=point_id, score=float(score), payload=self._payloads[point_id])
            )
        return matches

    async def delete(self, id: str) -> None:
        index = self._require_index("delete")
        int_id = self._int_ids.pop(id, None)
        if int_id is None:
            return
        index.remove_ids(np.asarray([int_id], dtype=np.int64))
        self._payloads.pop(id, None)
        self._save()

    async def list_ids(self) -> list[str]:
        self._require_index("list")
        return list(self._payloads)
