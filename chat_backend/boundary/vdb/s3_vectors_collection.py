"""
S3 Vectors collection for production knowledge storage.

One S3 Vectors index per collection, created with cosine distance.
The document text is stored as non-filterable metadata next to the
file name and category.

Dependencies: boto3, botocore, tenacity, fastapi.concurrency
System role: Production vector store (S3 Vectors)
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError
from fastapi.concurrency import run_in_threadpool
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from chat_backend.boundary.vdb.vector_schemas import CollectionInfo, VectorMatch
from chat_backend.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"NotFoundException", "ResourceNotFoundException"}
THROTTLE_CODES = {
    "ThrottlingException",
    "TooManyRequestsException",
    "ServiceUnavailableException",
}
LIST_PAGE_SIZE = 500


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def _is_throttled(error: BaseException) -> bool:
    return isinstance(error, ClientError) and _error_code(error) in THROTTLE_CODES


_throttle_retry = retry(
    retry=retry_if_exception(_is_throttled),
    stop=stop_after_attempt(5),
    wait=wait_exponential_jitter(initial=1, max=30, jitter=5),
    before_sleep=lambda retry_state: logger.warning(
        f"{__name__}:_call - Retry {retry_state.attempt_number}/5 after throttling"
    ),
    reraise=True,
)


class S3VectorsCollection:
    """
    VectorCollection backed by an Amazon S3 Vectors index.

    boto3 calls are blocking, so each one runs in the threadpool.
    """

    def __init__(
        self,
        vectors_bucket: str,
        name: str = "knowledge_base",
        region: str = "ap-southeast-2",
        client: Any | None = None,
    ) -> None:
        """
        Args:
            vectors_bucket: S3 Vectors bucket name
            name: Index name used as the collection
            region: AWS region for S3 Vectors
            client: Pre-built s3vectors client (tests pass a stub)
        """
        self.name = name
        self._bucket = vectors_bucket
        self._client = client or boto3.client("s3vectors", region_name=region)

    @_throttle_retry
    def _call(self, operation: str, **kwargs) -> dict:
        method = getattr(self._client, operation)
        return method(vectorBucketName=self._bucket, indexName=self.name, **kwargs)

    async def _invoke(self, operation: str, **kwargs) -> dict:
        try:
            return await run_in_threadpool(self._call, operation, **kwargs)
        except ClientError as e:
            raise VectorStoreError(
                message=f"S3 Vectors {operation} failed",
                operation=operation,
                details={"error": str(e), "index": self.name},
            ) from e

    async def get_collection_info(self) -> CollectionInfo | None:
        try:
            response = await run_in_threadpool(self._call, "get_index")
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                return None
            raise VectorStoreError(
                message="S3 Vectors get_index failed",
                operation="get_index",
                details={"error": str(e), "index": self.name},
            ) from e

        index = response.get("index", {})
        return CollectionInfo(
            name=self.name,
            dimension=int(index.get("dimension", 0)),
            distance=str(index.get("distanceMetric", "cosine")),
        )

    async def collection_exists(self) -> bool:
        return await self.get_collection_info() is not None

    async def create_collection(self, vector_size: int) -> None:
        await self._invoke(
            "create_index",
            dataType="float32",
            dimension=vector_size,
            distanceMetric="cosine",
            metadataConfiguration={"nonFilterableMetadataKeys": ["text"]},
        )
        logger.info(
            f"{__name__}:create_collection - Created index {self.name} (dimension={vector_size})"
        )

    async def delete_collection(self) -> None:
        await self._invoke("delete_index")
        logger.warning(f"{__name__}:delete_collection - Deleted index {self.name}")

    async def upsert(self, id: str, vector: list[float], payload: dict[str, Any]) -> None:
        # S3 Vectors rejects null metadata values
        metadata = {key: value for key, value in payload.items() if value is not None}
        await self._invoke(
            "put_vectors",
            vectors=[
                {
                    "key": id,
                    "data": {"float32": [float(v) for v in vector]},
                    "metadata": metadata,
                }
            ],
        )

    async def similarity_search(
        self,
        vector: list[float],
        limit: int,
        min_score: float = 0.0,
    ) -> list[VectorMatch]:
        """
        Query the index and convert cosine distance to similarity.

        Returns:
            Matches with score >= min_score, best first
        """
        response = await self._invoke(
            "query_vectors",
            topK=limit,
            queryVector={"float32": [float(v) for v in vector]},
            returnMetadata=True,
            returnDistance=True,
        )

        matches = []
        for item in response.get("vectors", []):
            score = 1.0 - float(item.get("distance", 1.0))
            if score < min_score:
                continue
            matches.append(
                VectorMatch(id=item["key"], score=score, payload=item.get("metadata") or {})
            )
        matches.sort(key=lambda match: match.score, reverse=True)

        logger.info(
            f"{__name__}:similarity_search - Found {len(matches)} results",
            extra={"limit": limit, "min_score": min_score},
        )
        return matches

    async def delete(self, id: str) -> None:
        # Deleting an absent key is a no-op on S3 Vectors
        await self._invoke("delete_vectors", keys=[id])

    async def list_ids(self) -> list[str]:
        ids: list[str] = []
        next_token: str | None = None
        while True:
            kwargs: dict[str, Any] = {"maxResults": LIST_PAGE_SIZE}
            if next_token:
                kwargs["nextToken"] = next_token
            response = await self._invoke("list_vectors", **kwargs)
            ids.extend(item["key"] for item in response.get("vectors", []))
            next_token = response.get("nextToken")
            if not next_token:
                return ids
