"""
Test suite for S3VectorsCollection.

Tests request shaping, distance-to-score conversion, pagination and
error translation against a stubbed s3vectors client.

System role: Verification of the production vector store adapter
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from tenacity import wait_none

from chat_backend.boundary.vdb.s3_vectors_collection import S3VectorsCollection
from chat_backend.core.exceptions import VectorStoreError


def _client_error(code: str, operation: str = "Operation") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture
def s3_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def collection(s3_client) -> S3VectorsCollection:
    return S3VectorsCollection(vectors_bucket="vectors", name="knowledge", client=s3_client)


@pytest.fixture
def no_retry_wait(monkeypatch):
    """Remove backoff sleeps from the throttling retry."""
    monkeypatch.setattr(S3VectorsCollection._call.retry, "wait", wait_none())


class TestS3VectorsCollectionIndex:
    """Test suite for index lifecycle."""

    async def test_get_collection_info_should_return_none_when_missing(self, collection, s3_client) -> None:
        """Test NotFound maps to a missing collection."""
        # Arrange
        s3_client.get_index.side_effect = _client_error("NotFoundException", "GetIndex")

        # Act & Assert
        assert await collection.get_collection_info() is None
        assert await collection.collection_exists() is False

    async def test_get_collection_info_should_read_dimension(self, collection, s3_client) -> None:
        """Test index metadata is mapped to CollectionInfo."""
        # Arrange
        s3_client.get_index.return_value = {"index": {"dimension": 384, "distanceMetric": "cosine"}}

        # Act
        info = await collection.get_collection_info()

        # Assert
        assert info.dimension == 384
        s3_client.get_index.assert_called_once_with(vectorBucketName="vectors", indexName="knowledge")

    async def test_get_collection_info_should_wrap_other_errors(self, collection, s3_client) -> None:
        """Test unexpected client errors become VectorStoreError."""
        # Arrange
        s3_client.get_index.side_effect = _client_error("AccessDeniedException", "GetIndex")

        # Act & Assert
        with pytest.raises(VectorStoreError):
            await collection.get_collection_info()

    async def test_create_collection_should_use_cosine_index(self, collection, s3_client) -> None:
        """Test the index is created with cosine distance and text as non-filterable."""
        # Act
        await collection.create_collection(384)

        # Assert
        s3_client.create_index.assert_called_once_with(
            vectorBucketName="vectors",
            indexName="knowledge",
            dataType="float32",
            dimension=384,
            distanceMetric="cosine",
            metadataConfiguration={"nonFilterableMetadataKeys": ["text"]},
        )


class TestS3VectorsCollectionPoints:
    """Test suite for vector operations."""

    async def test_upsert_should_drop_null_metadata(self, collection, s3_client) -> None:
        """Test None payload values are not sent."""
        # Act
        await collection.upsert("doc-1", [1, 2], {"text": "hello", "category": None})

        # Assert
        kwargs = s3_client.put_vectors.call_args.kwargs
        assert kwargs["vectors"] == [
            {"key": "doc-1", "data": {"float32": [1.0, 2.0]}, "metadata": {"text": "hello"}}
        ]

    async def test_similarity_search_should_convert_distance_to_score(self, collection, s3_client) -> None:
        """Test score = 1 - distance, filtered by min_score and sorted best first."""
        # Arrange
        s3_client.query_vectors.return_value = {
            "vectors": [
                {"key": "far", "distance": 0.7, "metadata": {"text": "far"}},
                {"key": "near", "distance": 0.05, "metadata": {"text": "near"}},
                {"key": "mid", "distance": 0.3},
            ]
        }

        # Act
        matches = await collection.similarity_search([0.1, 0.2], limit=3, min_score=0.5)

        # Assert
        assert [m.id for m in matches] == ["near", "mid"]
        assert matches[0].score == pytest.approx(0.95)
        assert matches[1].payload == {}
        assert s3_client.query_vectors.call_args.kwargs["topK"] == 3

    async def test_list_ids_should_follow_pagination(self, collection, s3_client) -> None:
        """Test every page is read until nextToken is absent."""
        # Arrange
        s3_client.list_vectors.side_effect = [
            {"vectors": [{"key": "a"}, {"key": "b"}], "nextToken": "page-2"},
            {"vectors": [{"key": "c"}]},
        ]

        # Act
        ids = await collection.list_ids()

        # Assert
        assert ids == ["a", "b", "c"]
        assert s3_client.list_vectors.call_args_list[1].kwargs["nextToken"] == "page-2"

    async def test_delete_should_send_key(self, collection, s3_client) -> None:
        """Test deletes address the vector by key."""
        # Act
        await collection.delete("doc-1")

        # Assert
        s3_client.delete_vectors.assert_called_once_with(
            vectorBucketName="vectors", indexName="knowledge", keys=["doc-1"]
        )

    async def test_client_errors_should_become_vector_store_errors(self, collection, s3_client) -> None:
        """Test non-throttling failures are wrapped, not retried."""
        # Arrange
        s3_client.put_vectors.side_effect = _client_error("ValidationException", "PutVectors")

        # Act & Assert
        with pytest.raises(VectorStoreError) as exc_info:
            await collection.upsert("doc-1", [1.0], {})
        assert exc_info.value.details["operation"] == "put_vectors"
        assert s3_client.put_vectors.call_count == 1

    async def test_throttling_should_be_retried(self, collection, s3_client, no_retry_wait) -> None:
        """Test throttled calls are retried until they succeed."""
        # Arrange
        s3_client.delete_vectors.side_effect = [
            _client_error("ThrottlingException", "DeleteVectors"),
            _client_error("ThrottlingException", "DeleteVectors"),
            {},
        ]

        # Act
        await collection.delete("doc-1")

        # Assert
        assert s3_client.delete_vectors.call_count == 3
