"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory SQLite store, deterministic embeddings, FAISS-backed
knowledge service, scripted chat agents
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import uuid
import zlib
from datetime import datetime, timedelta, timezone
from typing import Sequence

import pytest
from langchain_core.embeddings import Embeddings
from langchain_core.messages import AIMessageChunk, ToolMessage


TEST_VECTOR_SIZE = 384


class TrigramEmbeddings(Embeddings):
    """
    Deterministic bag-of-trigrams embeddings.

    Counts hashed character trigrams into fixed buckets, so vectors are
    non-negative (cosine >= 0), identical texts score 1.0 and unrelated
    texts score low.
    """

    def __init__(self, size: int = TEST_VECTOR_SIZE) -> None:
        self.size = size

    def _embed(self, text: str) -> list[float]:
        padded = f"  {text.lower()}  "
        vector = [0.0] * self.size
        for i in range(len(padded) - 2):
            bucket = zlib.crc32(padded[i:i + 3].encode("utf-8")) % self.size
            vector[bucket] += 1.0
        return vector

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._embed(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._embed(text)

    async def aembed_query(self, text: str) -> list[float]:
        return self._embed(text)


class ScriptedAgent:
    """Agent double whose astream yields pre-set (chunk, metadata) pairs."""

    def __init__(self, chunks: Sequence, error: Exception | None = None, on_chunk=None) -> None:
        self.chunks = list(chunks)
        self.error = error
        self.on_chunk = on_chunk
        self.inputs: list[dict] = []

    async def astream(self, inputs: dict, stream_mode: str = "messages"):
        self.inputs.append(inputs)
        for index, chunk in enumerate(self.chunks):
            yield chunk, {"langgraph_node": "model"}
            if self.on_chunk is not None:
                self.on_chunk(index)
        if self.error is not None:
            raise self.error


class ScriptedAgentFactory:
    """
    AgentFactory double.

    Records the tools each turn was built with and hands out a ScriptedAgent
    producing the given text fragments.
    """

    def __init__(
        self,
        texts: Sequence[str] = ("Hi", " there", "!"),
        error: Exception | None = None,
        build_error: Exception | None = None,
        extra_chunks: Sequence = (),
        on_chunk=None,
    ) -> None:
        self.texts = list(texts)
        self.error = error
        self.build_error = build_error
        self.extra_chunks = list(extra_chunks)
        self.on_chunk = on_chunk
        self.tool_calls: list[list[str]] = []
        self.agents: list[ScriptedAgent] = []

    def __call__(self, tools):
        self.tool_calls.append([t.name for t in tools])
        if self.build_error is not None:
            raise self.build_error
        chunks = list(self.extra_chunks) + [AIMessageChunk(content=t) for t in self.texts]
        agent = ScriptedAgent(chunks, error=self.error, on_chunk=self.on_chunk)
        self.agents.append(agent)
        return agent

    @property
    def last_messages(self):
        return self.agents[-1].inputs[-1]["messages"]


@pytest.fixture
async def async_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared by every session in the test (StaticPool)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from chat_backend.boundary.db.base import Base
    # Register models with the metadata
    from chat_backend.boundary.db import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    """Session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Create a test database session.

    Yields:
        AsyncSession: Test database session with rollback on teardown
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def session_store(session_factory):
    """SqlAlchemySessionStore over the test database."""
    from chat_backend.application.adapters.session_store import SqlAlchemySessionStore

    return SqlAlchemySessionStore(session_factory)


@pytest.fixture
async def chat_session_with_history(session_factory):
    """
    Persist a session with two user/assistant exchanges.

    Returns:
        ChatSessionModel: Stored session (messages a minute apart)
    """
    from chat_backend.boundary.db.models import ChatMessageModel, ChatSessionModel

    base_time = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
    session = ChatSessionModel(user_id="user-1", title="Trip planning")
    session.messages = [
        ChatMessageModel(role="user", content="Hello", created_at=base_time),
        ChatMessageModel(role="assistant", content="Hi! How can I help?", created_at=base_time + timedelta(minutes=1)),
        ChatMessageModel(role="user", content="Is it sunny in Oslo?", created_at=base_time + timedelta(minutes=2)),
        ChatMessageModel(role="assistant", content="Let me check.", created_at=base_time + timedelta(minutes=3)),
    ]

    async with session_factory() as db:
        db.add(session)
        await db.commit()
    return session


@pytest.fixture
def trigram_embeddings() -> TrigramEmbeddings:
    return TrigramEmbeddings()


@pytest.fixture
async def knowledge_service(trigram_embeddings):
    """KnowledgeService over an in-memory FAISS collection, initialized."""
    from chat_backend.application.services.knowledge_service import KnowledgeService
    from chat_backend.boundary.vdb.embedding_client import EmbeddingClient
    from chat_backend.boundary.vdb.faiss_collection import FaissCollection

    service = KnowledgeService(
        embedding_client=EmbeddingClient(trigram_embeddings),
        collection=FaissCollection(name="test_knowledge"),
        vector_size=TEST_VECTOR_SIZE,
    )
    await service.initialize()
    return service


@pytest.fixture
def agent_factory() -> ScriptedAgentFactory:
    """Agent factory streaming "Hi there!" in three fragments."""
    return ScriptedAgentFactory()


@pytest.fixture
def tool_message_chunk() -> ToolMessage:
    """Tool result emitted inside the agent loop (never streamed to the caller)."""
    return ToolMessage(content='{"temperature": 21}', tool_call_id="call-1")


@pytest.fixture
def session_id():
    """Generate a test session ID."""
    return uuid.uuid4()


@pytest.fixture
def make_agent_factory():
    """Build ScriptedAgentFactory instances with custom scripts."""
    return ScriptedAgentFactory


@pytest.fixture
def make_scripted_agent():
    """Build ScriptedAgent instances streaming the given chunks."""
    return ScriptedAgent
