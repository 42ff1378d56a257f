"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, chat_backend.configs
System role: Database schema initialization

Usage:
    python -m chat_backend.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from chat_backend.boundary.db.base import Base
from chat_backend.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from chat_backend.boundary.db.models import (  # noqa: F401
    ChatAttachmentModel,
    ChatMessageModel,
    ChatSessionModel,
)

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables remain unchanged.

    Args:
        engine: Engine to use (defaults to the configured application engine)
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Tables ensured: {sorted(Base.metadata.tables)}")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
