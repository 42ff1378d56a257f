"""
Knowledge base search tool.

Wraps KnowledgeService.search for agent tool calling.

Dependencies: langchain_core.tools, chat_backend.application.services.knowledge_service
System role: Knowledge retrieval tool for the chat agent
"""

import logging
from typing import TYPE_CHECKING

from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from chat_backend.application.services.knowledge_service import KnowledgeService

logger = logging.getLogger(__name__)


class KnowledgeSearchInput(BaseModel):
    query: str = Field(description="What to look for; '*' lists stored documents")
    max_results: int = Field(default=5, ge=1, le=20, description="Maximum number of documents")


def create_knowledge_tool(knowledge_service: "KnowledgeService") -> BaseTool:
    """
    Create a search tool bound to a KnowledgeService instance.

    Args:
        knowledge_service: Service used for similarity search

    Returns:
        BaseTool: Async knowledge search tool
    """

    @tool("search_knowledge_base", args_schema=KnowledgeSearchInput)
    async def search_knowledge_base(query: str, max_results: int = 5) -> str:
        """Search the organisation's knowledge base for documents relevant to the question.

        Returns matching document excerpts with file name, category and relevance score.
        """
        logger.info(f"{__name__}:search_knowledge_base - START query_len={len(query)}, max_results={max_results}")

        try:
            results = await knowledge_service.search(query, max_results=max_results)
        except Exception as e:
            logger.error(f"{__name__}:search_knowledge_base - search FAILED: {type(e).__name__}: {e}")
            return f"Error searching knowledge base: {e}"

        if not results:
            return "No relevant documents found in the knowledge base."

        formatted = []
        for result in results:
            formatted.append(
                f"""---
document_id: {result.document_id}
file_name: {result.file_name or "unknown"}
category: {result.category or "uncategorized"}
relevance_score: {result.relevance_score:.3f}

{result.content}
---"""
            )
        return "\n".join(formatted)

    search_knowledge_base.tags = ["knowledge"]
    return search_knowledge_base
