"""
Microsoft Learn documentation tools.

Search and learning-path lookups go to the documentation server; when it
fails the tools answer with a deterministic fallback pointing at the
public search pages instead of an error. Code samples and Azure service
summaries are generated offline.

Dependencies: httpx, langchain_core.tools
System role: Documentation capability for the chat agent
"""

import logging
from urllib.parse import quote

import httpx
from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

from chat_backend.core.agentic_system.tools.http_tool_utils import to_json

logger = logging.getLogger(__name__)

LEARN_BASE_URL = "https://learn.microsoft.com"
SEARCH_MAX_RESULTS = 10


def _slug(value: str) -> str:
    return value.lower().replace(" ", "-")


def fallback_search_results(query: str, product: str | None) -> str:
    return to_json(
        {
            "query": query,
            "product": product or "All",
            "source": "fallback",
            "results": [
                {
                    "title": f"Microsoft Learn: {query}",
                    "url": f"{LEARN_BASE_URL}/search?query={quote(query, safe='')}",
                    "summary": f"Documentation and tutorials related to {query}",
                    "type": "documentation",
                },
                {
                    "title": f"Azure Documentation: {query}",
                    "url": f"{LEARN_BASE_URL}/azure?query={quote(query, safe='')}",
                    "summary": f"Azure-specific documentation for {query}",
                    "type": "azure-docs",
                },
            ],
        }
    )


def fallback_learning_path(topic: str) -> str:
    return to_json(
        {
            "topic": topic,
            "title": f"Learning Path: {topic}",
            "description": f"Comprehensive learning path for {topic}",
            "source": "fallback",
            "modules": [
                f"Introduction to {topic}",
                f"Advanced {topic} concepts",
                f"Best practices for {topic}",
                "Hands-on labs and exercises",
            ],
            "estimatedTime": "4-6 hours",
            "url": f"{LEARN_BASE_URL}/training/paths/{_slug(topic)}",
        }
    )


class SearchDocumentationInput(BaseModel):
    query: str = Field(description="Search query for Microsoft Learn documentation")
    product: str | None = Field(
        default=None,
        description="Product to focus on, e.g. 'Azure', 'Microsoft 365', 'Power Platform'",
    )


class LearningPathInput(BaseModel):
    topic: str = Field(description="Name or topic of the learning path")


class CodeSamplesInput(BaseModel):
    technology: str = Field(description="Technology or programming language")
    scenario: str | None = Field(default=None, description="Specific scenario or use case")


class AzureServiceInput(BaseModel):
    service_name: str = Field(description="Name of the Azure service")


async def _call_server(
    client: httpx.AsyncClient,
    server_url: str,
    method: str,
    params: dict,
) -> str | None:
    """POST an RPC-style request; None means the caller should fall back."""
    try:
        response = await client.post(server_url, json={"method": method, "params": params})
    except httpx.HTTPError as e:
        logger.warning(
            f"{__name__}:_call_server - {method} failed ({type(e).__name__}: {e}), using fallback"
        )
        return None

    if not response.is_success:
        logger.warning(
            f"{__name__}:_call_server - {method} returned {response.status_code}, using fallback"
        )
        return None
    return response.text


def create_documentation_tools(client: httpx.AsyncClient, server_url: str) -> list[BaseTool]:
    """
    Build the documentation tools around a shared HTTP client.

    Args:
        client: Async HTTP client owned by the application
        server_url: Documentation server endpoint

    Returns:
        list[BaseTool]: Documentation tools tagged "documentation"
    """

    @tool("search_documentation", args_schema=SearchDocumentationInput)
    async def search_documentation(query: str, product: str | None = None) -> str:
        """Search Microsoft Learn documentation for a topic."""
        result = await _call_server(
            client,
            server_url,
            "search",
            {"query": query, "product": product or "All", "maxResults": SEARCH_MAX_RESULTS},
        )
        return result if result is not None else fallback_search_results(query, product)

    @tool("get_learning_path", args_schema=LearningPathInput)
    async def get_learning_path(topic: str) -> str:
        """Get information about a Microsoft Learn learning path."""
        result = await _call_server(client, server_url, "getLearningPath", {"topic": topic})
        return result if result is not None else fallback_learning_path(topic)

    @tool("get_code_samples", args_schema=CodeSamplesInput)
    async def get_code_samples(technology: str, scenario: str | None = None) -> str:
        """Get links to code samples for a technology and optional scenario."""
        return to_json(
            {
                "technology": technology,
                "scenario": scenario or "General usage",
                "samples": [
                    {
                        "title": f"{technology} - Basic Example",
                        "description": f"Basic implementation example using {technology}",
                        "url": f"{LEARN_BASE_URL}/samples?technology={quote(technology, safe='')}",
                        "language": technology,
                    },
                    {
                        "title": f"{technology} - {scenario or 'Advanced'} Example",
                        "description": f"More complex example demonstrating {scenario or 'advanced features'}",
                        "url": f"https://github.com/Azure-Samples?q={quote(technology, safe='')}",
                        "language": technology,
                    },
                ],
            }
        )

    @tool("get_azure_service_info", args_schema=AzureServiceInput)
    async def get_azure_service_info(service_name: str) -> str:
        """Get documentation, quickstart and pricing links for an Azure service."""
        slug = _slug(service_name)
        return to_json(
            {
                "serviceName": service_name,
                "description": f"Information about Azure {service_name}",
                "documentation": f"{LEARN_BASE_URL}/azure/{slug}",
                "quickstart": f"{LEARN_BASE_URL}/azure/{slug}/quickstart",
                "pricing": f"https://azure.microsoft.com/pricing/details/{slug}/",
                "features": [
                    f"Scalable {service_name} capabilities",
                    "Enterprise-grade security",
                    "Global availability",
                    "Pay-as-you-use pricing",
                ],
            }
        )

    tools = [search_documentation, get_learning_path, get_code_samples, get_azure_service_info]
    for documentation_tool in tools:
        documentation_tool.tags = ["documentation"]
    return tools
