"""
Microsoft Graph tools.

Profile, groups, mail, calendar, OneDrive search and contacts for the
signed-in user. The bearer credential is captured in the closure of the
tools built for one request and never stored anywhere shared.

Dependencies: httpx, langchain_core.tools
System role: Credentialed capability for the chat agent
"""

import logging
from urllib.parse import quote

import httpx
from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

from chat_backend.core.agentic_system.tools.http_tool_utils import clamp, get_text

logger = logging.getLogger(__name__)

MAX_MAIL = 50
MAX_EVENTS = 25
MAX_FILES = 25
MAX_CONTACTS = 100


class NoInput(BaseModel):
    pass


class MailInput(BaseModel):
    count: int = Field(default=10, description="Number of emails to retrieve (max 50)")


class CalendarInput(BaseModel):
    count: int = Field(default=10, description="Number of events to retrieve (max 25)")


class FileSearchInput(BaseModel):
    query: str = Field(description="Search query for files")
    count: int = Field(default=10, description="Number of results to return (max 25)")


class ContactsInput(BaseModel):
    count: int = Field(default=20, description="Number of contacts to retrieve (max 100)")


def create_graph_tools(
    client: httpx.AsyncClient,
    access_token: str,
    base_url: str = "https://graph.microsoft.com/v1.0",
) -> list[BaseTool]:
    """
    Build Graph tools bound to one caller's bearer credential.

    Args:
        client: Async HTTP client owned by the application
        access_token: Caller's OBO bearer token
        base_url: Microsoft Graph REST base URL

    Returns:
        list[BaseTool]: New tool instances tagged "graph"
    """
    headers = {"Authorization": f"Bearer {access_token}"}

    async def graph_get(path: str, failure_label: str, params: dict | None = None) -> str:
        return await get_text(client, f"{base_url}{path}", failure_label, params=params, headers=headers)

    @tool("get_my_profile", args_schema=NoInput)
    async def get_my_profile() -> str:
        """Get the signed-in user's profile (name, job title, mail, office)."""
        return await graph_get("/me", "getting user profile")

    @tool("get_my_groups", args_schema=NoInput)
    async def get_my_groups() -> str:
        """Get the groups the signed-in user is a member of."""
        return await graph_get("/me/memberOf", "getting user groups")

    @tool("get_my_mail", args_schema=MailInput)
    async def get_my_mail(count: int = 10) -> str:
        """Get the signed-in user's most recent emails (subject, sender, received time, read state)."""
        return await graph_get(
            "/me/messages",
            "getting user mail",
            params={"$top": clamp(count, 1, MAX_MAIL), "$select": "subject,from,receivedDateTime,isRead"},
        )

    @tool("get_my_calendar_events", args_schema=CalendarInput)
    async def get_my_calendar_events(count: int = 10) -> str:
        """Get the signed-in user's upcoming calendar events."""
        return await graph_get(
            "/me/events",
            "getting calendar events",
            params={"$top": clamp(count, 1, MAX_EVENTS), "$select": "subject,start,end,organizer,attendees"},
        )

    @tool("search_files", args_schema=FileSearchInput)
    async def search_files(query: str, count: int = 10) -> str:
        """Search the signed-in user's OneDrive for files."""
        return await graph_get(
            f"/me/drive/search(q='{quote(query, safe='')}')",
            "searching files",
            params={"$top": clamp(count, 1, MAX_FILES), "$select": "name,webUrl,lastModifiedDateTime,size"},
        )

    @tool("get_my_contacts", args_schema=ContactsInput)
    async def get_my_contacts(count: int = 20) -> str:
        """Get the signed-in user's contacts."""
        return await graph_get(
            "/me/contacts",
            "getting user contacts",
            params={
                "$top": clamp(count, 1, MAX_CONTACTS),
                "$select": "displayName,emailAddresses,businessPhones,mobilePhone,companyName,jobTitle",
            },
        )

    tools = [
        get_my_profile,
        get_my_groups,
        get_my_mail,
        get_my_calendar_events,
        search_files,
        get_my_contacts,
    ]
    for graph_tool in tools:
        graph_tool.tags = ["graph"]
    return tools
