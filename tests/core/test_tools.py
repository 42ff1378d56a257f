"""
Test suite for the agent tools.

Tests the weather, documentation, Graph and knowledge tools against
httpx.MockTransport: request shaping, count clamping, in-band error
strings and the documentation fallback.

System role: Verification of tool adapters
"""

import json

import httpx
import pytest

from chat_backend.configs.tools import ToolSettings
from chat_backend.core.agentic_system.tools.documentation_tools import create_documentation_tools
from chat_backend.core.agentic_system.tools.graph_tools import create_graph_tools
from chat_backend.core.agentic_system.tools.knowledge_tool import create_knowledge_tool
from chat_backend.core.agentic_system.tools.http_tool_utils import clamp
from chat_backend.core.agentic_system.tools.weather_tools import create_weather_tools


class RecordingTransport:
    """MockTransport handler that records requests and replies from a callable."""

    def __init__(self, reply) -> None:
        self.reply = reply
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.reply(request)


def _client(reply) -> tuple[httpx.AsyncClient, RecordingTransport]:
    recorder = RecordingTransport(reply)
    return httpx.AsyncClient(transport=httpx.MockTransport(recorder)), recorder


def _by_name(tools) -> dict:
    return {t.name: t for t in tools}


@pytest.fixture
def tool_settings() -> ToolSettings:
    return ToolSettings()


class TestWeatherTools:
    """Test suite for the Open-Meteo tools."""

    def test_create_weather_tools_should_tag_all_tools(self, tool_settings) -> None:
        """Test all six weather tools are built and tagged."""
        # Arrange
        client, _ = _client(lambda r: httpx.Response(200, json={}))

        # Act
        tools = create_weather_tools(client, tool_settings)

        # Assert
        assert sorted(t.name for t in tools) == [
            "get_current_weather",
            "get_historical_weather",
            "get_hourly_weather",
            "get_marine_weather",
            "get_weather_for_city",
            "get_weather_forecast",
        ]
        assert all(t.tags == ["weather"] for t in tools)

    @pytest.mark.parametrize(
        "value,low,high,expected",
        [(0, 1, 16, 1), (30, 1, 16, 16), (5, 1, 16, 5), (9, 1, 7, 7)],
    )
    def test_clamp_should_bound_values(self, value, low, high, expected) -> None:
        """Test day counts are clamped into range."""
        assert clamp(value, low, high) == expected

    async def test_get_current_weather_should_return_body(self, tool_settings) -> None:
        """Test a successful response is returned verbatim."""
        # Arrange
        client, recorder = _client(lambda r: httpx.Response(200, text='{"current": {"temperature_2m": 21}}'))
        tools = _by_name(create_weather_tools(client, tool_settings))

        # Act
        result = await tools["get_current_weather"].ainvoke({"latitude": 59.9, "longitude": 10.7})

        # Assert
        assert result == '{"current": {"temperature_2m": 21}}'
        assert recorder.requests[0].url.params["latitude"] == "59.9"
        assert recorder.requests[0].url.path == "/v1/forecast"

    async def test_get_current_weather_should_report_status_errors(self, tool_settings) -> None:
        """Test a non-success response becomes an in-band error string."""
        # Arrange
        client, _ = _client(lambda r: httpx.Response(503))
        tools = _by_name(create_weather_tools(client, tool_settings))

        # Act
        result = await tools["get_current_weather"].ainvoke({"latitude": 1.0, "longitude": 2.0})

        # Assert
        assert result == "Error: 503 - Service Unavailable"

    async def test_get_current_weather_should_report_transport_errors(self, tool_settings) -> None:
        """Test connection failures are returned, not raised."""
        # Arrange
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = _client(fail)
        tools = _by_name(create_weather_tools(client, tool_settings))

        # Act
        result = await tools["get_current_weather"].ainvoke({"latitude": 1.0, "longitude": 2.0})

        # Assert
        assert result.startswith("Error getting current weather:")

    async def test_get_weather_forecast_should_clamp_days(self, tool_settings) -> None:
        """Test forecast days above 16 are clamped."""
        # Arrange
        client, recorder = _client(lambda r: httpx.Response(200, json={}))
        tools = _by_name(create_weather_tools(client, tool_settings))

        # Act
        await tools["get_weather_forecast"].ainvoke({"latitude": 1.0, "longitude": 2.0, "days": 40})

        # Assert
        assert recorder.requests[0].url.params["forecast_days"] == "16"

    async def test_get_marine_weather_should_clamp_days(self, tool_settings) -> None:
        """Test marine forecast days are clamped to 7."""
        # Arrange
        client, recorder = _client(lambda r: httpx.Response(200, json={}))
        tools = _by_name(create_weather_tools(client, tool_settings))

        # Act
        await tools["get_marine_weather"].ainvoke({"latitude": 1.0, "longitude": 2.0, "days": 10})

        # Assert
        assert recorder.requests[0].url.params["forecast_days"] == "7"
        assert recorder.requests[0].url.host == "marine-api.open-meteo.com"

    async def test_get_weather_for_city_should_geocode_then_forecast(self, tool_settings) -> None:
        """Test the city lookup resolves coordinates and wraps the forecast."""
        # Arrange
        def reply(request):
            if request.url.host == "geocoding-api.open-meteo.com":
                return httpx.Response(
                    200,
                    json={"results": [{"name": "Oslo", "country": "Norway", "latitude": 59.91, "longitude": 10.75}]},
                )
            return httpx.Response(200, json={"current": {"temperature_2m": 4}})

        client, recorder = _client(reply)
        tools = _by_name(create_weather_tools(client, tool_settings))

        # Act
        result = json.loads(await tools["get_weather_for_city"].ainvoke({"city_name": "Oslo"}))

        # Assert
        assert result["city"] == {"name": "Oslo", "country": "Norway", "latitude": 59.91, "longitude": 10.75}
        assert result["weather"] == {"current": {"temperature_2m": 4}}
        assert recorder.requests[1].url.params["forecast_days"] == "3"

    async def test_get_weather_for_city_should_report_unknown_city(self, tool_settings) -> None:
        """Test an empty geocoding result is reported by name."""
        # Arrange
        client, _ = _client(lambda r: httpx.Response(200, json={"generationtime_ms": 0.1}))
        tools = _by_name(create_weather_tools(client, tool_settings))

        # Act
        result = await tools["get_weather_for_city"].ainvoke({"city_name": "Atlantis"})

        # Assert
        assert result == "City 'Atlantis' not found"

    async def test_get_weather_for_city_should_report_geocoding_status(self, tool_settings) -> None:
        """Test a failed geocoding call reports its status code."""
        # Arrange
        client, _ = _client(lambda r: httpx.Response(429))
        tools = _by_name(create_weather_tools(client, tool_settings))

        # Act
        result = await tools["get_weather_for_city"].ainvoke({"city_name": "Oslo"})

        # Assert
        assert result == "Error finding location for Oslo: 429"

    @pytest.mark.parametrize("body", [[], "Oslo", 42])
    async def test_get_weather_for_city_should_report_non_object_geocoding_body(
        self, tool_settings, body
    ) -> None:
        """Test a geocoding body that is not a JSON object is reported in-band."""
        # Arrange
        client, recorder = _client(lambda r: httpx.Response(200, json=body))
        tools = _by_name(create_weather_tools(client, tool_settings))

        # Act
        result = await tools["get_weather_for_city"].ainvoke({"city_name": "Oslo"})

        # Assert
        assert result == "Error finding location for Oslo: unexpected geocoding response"
        assert len(recorder.requests) == 1

    async def test_get_weather_for_city_should_report_malformed_results(self, tool_settings) -> None:
        """Test a results entry that is not an object is reported in-band."""
        # Arrange
        client, _ = _client(lambda r: httpx.Response(200, json={"results": ["Oslo"]}))
        tools = _by_name(create_weather_tools(client, tool_settings))

        # Act
        result = await tools["get_weather_for_city"].ainvoke({"city_name": "Oslo"})

        # Assert
        assert result.startswith("Error getting weather for Oslo:")


class TestDocumentationTools:
    """Test suite for the Microsoft Learn tools."""

    async def test_search_documentation_should_post_rpc_request(self) -> None:
        """Test the search request carries query, product and result limit."""
        # Arrange
        client, recorder = _client(lambda r: httpx.Response(200, text='{"results": []}'))
        tools = _by_name(create_documentation_tools(client, "https://docs.example/mcp"))

        # Act
        result = await tools["search_documentation"].ainvoke({"query": "functions"})

        # Assert
        assert result == '{"results": []}'
        body = json.loads(recorder.requests[0].content)
        assert body == {"method": "search", "params": {"query": "functions", "product": "All", "maxResults": 10}}

    async def test_search_documentation_should_fall_back_when_server_fails(self) -> None:
        """Test a failing server yields the deterministic fallback instead of an error."""
        # Arrange
        client, _ = _client(lambda r: httpx.Response(500))
        tools = _by_name(create_documentation_tools(client, "https://docs.example/mcp"))

        # Act
        result = json.loads(
            await tools["search_documentation"].ainvoke({"query": "key vault", "product": "Azure"})
        )

        # Assert
        assert result["source"] == "fallback"
        assert result["product"] == "Azure"
        assert len(result["results"]) == 2
        assert "key%20vault" in result["results"][0]["url"]

    async def test_get_learning_path_should_fall_back_on_transport_error(self) -> None:
        """Test an unreachable server still produces a learning path."""
        # Arrange
        def fail(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        client, _ = _client(fail)
        tools = _by_name(create_documentation_tools(client, "https://docs.example/mcp"))

        # Act
        result = json.loads(await tools["get_learning_path"].ainvoke({"topic": "Azure Functions"}))

        # Assert
        assert result["source"] == "fallback"
        assert result["url"].endswith("/training/paths/azure-functions")

    async def test_get_azure_service_info_should_not_call_network(self) -> None:
        """Test Azure service info is generated offline."""
        # Arrange
        client, recorder = _client(lambda r: httpx.Response(500))
        tools = _by_name(create_documentation_tools(client, "https://docs.example/mcp"))

        # Act
        result = json.loads(await tools["get_azure_service_info"].ainvoke({"service_name": "App Service"}))

        # Assert
        assert result["documentation"] == "https://learn.microsoft.com/azure/app-service"
        assert recorder.requests == []


class TestGraphTools:
    """Test suite for the Microsoft Graph tools."""

    async def test_graph_tools_should_send_bearer_credential(self) -> None:
        """Test every Graph request carries the caller's token."""
        # Arrange
        client, recorder = _client(lambda r: httpx.Response(200, json={"displayName": "Ada"}))
        tools = _by_name(create_graph_tools(client, "token-123", "https://graph.example/v1.0"))

        # Act
        result = await tools["get_my_profile"].ainvoke({})

        # Assert
        assert json.loads(result) == {"displayName": "Ada"}
        assert recorder.requests[0].headers["Authorization"] == "Bearer token-123"
        assert recorder.requests[0].url.path == "/v1.0/me"

    @pytest.mark.parametrize(
        "tool_name,args,expected_top",
        [
            ("get_my_mail", {"count": 500}, "50"),
            ("get_my_calendar_events", {"count": 100}, "25"),
            ("search_files", {"query": "budget", "count": 99}, "25"),
            ("get_my_contacts", {"count": 1000}, "100"),
            ("get_my_mail", {"count": 5}, "5"),
            ("get_my_mail", {"count": 0}, "1"),
            ("get_my_calendar_events", {"count": -3}, "1"),
            ("search_files", {"query": "budget", "count": -1}, "1"),
            ("get_my_contacts", {"count": 0}, "1"),
        ],
    )
    async def test_graph_tools_should_clamp_counts(self, tool_name, args, expected_top) -> None:
        """Test requested counts are capped per endpoint."""
        # Arrange
        client, recorder = _client(lambda r: httpx.Response(200, json={"value": []}))
        tools = _by_name(create_graph_tools(client, "token-123"))

        # Act
        await tools[tool_name].ainvoke(args)

        # Assert
        assert recorder.requests[0].url.params["$top"] == expected_top

    async def test_graph_tools_should_report_unauthorized(self) -> None:
        """Test an expired credential is reported in-band."""
        # Arrange
        client, _ = _client(lambda r: httpx.Response(401))
        tools = _by_name(create_graph_tools(client, "expired"))

        # Act
        result = await tools["get_my_groups"].ainvoke({})

        # Assert
        assert result == "Error: 401 - Unauthorized"

    def test_graph_tools_should_be_new_instances_per_token(self) -> None:
        """Test tools built for different tokens share nothing."""
        # Arrange
        client, _ = _client(lambda r: httpx.Response(200))

        # Act
        first = create_graph_tools(client, "token-a")
        second = create_graph_tools(client, "token-b")

        # Assert
        assert all(a is not b for a, b in zip(first, second))
        assert all(t.tags == ["graph"] for t in first)


class TestKnowledgeTool:
    """Test suite for the knowledge search tool."""

    async def test_search_knowledge_base_should_format_results(self, knowledge_service) -> None:
        """Test matches are rendered with file name and score."""
        # Arrange
        text = "The cafeteria opens at eight every weekday morning."
        await knowledge_service.add_document(text, file_name="facilities.md", category="office")
        tool = create_knowledge_tool(knowledge_service)

        # Act
        result = await tool.ainvoke({"query": text})

        # Assert
        assert "file_name: facilities.md" in result
        assert "category: office" in result
        assert text in result

    async def test_search_knowledge_base_should_report_no_results(self, knowledge_service) -> None:
        """Test an empty result set has a readable message."""
        # Arrange
        tool = create_knowledge_tool(knowledge_service)

        # Act
        result = await tool.ainvoke({"query": "anything at all"})

        # Assert
        assert result == "No relevant documents found in the knowledge base."
