"""
Open-Meteo weather tools.

Current conditions, forecasts, hourly, historical, marine and city
lookups. Open-Meteo needs no credential, so these tools are built once
per process.

Dependencies: httpx, langchain_core.tools, chat_backend.configs.tools
System role: Weather capability for the chat agent
"""

import json
import logging

import httpx
from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

from chat_backend.configs.tools import ToolSettings
from chat_backend.core.agentic_system.tools.http_tool_utils import clamp, get_text, to_json

logger = logging.getLogger(__name__)

CURRENT_FIELDS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,is_day,precipitation,rain,"
    "showers,snowfall,weather_code,cloud_cover,pressure_msl,surface_pressure,"
    "wind_speed_10m,wind_direction_10m,wind_gusts_10m"
)
DAILY_FIELDS = (
    "weather_code,temperature_2m_max,temperature_2m_min,apparent_temperature_max,"
    "apparent_temperature_min,sunrise,sunset,daylight_duration,sunshine_duration,"
    "uv_index_max,precipitation_sum,rain_sum,showers_sum,snowfall_sum,precipitation_hours,"
    "precipitation_probability_max,wind_speed_10m_max,wind_gusts_10m_max,"
    "wind_direction_10m_dominant"
)
HOURLY_FIELDS = (
    "temperature_2m,relative_humidity_2m,dew_point_2m,apparent_temperature,"
    "precipitation_probability,precipitation,rain,showers,snowfall,snow_depth,weather_code,"
    "pressure_msl,surface_pressure,cloud_cover,visibility,wind_speed_10m,"
    "wind_direction_10m,wind_gusts_10m"
)
HISTORICAL_FIELDS = (
    "weather_code,temperature_2m_max,temperature_2m_min,temperature_2m_mean,"
    "apparent_temperature_max,apparent_temperature_min,apparent_temperature_mean,"
    "sunrise,sunset,daylight_duration,sunshine_duration,precipitation_sum,rain_sum,"
    "snowfall_sum,precipitation_hours,wind_speed_10m_max,wind_gusts_10m_max,"
    "wind_direction_10m_dominant,shortwave_radiation_sum"
)
CITY_CURRENT_FIELDS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,is_day,precipitation,"
    "weather_code,cloud_cover,pressure_msl,wind_speed_10m,wind_direction_10m"
)
CITY_DAILY_FIELDS = (
    "weather_code,temperature_2m_max,temperature_2m_min,precipitation_sum,wind_speed_10m_max"
)
MARINE_FIELDS = (
    "wave_height_max,wave_direction_dominant,wave_period_max,wind_wave_height_max,"
    "wind_wave_direction_dominant,wind_wave_period_max,swell_wave_height_max,"
    "swell_wave_direction_dominant,swell_wave_period_max"
)


class LocationInput(BaseModel):
    latitude: float = Field(description="Latitude of the location")
    longitude: float = Field(description="Longitude of the location")
    temperature_unit: str = Field(default="celsius", description="celsius or fahrenheit")


class ForecastInput(LocationInput):
    days: int = Field(default=7, description="Number of forecast days (1-16)")


class HourlyInput(LocationInput):
    days: int = Field(default=2, description="Number of days of hourly data (1-16)")


class HistoricalInput(LocationInput):
    start_date: str = Field(description="Start date in YYYY-MM-DD format")
    end_date: str = Field(description="End date in YYYY-MM-DD format")


class CityInput(BaseModel):
    city_name: str = Field(description="City name, e.g. 'London', 'New York', 'Tokyo'")
    country_code: str | None = Field(default=None, description="Optional ISO country code, e.g. 'GB'")
    temperature_unit: str = Field(default="celsius", description="celsius or fahrenheit")


class MarineInput(LocationInput):
    days: int = Field(default=3, description="Number of forecast days (1-7)")


def _units(temperature_unit: str) -> dict[str, str]:
    return {
        "temperature_unit": temperature_unit,
        "wind_speed_unit": "kmh",
        "precipitation_unit": "mm",
    }


def create_weather_tools(client: httpx.AsyncClient, settings: ToolSettings) -> list[BaseTool]:
    """
    Build the Open-Meteo tools around a shared HTTP client.

    Args:
        client: Async HTTP client owned by the application
        settings: Endpoint configuration

    Returns:
        list[BaseTool]: Weather tools tagged "weather"
    """
    forecast_url = f"{settings.weather_base_url}/forecast"

    @tool("get_current_weather", args_schema=LocationInput)
    async def get_current_weather(
        latitude: float, longitude: float, temperature_unit: str = "celsius"
    ) -> str:
        """Get current weather conditions (temperature, humidity, wind, precipitation) for a location."""
        return await get_text(
            client,
            forecast_url,
            "getting current weather",
            params={"latitude": latitude, "longitude": longitude, "current": CURRENT_FIELDS, **_units(temperature_unit)},
        )

    @tool("get_weather_forecast", args_schema=ForecastInput)
    async def get_weather_forecast(
        latitude: float, longitude: float, days: int = 7, temperature_unit: str = "celsius"
    ) -> str:
        """Get the daily weather forecast (highs, lows, conditions) for up to 16 days."""
        return await get_text(
            client,
            forecast_url,
            "getting weather forecast",
            params={
                "latitude": latitude,
                "longitude": longitude,
                "daily": DAILY_FIELDS,
                "forecast_days": clamp(days, 1, 16),
                **_units(temperature_unit),
            },
        )

    @tool("get_hourly_weather", args_schema=HourlyInput)
    async def get_hourly_weather(
        latitude: float, longitude: float, days: int = 2, temperature_unit: str = "celsius"
    ) -> str:
        """Get the hourly weather forecast (temperature, precipitation, wind) for a location."""
        return await get_text(
            client,
            forecast_url,
            "getting hourly weather",
            params={
                "latitude": latitude,
                "longitude": longitude,
                "hourly": HOURLY_FIELDS,
                "forecast_days": clamp(days, 1, 16),
                **_units(temperature_unit),
            },
        )

    @tool("get_historical_weather", args_schema=HistoricalInput)
    async def get_historical_weather(
        latitude: float,
        longitude: float,
        start_date: str,
        end_date: str,
        temperature_unit: str = "celsius",
    ) -> str:
        """Get historical daily weather for a location and date range."""
        return await get_text(
            client,
            settings.weather_archive_url,
            "getting historical weather",
            params={
                "latitude": latitude,
                "longitude": longitude,
                "start_date": start_date,
                "end_date": end_date,
                "daily": HISTORICAL_FIELDS,
                **_units(temperature_unit),
            },
        )

    @tool("get_weather_for_city", args_schema=CityInput)
    async def get_weather_for_city(
        city_name: str, country_code: str | None = None, temperature_unit: str = "celsius"
    ) -> str:
        """Get current weather and a 3-day forecast for a city by name."""
        params = {"name": city_name, "count": 1, "language": "en", "format": "json"}
        if country_code:
            params["country_code"] = country_code

        try:
            geocode = await client.get(settings.weather_geocoding_url, params=params)
            if not geocode.is_success:
                return f"Error finding location for {city_name}: {geocode.status_code}"

            body = geocode.json()
            if not isinstance(body, dict):
                return f"Error finding location for {city_name}: unexpected geocoding response"

            results = body.get("results") or []
            if not results:
                return f"City '{city_name}' not found"

            place = results[0]
            latitude, longitude = place["latitude"], place["longitude"]
            weather = await client.get(
                forecast_url,
                params={
                    "latitude": latitude,
                    "longitude": longitude,
                    "current": CITY_CURRENT_FIELDS,
                    "daily": CITY_DAILY_FIELDS,
                    "forecast_days": 3,
                    **_units(temperature_unit),
                },
            )
            if not weather.is_success:
                return f"Error getting weather data: {weather.status_code}"

            return to_json(
                {
                    "city": {
                        "name": place.get("name"),
                        "country": place.get("country"),
                        "latitude": latitude,
                        "longitude": longitude,
                    },
                    "weather": weather.json(),
                }
            )
        except (httpx.HTTPError, json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning(f"{__name__}:get_weather_for_city - {type(e).__name__}: {e}")
            return f"Error getting weather for {city_name}: {e}"

    @tool("get_marine_weather", args_schema=MarineInput)
    async def get_marine_weather(
        latitude: float, longitude: float, days: int = 3, temperature_unit: str = "celsius"
    ) -> str:
        """Get marine forecast (wave height, swell, ocean conditions) for a coastal location."""
        return await get_text(
            client,
            settings.weather_marine_url,
            "getting marine weather",
            params={
                "latitude": latitude,
                "longitude": longitude,
                "daily": MARINE_FIELDS,
                "forecast_days": clamp(days, 1, 7),
                "temperature_unit": temperature_unit,
                "wind_speed_unit": "kmh",
            },
        )

    tools = [
        get_current_weather,
        get_weather_forecast,
        get_hourly_weather,
        get_historical_weather,
        get_weather_for_city,
        get_marine_weather,
    ]
    for weather_tool in tools:
        weather_tool.tags = ["weather"]
    return tools
