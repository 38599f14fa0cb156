"""Test configuration and fixtures."""

import httpx
import pytest
import pytest_asyncio

from weather_proxy.main import app, get_weather_service
from weather_proxy.services.weather import WeatherService

TEST_API_URL = "https://weather.test/data/2.5/weather"
TEST_API_KEY = "test-key"


class StubUpstream:
    """Records outbound requests and answers them with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json = None
        self.content = b""
        self.stream: httpx.AsyncByteStream | None = None
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.stream is not None:
            return httpx.Response(self.status_code, stream=self.stream)
        if self.json is not None:
            return httpx.Response(self.status_code, json=self.json)
        return httpx.Response(self.status_code, content=self.content)


@pytest.fixture
def upstream():
    """Stubbed weather provider."""
    return StubUpstream()


@pytest_asyncio.fixture
async def weather_service(upstream):
    """Weather service whose HTTP client talks to the stub."""
    service = WeatherService(
        api_key=TEST_API_KEY,
        api_url=TEST_API_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)),
    )
    yield service
    await service.close()


@pytest.fixture
def client(weather_service):
    """Async test client with the weather service wired to the stub."""
    app.dependency_overrides[get_weather_service] = lambda: weather_service
    yield httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


@pytest.fixture
def mock_weather_response():
    """Mock OpenWeatherMap current weather response."""
    return {
        "name": "London",
        "main": {"temp": 15.2, "humidity": 80, "pressure": 1012},
        "weather": [{"description": "cloudy", "icon": "04d"}],
        "clouds": {"all": 75},
    }
