"""Weather service translating OpenWeatherMap responses."""

import httpx
from pydantic import ValidationError

from weather_proxy.core.config import Settings
from weather_proxy.core.logging import get_logger
from weather_proxy.models.weather import UpstreamWeatherResponse, WeatherData

logger = get_logger(__name__)


class WeatherServiceError(Exception):
    """Weather service error."""

    kind = "internal"


class TransportError(WeatherServiceError):
    """The outbound request could not be completed."""

    kind = "transport"


class UpstreamError(WeatherServiceError):
    """The provider answered with a non-success status.

    The message is the provider's response body, verbatim.
    """

    kind = "upstream"

    def __init__(self, body: str, status_code: int):
        super().__init__(body)
        self.body = body
        self.status_code = status_code


class DecodeError(WeatherServiceError):
    """The provider payload could not be parsed."""

    kind = "decode"


class WeatherService:
    """Fetches current weather for a city and reshapes it."""

    def __init__(self, api_key: str, api_url: str, client: httpx.AsyncClient):
        """Initialize weather service.

        Args:
            api_key: Credential forwarded as ``appid``
            api_url: Provider current weather endpoint
            client: HTTP client used for the outbound call
        """
        self.api_key = api_key
        self.api_url = api_url
        self.client = client

    async def close(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()

    def _params(self, city: str) -> dict[str, str]:
        return {"q": city, "units": "metric", "appid": self.api_key}

    async def fetch_weather(self, city: str) -> WeatherData:
        """Get current weather for city.

        Args:
            city: Non-empty city name

        Returns:
            Weather data projected from the provider response

        Raises:
            TransportError: If the request could not be sent or answered
            UpstreamError: If the provider returned a non-success status
            DecodeError: If the provider body is not the expected JSON
        """
        logger.info("weather_request", city=city)

        try:
            async with self.client.stream("GET", self.api_url, params=self._params(city)) as response:
                if not response.is_success:
                    body = await self._read_body(response)
                    logger.warning(
                        "upstream_error_status",
                        city=city,
                        status_code=response.status_code,
                    )
                    raise UpstreamError(body, response.status_code)

                content = await response.aread()
        except httpx.RequestError as e:
            message = str(e) or f"{type(e).__name__} while contacting weather provider"
            logger.error("upstream_request_failed", city=city, error=message)
            raise TransportError(message) from e

        try:
            payload = UpstreamWeatherResponse.model_validate_json(content)
        except ValidationError as e:
            logger.error("upstream_decode_failed", city=city, error=str(e))
            raise DecodeError(f"Invalid weather payload: {e}") from e

        result = WeatherData.from_upstream(payload)
        logger.info("weather_fetched", city=city, temperature=result.temperature)
        return result

    @staticmethod
    async def _read_body(response: httpx.Response) -> str:
        """Read an error body, degrading to an empty string."""
        try:
            await response.aread()
        except httpx.HTTPError:
            return ""
        return response.text


def build_weather_service(config: Settings) -> WeatherService:
    """Create a weather service backed by a fresh HTTP client."""
    return WeatherService(
        api_key=config.api_key,
        api_url=config.weather_api_url,
        client=httpx.AsyncClient(),
    )
