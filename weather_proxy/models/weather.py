"""Pydantic models for the upstream payload and API responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UpstreamModel(BaseModel):
    """Base for provider payload blocks.

    JSON ``null`` is treated like an absent value, so it decodes to the
    field default rather than failing validation.
    """

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class UpstreamMain(UpstreamModel):
    """``main`` block of the OpenWeatherMap current weather payload."""

    temp: float = 0.0
    humidity: int = 0
    pressure: int = 0


class UpstreamCondition(UpstreamModel):
    """One entry of the ``weather`` list."""

    description: str = ""
    icon: str = ""


class UpstreamClouds(UpstreamModel):
    all: int = 0


class UpstreamWeatherResponse(UpstreamModel):
    """Subset of the OpenWeatherMap ``/data/2.5/weather`` response we consume.

    Absent or null blocks fall back to zero values; unknown fields are ignored.
    """

    name: str = ""
    main: UpstreamMain = Field(default_factory=UpstreamMain)
    weather: list[UpstreamCondition] = Field(default_factory=list)
    clouds: UpstreamClouds = Field(default_factory=UpstreamClouds)


class WeatherData(BaseModel):
    """Weather data response model."""

    model_config = ConfigDict(frozen=True)

    city: str = Field(..., description="City name as reported by the provider")
    temperature: float = Field(..., description="Current temperature in Celsius")
    description: str = Field(default="", description="Weather condition description")
    clouds: int = Field(..., description="Cloud coverage in percent")
    humidity: int = Field(..., description="Humidity in percent")
    pressure: int = Field(..., description="Atmospheric pressure in hPa")
    icon: str = Field(default="", description="Provider icon code")

    @classmethod
    def from_upstream(cls, payload: UpstreamWeatherResponse) -> "WeatherData":
        """Project the provider payload onto the public response shape."""
        condition = payload.weather[0] if payload.weather else UpstreamCondition()
        return cls(
            city=payload.name,
            temperature=payload.main.temp,
            description=condition.description,
            clouds=payload.clouds.all,
            humidity=payload.main.humidity,
            pressure=payload.main.pressure,
            icon=condition.icon,
        )


class LivenessResponse(BaseModel):
    """Liveness probe response model."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
