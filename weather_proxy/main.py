"""FastAPI application exposing the city weather proxy."""

import time
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import Counter, Histogram, generate_latest

from weather_proxy.core.config import settings
from weather_proxy.core.logging import configure_logging, get_logger
from weather_proxy.models.weather import LivenessResponse, WeatherData
from weather_proxy.services.weather import (
    WeatherService,
    WeatherServiceError,
    build_weather_service,
)

# Configure logging
configure_logging()
logger = get_logger(__name__)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "weather_proxy_requests_total",
    "Total number of requests",
    ["method", "endpoint", "status"],
)
REQUEST_DURATION = Histogram(
    "weather_proxy_request_duration_seconds",
    "Request duration in seconds",
    ["method", "endpoint"],
)
UPSTREAM_FAILURES = Counter(
    "weather_proxy_upstream_failures_total",
    "Total number of failed weather lookups",
    ["kind"],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    logger.info("application_starting", version=settings.app_version, port=settings.port)
    app.state.weather_service = build_weather_service(settings)
    logger.info("application_started")

    yield

    logger.info("application_shutting_down")
    await app.state.weather_service.close()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Proxy returning a compact view of the current weather for a city",
    lifespan=lifespan,
)


@app.middleware("http")
async def add_correlation_id(request: Request, call_next):
    """Add correlation ID to each request for tracing."""
    correlation_id = request.headers.get("X-Correlation-ID", str(uuid.uuid4()))

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    response = await call_next(request)
    response.headers["X-Correlation-ID"] = correlation_id

    return response


@app.middleware("http")
async def allow_any_origin(request: Request, call_next):
    """Allow cross-origin access from any origin."""
    response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Track request metrics."""
    method = request.method
    started = time.perf_counter()

    response = await call_next(request)

    # route template keeps label cardinality bounded
    route = request.scope.get("route")
    endpoint = route.path if route is not None else "unmatched"

    REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(time.perf_counter() - started)
    REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=response.status_code).inc()

    return response


def get_weather_service(request: Request) -> WeatherService:
    """Return the weather service created at startup."""
    return request.app.state.weather_service


@app.get(
    "/weather",
    response_model=WeatherData,
    summary="Get weather for a city",
    description="""Fetch current weather for a city from OpenWeatherMap.

    Temperatures are in Celsius. Errors are returned as plain text.
    """,
    tags=["Weather"],
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "city": "London",
                        "temperature": 15.2,
                        "description": "cloudy",
                        "clouds": 75,
                        "humidity": 80,
                        "pressure": 1012,
                        "icon": "04d",
                    }
                }
            },
        },
        400: {"description": "City parameter missing or empty", "content": {"text/plain": {}}},
        500: {"description": "Upstream lookup failed", "content": {"text/plain": {}}},
    },
)
async def get_weather(
    city: str | None = None,
    weather_service: WeatherService = Depends(get_weather_service),
):
    """Get weather data for a city.

    Args:
        city: City name (e.g., "London"), passed to the provider as-is
        weather_service: Injected weather service

    Returns:
        Weather data, or a plain-text 400/500 response
    """
    if not city:
        return PlainTextResponse("City is required", status_code=400)

    try:
        return await weather_service.fetch_weather(city)
    except WeatherServiceError as e:
        UPSTREAM_FAILURES.labels(kind=e.kind).inc()
        logger.error("weather_request_failed", city=city, kind=e.kind, error=str(e))
        return PlainTextResponse(str(e), status_code=500)


@app.get(
    "/health/live",
    response_model=LivenessResponse,
    summary="Liveness probe",
    tags=["Health"],
)
async def liveness():
    """Liveness probe.

    Returns 200 while the process is able to serve requests.
    """
    return LivenessResponse(status="alive", version=settings.app_version)


@app.get(
    "/metrics",
    response_class=PlainTextResponse,
    summary="Prometheus metrics",
    tags=["Monitoring"],
)
async def metrics():
    """Prometheus metrics endpoint."""
    return generate_latest()


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> Response:
    """Global exception handler for unhandled errors."""
    logger.error("unhandled_exception", error=str(exc), path=request.url.path)

    return PlainTextResponse(
        "Internal server error",
        status_code=500,
        headers={"Access-Control-Allow-Origin": "*"},
    )


def run() -> None:
    """Serve the application; uvicorn exits non-zero if the port cannot be bound."""
    import uvicorn

    uvicorn.run(
        "weather_proxy.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    run()
