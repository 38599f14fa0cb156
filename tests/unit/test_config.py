"""Tests for environment-driven settings."""

from weather_proxy.core.config import Settings
from weather_proxy.services.weather import build_weather_service


def test_defaults(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("PORT", raising=False)

    config = Settings(_env_file=None)

    assert config.api_key == ""
    assert config.port == 8080
    assert config.weather_api_url == "https://api.openweathermap.org/data/2.5/weather"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("API_KEY", "secret")
    monkeypatch.setenv("PORT", "9090")

    config = Settings(_env_file=None)

    assert config.api_key == "secret"
    assert config.port == 9090


def test_empty_port_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("PORT", "")

    assert Settings(_env_file=None).port == 8080


def test_build_weather_service_injects_credential(monkeypatch):
    monkeypatch.setenv("API_KEY", "secret")

    service = build_weather_service(Settings(_env_file=None))

    assert service.api_key == "secret"
    assert service.api_url == "https://api.openweathermap.org/data/2.5/weather"
