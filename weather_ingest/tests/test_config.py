import structlog

from weather_ingest.config import AppSettings
from weather_ingest.logging import init_logging


def test_defaults():
    s = AppSettings(_env_file=None)
    assert s.port == 3002
    assert s.collection == "weather_data"
    assert s.unit_group == "metric"
    assert s.atomic_ingest is True
    assert s.forecast_base_url.endswith("/timeline/")


def test_env_prefix_overrides(monkeypatch):
    monkeypatch.setenv("APP_FORECAST_API_KEY", "from-env")
    monkeypatch.setenv("APP_ATOMIC_INGEST", "false")
    monkeypatch.setenv("APP_DATABASE_URL", "sqlite:///./elsewhere.db")
    s = AppSettings(_env_file=None)
    assert s.forecast_api_key == "from-env"
    assert s.atomic_ingest is False
    assert s.database_url == "sqlite:///./elsewhere.db"


def test_init_logging_returns_logger():
    logger = init_logging("warning")
    assert hasattr(logger, "info")


def test_init_logging_merges_request_context():
    init_logging("INFO")
    assert structlog.get_config()["processors"][0] is structlog.contextvars.merge_contextvars
