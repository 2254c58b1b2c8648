import pytest

from polo_collector.logging_utils import reset_loggers


@pytest.fixture(autouse=True)
def _fresh_loggers():
    yield
    reset_loggers()


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("SERPAPI_API_KEY", "POLO_PROJECT_ROOT", "POLO_LOG_LEVEL", "POLO_REQUEST_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    # keep a developer's local .env out of the test run
    monkeypatch.setattr("polo_collector.config.settings.load_dotenv", lambda *a, **k: False)
    return monkeypatch
