import json
import logging

import pytest
import requests

from assistant_app.config import DEFAULT_IMAGE_MODEL, DEFAULT_TEXT_MODEL, AppConfig
from assistant_app.logging_config import (
    CORRELATION_ID,
    JsonFormatter,
    correlation_context,
    log_event,
    redact_for_log,
)
from logic.errors import ConnectivityError
from tools.connectivity import ConnectivityProbe, require_online
from tools.observability import instrument_tool


class CollectingHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture()
def collected():
    handler = CollectingHandler()
    logger = logging.getLogger("tools.observability")
    logger.addHandler(handler)
    previous = logger.level
    logger.setLevel(logging.DEBUG)
    yield handler.records
    logger.removeHandler(handler)
    logger.setLevel(previous)


def _clear_env(monkeypatch):
    for key in [
        "APP_ENV",
        "APP_CONFIG_PATH",
        "APP_CONFIG_DIR",
        "GOOGLE_API_KEY",
        "API_KEY",
        "TEXT_MODEL",
        "IMAGE_MODEL",
        "STATE_BACKEND",
        "STATE_PATH",
        "PORT",
        "REQUEST_TIMEOUT_SECONDS",
        "UPLOAD_FOLDER",
        "ASSET_BASE_URL",
    ]:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment(monkeypatch):
    _clear_env(monkeypatch)

    config = AppConfig.from_env()

    assert config.text_model == DEFAULT_TEXT_MODEL
    assert config.image_model == DEFAULT_IMAGE_MODEL
    assert config.state_backend == "json"
    assert config.port == 3000
    assert config.request_timeout_seconds is None
    assert config.asset_base_url is None


def test_environment_overrides_yaml(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    (tmp_path / "staging.yaml").write_text(
        "# staging\n"
        "text_model: gemini-2.5-pro\n"
        "state_backend: sqlite\n"
        "upload_folder: 'staging-closet'\n"
        "port: 8080\n"
    )
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("APP_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("GOOGLE_API_KEY", "secret")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "12.5")

    config = AppConfig.from_env()

    assert config.text_model == "gemini-2.5-pro"
    assert config.state_backend == "sqlite"
    assert config.upload_folder == "staging-closet"
    assert config.port == 9000
    assert config.api_key == "secret"
    assert config.request_timeout_seconds == 12.5
    assert config.environment == "staging"


def test_redaction_masks_personal_data():
    scrubbed = redact_for_log(
        {
            "height": "180",
            "photo_url": "data:image/png;base64,AAAA",
            "nested": {"note": "mail me at someone@example.com", "raw": b"1234"},
            "link": "https://res.cloudinary.com/x.jpg",
            "long": "x" * 600,
            "count": 3,
        }
    )

    assert scrubbed["height"] == "[redacted]"
    assert scrubbed["photo_url"] == "[redacted]"
    assert scrubbed["nested"] == {"note": "mail me at [redacted-email]", "raw": "[4 bytes]"}
    assert scrubbed["link"] == "[redacted-url]"
    assert scrubbed["long"].endswith("...[truncated]")
    assert scrubbed["count"] == 3


def test_json_formatter_includes_event_and_correlation():
    record = logging.LogRecord("app", logging.INFO, __file__, 1, "item_added", None, None)
    record.event = "item_added"
    record.item_count = 4

    with correlation_context("corr-123"):
        payload = json.loads(JsonFormatter().format(record))

    assert payload["event"] == "item_added"
    assert payload["correlation_id"] == "corr-123"
    assert payload["item_count"] == 4
    assert payload["level"] == "INFO"


def test_correlation_context_restores_previous_value():
    before = CORRELATION_ID.get()
    with correlation_context("scoped") as correlation_id:
        assert CORRELATION_ID.get() == correlation_id == "scoped"
    assert CORRELATION_ID.get() == before


def test_log_event_redacts_fields(collected):
    log_event(logging.getLogger("tools.observability"), logging.INFO, "profile_saved", weight="70")

    assert collected[-1].event == "profile_saved"
    assert collected[-1].weight == "[redacted]"


def test_instrument_tool_logs_failures(collected):
    @instrument_tool("flaky")
    def flaky():
        raise ConnectivityError()

    with pytest.raises(ConnectivityError):
        flaky()

    events = [record.event for record in collected]
    assert events == ["tool_call_started", "tool_call_failed"]
    assert collected[-1].error_type == "ConnectivityError"
    assert collected[-1].levelno == logging.WARNING


def test_instrument_tool_logs_unexpected_errors_with_traceback(collected):
    @instrument_tool("broken")
    def broken():
        raise KeyError("candidates")

    with pytest.raises(KeyError):
        broken()

    assert collected[-1].levelno == logging.ERROR
    assert collected[-1].exc_info is not None


class _Session:
    def __init__(self, error=None):
        self.error = error

    def head(self, url, timeout=None, allow_redirects=False):
        if self.error is not None:
            raise self.error
        return object()


def test_connectivity_probe_treats_connection_errors_as_offline():
    assert ConnectivityProbe(session=_Session())() is True
    assert ConnectivityProbe(session=_Session(requests.ConnectionError("dns")))() is False
    assert ConnectivityProbe(session=_Session(requests.Timeout("slow")))() is False


def test_require_online_raises_user_message():
    with pytest.raises(ConnectivityError) as excinfo:
        require_online(lambda: False)

    assert "offline" in excinfo.value.user_message
