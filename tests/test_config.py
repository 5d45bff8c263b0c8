import json
import logging

from certform.config import DEFAULT_API_URL, Settings
from certform.logging_config import (
    StructuredJsonFormatter, get_logger, log_with_context, operation_id_var,
    setup_logging,
)


def test_defaults_point_at_the_hosted_service(monkeypatch):
    monkeypatch.delenv("API_URL", raising=False)
    monkeypatch.delenv("API_TIMEOUT", raising=False)
    settings = Settings.from_env()
    assert settings.api_base_url == DEFAULT_API_URL
    assert settings.timeout == 30.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("API_URL", "http://localhost:5000/")
    monkeypatch.setenv("API_TIMEOUT", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.api_base_url == "http://localhost:5000"
    assert settings.timeout == 5.0
    assert settings.log_level == "DEBUG"


def test_explicit_url_wins_over_environment(monkeypatch):
    monkeypatch.setenv("API_URL", "http://env:5000")
    assert Settings.from_env("http://cli:8000").api_base_url == "http://cli:8000"


def test_upload_url_joins_base_and_path():
    settings = Settings(api_base_url="http://svc/")
    assert settings.upload_url("certificates/R100.png") == "http://svc/uploads/certificates/R100.png"
    assert settings.upload_url("/R100.png") == "http://svc/uploads/R100.png"


def test_log_entries_are_json_with_channel_and_context():
    records = []

    class Capture(logging.Handler):
        def emit(self, record):
            records.append(record)

    logger = get_logger("form")
    handler = Capture()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    token = operation_id_var.set("op-123")
    try:
        log_with_context(logger, "WARNING", "Student not found",
                         context={"reg_no": "R404"}, extra_data={"status_code": 404})
    finally:
        operation_id_var.reset(token)
        logger.removeHandler(handler)

    entry = json.loads(StructuredJsonFormatter().format(records[0]))
    assert entry["level"] == "WARNING"
    assert entry["channel"] == "form"
    assert entry["message"] == "Student not found"
    assert entry["context"] == {"operation_id": "op-123", "reg_no": "R404"}
    assert entry["extra"] == {"status_code": 404}


def test_upload_url_quotes_each_segment():
    settings = Settings(api_base_url="http://svc")
    assert settings.upload_url("certificates/R100 cert.png") == "http://svc/uploads/certificates/R100%20cert.png"


def test_log_entry_includes_exception_traceback():
    records = []

    class Capture(logging.Handler):
        def emit(self, record):
            records.append(record)

    logger = get_logger("form")
    handler = Capture()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        try:
            raise ValueError("bad body")
        except ValueError as e:
            log_with_context(logger, "ERROR", "Error fetching student", exc_info=e)
    finally:
        logger.removeHandler(handler)

    entry = json.loads(StructuredJsonFormatter().format(records[0]))
    assert "ValueError: bad body" in entry["exception"]


def test_setup_logging_uses_given_level():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug")
        assert root.level == logging.DEBUG
        assert get_logger("http").level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, StructuredJsonFormatter)
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
