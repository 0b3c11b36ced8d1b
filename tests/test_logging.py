"""Tests for structured logging setup."""

import json

from restcommons.config import Settings
from restcommons.utils.logging import LoggerMixin, get_logger, service_context, setup_logging


def test_service_context_adds_identity():
    processor = service_context("demo-service", "1.2.3")

    event = processor(None, "info", {"event": "hello"})

    assert event == {"event": "hello", "service": "demo-service", "service_version": "1.2.3"}


def test_service_context_without_version():
    processor = service_context("demo-service")

    assert processor(None, "info", {"event": "hello"}) == {"event": "hello", "service": "demo-service"}


def test_json_logs_carry_service_identity(capsys):
    settings = Settings(_env_file=None, service_name="demo-service", json_logs=True)
    setup_logging(settings, "1.2.3")

    get_logger("tests.logging").info("hello", answer=42)

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["event"] == "hello"
    assert record["answer"] == 42
    assert record["logger"] == "tests.logging"
    assert record["service"] == "demo-service"
    assert record["service_version"] == "1.2.3"
    assert record["level"] == "info"


def test_log_level_filters_events(capsys):
    settings = Settings(_env_file=None, json_logs=True, log_level="WARNING")
    setup_logging(settings)

    get_logger("tests.logging").info("quiet")

    assert capsys.readouterr().out == ""


def test_module_logger_picks_up_later_configuration(capsys):
    logger = get_logger("tests.early")
    setup_logging(Settings(_env_file=None, service_name="late-service", json_logs=True))

    logger.warning("configured late")

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["service"] == "late-service"


def test_logger_mixin_tags_component(capsys):
    class Worker(LoggerMixin):
        pass

    setup_logging(Settings(_env_file=None, json_logs=True))
    Worker().logger.info("working")

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["component"] == "Worker"
