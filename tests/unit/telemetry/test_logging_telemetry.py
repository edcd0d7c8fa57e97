import logging

from envtoml.adapters.telemetry.logging_telemetry import LoggingTelemetry


def test_events_are_logged_at_info(caplog):
    with caplog.at_level(logging.INFO, logger="envtoml.telemetry"):
        LoggingTelemetry().log("conversion_completed", items_total=2)

    (record,) = caplog.records
    assert record.levelno == logging.INFO
    assert record.getMessage() == "conversion_completed"
    assert record.event == "conversion_completed"
    assert record.fields == {"items_total": 2}


def test_failures_are_logged_at_error(caplog):
    with caplog.at_level(logging.INFO, logger="envtoml.telemetry"):
        LoggingTelemetry().log("conversion_failed", error_type="DuplicateKeyError")

    assert caplog.records[0].levelno == logging.ERROR


def test_custom_logger(caplog):
    logger = logging.getLogger("envtoml.tests.custom")

    with caplog.at_level(logging.INFO, logger="envtoml.tests.custom"):
        LoggingTelemetry(logger).log("conversion_started", prefix="APP_")

    assert caplog.records[0].name == "envtoml.tests.custom"
