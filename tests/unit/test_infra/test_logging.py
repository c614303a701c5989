"""Unit tests for logging configuration and the JSON formatter."""

from __future__ import annotations

import json
import logging
import sys

from capability_service.infra.logging import (
    JSONFormatter,
    build_logging_config,
    get_lazy_logger,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="capability_service.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Query depth %s exceeded",
        args=(6,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_one_object_per_record() -> None:
    formatter = JSONFormatter(static={"service": "capability-service"})

    line = formatter.format(_record(depth=6, limit=5))
    data = json.loads(line)

    assert "\n" not in line
    assert data["level"] == "WARNING"
    assert data["logger"] == "capability_service.test"
    assert data["message"] == "Query depth 6 exceeded"
    assert data["service"] == "capability-service"
    assert data["depth"] == 6
    assert data["limit"] == 5
    assert data["timestamp"].endswith("Z")


def test_json_formatter_escapes_exceptions() -> None:
    try:
        raise ValueError("bad\nvalue")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    data = json.loads(JSONFormatter().format(record))

    assert "ValueError" in data["exception"]
    assert "\n" not in data["exception"]


def test_build_logging_config_handlers(tmp_path) -> None:
    config = build_logging_config(
        log_level="debug",
        service_name="capability-service",
        json_logs=False,
        console_enabled=True,
        file_path=tmp_path / "service.jsonl",
        file_max_bytes=1024,
        file_backup_count=1,
        include_uvicorn=True,
    )

    assert config["root"] == {"level": "DEBUG", "handlers": ["console", "file"]}
    assert config["handlers"]["console"]["formatter"] == "text"
    assert config["handlers"]["file"]["maxBytes"] == 1024
    assert config["loggers"]["uvicorn.access"] == {"handlers": [], "propagate": True}


def test_lazy_logger_skips_disabled_levels(caplog) -> None:
    calls: list[int] = []
    logger = get_lazy_logger("capability_service.lazy")

    def expensive() -> str:
        calls.append(1)
        return "computed"

    with caplog.at_level(logging.INFO, logger="capability_service.lazy"):
        logger.debug(expensive)
        logger.info(expensive)

    assert calls == [1]
    assert [r.getMessage() for r in caplog.records] == ["computed"]
