import json
import logging

import pytest

from bundleplan.logging import (
    ColorHandler,
    debug_log_artifact,
    get_log_level,
    log_time_duration,
    pluralize,
    setup_logger,
)


def read_records(stderr: str) -> list[dict]:
    return [json.loads(line) for line in stderr.strip().splitlines()]


def test_setup_logger_adds_one_handler():
    logger = setup_logger("tests.handlers", logging.DEBUG)
    setup_logger("tests.handlers", logging.DEBUG)

    assert logger.level == logging.DEBUG
    handlers = [handler for handler in logger.handlers if isinstance(handler, ColorHandler)]
    assert len(handlers) == 1


def test_records_go_to_stderr_with_build_mode(capsys: pytest.CaptureFixture):
    logger = setup_logger("tests.stderr", logging.DEBUG)
    logger.warning("Template missing", extra={"build_mode": "production"})

    captured = capsys.readouterr()
    assert captured.out == ""

    (record,) = read_records(captured.err)
    assert record["level"] == "WARNING"
    assert record["name"] == "tests.stderr"
    assert record["message"] == "Template missing"
    assert record["build_mode"] == "production"
    assert "duration" not in record


def test_exception_logging(capsys: pytest.CaptureFixture):
    logger = setup_logger("tests.exception", logging.DEBUG)
    try:
        raise ValueError("Unknown build mode")
    except ValueError:
        logger.exception("Could not resolve mode")

    (record,) = read_records(capsys.readouterr().err)
    assert "Unknown build mode" in record["exception"]


@pytest.mark.parametrize(
    "env_value,expected",
    [
        (None, logging.WARNING),
        ("debug", logging.DEBUG),
        ("ERROR", logging.ERROR),
        ("verbose", logging.WARNING),
    ],
)
def test_get_log_level(
    monkeypatch: pytest.MonkeyPatch, env_value: str | None, expected: int
):
    if env_value is not None:
        monkeypatch.setenv("BUNDLEPLAN_LOG_LEVEL", env_value)
    assert get_log_level() == expected


def test_log_time_duration_uses_given_logger_and_level(capsys: pytest.CaptureFixture):
    logger = setup_logger("tests.timing", logging.INFO)

    with log_time_duration("Assemble build descriptor", logger=logger):
        pass
    assert capsys.readouterr().err == ""

    with log_time_duration(
        "Assemble build descriptor",
        logger=logger,
        level=logging.INFO,
        build_mode="development",
    ):
        pass

    (record,) = read_records(capsys.readouterr().err)
    assert record["level"] == "INFO"
    assert record["message"].startswith("Assemble build descriptor : Took")
    assert record["build_mode"] == "development"
    assert record["duration"] >= 0


@pytest.mark.parametrize(
    "log_level,should_create_file",
    [
        (logging.DEBUG, True),
        (logging.INFO, False),
        (logging.WARNING, False),
    ],
)
def test_debug_log_artifact(log_level: int, should_create_file: bool):
    logger = setup_logger(f"tests.artifact.{log_level}", log_level)

    path = debug_log_artifact("descriptor", "json", "{}", logger=logger)

    if should_create_file:
        assert path is not None
        assert path.name.startswith("descriptor-")
        assert path.suffix == ".json"
        assert path.read_text() == "{}"
        path.unlink()
    else:
        assert path is None


def test_pluralize():
    assert pluralize(1, "plugin", "plugins") == "plugin"
    assert pluralize(0, "plugin", "plugins") == "plugins"
    assert pluralize(4, "plugin", "plugins") == "plugins"
