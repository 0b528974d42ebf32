import logging
from contextlib import contextmanager
from json import dumps as json_dumps
from logging import Formatter, Logger, StreamHandler, getLogger
from os import environ, fdopen
from pathlib import Path
from tempfile import mkstemp
from time import monotonic_ns

from click import secho

LOG_LEVEL_VARIABLE = "BUNDLEPLAN_LOG_LEVEL"

# Record attributes passed through `extra=` that we lift into the JSON payload
BUILD_FIELDS = ("build_mode", "duration")

LEVEL_COLORS = {
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


class JsonFormatter(Formatter):
    """
    One JSON object per line, so build logs can be filtered in CI:

    ```json
    {"level": "DEBUG", "name": "bundleplan", "message": "Resolved build mode: production", "build_mode": "production"}
    ```

    """

    def format(self, record):
        log_record = {
            "level": record.levelname,
            "name": record.name,
            "timestamp": self.formatTime(record, self.datefmt),
            "message": record.getMessage(),
        }
        for field in BUILD_FIELDS:
            if hasattr(record, field):
                log_record[field] = getattr(record, field)
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json_dumps(log_record)


class ColorHandler(StreamHandler):
    """
    Writes to stderr: stdout is reserved for the rendered descriptor.

    """

    def emit(self, record):
        try:
            secho(self.format(record), fg=LEVEL_COLORS.get(record.levelno), err=True)
        except Exception:
            self.handleError(record)


def get_log_level() -> int:
    level_name = environ.get(LOG_LEVEL_VARIABLE, "WARNING").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.WARNING


def setup_logger(name: str, log_level: int | None = None) -> Logger:
    """
    Loggers only surface warnings and above unless BUNDLEPLAN_LOG_LEVEL asks
    for more. Set it to DEBUG to see every composition decision as the
    descriptor is assembled.

    """
    logger = getLogger(name)
    logger.setLevel(log_level if log_level is not None else get_log_level())

    # Modules can call this more than once, each handler would print the record
    if not any(isinstance(handler, ColorHandler) for handler in logger.handlers):
        handler = ColorHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)

    return logger


@contextmanager
def log_time_duration(
    message: str,
    logger: Logger | None = None,
    level: int = logging.DEBUG,
    **extra,
):
    """
    Time a block and log how long it took. Extra keyword arguments (like the
    build_mode) are attached to the record.

    ```python
    with log_time_duration("Assemble descriptor", build_mode=mode.value):
        descriptor = assemble(mode, settings)
    ```

    """
    logger = logger or LOGGER
    start = monotonic_ns()
    yield
    duration = round((monotonic_ns() - start) / 1e9, 4)
    logger.log(
        level,
        f"{message} : Took {duration:.4f}s",
        extra={**extra, "duration": duration},
    )


def debug_log_artifact(
    artifact_prefix: str,
    extension: str,
    content: str,
    logger: Logger | None = None,
) -> Path | None:
    """
    Persist a rendered descriptor to a temporary file so it can be inspected
    after the run. No-op unless the logger is enabled for DEBUG.

    """
    logger = logger or LOGGER
    if not logger.isEnabledFor(logging.DEBUG):
        return None

    handle, filename = mkstemp(prefix=f"{artifact_prefix}-", suffix=f".{extension}")
    with fdopen(handle, "w") as file:
        file.write(content)

    logger.debug(f"Wrote {artifact_prefix} artifact to {filename}")
    return Path(filename)


def pluralize(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


LOGGER = setup_logger("bundleplan")
