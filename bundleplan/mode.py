from enum import Enum
from os import environ as os_environ
from typing import Mapping

DEVELOPMENT_MARKER = "development"
MODE_VARIABLE = "NODE_ENV"


class BuildMode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @property
    def is_development(self) -> bool:
        return self == BuildMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self == BuildMode.PRODUCTION


def resolve_mode(signal: str | None) -> BuildMode:
    """
    Only the exact development marker selects a development build. Anything else,
    including a missing value or a differently cased marker, falls back to
    production so an unconfigured environment never ships unminified assets.

    """
    if signal == DEVELOPMENT_MARKER:
        return BuildMode.DEVELOPMENT
    return BuildMode.PRODUCTION


def mode_from_environment(
    environ: Mapping[str, str] | None = None,
    variable: str = MODE_VARIABLE,
) -> BuildMode:
    environ = os_environ if environ is None else environ
    return resolve_mode(environ.get(variable))
