from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bundleplan.exceptions import ConfigurationError


class CopyPattern(BaseModel):
    """
    One static file (or directory) that the copy plugin moves into the output
    directory untouched. Paths are relative to the project root.

    """

    source: str
    destination: str

    model_config = {"frozen": True}


class ConfigBase(BaseSettings):
    """
    Base class for settings read from the environment. Settings are frozen once
    loaded so the same instance can be passed through every composer without
    any of them changing it along the way.

    """

    model_config = SettingsConfigDict(
        env_prefix="BUNDLEPLAN_",
        env_file=(".env",),
        extra="ignore",
        frozen=True,
    )


class BuildSettings(ConfigBase):
    """
    Static structure of the project being bundled. Nothing here depends on the
    build mode; the mode is resolved separately and passed alongside.

    """

    # Directory that holds the source and output directories. Aliases and copy
    # patterns are relative to it.
    PROJECT_ROOT: Path = Path(".")

    # Both relative to PROJECT_ROOT. SOURCE_DIR is also the engine's context, so
    # entry points and the HTML template (index.html) are resolved against it.
    SOURCE_DIR: str = "src"
    OUTPUT_DIR: str = "dist"

    ENTRY_POINTS: dict[str, list[str]] = {
        "main": ["@babel/polyfill", "./index.tsx"],
    }

    TEMPLATE: str = "./index.html"
    HTML_FILENAME: str = "index.html"

    # Short import names mapped to directories relative to PROJECT_ROOT
    ALIASES: dict[str, str] = {
        "@core": "src/core",
        "@components": "src/components",
        "@src": "src",
    }
    RESOLVE_EXTENSIONS: list[str] = [".js", ".jsx"]

    DEV_SERVER_PORT: int = 9000
    DEV_SERVER_OPEN: bool = True
    WRITE_TO_DISK: bool = False

    # Mirror the output directory as the public path of emitted assets
    PUBLIC_PATH_ENABLED: bool = True

    # The copy step is wired into the plugin list but disabled unless enabled here
    COPY_ASSETS: bool = False
    COPY_PATTERNS: list[CopyPattern] = [
        CopyPattern(source="src/assets/favicon.png", destination="dist"),
    ]

    @field_validator("SOURCE_DIR", "OUTPUT_DIR", "TEMPLATE", "HTML_FILENAME")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Path can't be blank")
        return value

    @field_validator("ENTRY_POINTS")
    @classmethod
    def validate_entry_points(cls, value: dict[str, list[str]]):
        if not value:
            raise ValueError("At least one entry point is required")
        for name, modules in value.items():
            if not name.strip():
                raise ValueError("Entry point names can't be blank")
            if not modules:
                raise ValueError(f"Entry point '{name}' has no modules")
            if any(not module.strip() for module in modules):
                raise ValueError(f"Entry point '{name}' has a blank module path")
        return value

    @field_validator("DEV_SERVER_PORT")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError(f"Port {value} is out of range")
        return value

    @property
    def source_path(self) -> Path:
        return (self.PROJECT_ROOT / self.SOURCE_DIR).resolve()

    @property
    def output_path(self) -> Path:
        return (self.PROJECT_ROOT / self.OUTPUT_DIR).resolve()

    def resolve_project_path(self, relative_path: str) -> Path:
        return (self.PROJECT_ROOT / relative_path).resolve()


def load_settings(**overrides: Any) -> BuildSettings:
    """
    Load the build settings from the environment (and optional .env file),
    with explicit keyword overrides taking precedence.

    Malformed values are a fatal configuration error: we raise before any
    descriptor is assembled.

    """
    try:
        return BuildSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid build settings",
            problems=[
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ],
        ) from e
