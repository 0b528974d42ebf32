from pathlib import Path


class BundlePlanException(Exception):
    """
    Base class for every error raised by bundleplan.

    """


class ConfigurationError(BundlePlanException):
    """
    The build settings can't produce a usable descriptor. Raised before the
    descriptor is handed to the bundling engine, so the engine never sees a
    partial configuration.

    """

    def __init__(self, message: str, problems: list[str] | None = None):
        self.problems = problems or []
        if self.problems:
            message += "\n" + "\n".join(f"- {problem}" for problem in self.problems)
        super().__init__(message)


class MissingSourceError(ConfigurationError):
    """
    One or more entry point modules or the HTML template don't exist on disk.

    """

    def __init__(self, missing_paths: list[Path]):
        self.missing_paths = missing_paths
        super().__init__(
            "Build sources are missing",
            problems=[f"Not found: {path}" for path in missing_paths],
        )
