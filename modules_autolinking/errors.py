"""Exception types raised by the autolinking pipeline."""

from pathlib import Path


class AutolinkingError(Exception):
    """Base class for autolinking failures the CLI reports without a traceback."""


class ConfigParseError(AutolinkingError):
    """Raised when a manifest or module config file cannot be parsed."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class UnsupportedPlatformError(AutolinkingError):
    """Raised when no capability (or no emitter) exists for a platform."""

    def __init__(self, platform: str, message: str | None = None):
        self.platform = platform
        self.message = message or f"Platform '{platform}' is not supported"
        super().__init__(self.message)
