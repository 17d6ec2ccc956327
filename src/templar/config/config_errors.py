# src/templar/config/config_errors.py
"""Errors raised while resolving a configuration document.

Every kind renders as "<prefix> <message>" so the CLI can print it verbatim.
InvalidPathsError is internal: callers re-raise its message as the kind that
matches what was being resolved (sources or templates).
"""


class ConfigError(ValueError):
    prefix: str = ""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self.prefix} {message}".strip())


class InvalidFormatError(ConfigError):
    prefix = "Invalid config file format."


class InvalidSourcesError(ConfigError):
    prefix = "Invalid sources."


class InvalidTemplatesError(ConfigError):
    prefix = "Invalid templates."


class InvalidOutputError(ConfigError):
    prefix = "Invalid output."


class InvalidCacheBasePathError(ConfigError):
    prefix = "Invalid cacheBasePath."


class InvalidPathsError(ConfigError):
    pass
