# src/templar/constants.py
"""Central constants used across the project."""

# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
DEFAULT_ENV_CACHE_DIR: str = "CACHE_DIR"
DEFAULT_ENV_XDG_CACHE_HOME: str = "XDG_CACHE_HOME"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_STRICT_CONFIG: bool = False

# --- config discovery ---
# Highest priority first; a config at a closer directory always wins.
DEFAULT_CONFIG_SUFFIXES: tuple[str, ...] = (".yml", ".yaml", ".json", ".jsonc", ".toml")

# --- project handles ---
XCODE_PROJECT_SUFFIX: str = ".xcodeproj"
XCODE_PBXPROJ_NAME: str = "project.pbxproj"
