# src/templar/meta.py
"""Program identity, shared by the CLI, logger and config discovery."""

__version__ = "0.3.0"

PROGRAM_PACKAGE = "templar"
PROGRAM_SCRIPT = "templar"
PROGRAM_DISPLAY = "Templar"
PROGRAM_ENV = "TEMPLAR"
PROGRAM_CONFIG = "templar"
