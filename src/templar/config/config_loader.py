# src/templar/config/config_loader.py


import argparse
from pathlib import Path
from typing import Any

from apathetic_logging import getLevelNumber
from apathetic_schema import ApatheticSchema_ValidationSummary as ValidationSummary
from apathetic_utils import (
    load_jsonc,
    load_toml,
    plural,
    remove_path_in_error_message,
)

from templar.constants import DEFAULT_CONFIG_SUFFIXES
from templar.logs import get_app_logger
from templar.meta import PROGRAM_CONFIG
from templar.project_handle import ProjectOpener, open_xcode_project
from templar.utils import load_yaml

from .config_errors import InvalidFormatError
from .config_resolve import resolve_config
from .config_types import Configuration
from .config_validate import validate_config


def can_run_configless(args: argparse.Namespace) -> bool:
    """To run without a config file we need at least --sources and --templates."""
    return bool(getattr(args, "sources", None) and getattr(args, "templates", None))


def find_config(
    args: argparse.Namespace,
    cwd: Path,
    *,
    missing_level: str = "error",
) -> Path | None:
    """Locate a configuration file.

    missing_level: log-level for failing to find a configuration file.

    Search order:
      1. Explicit path from CLI (--config)
      2. Default candidates in the current working directory, then parents:
         .{PROGRAM_CONFIG}.yml, .yaml, .json, .jsonc, .toml

    Returns the first matching path, or None if no config was found.
    """
    logger = get_app_logger()

    try:
        getLevelNumber(missing_level)
    except ValueError:
        logger.error("Invalid log level name in find_config(): %s", missing_level)
        missing_level = "error"

    # --- 1. Explicit config path ---
    if getattr(args, "config", None):
        config = Path(args.config).expanduser().resolve()
        logger.trace(f"[find_config] Checking explicit path: {config}")
        if not config.exists():
            xmsg = f"Specified config file not found: {config}"
            raise FileNotFoundError(xmsg)
        if config.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {config}"
            raise ValueError(xmsg)
        return config

    # --- 2. Default candidate files (search current dir and parents) ---
    candidate_names = [f".{PROGRAM_CONFIG}{suffix}" for suffix in DEFAULT_CONFIG_SUFFIXES]
    current = cwd
    found: list[Path] = []
    while True:
        found = [
            current / name for name in candidate_names if (current / name).is_file()
        ]
        if found:
            break
        parent = current.parent
        if parent == current:  # reached filesystem root
            break
        current = parent

    if not found:
        logger.logDynamic(missing_level, f"No config file found in {cwd} or parents")
        return None

    # --- 3. Several at one level: candidate order is the priority ---
    if len(found) > 1:
        names = ", ".join(p.name for p in found)
        logger.warning(
            "Multiple config files detected (%s); using %s.",
            names,
            found[0].name,
        )
    return found[0]


def load_config(config_path: Path) -> Any:
    """Decode a configuration file by suffix.

    Supports:
      - YAML: .yml, .yaml (and any unrecognized suffix)
      - JSON/JSONC: .json, .jsonc (comments and trailing commas allowed)
      - TOML: .toml

    Returns:
        The decoded document, or None for an empty file.

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: the document could not be decoded.
    """
    logger = get_app_logger()
    logger.trace(f"[load_config] Loading from {config_path} ({config_path.suffix})")

    suffix = config_path.suffix.lower()
    try:
        if suffix in {".json", ".jsonc"}:
            return load_jsonc(config_path)
        if suffix == ".toml":
            return load_toml(config_path, required=True)
        return load_yaml(config_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        xmsg = (
            f"Error while loading configuration file '{config_path.name}': {clean_msg}"
        )
        raise ValueError(xmsg) from e


def _validation_summary(
    summary: ValidationSummary,
    config_path: Path,
) -> None:
    """Pretty-print a validation summary using the standard log() interface."""
    logger = get_app_logger()
    mode = "strict mode" if summary.strict else "lenient mode"

    counts: list[str] = []
    if summary.errors:
        counts.append(f"{len(summary.errors)} error{plural(summary.errors)}")
    if summary.strict_warnings:
        counts.append(
            f"{len(summary.strict_warnings)} strict warning"
            f"{plural(summary.strict_warnings)}",
        )
    if summary.warnings:
        counts.append(
            f"{len(summary.warnings)} normal warning{plural(summary.warnings)}",
        )
    counts_msg = f"\nFound {', '.join(counts)}." if counts else ""

    if not summary.valid:
        logger.error(
            "Failed to validate configuration file %s (%s).%s",
            config_path.name,
            mode,
            counts_msg,
        )
    elif counts:
        logger.warning(
            "Validated configuration file %s (%s) with warnings.%s",
            config_path.name,
            mode,
            counts_msg,
        )
    else:
        logger.debug("Validated %s (%s) successfully.", config_path.name, mode)

    if summary.errors:
        msg_summary = "\n  • ".join(summary.errors)
        logger.error("\nErrors:\n  • %s", msg_summary)
    if summary.strict_warnings:
        msg_summary = "\n  • ".join(summary.strict_warnings)
        logger.error("\nStrict warnings (treated as errors):\n  • %s", msg_summary)
    if summary.warnings:
        msg_summary = "\n  • ".join(summary.warnings)
        logger.warning("\nWarnings (non-fatal):\n  • %s", msg_summary)


def load_and_resolve_config(
    config_path: Path,
    *,
    relative_base: Path | None = None,
    strict: bool = False,
    open_project: ProjectOpener = open_xcode_project,
) -> Configuration:
    """Decode, validate and resolve a configuration file.

    Relative paths inside the document are anchored to `relative_base`,
    which defaults to the directory holding the file.

    Raises:
        InvalidFormatError: the document is not a mapping.
        ValueError: decoding failed, or validation failed (strict warnings
            included).
        ConfigError subclasses / ProjectOpenError: from resolution.
    """
    logger = get_app_logger()
    config_path = config_path.expanduser().resolve()
    if relative_base is None:
        relative_base = config_path.parent

    raw = load_config(config_path)
    if not isinstance(raw, dict):
        xmsg = "Expected dictionary."
        raise InvalidFormatError(xmsg)

    summary = validate_config(raw, strict=strict)
    _validation_summary(summary, config_path)
    if not summary.valid:
        xmsg = f"Configuration file {config_path.name} contains validation errors."
        raise ValueError(xmsg)

    logger.trace(f"[load_and_resolve_config] Resolving {config_path.name}")
    return resolve_config(raw, relative_base, open_project=open_project)
