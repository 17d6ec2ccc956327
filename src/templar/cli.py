# src/templar/cli.py

import argparse
import platform
import sys
from difflib import get_close_matches
from pathlib import Path
from typing import Any

from apathetic_logging import LEVEL_ORDER, safeLog

from .config import (
    Configuration,
    OutputDescriptor,
    ProjectsSource,
    can_run_configless,
    configuration_from_paths,
    find_config,
    load_and_resolve_config,
    make_path_set,
)
from .logs import get_app_logger
from .meta import PROGRAM_DISPLAY, PROGRAM_SCRIPT, __version__
from .utils import anchor_path, shorten_path_for_display


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Build known option strings: ["-v", "--verbose", "--log-level", ...]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # "unrecognized arguments: --sorces ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _key_value(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        xmsg = f"expected KEY=VALUE, got {raw!r}"
        raise argparse.ArgumentTypeError(xmsg)
    return key, value


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        description="Resolve and check a code-generation configuration.",
    )

    parser.add_argument("-c", "--config", help="Path to the configuration file.")

    # --- Configless mode ---
    parser.add_argument(
        "--sources",
        nargs="+",
        help="Source files or directories (configless mode, relative to cwd).",
    )
    parser.add_argument(
        "--templates",
        nargs="+",
        help="Template files or directories (configless mode, relative to cwd).",
    )
    parser.add_argument(
        "-o",
        "--output",
        help=(
            "Output file or directory (configless mode). "
            "Use trailing slash for directories (e.g., 'Generated/')."
        ),
    )
    parser.add_argument(
        "--cache-base-path",
        help="Cache directory (configless mode; default from environment).",
    )
    parser.add_argument(
        "--force-parse",
        nargs="+",
        default=[],
        metavar="NAME",
        help="File extensions or names that always bypass the cache.",
    )
    parser.add_argument(
        "--args",
        nargs="+",
        type=_key_value,
        default=[],
        metavar="KEY=VALUE",
        help="Free-form arguments passed through to templates.",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat configuration warnings (unknown keys) as errors.",
    )

    # --- Color ---
    color = parser.add_mutually_exclusive_group()
    color.add_argument(
        "--no-color",
        dest="use_color",
        action="store_const",
        const=False,
        help="Disable ANSI color output.",
    )
    color.add_argument(
        "--color",
        dest="use_color",
        action="store_const",
        const=True,
        help="Force-enable ANSI color output (overrides auto-detect).",
    )
    color.set_defaults(use_color=None)

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LEVEL_ORDER,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


# --------------------------------------------------------------------------- #
# Main entry helpers
# --------------------------------------------------------------------------- #


def _initialize_logger(args: argparse.Namespace) -> None:
    """Initialize logger with CLI args, env vars, and defaults."""
    logger = get_app_logger()
    log_level = logger.determineLogLevel(args=args)
    logger.setLevel(log_level)
    if args.use_color is not None:
        logger.enable_color = args.use_color
    else:
        logger.enable_color = logger.determineColorEnabled()
    # handlers copy the color flag when built
    logger.handlers.clear()

    logger.trace("[BOOT] log-level initialized: %s", logger.levelName)
    logger.debug(
        "Runtime: Python %s (%s)\n    %s",
        platform.python_version(),
        platform.python_implementation(),
        sys.version.replace("\n", " "),
    )


def _configless(args: argparse.Namespace, cwd: Path) -> Configuration:
    if not args.output:
        xmsg = "Configless mode needs --output."
        raise ValueError(xmsg)

    return configuration_from_paths(
        sources=make_path_set(anchor_path(p, cwd) for p in args.sources),
        templates=make_path_set(anchor_path(p, cwd) for p in args.templates),
        output=OutputDescriptor(path=anchor_path(args.output, cwd), raw=args.output),
        cache_base_path=(
            anchor_path(args.cache_base_path, cwd) if args.cache_base_path else None
        ),
        force_parse=args.force_parse,
        args=dict(args.args),
    )


def _load_configuration(
    args: argparse.Namespace,
    cwd: Path,
) -> tuple[Configuration, Path | None]:
    """Load from a config file, or from flags alone when no file is in play."""
    logger = get_app_logger()

    if not args.config and can_run_configless(args):
        logger.info("🔧 Running in CLI-only mode (no config file).")
        return _configless(args, cwd), None

    config_path = find_config(args, cwd, missing_level="debug")
    if config_path is None:
        xmsg = (
            f"No config file found in {cwd} or parents. Pass --config,"
            " or --sources, --templates and --output."
        )
        raise FileNotFoundError(xmsg)

    logger.info("🔧 Using config: %s", config_path.name)
    config = load_and_resolve_config(config_path, strict=args.strict)
    return config, config_path


def _report(config: Configuration, cwd: Path, config_dir: Path | None) -> None:
    """Log a summary of the resolved configuration."""
    logger = get_app_logger()

    def show(path: Path) -> str:
        return shorten_path_for_display(path, cwd=cwd, config_dir=config_dir)

    source = config.source
    if isinstance(source, ProjectsSource):
        logger.info("📦 Projects: %d", len(source.projects))
        for project in source.projects:
            targets = ", ".join(t.name for t in project.targets)
            deps = ", ".join(d.name for d in project.dependencies) or "-"
            label = project.name or project.path.name
            logger.info("   %s [%s] (depends on: %s)", label, targets, deps)
    else:
        logger.info("📂 Sources: %d file(s)", len(source.paths))

    logger.info("🧩 Templates: %d file(s)", len(config.templates))

    kind = "directory" if config.output.is_directory else "file"
    logger.info("📝 Output: %s (%s)", show(config.output.path), kind)
    link = config.output.link
    if link is not None:
        group = f", group {link.group}" if link.group else ""
        logger.info(
            "🔗 Linked to %s: target %s%s",
            show(link.project_path),
            link.target,
            group,
        )

    logger.debug("Cache: %s", config.cache_base_path)
    if config.force_parse:
        logger.debug("Force-parse: %s", ", ".join(config.force_parse))
    if config.args:
        args: dict[str, Any] = config.args
        logger.debug("Args: %s", ", ".join(f"{k}={v!r}" for k, v in args.items()))


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = get_app_logger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        _initialize_logger(args)

        if args.version:
            logger.info("%s %s", PROGRAM_DISPLAY, __version__)
            return 0

        cwd = Path.cwd().resolve()
        config, config_path = _load_configuration(args, cwd)
        config_dir = config_path.parent if config_path else None
        _report(config, cwd, config_dir)
        logger.info("✅ Configuration is valid.")

    except (OSError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        try:
            logger.errorIfNotDebug(str(e))
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.criticalIfNotDebug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    else:
        return 0
