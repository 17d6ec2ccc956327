# src/templar/config/config_validate.py


from typing import Any, get_args, get_origin

from apathetic_schema import (
    ApatheticSchema_ValidationSummary as ValidationSummary,
)
from apathetic_schema import (
    check_schema_conformance,
    collect_msg,
)
from apathetic_utils import safe_isinstance, schema_from_typeddict
from typing_extensions import NotRequired

from templar.constants import DEFAULT_STRICT_CONFIG
from templar.logs import get_app_logger

from .config_types import (
    LinkConfig,
    OutputConfig,
    ProjectConfig,
    RootConfig,
    TargetConfig,
)


# --- constants ------------------------------------------------------

ROOT_SCHEMA: dict[str, Any] = {
    **schema_from_typeddict(RootConfig),
    "force-parse": list[str],
}
PROJECT_SCHEMA: dict[str, Any] = schema_from_typeddict(ProjectConfig)
TARGET_SCHEMA: dict[str, Any] = schema_from_typeddict(TargetConfig)
OUTPUT_SCHEMA: dict[str, Any] = schema_from_typeddict(OutputConfig)
LINK_SCHEMA: dict[str, Any] = schema_from_typeddict(LinkConfig)

# optional keys the resolver quietly ignores when mistyped
ROOT_SOFT_KEYS = {"force-parse", "args"}
PROJECT_SOFT_KEYS = {"name", "dependencies", "exclude"}
LINK_SOFT_KEYS = {"group"}

FIELD_EXAMPLES: dict[str, str] = {
    "force-parse": '["generated.swift", ".g"]',
    "args": '{"imports": ["Foundation"]}',
    "dependencies": '["Core", "Networking"]',
    "exclude": '["Sources/Generated/"]',
    "name": '"Core"',
    "group": '"Generated"',
}


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _type_label(expected: Any) -> str:
    origin = get_origin(expected)
    args = get_args(expected)
    if origin is NotRequired and args:
        return _type_label(args[0])
    if origin is list and args:
        return f"list[{_type_label(args[0])}]"
    if origin is dict:
        return "object"
    if isinstance(expected, type):
        return expected.__name__
    return str(expected)


def _check_unknown_keys(
    context: str,
    cfg: dict[str, Any],
    schema: dict[str, Any],
    *,
    strict: bool,
    summary: ValidationSummary,  # modified
) -> bool:
    # field shapes belong to the resolver; only unknown keys are checked here
    return check_schema_conformance(
        cfg,
        schema,
        context,
        strict_config=strict,
        summary=summary,
        ignore_keys=set(schema),
    )


def _warn_mistyped_keys(
    context: str,
    cfg: dict[str, Any],
    schema: dict[str, Any],
    keys: set[str],
    *,
    summary: ValidationSummary,  # modified
) -> bool:
    """Warn for present optional `keys` whose value does not match the schema."""
    ok = True
    for key in sorted(keys):
        if key not in cfg or key not in schema:
            continue
        val = cfg[key]
        if safe_isinstance(val, schema[key]):
            continue
        example = FIELD_EXAMPLES.get(key)
        exmsg = f" (e.g. {example})" if example else ""
        collect_msg(
            f"{context}: key `{key}` expected {_type_label(schema[key])}{exmsg},"
            f" got {type(val).__name__}; it will be ignored",
            strict=False,
            summary=summary,
        )
        ok = False
    return ok


def _set_valid_and_return(summary: ValidationSummary) -> ValidationSummary:
    summary.valid = not summary.errors and not summary.strict_warnings
    return summary


# ---------------------------------------------------------------------------
# sections
# ---------------------------------------------------------------------------


def _validate_output(
    raw: Any,
    context: str,
    *,
    strict: bool,
    summary: ValidationSummary,  # modified
) -> None:
    if not isinstance(raw, dict):
        return
    _check_unknown_keys(context, raw, OUTPUT_SCHEMA, strict=strict, summary=summary)
    link: Any = raw.get("link")
    if isinstance(link, dict):
        link_ctx = f"{context} link"
        _check_unknown_keys(
            link_ctx, link, LINK_SCHEMA, strict=strict, summary=summary
        )
        _warn_mistyped_keys(
            link_ctx, link, LINK_SCHEMA, LINK_SOFT_KEYS, summary=summary
        )


def _validate_projects(
    raw: Any,
    *,
    strict: bool,
    summary: ValidationSummary,  # modified
) -> None:
    logger = get_app_logger()
    declarations = raw if isinstance(raw, list) else [raw]
    logger.trace(f"[validate_projects] Checking {len(declarations)} project(s)")

    for i, project in enumerate(declarations):
        if not isinstance(project, dict):
            # reported by the resolver
            continue
        context = f"in project #{i + 1}"
        _check_unknown_keys(
            context, project, PROJECT_SCHEMA, strict=strict, summary=summary
        )
        _warn_mistyped_keys(
            context, project, PROJECT_SCHEMA, PROJECT_SOFT_KEYS, summary=summary
        )

        targets: Any = project.get("target")
        targets = targets if isinstance(targets, list) else [targets]
        for j, target in enumerate(targets):
            if isinstance(target, dict):
                _check_unknown_keys(
                    f"in target #{j + 1} of project #{i + 1}",
                    target,
                    TARGET_SCHEMA,
                    strict=strict,
                    summary=summary,
                )

        _validate_output(
            project.get("output"),
            f"in output of project #{i + 1}",
            strict=strict,
            summary=summary,
        )


# ---------------------------------------------------------------------------
# main validator
# ---------------------------------------------------------------------------


def validate_config(
    raw: Any,
    *,
    strict: bool | None = None,
) -> ValidationSummary:
    """Check a decoded document for unknown keys and mistyped optional keys.

    strict=True  →  unknown keys become fatal, but still listed separately
    strict=False →  warnings remain non-fatal

    Required keys and their shapes are left to the resolver, which reports
    them with their own error kinds.
    """
    logger = get_app_logger()
    logger.trace(f"[validate_config] Starting validation (strict={strict})")

    summary = ValidationSummary(
        valid=True,
        errors=[],
        strict_warnings=[],
        warnings=[],
        strict=DEFAULT_STRICT_CONFIG if strict is None else strict,
    )
    if not isinstance(raw, dict):
        collect_msg(
            "Top-level configuration must be an object with named keys.",
            strict=True,
            summary=summary,
            is_error=True,
        )
        return _set_valid_and_return(summary)

    _check_unknown_keys(
        "in top-level configuration",
        raw,
        ROOT_SCHEMA,
        strict=summary.strict,
        summary=summary,
    )
    _warn_mistyped_keys(
        "in top-level configuration",
        raw,
        ROOT_SCHEMA,
        ROOT_SOFT_KEYS,
        summary=summary,
    )
    if "project" in raw and "sources" in raw:
        collect_msg(
            "Both `project` and `sources` are set; `project` takes precedence.",
            strict=False,
            summary=summary,
        )

    if "project" in raw:
        _validate_projects(raw["project"], strict=summary.strict, summary=summary)
    _validate_output(
        raw.get("output"),
        "in output",
        strict=summary.strict,
        summary=summary,
    )

    return _set_valid_and_return(summary)
