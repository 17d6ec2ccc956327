# src/templar/utils/utils_files.py

from pathlib import Path
from typing import Any

import yaml


def load_yaml(path: Path) -> Any:
    """Load a YAML document. An empty document yields None."""
    if not path.exists():
        xmsg = f"YAML file not found: {path}"
        raise FileNotFoundError(xmsg)

    try:
        with path.open(encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        xmsg = f"Invalid YAML syntax in {path}: {e}"
        raise ValueError(xmsg) from e
