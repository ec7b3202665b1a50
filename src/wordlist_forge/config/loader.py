"""Config loader.

Filter configurations are YAML files whose keys match the FilterSpec builder
arguments (see `builder.CONFIG_KEYS`). Keeping them in YAML allows:
- reusable named filter presets (e.g. "wpa_candidates.yaml")
- reviewable diffs between presets (`wordlist config-diff`)
"""

from __future__ import annotations
from typing import Any, Dict
import yaml

from ..errors import InvalidSpec

def load_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise InvalidSpec(f"cannot read config {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise InvalidSpec(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidSpec(f"config {path} must be a mapping, got {type(data).__name__}")
    return data
