"""Configuration for reportbound: string, sequence, and payload budgets."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from reportbound.constants import TRUNCATED_MARKER, default_budget

_MIN_MAX_STRING_LENGTH = len(TRUNCATED_MARKER) + 1
_MIN_MAX_ARRAY_LENGTH = 1
_MIN_MAX_PAYLOAD_LENGTH = 1024

_MINIMUMS = {
    "max_string_length": _MIN_MAX_STRING_LENGTH,
    "max_array_length": _MIN_MAX_ARRAY_LENGTH,
    "max_payload_length": _MIN_MAX_PAYLOAD_LENGTH,
}

_ENV_VARS = {
    "max_string_length": "REPORTBOUND_MAX_STRING_LENGTH",
    "max_array_length": "REPORTBOUND_MAX_ARRAY_LENGTH",
    "max_payload_length": "REPORTBOUND_MAX_PAYLOAD_LENGTH",
}


@dataclass(frozen=True)
class ReportBoundConfig:
    """Budgets applied by the trimmer. Read-only for the duration of a call."""

    max_string_length: int
    max_array_length: int
    max_payload_length: int

    def __post_init__(self) -> None:
        # Clamp directly constructed configs the same way load_config does.
        for key, minimum in _MINIMUMS.items():
            object.__setattr__(self, key, max(minimum, int(getattr(self, key))))


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from path. Return {} if file missing, unreadable, or not a mapping."""
    if not path.is_file():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce(key: str, val: Any, default: int) -> int:
    """Return val as an int clamped to the key's minimum; default if not an integer."""
    if isinstance(val, bool):
        return default
    try:
        return max(_MINIMUMS[key], int(val))
    except (TypeError, ValueError):
        return default


def _apply_yaml(config: dict[str, Any], values: dict[str, int]) -> dict[str, int]:
    """Overlay budget keys present in a YAML mapping onto values."""
    merged = dict(values)
    for key in merged:
        if key in config:
            merged[key] = _coerce(key, config[key], merged[key])
    return merged


def load_config(project_root: Path | None = None) -> ReportBoundConfig:
    """
    Load ReportBoundConfig with precedence (highest first):
    1. Environment variables (REPORTBOUND_MAX_*)
    2. .reportbound/config.yaml in project root (if present)
    3. ~/.reportbound/config.yaml
    """
    values = default_budget()

    # 3. User config
    user_cfg = _load_yaml(Path.home() / ".reportbound" / "config.yaml")
    if user_cfg:
        values = _apply_yaml(user_cfg, values)

    # 2. Project config (overrides user)
    root = project_root if project_root is not None else Path.cwd()
    proj_cfg = _load_yaml(root / ".reportbound" / "config.yaml")
    if proj_cfg:
        values = _apply_yaml(proj_cfg, values)

    # 1. Env overrides (only when the key is explicitly set in the environment)
    for key, env_var in _ENV_VARS.items():
        if env_var in os.environ:
            values[key] = _coerce(key, os.environ[env_var].strip(), values[key])

    return ReportBoundConfig(**values)
