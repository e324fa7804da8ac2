"""
Shared pytest fixtures and helpers for reportbound tests.
"""
import os
import tempfile
from pathlib import Path

import pytest

from reportbound.config import ReportBoundConfig
from reportbound.constants import default_budget

_BUDGET_ENV_VARS = (
    "REPORTBOUND_MAX_STRING_LENGTH",
    "REPORTBOUND_MAX_ARRAY_LENGTH",
    "REPORTBOUND_MAX_PAYLOAD_LENGTH",
)

DEFAULT_CONFIG = ReportBoundConfig(**default_budget())
SMALL_CONFIG = ReportBoundConfig(max_string_length=64, max_array_length=4, max_payload_length=1024)


@pytest.fixture
def temp_home():
    """
    Point HOME at a temporary directory and clear REPORTBOUND_* env vars for the test.

    Yields the temporary home; user config goes in <home>/.reportbound/config.yaml.
    """
    with tempfile.TemporaryDirectory() as tmp:
        saved = {name: os.environ.get(name) for name in ("HOME", *_BUDGET_ENV_VARS)}
        try:
            os.environ["HOME"] = tmp
            for name in _BUDGET_ENV_VARS:
                os.environ.pop(name, None)
            yield Path(tmp)
        finally:
            for name, old in saved.items():
                if old is not None:
                    os.environ[name] = old
                elif name in os.environ:
                    os.environ.pop(name)


def write_config(root: Path, text: str) -> Path:
    """Write text to <root>/.reportbound/config.yaml and return the path."""
    path = root / ".reportbound" / "config.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def event_payload(**event) -> dict:
    """Wrap one event mapping in a {"events": [...]} payload."""
    return {"events": [event]}
