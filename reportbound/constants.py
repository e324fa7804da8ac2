"""Shared constants: trim markers, default budgets, and event payload keys."""

RECURSION_MARKER = "[RECURSION]"
RAISED_MARKER = "[RAISED]"
TRUNCATED_MARKER = "[TRUNCATED]"

# Default budgets (overridable through config.yaml or REPORTBOUND_* env vars).
MAX_STRING_LENGTH = 3072
MAX_ARRAY_LENGTH = 80
MAX_PAYLOAD_LENGTH = 512000

# Nesting deeper than this is replaced by TRUNCATED_MARKER.
DEPTH_LIMIT = 200

# Event payload shape: {"events": [{"metaData": ..., "exceptions": [{"stacktrace": [...]}]}]}
EVENTS_KEY = "events"
METADATA_KEY = "metaData"
EXCEPTIONS_KEY = "exceptions"
STACKTRACE_KEY = "stacktrace"
CODE_KEY = "code"


def default_budget() -> dict[str, int]:
    """Default budget per field. Keys: max_string_length, max_array_length, max_payload_length."""
    return {
        "max_string_length": MAX_STRING_LENGTH,
        "max_array_length": MAX_ARRAY_LENGTH,
        "max_payload_length": MAX_PAYLOAD_LENGTH,
    }
