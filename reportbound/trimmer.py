"""
Escalating trimmer: bound a report payload to the configured byte budget.

The payload is first walked into a JSON-safe copy. If that copy is over
budget, reducers run in a fixed order, each returning the new size, and the
ladder stops at the first step that brings the payload within budget:

1. truncate long strings
2. truncate long sequences
3. drop events' metaData
4. drop stack frames' code, last frames first, in rounds across stacktraces
5. drop stack frames, last frames first, in rounds across stacktraces

Stacktraces of an event payload are left alone by steps 1 and 2; only steps 4
and 5 reduce them. The input value is never mutated.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator

from reportbound.config import ReportBoundConfig, load_config
from reportbound.constants import (
    CODE_KEY,
    EVENTS_KEY,
    EXCEPTIONS_KEY,
    METADATA_KEY,
    STACKTRACE_KEY,
    TRUNCATED_MARKER,
)
from reportbound.measure import measure, measure_entry, removal_saving
from reportbound.walker import walk

logger = logging.getLogger(__name__)


class TrimStep(str, Enum):
    """Trimmer states, in escalation order."""

    UNDER_BUDGET = "under_budget"
    STEP_STRINGS = "strings"
    STEP_ARRAYS = "arrays"
    STEP_REMOVE_METADATA = "remove_metadata"
    STEP_REMOVE_CODE = "remove_code"
    STEP_REMOVE_FRAMES = "remove_frames"
    EXHAUSTED = "exhausted"


@dataclass
class TrimReport:
    """Bounded value plus how far escalation went to produce it."""

    value: Any
    size: int
    final_step: TrimStep
    within_budget: bool


Reducer = Callable[[Any, int, ReportBoundConfig], tuple[Any, int]]


def _events(payload: Any) -> Iterator[dict]:
    """Yield event mappings of an event payload; nothing for other values."""
    if not isinstance(payload, dict):
        return
    events = payload.get(EVENTS_KEY)
    if not isinstance(events, list):
        return
    for event in events:
        if isinstance(event, dict):
            yield event


def _stacktraces(payload: Any) -> Iterator[list]:
    """Yield every stacktrace list: events in order, then exceptions in order."""
    for event in _events(payload):
        exceptions = event.get(EXCEPTIONS_KEY)
        if not isinstance(exceptions, list):
            continue
        for exception in exceptions:
            if not isinstance(exception, dict):
                continue
            stacktrace = exception.get(STACKTRACE_KEY)
            if isinstance(stacktrace, list):
                yield stacktrace


def truncate_string(value: str, max_length: int) -> str:
    """
    Cut value to exactly max_length characters ending in TRUNCATED_MARKER.

    Limits too small to hold the marker cut the text without one.
    """
    if len(value) <= max_length:
        return value
    keep = max_length - len(TRUNCATED_MARKER)
    if keep <= 0:
        return value[: max(max_length, 0)]
    return value[:keep] + TRUNCATED_MARKER


def _truncate_strings_in(value: Any, max_length: int, skip: set[int]) -> Any:
    if isinstance(value, str):
        return truncate_string(value, max_length)
    if id(value) in skip:
        return value
    if isinstance(value, dict):
        for key, item in value.items():
            value[key] = _truncate_strings_in(item, max_length, skip)
    elif isinstance(value, list):
        for i, item in enumerate(value):
            value[i] = _truncate_strings_in(item, max_length, skip)
    return value


def _truncate_arrays_in(value: Any, max_length: int, skip: set[int]) -> Any:
    if id(value) in skip:
        return value
    if isinstance(value, list):
        del value[max_length:]
        for item in value:
            _truncate_arrays_in(item, max_length, skip)
    elif isinstance(value, dict):
        for item in value.values():
            _truncate_arrays_in(item, max_length, skip)
    return value


def _reduce_strings(value: Any, size: int, config: ReportBoundConfig) -> tuple[Any, int]:
    skip = {id(stacktrace) for stacktrace in _stacktraces(value)}
    value = _truncate_strings_in(value, config.max_string_length, skip)
    return value, measure(value)


def _reduce_arrays(value: Any, size: int, config: ReportBoundConfig) -> tuple[Any, int]:
    skip = {id(stacktrace) for stacktrace in _stacktraces(value)}
    value = _truncate_arrays_in(value, config.max_array_length, skip)
    return value, measure(value)


def _remove_metadata(value: Any, size: int, config: ReportBoundConfig) -> tuple[Any, int]:
    for event in _events(value):
        if METADATA_KEY not in event:
            continue
        saving = removal_saving(measure_entry(METADATA_KEY, event[METADATA_KEY]), len(event) - 1)
        del event[METADATA_KEY]
        size -= saving
        if size <= config.max_payload_length:
            break
    return value, size


def _remove_code(value: Any, size: int, config: ReportBoundConfig) -> tuple[Any, int]:
    """
    Drop frames' code in rounds from the end: the last frame of every
    stacktrace, then the second to last of every stacktrace, and so on.
    """
    stacktraces = list(_stacktraces(value))
    depth = max((len(stacktrace) for stacktrace in stacktraces), default=0)
    for offset in range(1, depth + 1):
        for stacktrace in stacktraces:
            if offset > len(stacktrace):
                continue
            frame = stacktrace[-offset]
            if not isinstance(frame, dict) or CODE_KEY not in frame:
                continue
            saving = removal_saving(measure_entry(CODE_KEY, frame[CODE_KEY]), len(frame) - 1)
            del frame[CODE_KEY]
            size -= saving
            if size <= config.max_payload_length:
                return value, size
    return value, size


def _remove_frames(value: Any, size: int, config: ReportBoundConfig) -> tuple[Any, int]:
    """
    Drop whole frames in rounds, one from the end of every stacktrace per
    round. A stacktrace may end up empty.
    """
    stacktraces = list(_stacktraces(value))
    while size > config.max_payload_length and any(stacktraces):
        for stacktrace in stacktraces:
            if not stacktrace:
                continue
            frame = stacktrace.pop()
            size -= removal_saving(measure(frame), len(stacktrace))
            if size <= config.max_payload_length:
                break
    return value, size


_REDUCERS: tuple[tuple[TrimStep, Reducer], ...] = (
    (TrimStep.STEP_STRINGS, _reduce_strings),
    (TrimStep.STEP_ARRAYS, _reduce_arrays),
    (TrimStep.STEP_REMOVE_METADATA, _remove_metadata),
    (TrimStep.STEP_REMOVE_CODE, _remove_code),
    (TrimStep.STEP_REMOVE_FRAMES, _remove_frames),
)


def trim_with_report(value: Any, config: ReportBoundConfig | None = None) -> TrimReport:
    """Walk value and escalate through the reducers until it fits the payload budget."""
    if config is None:
        config = load_config()
    budget = config.max_payload_length

    working = walk(value)
    size = measure(working)
    if size <= budget:
        return TrimReport(value=working, size=size, final_step=TrimStep.UNDER_BUDGET, within_budget=True)

    logger.debug("payload is %d bytes, budget %d; trimming", size, budget)
    for step, reduce in _REDUCERS:
        working, size = reduce(working, size, config)
        logger.debug("after %s: %d bytes", step.value, size)
        if size <= budget:
            return TrimReport(value=working, size=size, final_step=step, within_budget=True)

    logger.warning("payload still %d bytes after all trimming steps (budget %d)", size, budget)
    return TrimReport(value=working, size=size, final_step=TrimStep.EXHAUSTED, within_budget=False)


def trim_if_needed(value: Any, config: ReportBoundConfig | None = None) -> Any:
    """Return a JSON-safe copy of value that fits the payload budget when possible."""
    return trim_with_report(value, config).value
