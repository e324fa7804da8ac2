"""reportbound: bound error-report payloads to a serialized byte budget (trim_if_needed, walk, measure)."""

from reportbound.config import ReportBoundConfig, load_config
from reportbound.constants import RAISED_MARKER, RECURSION_MARKER, TRUNCATED_MARKER
from reportbound.measure import measure
from reportbound.trimmer import TrimReport, TrimStep, trim_if_needed, trim_with_report
from reportbound.version import version as __version__
from reportbound.walker import normalize, walk

__all__ = [
    "trim_if_needed",
    "trim_with_report",
    "TrimReport",
    "TrimStep",
    "walk",
    "normalize",
    "measure",
    "load_config",
    "ReportBoundConfig",
    "RECURSION_MARKER",
    "RAISED_MARKER",
    "TRUNCATED_MARKER",
    "__version__",
]
