"""
Printer status code classification.

Maps the raw status code reported by the spooler (numeric, like Windows'
PrinterStatus, or symbolic) onto a closed set of semantic states.
"""

from dataclasses import dataclass
from enum import Enum


class SemanticStatus(Enum):
    """Classification of printer status codes."""

    READY = "Ready"
    PAUSED = "Paused"
    ERROR = "Error"
    PENDING_DELETION = "Pending Deletion"
    PAPER_JAM = "Paper Jam"
    PAPER_OUT = "Paper Out"
    MANUAL_FEED = "Manual Feed"
    PAPER_PROBLEM = "Paper Problem"
    OFFLINE = "Offline"
    UNKNOWN = "Unknown"  # Raw code kept alongside


# Exact matches, checked before any substring rule
EXACT_CODES = {
    "0": SemanticStatus.READY,
    "Normal": SemanticStatus.READY,
    "1": SemanticStatus.PAUSED,
    "2": SemanticStatus.ERROR,
    "3": SemanticStatus.PENDING_DELETION,
    "4": SemanticStatus.PAPER_JAM,
    "5": SemanticStatus.PAPER_OUT,
    "6": SemanticStatus.MANUAL_FEED,
    "7": SemanticStatus.PAPER_PROBLEM,
    "8": SemanticStatus.OFFLINE,
}


@dataclass(frozen=True)
class ClassifiedStatus:
    """A status code with its semantic state and raw-text facets."""

    code: str
    status: SemanticStatus
    is_ready: bool
    has_paper: bool
    has_error: bool

    @property
    def label(self) -> str:
        return status_label(self.status, self.code)


def classify(code: str) -> SemanticStatus:
    """
    Classify a raw status code.

    Rules in priority order: exact codes, then "paper" anywhere in the
    code (case-insensitive), then "error", else UNKNOWN.

    Args:
        code: Raw status code as reported by the status source

    Returns:
        SemanticStatus for the code
    """
    code = code.strip()

    if code in EXACT_CODES:
        return EXACT_CODES[code]

    lowered = code.lower()
    if "paper" in lowered:
        return SemanticStatus.PAPER_PROBLEM
    if "error" in lowered:
        return SemanticStatus.ERROR

    return SemanticStatus.UNKNOWN


def is_ready(code: str) -> bool:
    return "Normal" in code or code == "0"


def has_paper(code: str) -> bool:
    return "paper" not in code.lower()


def has_error(code: str) -> bool:
    return "error" in code.lower()


def describe(code: str) -> ClassifiedStatus:
    """
    Classify a code and compute its facets.

    The facets come from the raw text, not from the enum, so a code like
    "Normal-paper-error" is ready, out of paper and in error all at once.
    A numeric "5" (Paper Out) still reports has_paper=True.
    """
    return ClassifiedStatus(
        code=code,
        status=classify(code),
        is_ready=is_ready(code),
        has_paper=has_paper(code),
        has_error=has_error(code),
    )


def status_label(status: SemanticStatus, code: str) -> str:
    """Display text for a status: the raw code when it is unknown."""
    if status == SemanticStatus.UNKNOWN:
        return code.strip()
    return status.value
