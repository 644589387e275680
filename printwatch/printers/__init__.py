from .base import PrinterStatusSnapshot, StatusSource
from .poller import StatusPoller
from .status_codes import SemanticStatus, classify, describe

__all__ = [
    "PrinterStatusSnapshot",
    "SemanticStatus",
    "StatusPoller",
    "StatusSource",
    "classify",
    "describe",
]
