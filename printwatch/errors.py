"""
Error taxonomy for print submission and job monitoring.

Every failure is terminal for the operation that raised it. Nothing here
is retried automatically.
"""

from typing import Optional, Sequence


class PrintError(Exception):
    """Base error for printwatch."""


class NotFoundError(PrintError):
    """A printer or document is absent."""


class DocumentNotFoundError(NotFoundError):
    """Raised when the document to print does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class PrinterNotFoundError(NotFoundError):
    """Raised when the status source has no such printer or its query fails."""

    def __init__(self, printer_name: str, reason: str = "printer not found"):
        self.printer_name = printer_name
        self.reason = reason
        super().__init__(f"Printer not found: {printer_name} ({reason})")


class NotReadyError(PrintError):
    """A printer exists but cannot take a job right now."""


class PrinterNotReadyError(NotReadyError):
    """Raised when the printer reports it is busy, paused, offline, etc."""

    def __init__(self, printer_name: str, status, status_label: str):
        self.printer_name = printer_name
        self.status = status
        self.status_label = status_label
        super().__init__(f"Printer not ready: {status_label}")


class RendererMissingError(PrintError):
    """Raised when no renderer executable is found among the search paths."""

    def __init__(self, searched: Sequence[str] = ()):
        self.searched = list(searched)
        super().__init__("Ghostscript not found")


class RenderFailedError(PrintError):
    """
    Raised when the renderer exits non-zero, or cannot be started at all
    (exit_code None). Carries its combined output or the OS error text.
    """

    def __init__(self, exit_code: Optional[int], output: str):
        self.exit_code = exit_code
        self.output = output
        if exit_code is None:
            super().__init__(f"Print failed: {output}")
        else:
            super().__init__(f"Print failed: exit status {exit_code} - {output}")


class ParseError(PrintError):
    """Malformed status source output. Degraded to defaults, never fatal."""
