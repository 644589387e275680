"""
CUPS status source.

Requires: pycups package
Translates CUPS printer state and state reasons into the same
STATUS:/JOBS:/NAME: text the Windows source produces, so the rest of the
pipeline does not care which spooler answered.
"""

import logging
from typing import Optional

from printwatch.errors import PrinterNotFoundError
from .base import StatusSource

logger = logging.getLogger(__name__)

try:
    import cups
    CUPS_AVAILABLE = True
except ImportError:
    CUPS_AVAILABLE = False
    logger.warning("pycups package not available - CupsStatusSource will not function")

# CUPS printer-state values
IPP_PRINTER_IDLE = 3
IPP_PRINTER_PROCESSING = 4
IPP_PRINTER_STOPPED = 5

# printer-state-reasons prefix -> status code understood by the classifier
REASON_CODES = (
    ("media-empty", "PaperOut"),
    ("media-needed", "PaperOut"),
    ("media-jam", "PaperJam"),
    ("offline-report", "8"),
    ("paused", "1"),
)


def state_to_code(state: int, reasons: list[str]) -> str:
    """Map CUPS printer-state + printer-state-reasons to a status code."""
    for reason in reasons:
        for prefix, code in REASON_CODES:
            if reason.startswith(prefix):
                return code

    if any(reason.endswith("-error") for reason in reasons):
        return "Error"

    if state == IPP_PRINTER_STOPPED:
        return "1"
    if state in (IPP_PRINTER_IDLE, IPP_PRINTER_PROCESSING):
        return "Normal"
    return str(state)


class CupsStatusSource(StatusSource):
    """
    Status source for CUPS-managed printers.

    Config options:
        cups_server: CUPS server address (default: localhost)
    """

    def __init__(self, config: Optional[dict] = None):
        super().__init__(config)
        self.cups_server = self.config.get("cups_server", "localhost")
        self._conn = None

    def _get_connection(self):
        """Get or create CUPS connection."""
        if self._conn is None:
            if self.cups_server != "localhost":
                cups.setServer(self.cups_server)
            self._conn = cups.Connection()
        return self._conn

    async def query(self, printer_name: str) -> str:
        if not CUPS_AVAILABLE and self._conn is None:
            raise PrinterNotFoundError(printer_name, "pycups package not installed")

        try:
            conn = self._get_connection()
            printers = conn.getPrinters()

            if printer_name not in printers:
                raise PrinterNotFoundError(printer_name)

            info = printers[printer_name]
            code = state_to_code(
                info.get("printer-state", 0),
                list(info.get("printer-state-reasons", [])),
            )

            jobs = conn.getJobs(
                which_jobs="not-completed",
                requested_attributes=["job-printer-uri"],
            )
            suffix = f"/printers/{printer_name}"
            job_count = sum(
                1 for attrs in jobs.values()
                if attrs.get("job-printer-uri", "").endswith(suffix)
            )

        except PrinterNotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to get CUPS status for {printer_name}: {e}")
            raise PrinterNotFoundError(printer_name, f"CUPS query failed: {e}") from e

        return f"STATUS:{code}\nJOBS:{job_count}\nNAME:{printer_name}\n"
