"""
Status poller: one round trip to the status source per call.

Parses the source's line-oriented output into a PrinterStatusSnapshot.
Parsing is best-effort; malformed values degrade to defaults.
"""

import logging
import re
from typing import Optional

from printwatch.errors import ParseError
from .base import PrinterStatusSnapshot, StatusSource
from .status_codes import describe

logger = logging.getLogger(__name__)

STATUS_PREFIX = "STATUS:"
JOBS_PREFIX = "JOBS:"
JOBS_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_jobs(value: str) -> int:
    """Parse a JOBS: payload as a non-negative base-10 integer."""
    value = value.strip()
    if not JOBS_PATTERN.fullmatch(value):
        raise ParseError(f"Invalid job count: {value!r}")
    jobs = int(value)
    if jobs < 0:
        raise ParseError(f"Negative job count: {jobs}")
    return jobs


def parse_status_output(printer_name: str, output: str) -> PrinterStatusSnapshot:
    """
    Build a snapshot from status source output.

    The first STATUS: and the first JOBS: line win. Anything else,
    NAME: included, is ignored. The snapshot keeps the requested name.
    """
    status_code: Optional[str] = None
    jobs: Optional[int] = None

    for line in output.splitlines():
        line = line.strip()

        if status_code is None and line.startswith(STATUS_PREFIX):
            status_code = line[len(STATUS_PREFIX):].strip()

        elif jobs is None and line.startswith(JOBS_PREFIX):
            try:
                jobs = parse_jobs(line[len(JOBS_PREFIX):])
            except ParseError as e:
                logger.warning(f"Status output for {printer_name}: {e}, using 0")
                jobs = 0

    if status_code is None:
        logger.warning(f"Status output for {printer_name} has no STATUS line")
        status_code = ""

    classified = describe(status_code)

    return PrinterStatusSnapshot(
        name=printer_name,
        status=classified.status,
        status_code=status_code,
        jobs_in_queue=jobs or 0,
        is_ready=classified.is_ready,
        has_paper=classified.has_paper,
        has_error=classified.has_error,
        error_message=status_code if classified.has_error else None,
    )


class StatusPoller:
    """Fetches fresh printer snapshots from a status source."""

    def __init__(self, source: StatusSource):
        self.source = source

    async def poll(self, printer_name: str) -> PrinterStatusSnapshot:
        """
        Take one snapshot of a printer.

        Raises:
            PrinterNotFoundError: the source does not know the printer
        """
        output = await self.source.query(printer_name)
        snapshot = parse_status_output(printer_name, output)
        logger.debug(
            f"Polled {printer_name}: status={snapshot.status_label} "
            f"jobs={snapshot.jobs_in_queue}"
        )
        return snapshot
