import logging
from collections import deque
from typing import Optional, Union

from printwatch.errors import PrinterNotFoundError
from .base import StatusSource

logger = logging.getLogger(__name__)

# A scripted response: (status code, job count), raw output text, or None
# for "printer not found"
Response = Optional[Union[tuple[str, int], str]]


def format_status(printer_name: str, code: str, jobs: int) -> str:
    """Render status source output in the STATUS:/JOBS:/NAME: protocol."""
    return f"STATUS:{code}\nJOBS:{jobs}\nNAME:{printer_name}\n"


class MockStatusSource(StatusSource):
    """
    Mock status source for development and tests without a spooler.

    Config options:
        printers: mapping of printer name -> {status: <code>, jobs: <int>}
    """

    def __init__(self, config: Optional[dict] = None):
        super().__init__(config)
        self._printers: dict[str, tuple[str, int]] = {}
        self._scripts: dict[str, deque[Response]] = {}
        self.queries: list[str] = []

        for name, printer_conf in self.config.get("printers", {}).items():
            printer_conf = printer_conf or {}
            self.set_status(
                name,
                str(printer_conf.get("status", "0")),
                int(printer_conf.get("jobs", 0)),
            )

    def set_status(self, printer_name: str, code: str = "0", jobs: int = 0) -> None:
        """Allow tests to set the standing status of a printer."""
        self._printers[printer_name] = (code, jobs)

    def remove_printer(self, printer_name: str) -> None:
        self._printers.pop(printer_name, None)

    def script(self, printer_name: str, responses: list[Response]) -> None:
        """
        Queue responses returned one per query, before the standing status.
        """
        self._scripts.setdefault(printer_name, deque()).extend(responses)

    async def query(self, printer_name: str) -> str:
        self.queries.append(printer_name)

        script = self._scripts.get(printer_name)
        if script:
            response = script.popleft()
            if response is None:
                raise PrinterNotFoundError(printer_name)
            if isinstance(response, str):
                return response
            code, jobs = response
            return format_status(printer_name, code, jobs)

        if printer_name not in self._printers:
            raise PrinterNotFoundError(printer_name)

        code, jobs = self._printers[printer_name]
        logger.debug(f"[MOCK] Status for {printer_name}: {code} ({jobs} jobs)")
        return format_status(printer_name, code, jobs)
