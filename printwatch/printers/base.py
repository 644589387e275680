from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .status_codes import SemanticStatus, status_label


@dataclass
class PrinterStatusSnapshot:
    name: str
    status: SemanticStatus = SemanticStatus.UNKNOWN
    status_code: str = ""
    jobs_in_queue: int = 0
    is_ready: bool = False
    has_paper: bool = True
    has_error: bool = False
    error_message: Optional[str] = None

    @property
    def status_label(self) -> str:
        return status_label(self.status, self.status_code)

    def to_dict(self) -> dict:
        """Return snapshot as dict for API responses."""
        result = {
            "name": self.name,
            "status": self.status_label,
            "status_code": self.status_code,
            "jobs_in_queue": self.jobs_in_queue,
            "is_ready": self.is_ready,
            "has_paper": self.has_paper,
            "has_error": self.has_error,
        }
        if self.error_message:
            result["error_msg"] = self.error_message
        return result


class StatusSource(ABC):
    """
    Abstract base class for printer status sources.

    A source answers one question: what does the spooler say about this
    printer right now. The answer is line-oriented text:

        STATUS:<code>
        JOBS:<int>
        NAME:<string>
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = config or {}

    @abstractmethod
    async def query(self, printer_name: str) -> str:
        """
        Query the spooler for a printer.

        Raises:
            PrinterNotFoundError: printer unknown or the query process failed
        """
        pass

    @property
    def source_type(self) -> str:
        return type(self).__name__
