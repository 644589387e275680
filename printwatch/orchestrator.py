"""
Print orchestration: check preconditions, render, hand off to the monitor.

Precondition order is fixed and short-circuits on the first failure:
document exists, printer answers, printer is ready, renderer is installed.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from printwatch.config import MonitorConfig, PrintConfig
from printwatch.errors import (
    DocumentNotFoundError,
    PrinterNotReadyError,
    RenderFailedError,
    RendererMissingError,
)
from printwatch.monitor import JobMonitor, MonitorResult
from printwatch.monitor.job_monitor import EventCallback
from printwatch.printers.base import PrinterStatusSnapshot
from printwatch.printers.poller import StatusPoller
from printwatch.render.base import Renderer
from printwatch.render.command import build_args
from printwatch.render.options import PrintOptions

logger = logging.getLogger(__name__)


@dataclass
class JobHandle:
    job_id: str
    printer_name: str
    document_path: str
    options: PrintOptions = field(default_factory=PrintOptions)
    submitted_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "job_id": self.job_id,
            "printer": self.printer_name,
            "document": self.document_path,
            "settings": self.options.to_dict(),
            "submitted_at": self.submitted_at.isoformat(),
        }


def new_job_id() -> str:
    return f"job_{int(time.time())}"


class PrintOrchestrator:
    """
    Submits documents to printers and watches them through.

    Renderer invocations for the same printer name are serialized; different
    printers proceed independently.
    """

    def __init__(
        self,
        print_config: PrintConfig,
        poller: StatusPoller,
        renderer: Renderer,
        monitor_config: Optional[MonitorConfig] = None
    ):
        self.print_config = print_config
        self.poller = poller
        self.renderer = renderer
        self.monitor_config = monitor_config or MonitorConfig()

        self._printer_locks: dict[str, asyncio.Lock] = {}
        self._background: set[asyncio.Task] = set()

    def _lock_for(self, printer_name: str) -> asyncio.Lock:
        if printer_name not in self._printer_locks:
            self._printer_locks[printer_name] = asyncio.Lock()
        return self._printer_locks[printer_name]

    async def check_printer(self, printer_name: str) -> PrinterStatusSnapshot:
        """
        Snapshot a printer and require it to be ready.

        Raises:
            PrinterNotFoundError: status not retrievable
            PrinterNotReadyError: printer not ready
        """
        snapshot = await self.poller.poll(printer_name)
        if not snapshot.is_ready:
            raise PrinterNotReadyError(printer_name, snapshot.status, snapshot.status_label)
        return snapshot

    async def submit(
        self,
        document: str,
        printer_name: Optional[str] = None,
        options: Optional[PrintOptions] = None
    ) -> JobHandle:
        """
        Send a document to a printer.

        Args:
            document: Document path, relative to the documents directory
                      unless absolute
            printer_name: Target printer (default: configured printer)
            options: Page setup (default: PrintOptions())

        Returns:
            JobHandle for the submitted job

        Raises:
            DocumentNotFoundError, PrinterNotFoundError, PrinterNotReadyError,
            RendererMissingError, RenderFailedError
        """
        printer_name = printer_name or self.print_config.default_printer
        options = options or PrintOptions()

        path = self.print_config.resolve_document(document)
        if not path.is_file():
            raise DocumentNotFoundError(document)

        await self.check_printer(printer_name)

        if self.renderer.locate() is None:
            raise RendererMissingError(self.renderer.search_paths)

        args = build_args(printer_name, str(path), options)

        async with self._lock_for(printer_name):
            logger.info(f"[PRINT] Sending {path.name} to {printer_name}")
            result = await self.renderer.render(args)

        if not result.success:
            logger.error(f"[PRINT] Renderer exited {result.exit_code} for {path.name}: {result.output.strip()}")
            raise RenderFailedError(result.exit_code, result.output)

        handle = JobHandle(
            job_id=new_job_id(),
            printer_name=printer_name,
            document_path=str(path),
            options=options,
        )
        logger.info(f"[PRINT] Job {handle.job_id} sent to {printer_name}")
        return handle

    def create_monitor(self, on_event: Optional[EventCallback] = None) -> JobMonitor:
        return JobMonitor(
            self.poller,
            interval_sec=self.monitor_config.poll_interval_sec,
            timeout_sec=self.monitor_config.timeout_sec,
            on_event=on_event,
        )

    async def watch(
        self,
        handle: JobHandle,
        on_event: Optional[EventCallback] = None
    ) -> MonitorResult:
        """Watch a submitted job until it completes, fails or times out."""
        monitor = self.create_monitor(on_event)
        result = await monitor.watch(handle.printer_name)
        logger.info(f"[PRINT] Job {handle.job_id} monitoring ended: {result.state.value}")
        return result

    async def submit_and_watch(
        self,
        document: str,
        printer_name: Optional[str] = None,
        options: Optional[PrintOptions] = None,
        on_event: Optional[EventCallback] = None
    ) -> tuple[JobHandle, MonitorResult]:
        """Submit a document and block until monitoring ends."""
        handle = await self.submit(document, printer_name, options)
        result = await self.watch(handle, on_event)
        return handle, result

    def watch_in_background(self, handle: JobHandle) -> asyncio.Task:
        """
        Watch a job detached from the caller. The outcome is only logged.
        """
        task = asyncio.create_task(self.watch(handle))
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def stop(self) -> None:
        """Cancel detached monitors."""
        for task in list(self._background):
            task.cancel()
        for task in list(self._background):
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._background.clear()
