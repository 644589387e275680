"""
Print job lifecycle monitor.

Polls the spooler at a fixed interval after a job is submitted and decides
when to stop watching:

    POLLING -> COMPLETED   queue drained
            -> FAILED      status query failed, or printer reports an error
            -> TIMED_OUT   configured timeout exceeded, job still queued

PAPER_OUT_WAIT is a sub-state of POLLING. It only changes what is reported
and keeps the paper-out warning from repeating every tick.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional

from printwatch.errors import NotFoundError
from printwatch.printers.base import PrinterStatusSnapshot
from printwatch.printers.poller import StatusPoller

logger = logging.getLogger(__name__)


class MonitorState(Enum):
    POLLING = "polling"
    PAPER_OUT_WAIT = "paper_out_wait"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


TERMINAL_STATES = (MonitorState.COMPLETED, MonitorState.TIMED_OUT, MonitorState.FAILED)


class MonitorEventType(Enum):
    PROGRESS = "progress"
    PAPER_OUT = "paper_out"
    PAPER_RESTORED = "paper_restored"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass
class MonitorEvent:
    type: MonitorEventType
    printer_name: str
    elapsed_sec: float
    jobs_in_queue: Optional[int] = None
    status: Optional[str] = None
    message: str = ""


@dataclass
class WatchedJob:
    """State of the job being watched. Lives only as long as one watch() call."""

    printer_name: str
    started_at: float
    previous_depth: Optional[int] = None  # None until the first snapshot
    paper_warning_active: bool = False
    state: MonitorState = MonitorState.POLLING
    message: str = ""
    last_snapshot: Optional[PrinterStatusSnapshot] = None
    events: list[MonitorEvent] = field(default_factory=list)


@dataclass
class MonitorResult:
    state: MonitorState
    printer_name: str
    elapsed_sec: float
    ticks: int
    message: str = ""
    last_snapshot: Optional[PrinterStatusSnapshot] = None
    events: list[MonitorEvent] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.state == MonitorState.COMPLETED

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "printer": self.printer_name,
            "elapsed_sec": round(self.elapsed_sec, 1),
            "ticks": self.ticks,
            "message": self.message,
        }


# Type alias for event callback
EventCallback = Callable[[MonitorEvent], Awaitable[None]]


class JobMonitor:
    """
    Watches one printer's queue until the submitted job is done.

    Features:
    - One status query per tick, never two at once
    - Progress reported only when the queue depth changes
    - One paper-out warning per paper-out episode, one restore notice after
    - Printer errors stop monitoring even with jobs still queued
    - Optional overall timeout (0 or less = unlimited)
    """

    def __init__(
        self,
        poller: StatusPoller,
        interval_sec: float = 2.0,
        timeout_sec: float = 0,
        on_event: Optional[EventCallback] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        """
        Initialize the job monitor.

        Args:
            poller: StatusPoller used for every tick
            interval_sec: Time between ticks (default 2s)
            timeout_sec: Stop watching after this long; 0 or less = never
            on_event: Async callback called for each MonitorEvent
            clock: Monotonic time source
            sleep: Coroutine used to wait between ticks
        """
        self.poller = poller
        self.interval_sec = interval_sec
        self.timeout_sec = timeout_sec
        self.on_event = on_event
        self._clock = clock
        self._sleep = sleep

    async def watch(self, printer_name: str) -> MonitorResult:
        """Poll until the job completes, fails or times out."""
        job = WatchedJob(printer_name=printer_name, started_at=self._clock())
        ticks = 0

        timeout = f"{self.timeout_sec}s" if self.timeout_sec > 0 else "unlimited"
        logger.info(
            f"[MONITOR] Watching {printer_name} "
            f"(interval: {self.interval_sec}s, timeout: {timeout})"
        )

        while job.state not in TERMINAL_STATES:
            await self._sleep(self.interval_sec)
            ticks += 1
            await self._tick(job)

        return MonitorResult(
            state=job.state,
            printer_name=printer_name,
            elapsed_sec=self._elapsed(job),
            ticks=ticks,
            message=job.message,
            last_snapshot=job.last_snapshot,
            events=job.events,
        )

    def _elapsed(self, job: WatchedJob) -> float:
        return self._clock() - job.started_at

    async def _tick(self, job: WatchedJob) -> None:
        """Take one snapshot and advance the job's state."""
        try:
            snapshot = await self.poller.poll(job.printer_name)
        except NotFoundError as e:
            await self._finish(job, MonitorState.FAILED, str(e))
            return
        except Exception as e:
            logger.exception(f"Status poll for {job.printer_name} failed")
            await self._finish(job, MonitorState.FAILED, f"Status query failed: {e}")
            return

        job.last_snapshot = snapshot
        depth = snapshot.jobs_in_queue

        if depth == 0:
            await self._finish(job, MonitorState.COMPLETED, "Print job finished")
            return

        if not snapshot.has_paper:
            if not job.paper_warning_active:
                job.paper_warning_active = True
                job.state = MonitorState.PAPER_OUT_WAIT
                await self._emit(job, MonitorEventType.PAPER_OUT, snapshot,
                                 "Out of paper. Load paper and printing will resume.")
        elif job.paper_warning_active:
            job.paper_warning_active = False
            job.state = MonitorState.POLLING
            await self._emit(job, MonitorEventType.PAPER_RESTORED, snapshot,
                             "Paper detected, printing resumed")

        if snapshot.has_error:
            message = f"Printer error: {snapshot.error_message or snapshot.status_label}"
            await self._finish(job, MonitorState.FAILED, message)
            return

        if depth != job.previous_depth:
            job.previous_depth = depth
            await self._emit(job, MonitorEventType.PROGRESS, snapshot,
                             f"Jobs in queue: {depth} - Status: {snapshot.status_label}")

        if self.timeout_sec > 0 and self._elapsed(job) > self.timeout_sec:
            await self._finish(
                job, MonitorState.TIMED_OUT,
                f"Timed out after {self.timeout_sec}s - print job still running"
            )

    async def _finish(self, job: WatchedJob, state: MonitorState, message: str) -> None:
        """Move the job to a terminal state and report it."""
        job.state = state
        job.message = message
        event_type = MonitorEventType(state.value)
        await self._emit(job, event_type, job.last_snapshot, message)

    async def _emit(
        self,
        job: WatchedJob,
        event_type: MonitorEventType,
        snapshot: Optional[PrinterStatusSnapshot],
        message: str
    ) -> None:
        """Record an event, log it and hand it to the callback."""
        event = MonitorEvent(
            type=event_type,
            printer_name=job.printer_name,
            elapsed_sec=self._elapsed(job),
            jobs_in_queue=snapshot.jobs_in_queue if snapshot else None,
            status=snapshot.status_label if snapshot else None,
            message=message,
        )
        job.events.append(event)

        if event_type in (MonitorEventType.FAILED, MonitorEventType.PAPER_OUT):
            logger.warning(f"[MONITOR] {job.printer_name}: {event_type.value} - {message}")
        else:
            logger.info(
                f"[MONITOR] {job.printer_name}: {event_type.value} - {message} "
                f"({event.elapsed_sec:.0f}s elapsed)"
            )

        if self.on_event:
            try:
                await self.on_event(event)
            except Exception as e:
                logger.error(f"Monitor event callback failed: {e}")
