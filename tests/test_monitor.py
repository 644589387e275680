"""Tests for the print job lifecycle monitor."""

import pytest

from printwatch.monitor import (
    JobMonitor,
    MonitorEvent,
    MonitorEventType,
    MonitorState,
)
from printwatch.printers.mock import MockStatusSource
from printwatch.printers.poller import StatusPoller

PRINTER = "MP230"


class FakeClock:
    """Time only moves when the monitor sleeps."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def source():
    source = MockStatusSource()
    source.set_status(PRINTER, "0", 0)
    return source


def make_monitor(source, clock, timeout_sec=0, on_event=None):
    return JobMonitor(
        StatusPoller(source),
        interval_sec=2.0,
        timeout_sec=timeout_sec,
        on_event=on_event,
        clock=clock,
        sleep=clock.sleep,
    )


def event_types(result) -> list[MonitorEventType]:
    return [event.type for event in result.events]


class TestProgress:
    @pytest.mark.asyncio
    async def test_progress_only_on_depth_change(self, source, clock):
        """Depths 5, 5, 3, 0: progress at 5 and 3, then completed."""
        source.script(PRINTER, [("0", 5), ("0", 5), ("0", 3), ("0", 0)])

        result = await make_monitor(source, clock).watch(PRINTER)

        assert result.state == MonitorState.COMPLETED
        assert result.success
        assert result.ticks == 4
        assert event_types(result) == [
            MonitorEventType.PROGRESS,
            MonitorEventType.PROGRESS,
            MonitorEventType.COMPLETED,
        ]
        progress = [e for e in result.events if e.type == MonitorEventType.PROGRESS]
        assert [e.jobs_in_queue for e in progress] == [5, 3]

    @pytest.mark.asyncio
    async def test_progress_event_contents(self, source, clock):
        """Progress carries depth, status and elapsed time."""
        source.script(PRINTER, [("0", 2), ("0", 0)])

        result = await make_monitor(source, clock).watch(PRINTER)

        first = result.events[0]
        assert first.type == MonitorEventType.PROGRESS
        assert first.jobs_in_queue == 2
        assert first.status == "Ready"
        assert first.elapsed_sec == 2.0
        assert first.printer_name == PRINTER

    @pytest.mark.asyncio
    async def test_empty_queue_on_first_tick(self, source, clock):
        """A queue already drained completes without any progress."""
        result = await make_monitor(source, clock).watch(PRINTER)

        assert result.state == MonitorState.COMPLETED
        assert result.ticks == 1
        assert event_types(result) == [MonitorEventType.COMPLETED]

    @pytest.mark.asyncio
    async def test_sleeps_one_interval_per_tick(self, source, clock):
        source.script(PRINTER, [("0", 1), ("0", 0)])

        await make_monitor(source, clock).watch(PRINTER)

        assert clock.sleeps == [2.0, 2.0]
        assert source.queries == [PRINTER, PRINTER]


class TestPaperOut:
    @pytest.mark.asyncio
    async def test_one_warning_per_episode(self, source, clock):
        """Two paper-out ticks warn once; the next good tick restores once."""
        source.script(PRINTER, [
            ("0", 2),
            ("PaperOut", 2),
            ("PaperOut", 2),
            ("0", 2),
            ("0", 0),
        ])

        result = await make_monitor(source, clock).watch(PRINTER)

        types = event_types(result)
        assert types.count(MonitorEventType.PAPER_OUT) == 1
        assert types.count(MonitorEventType.PAPER_RESTORED) == 1
        assert types.index(MonitorEventType.PAPER_OUT) < types.index(MonitorEventType.PAPER_RESTORED)
        assert result.state == MonitorState.COMPLETED

    @pytest.mark.asyncio
    async def test_new_episode_warns_again(self, source, clock):
        """Paper running out a second time warns again."""
        source.script(PRINTER, [
            ("PaperOut", 3),
            ("0", 3),
            ("PaperOut", 3),
            ("0", 0),
        ])

        result = await make_monitor(source, clock).watch(PRINTER)

        types = event_types(result)
        assert types.count(MonitorEventType.PAPER_OUT) == 2
        assert types.count(MonitorEventType.PAPER_RESTORED) == 1

    @pytest.mark.asyncio
    async def test_paper_out_keeps_polling(self, source, clock):
        """Paper-out is not terminal."""
        source.script(PRINTER, [("PaperOut", 1)] * 5 + [("0", 0)])

        result = await make_monitor(source, clock).watch(PRINTER)

        assert result.state == MonitorState.COMPLETED
        assert result.ticks == 6

    @pytest.mark.asyncio
    async def test_completion_during_paper_out(self, source, clock):
        """An empty queue completes even while paper is out."""
        source.script(PRINTER, [("PaperOut", 1), ("PaperOut", 0)])

        result = await make_monitor(source, clock).watch(PRINTER)

        assert result.state == MonitorState.COMPLETED
        assert MonitorEventType.PAPER_RESTORED not in event_types(result)


class TestFailure:
    @pytest.mark.asyncio
    async def test_printer_error_fails_with_jobs_queued(self, source, clock):
        """has_error stops the monitor even with jobs left."""
        source.script(PRINTER, [("0", 3), ("TonerError", 3)])

        result = await make_monitor(source, clock).watch(PRINTER)

        assert result.state == MonitorState.FAILED
        assert not result.success
        assert result.ticks == 2
        assert "TonerError" in result.message
        assert result.events[-1].type == MonitorEventType.FAILED

    @pytest.mark.asyncio
    async def test_error_wins_over_paper(self, source, clock):
        """A paper error warns about paper, then fails."""
        source.script(PRINTER, [("PaperError", 2)])

        result = await make_monitor(source, clock).watch(PRINTER)

        assert event_types(result) == [MonitorEventType.PAPER_OUT, MonitorEventType.FAILED]
        assert result.state == MonitorState.FAILED

    @pytest.mark.asyncio
    async def test_printer_disappears(self, source, clock):
        """A failed status query ends monitoring with no retry."""
        source.script(PRINTER, [("0", 2), None])

        result = await make_monitor(source, clock).watch(PRINTER)

        assert result.state == MonitorState.FAILED
        assert result.ticks == 2
        assert "printer not found" in result.message
        assert len(source.queries) == 2

    @pytest.mark.asyncio
    async def test_no_ticks_after_terminal_state(self, source, clock):
        """Scripted responses after a failure are never consumed."""
        source.script(PRINTER, [("Error", 1), ("0", 1), ("0", 0)])

        result = await make_monitor(source, clock).watch(PRINTER)

        assert result.ticks == 1
        assert source.queries == [PRINTER]


class TestTimeout:
    @pytest.mark.asyncio
    async def test_times_out_when_elapsed_exceeds_timeout(self, source, clock):
        """timeout=5 with 2s ticks ends at tick 3 (6s elapsed)."""
        source.set_status(PRINTER, "0", 1)

        result = await make_monitor(source, clock, timeout_sec=5).watch(PRINTER)

        assert result.state == MonitorState.TIMED_OUT
        assert result.ticks == 3
        assert result.elapsed_sec == 6.0
        assert result.events[-1].type == MonitorEventType.TIMED_OUT

    @pytest.mark.asyncio
    async def test_elapsed_equal_to_timeout_keeps_going(self, source, clock):
        """Timing out needs elapsed strictly greater than the timeout."""
        source.set_status(PRINTER, "0", 1)

        result = await make_monitor(source, clock, timeout_sec=4).watch(PRINTER)

        assert result.ticks == 3

    @pytest.mark.asyncio
    async def test_zero_timeout_is_unlimited(self, source, clock):
        """timeout=0 never times out."""
        source.script(PRINTER, [("0", 1)] * 200 + [("0", 0)])

        result = await make_monitor(source, clock, timeout_sec=0).watch(PRINTER)

        assert result.state == MonitorState.COMPLETED
        assert result.ticks == 201

    @pytest.mark.asyncio
    async def test_negative_timeout_is_unlimited(self, source, clock):
        source.script(PRINTER, [("0", 1)] * 50 + [("0", 0)])

        result = await make_monitor(source, clock, timeout_sec=-1).watch(PRINTER)

        assert result.state == MonitorState.COMPLETED


class TestCallbacks:
    @pytest.mark.asyncio
    async def test_callback_receives_events(self, source, clock):
        received: list[MonitorEvent] = []

        async def on_event(event: MonitorEvent) -> None:
            received.append(event)

        source.script(PRINTER, [("0", 1), ("0", 0)])
        result = await make_monitor(source, clock, on_event=on_event).watch(PRINTER)

        assert received == result.events

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_stop_monitoring(self, source, clock):
        async def on_event(event: MonitorEvent) -> None:
            raise RuntimeError("display broke")

        source.script(PRINTER, [("0", 2), ("0", 1), ("0", 0)])
        result = await make_monitor(source, clock, on_event=on_event).watch(PRINTER)

        assert result.state == MonitorState.COMPLETED
        assert result.ticks == 3

    @pytest.mark.asyncio
    async def test_result_to_dict(self, source, clock):
        result = await make_monitor(source, clock).watch(PRINTER)
        assert result.to_dict() == {
            "state": "completed",
            "printer": PRINTER,
            "elapsed_sec": 2.0,
            "ticks": 1,
            "message": "Print job finished",
        }
