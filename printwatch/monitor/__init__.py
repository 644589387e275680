"""
Job monitoring module.

Watches a printer's queue after submission until the job completes.
"""

from .job_monitor import (
    JobMonitor,
    MonitorEvent,
    MonitorEventType,
    MonitorResult,
    MonitorState,
    WatchedJob,
)

__all__ = [
    "JobMonitor",
    "MonitorEvent",
    "MonitorEventType",
    "MonitorResult",
    "MonitorState",
    "WatchedJob",
]
