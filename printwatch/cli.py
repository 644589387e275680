"""
Command line printing: submit a document, then watch it until it is done.

Usage:
    printwatch                                   # config defaults
    printwatch report.pdf --printer MP230
    printwatch report.pdf --color monochrome --duplex --duplex-mode horizontal
    printwatch report.pdf --timeout 60           # stop watching after 60s
"""

import argparse
import asyncio
import logging
import sys

from printwatch.config import (
    MonitorConfig,
    PrintConfig,
    load_config,
    setup_renderer,
    setup_status_source,
)
from printwatch.errors import NotFoundError, PrintError, RenderFailedError
from printwatch.monitor import MonitorEvent, MonitorEventType, MonitorState
from printwatch.orchestrator import PrintOrchestrator
from printwatch.printers.base import PrinterStatusSnapshot
from printwatch.printers.poller import StatusPoller
from printwatch.render.options import PrintOptions

logger = logging.getLogger(__name__)


def display_status(snapshot: PrinterStatusSnapshot) -> None:
    print(f"\n📋 Printer: {snapshot.name}")
    print(f"📊 Status: {snapshot.status_label}")
    print(f"📑 Jobs in queue: {snapshot.jobs_in_queue}")

    if snapshot.is_ready:
        print("✅ Printer ready")
    else:
        print("⚠️  Printer not ready")

    if not snapshot.has_paper:
        print("⚠️  Out of paper / paper problem!")

    if snapshot.has_error:
        print(f"❌ Error: {snapshot.error_message}")


async def print_event(event: MonitorEvent) -> None:
    """Render monitor events as console lines."""
    if event.type == MonitorEventType.PROGRESS:
        print(
            f"⏳ Jobs in queue: {event.jobs_in_queue} - Status: {event.status} "
            f"({event.elapsed_sec:.0f}s elapsed)"
        )
    elif event.type == MonitorEventType.PAPER_OUT:
        print("\n❌ OUT OF PAPER!")
        print("📄 Load paper, printing will resume automatically...")
    elif event.type == MonitorEventType.PAPER_RESTORED:
        print("✅ Paper detected! Printing resumed...")
    elif event.type == MonitorEventType.COMPLETED:
        print("✅ Print job finished!")
    elif event.type == MonitorEventType.FAILED:
        print(f"⚠️  Error: {event.message}")
    elif event.type == MonitorEventType.TIMED_OUT:
        print(f"⏱️  {event.message}")
        print("💡 Tip: raise --timeout or set it to 0 for unlimited")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print a document and watch the printer queue")
    parser.add_argument(
        "file",
        nargs="?",
        help="Document to print (default: printing.default_document from config)"
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to config file (default: config/default.yaml)"
    )
    parser.add_argument("-p", "--printer", help="Printer name (default from config)")
    parser.add_argument("--paper-size", default="a4", help="a4, letter, legal or a5")
    parser.add_argument("--color", default="color", choices=["color", "monochrome"])
    parser.add_argument("--duplex", action="store_true", help="Print on both sides")
    parser.add_argument(
        "--duplex-mode",
        default="vertical",
        choices=["vertical", "horizontal"],
        help="Flip on the long edge (vertical) or short edge (horizontal)"
    )
    parser.add_argument("--copies", type=int, default=1)
    parser.add_argument(
        "--timeout",
        type=float,
        help="Stop watching after this many seconds; 0 = unlimited (default from config)"
    )
    parser.add_argument(
        "--interval",
        type=float,
        help="Seconds between status checks (default from config)"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


async def run(args: argparse.Namespace, orchestrator: PrintOrchestrator) -> int:
    """Check, submit and watch. Returns the process exit code."""
    print_config = orchestrator.print_config
    printer_name = args.printer or print_config.default_printer
    document = args.file or print_config.default_document

    print("🖨️  Checking printer status...")
    try:
        snapshot = await orchestrator.poller.poll(printer_name)
    except NotFoundError as e:
        print(f"❌ Error checking printer: {e}")
        return 1

    display_status(snapshot)

    options = PrintOptions.from_settings(
        paper_size=args.paper_size,
        color=args.color,
        double_sided=args.duplex,
        duplex_mode=args.duplex_mode,
        copies=args.copies,
    )

    print("\n📄 Starting print job...")
    try:
        handle = await orchestrator.submit(document, printer_name, options)
    except RenderFailedError as e:
        if e.exit_code is None:
            print("❌ Print error: Ghostscript could not be started")
        else:
            print(f"❌ Print error: exit status {e.exit_code}")
        print(f"📝 Detail: {e.output}")
        return 1
    except PrintError as e:
        print(f"❌ {e}")
        return 1

    print(f"✅ Print command sent! ({handle.job_id})")

    print("\n📊 Monitoring print job...")
    result = await orchestrator.watch(handle, on_event=print_event)

    if result.state == MonitorState.FAILED:
        return 1
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        config = load_config(args.config)
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        sys.exit(1)

    print_config = PrintConfig.from_dict(config)
    try:
        monitor_config = MonitorConfig.from_dict(config)
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid monitor config: {e}")
        sys.exit(1)

    if args.timeout is not None:
        monitor_config.timeout_sec = args.timeout
    if args.interval is not None:
        monitor_config.poll_interval_sec = args.interval

    try:
        orchestrator = PrintOrchestrator(
            print_config,
            StatusPoller(setup_status_source(print_config)),
            setup_renderer(print_config),
            monitor_config
        )
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    sys.exit(asyncio.run(run(args, orchestrator)))


if __name__ == "__main__":
    main()
