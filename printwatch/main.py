"""
Printer API server entry point.
"""

import argparse
import logging
import sys

import uvicorn

from printwatch.api.server import create_app
from printwatch.config import (
    MonitorConfig,
    PrintConfig,
    get_server_config,
    load_config,
    setup_renderer,
    setup_status_source,
)
from printwatch.orchestrator import PrintOrchestrator
from printwatch.printers.poller import StatusPoller
from printwatch.startup import print_startup_banner, run_startup_checks

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Printer API server")
    parser.add_argument(
        "-c", "--config",
        help="Path to config file (default: config/default.yaml)"
    )
    parser.add_argument(
        "--host",
        help="Override host from config"
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Override port from config"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )
    parser.add_argument(
        "--skip-checks",
        action="store_true",
        help="Skip startup checks (not recommended)"
    )
    args = parser.parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        sys.exit(1)

    # Apply CLI overrides before validation
    if args.host:
        config.setdefault("server", {})["host"] = args.host
    if args.port:
        config.setdefault("server", {})["port"] = args.port
    if args.debug:
        config.setdefault("server", {})["debug"] = True
        logging.getLogger().setLevel(logging.DEBUG)

    # Run startup checks
    if not args.skip_checks:
        run_startup_checks(config)

    print_config = PrintConfig.from_dict(config)

    try:
        monitor_config = MonitorConfig.from_dict(config)
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid monitor config: {e}")
        sys.exit(1)

    try:
        status_source = setup_status_source(print_config)
        renderer = setup_renderer(print_config)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    orchestrator = PrintOrchestrator(
        print_config,
        StatusPoller(status_source),
        renderer,
        monitor_config
    )

    server_config = get_server_config(config)

    app = create_app(
        orchestrator,
        cors_origins=server_config.get("cors_origins"),
        debug=server_config.get("debug", False)
    )

    print_startup_banner(config)

    try:
        uvicorn.run(
            app,
            host=server_config["host"],
            port=server_config["port"],
            log_level="debug" if server_config.get("debug") else "info"
        )
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
