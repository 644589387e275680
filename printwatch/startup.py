"""
Startup checks and validation.

Run before starting the server to catch configuration issues early.
"""

import logging
import shutil
import socket
import sys
from pathlib import Path
from typing import Optional

from printwatch.config import (
    RENDERER_TYPES,
    STATUS_SOURCE_TYPES,
    MonitorConfig,
    PrintConfig,
)
from printwatch.printers import cups_adapter
from printwatch.render.ghostscript import find_executable

logger = logging.getLogger(__name__)


def check_port_available(host: str, port: int) -> tuple[bool, Optional[str]]:
    """
    Check if a port is available for binding.

    Returns:
        (True, None) if available
        (False, error_message) if not
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host, port))
        return True, None
    except socket.error as e:
        if e.errno == 10048 or e.errno == 98:  # Windows / Linux "address in use"
            return False, f"Port {port} is already in use. Another service may be running on this port."
        elif e.errno == 10049 or e.errno == 99:  # Can't assign address
            return False, f"Cannot bind to {host}:{port}. Check if the host address is valid."
        elif e.errno == 10013 or e.errno == 13:  # Permission denied
            return False, f"Permission denied for port {port}. Ports below 1024 require admin/root privileges."
        else:
            return False, f"Cannot bind to {host}:{port}: {e}"
    finally:
        sock.close()


def validate_config(config: dict) -> list[str]:
    """
    Validate configuration and return list of warnings/errors.

    Returns:
        List of warning/error messages (empty if all good)
    """
    issues = []

    server = config.get("server") or {}
    port = server.get("port", 3000)

    if not isinstance(port, int) or port < 1 or port > 65535:
        issues.append(f"Invalid port: {port}. Must be between 1 and 65535.")
    elif port < 1024:
        issues.append(f"Port {port} is a privileged port. Consider using a port >= 1024.")

    print_config = PrintConfig.from_dict(config)

    if print_config.status_source not in STATUS_SOURCE_TYPES:
        issues.append(
            f"Unknown status source '{print_config.status_source}'. "
            f"Available: {sorted(STATUS_SOURCE_TYPES)}"
        )

    if print_config.renderer not in RENDERER_TYPES:
        issues.append(
            f"Unknown renderer '{print_config.renderer}'. "
            f"Available: {sorted(RENDERER_TYPES)}"
        )

    if not Path(print_config.documents_dir).is_dir():
        issues.append(f"Documents directory '{print_config.documents_dir}' does not exist.")

    try:
        monitor_config = MonitorConfig.from_dict(config)
    except (TypeError, ValueError) as e:
        issues.append(f"Invalid monitor config: {e}")
    else:
        if monitor_config.poll_interval_sec <= 0:
            issues.append(
                f"Invalid poll interval: {monitor_config.poll_interval_sec}. Must be positive."
            )

    return issues


def check_dependencies(print_config: PrintConfig) -> dict[str, bool]:
    """
    Check which external tools and optional packages are available.

    Returns:
        Dict of dependency name -> is_available
    """
    return {
        "pycups": cups_adapter.CUPS_AVAILABLE,
        "powershell": shutil.which(print_config.powershell) is not None,
        "ghostscript": find_executable(print_config.renderer_paths) is not None,
    }


def run_startup_checks(config: dict) -> None:
    """
    Run all startup checks. Exits with error if critical issues found.

    Args:
        config: Loaded configuration dict
    """
    logger.info("Running startup checks...")

    errors = []
    warnings = []

    server = config.get("server") or {}
    host = server.get("host", "0.0.0.0")
    port = server.get("port", 3000)

    config_issues = validate_config(config)
    for issue in config_issues:
        if issue.startswith(("Invalid", "Unknown")):
            errors.append(issue)
        else:
            warnings.append(issue)

    if isinstance(port, int) and 0 < port <= 65535:
        available, port_error = check_port_available(host, port)
        if not available:
            errors.append(port_error)

    # Only the collaborators actually configured are required
    print_config = PrintConfig.from_dict(config)
    deps = check_dependencies(print_config)
    required = {
        "cups": "pycups",
        "powershell": "powershell",
    }.get(print_config.status_source)
    if required and not deps[required]:
        warnings.append(f"Status source '{print_config.status_source}' needs {required}, which is not available")
    if print_config.renderer == "ghostscript" and not deps["ghostscript"]:
        warnings.append("Ghostscript not found in renderer_paths. Print requests will fail.")

    # Report warnings
    for warning in warnings:
        logger.warning(f"  ⚠ {warning}")

    # Report errors and exit if any
    if errors:
        logger.error("Startup checks failed:")
        for error in errors:
            logger.error(f"  ✗ {error}")
        logger.error("")
        logger.error("Fix these issues and try again.")
        sys.exit(1)

    if warnings:
        logger.info(f"Startup checks passed with {len(warnings)} warning(s)")
    else:
        logger.info("Startup checks passed ✓")


def print_startup_banner(config: dict) -> None:
    """Print a startup banner with useful info."""
    server = config.get("server") or {}
    port = server.get("port", 3000)
    print_config = PrintConfig.from_dict(config)

    print("")
    print("=" * 50)
    print("  Printer API")
    print("=" * 50)
    print("")
    print(f"  Local URL:        http://localhost:{port}")
    print(f"  API Docs:         http://localhost:{port}/docs")
    print(f"  Default printer:  {print_config.default_printer}")
    print(f"  Status source:    {print_config.status_source}")
    print(f"  Documents:        {Path(print_config.documents_dir).resolve()}")
    print("")
    print("  Endpoints:")
    print("    POST /print                 - Print a document")
    print("    GET  /printer/status/:name  - Printer status")
    print("    GET  /files                 - List documents")
    print("")
    print("=" * 50)
    print("")
