"""
Configuration loading and collaborator setup.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from printwatch.printers.base import StatusSource
from printwatch.printers.cups_adapter import CupsStatusSource
from printwatch.printers.mock import MockStatusSource
from printwatch.printers.powershell import PowerShellStatusSource
from printwatch.render.base import Renderer
from printwatch.render.ghostscript import DEFAULT_SEARCH_PATHS, GhostscriptRenderer
from printwatch.render.mock import MockRenderer

logger = logging.getLogger(__name__)

# Map status source types to classes
STATUS_SOURCE_TYPES = {
    "powershell": PowerShellStatusSource,
    "cups": CupsStatusSource,
    "mock": MockStatusSource,
}

# Map renderer types to classes
RENDERER_TYPES = {
    "ghostscript": GhostscriptRenderer,
    "mock": MockRenderer,
}


@dataclass
class PrintConfig:
    """Printing configuration, passed to the orchestrator."""

    default_printer: str = "MP230"
    default_document: str = "test.pdf"
    documents_dir: str = "."
    document_patterns: list[str] = field(default_factory=lambda: ["*.pdf"])
    status_source: str = "powershell"
    renderer: str = "ghostscript"
    renderer_paths: list[str] = field(default_factory=lambda: list(DEFAULT_SEARCH_PATHS))
    cups_server: str = "localhost"
    powershell: str = "powershell"
    mock_printers: dict = field(default_factory=dict)
    mock_renderer: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, config: dict) -> "PrintConfig":
        """Create from config dictionary."""
        printing = config.get("printing") or {}
        defaults = cls()
        return cls(
            default_printer=printing.get("default_printer", defaults.default_printer),
            default_document=printing.get("default_document", defaults.default_document),
            documents_dir=str(printing.get("documents_dir", defaults.documents_dir)),
            document_patterns=list(printing.get("document_patterns") or defaults.document_patterns),
            status_source=printing.get("status_source", defaults.status_source),
            renderer=printing.get("renderer", defaults.renderer),
            renderer_paths=list(printing.get("renderer_paths") or defaults.renderer_paths),
            cups_server=printing.get("cups_server", defaults.cups_server),
            powershell=printing.get("powershell", defaults.powershell),
            mock_printers=dict(printing.get("mock_printers") or {}),
            mock_renderer=dict(printing.get("mock_renderer") or {}),
        )

    def resolve_document(self, file_name: str) -> Path:
        """Absolute path of a document; relative names live in documents_dir."""
        path = Path(file_name)
        if not path.is_absolute():
            path = Path(self.documents_dir) / path
        return path.resolve()


@dataclass
class MonitorConfig:
    """Job monitor configuration."""

    poll_interval_sec: float = 2.0
    timeout_sec: float = 0  # 0 = unlimited
    watch_service_jobs: bool = False

    @classmethod
    def from_dict(cls, config: dict) -> "MonitorConfig":
        """Create from config dictionary."""
        monitor = config.get("monitor") or {}
        return cls(
            poll_interval_sec=float(monitor.get("poll_interval_sec", 2.0)),
            timeout_sec=float(monitor.get("timeout_sec", 0)),
            watch_service_jobs=bool(monitor.get("watch_service_jobs", False)),
        )


def load_config(config_path: Optional[str] = None) -> dict:
    """
    Load configuration from YAML file.

    Looks for config in order:
    1. Explicit path if provided
    2. CONFIG_FILE environment variable
    3. ./config/local.yaml
    4. ./config/default.yaml
    """
    search_paths = []

    if config_path:
        search_paths.append(Path(config_path))

    if env_path := os.environ.get("CONFIG_FILE"):
        search_paths.append(Path(env_path))

    # Default paths relative to project root
    project_root = Path(__file__).parent.parent
    search_paths.extend([
        project_root / "config" / "local.yaml",
        project_root / "config" / "default.yaml",
    ])

    for path in search_paths:
        if path.exists():
            logger.info(f"Loading config from {path}")
            with open(path) as f:
                return yaml.safe_load(f) or {}

    logger.warning("No config file found, using defaults")
    return {}


def setup_status_source(print_config: PrintConfig) -> StatusSource:
    """
    Create the configured status source.

    Config format:
        printing:
          status_source: cups
          cups_server: print.local
    """
    source_type = print_config.status_source
    if source_type not in STATUS_SOURCE_TYPES:
        raise ValueError(f"Unknown status source type '{source_type}'")

    if source_type == "mock":
        # Dev mode: the default printer exists and is idle
        printers = print_config.mock_printers or {print_config.default_printer: {}}
        source_config = {"printers": printers}
    else:
        source_config = {
            "cups_server": print_config.cups_server,
            "powershell": print_config.powershell,
        }

    source = STATUS_SOURCE_TYPES[source_type](source_config)
    logger.info(f"Status source: {source_type}")
    return source


def setup_renderer(print_config: PrintConfig) -> Renderer:
    """Create the configured renderer."""
    renderer_type = print_config.renderer
    if renderer_type not in RENDERER_TYPES:
        raise ValueError(f"Unknown renderer type '{renderer_type}'")

    if renderer_type == "mock":
        renderer_config = print_config.mock_renderer
    else:
        renderer_config = {"renderer_paths": print_config.renderer_paths}

    renderer = RENDERER_TYPES[renderer_type](renderer_config)
    logger.info(f"Renderer: {renderer_type}")
    return renderer


def get_server_config(config: dict) -> dict:
    """Extract server configuration."""
    server = config.get("server") or {}
    return {
        "host": server.get("host", "0.0.0.0"),
        "port": server.get("port", 3000),
        "debug": server.get("debug", False),
        "cors_origins": server.get("cors_origins", None),
    }
