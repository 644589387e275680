"""
Dependency injection for API routes.

These are set up during app initialization.
"""

from typing import Optional

from printwatch.config import MonitorConfig, PrintConfig
from printwatch.orchestrator import PrintOrchestrator

# Global instances (set during app init)
_orchestrator: Optional[PrintOrchestrator] = None
_print_config: Optional[PrintConfig] = None
_monitor_config: Optional[MonitorConfig] = None


def init_dependencies(
    orchestrator: PrintOrchestrator,
    print_config: PrintConfig,
    monitor_config: MonitorConfig
):
    """Initialize global dependencies."""
    global _orchestrator, _print_config, _monitor_config
    _orchestrator = orchestrator
    _print_config = print_config
    _monitor_config = monitor_config


def get_orchestrator() -> PrintOrchestrator:
    """Get print orchestrator instance."""
    if _orchestrator is None:
        raise RuntimeError("Orchestrator not initialized")
    return _orchestrator


def get_print_config() -> PrintConfig:
    """Get printing configuration."""
    if _print_config is None:
        raise RuntimeError("Print config not initialized")
    return _print_config


def get_monitor_config() -> MonitorConfig:
    """Get monitor configuration."""
    if _monitor_config is None:
        raise RuntimeError("Monitor config not initialized")
    return _monitor_config
