"""
FastAPI application factory.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from printwatch import __version__
from printwatch.api.dependencies import init_dependencies
from printwatch.api.routes import router
from printwatch.config import MonitorConfig, PrintConfig
from printwatch.orchestrator import PrintOrchestrator

logger = logging.getLogger(__name__)


def create_app(
    orchestrator: PrintOrchestrator,
    cors_origins: Optional[list[str]] = None,
    debug: bool = False
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        orchestrator: Configured print orchestrator
        cors_origins: List of allowed CORS origins (None = allow all)
        debug: Enable debug mode

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Printer API",
        description="Print documents through Ghostscript and watch the spooler",
        version=__version__,
        debug=debug
    )

    # CORS configuration
    if cors_origins is None:
        # Development: allow all origins
        cors_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    print_config: PrintConfig = orchestrator.print_config
    monitor_config: MonitorConfig = orchestrator.monitor_config
    init_dependencies(orchestrator, print_config, monitor_config)

    app.include_router(router)

    @app.on_event("startup")
    async def startup():
        logger.info("Printer API starting...")
        logger.info(f"  Default printer: {print_config.default_printer}")
        logger.info(f"  Documents: {print_config.documents_dir} {print_config.document_patterns}")
        if monitor_config.watch_service_jobs:
            logger.info(f"  Job monitoring on (interval: {monitor_config.poll_interval_sec}s)")

    @app.on_event("shutdown")
    async def shutdown():
        logger.info("Printer API shutting down...")
        await orchestrator.stop()

    return app
