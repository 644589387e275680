"""
API routes for the print service.

Every response carries "success". Errors also carry "error".
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from printwatch import __version__
from printwatch.api.dependencies import get_monitor_config, get_orchestrator, get_print_config
from printwatch.api.models import PrintRequest
from printwatch.documents import list_documents
from printwatch.errors import (
    DocumentNotFoundError,
    NotFoundError,
    PrinterNotFoundError,
    PrinterNotReadyError,
    RenderFailedError,
    RendererMissingError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message}
    )


@router.get("/")
async def root():
    return {
        "message": "Printer API is running",
        "version": __version__
    }


@router.post("/print")
async def print_document(request: Request):
    """
    Print a document from the documents directory.

    Body:
        {
          "file_name": "report.pdf",
          "printer": "MP230",
          "settings": {"paper_size": "a4", "color": "monochrome",
                       "double_sided": true, "duplex_mode": "vertical",
                       "copies": 2}
        }

    Returns once the renderer has spooled the job. Monitoring, if enabled,
    continues in the background.
    """
    orchestrator = get_orchestrator()
    print_config = get_print_config()

    # JSON and validation errors are both ValueErrors
    try:
        req = PrintRequest.model_validate(await request.json())
    except ValueError:
        return _error(400, "Invalid request body")

    printer_name = req.printer or print_config.default_printer

    try:
        handle = await orchestrator.submit(
            req.file_name,
            printer_name,
            req.settings.to_options()
        )
    except DocumentNotFoundError:
        return _error(404, f"File not found: {req.file_name}")
    except PrinterNotFoundError:
        return _error(404, f"Printer not found: {printer_name}")
    except PrinterNotReadyError as e:
        return _error(503, str(e))
    except RendererMissingError as e:
        return _error(500, str(e))
    except RenderFailedError as e:
        return _error(500, str(e))

    if get_monitor_config().watch_service_jobs:
        orchestrator.watch_in_background(handle)

    return {
        "success": True,
        "message": "Print job sent successfully",
        "job_id": handle.job_id
    }


@router.get("/printer/status/{name}")
async def printer_status(name: str):
    """Get a fresh status snapshot of a printer."""
    orchestrator = get_orchestrator()

    try:
        snapshot = await orchestrator.poller.poll(name)
    except NotFoundError as e:
        return _error(404, str(e))

    return {
        "success": True,
        "data": snapshot.to_dict()
    }


@router.get("/files")
async def files():
    """List printable documents in the documents directory."""
    print_config = get_print_config()

    try:
        documents = list_documents(print_config.documents_dir, print_config.document_patterns)
    except OSError as e:
        logger.error(f"Failed to list documents: {e}")
        return _error(500, "Failed to list files")

    return {
        "success": True,
        "count": len(documents),
        "files": [doc.to_dict() for doc in documents]
    }
