"""
Windows spooler status source.

Runs Get-Printer / Get-PrintJob through PowerShell and emits the
STATUS:/JOBS:/NAME: text protocol. A missing printer makes the script
exit 1.
"""

import asyncio
import logging
from typing import Optional

from printwatch.errors import PrinterNotFoundError
from .base import StatusSource

logger = logging.getLogger(__name__)

STATUS_SCRIPT = """
$printer = Get-Printer -Name '{name}' -ErrorAction SilentlyContinue
if ($printer) {{
    $status = $printer.PrinterStatus
    $queue = Get-PrintJob -PrinterName '{name}' -ErrorAction SilentlyContinue
    $jobCount = if ($queue) {{ ($queue | Measure-Object).Count }} else {{ 0 }}

    Write-Host "STATUS:$status"
    Write-Host "JOBS:$jobCount"
    Write-Host "NAME:$($printer.Name)"
}} else {{
    Write-Error "Printer not found"
    exit 1
}}
"""


def build_status_script(printer_name: str) -> str:
    """Render the status script for a printer (single-quoted, '' escaped)."""
    return STATUS_SCRIPT.format(name=printer_name.replace("'", "''"))


class PowerShellStatusSource(StatusSource):
    """
    Status source backed by the Windows PrintManagement cmdlets.

    Config options:
        powershell: executable to run (default: powershell)
    """

    def __init__(self, config: Optional[dict] = None):
        super().__init__(config)
        self.executable = self.config.get("powershell", "powershell")

    async def query(self, printer_name: str) -> str:
        script = build_status_script(printer_name)

        try:
            proc = await asyncio.create_subprocess_exec(
                self.executable, "-NoProfile", "-NonInteractive", "-Command", script,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            logger.error(f"Failed to start {self.executable}: {e}")
            raise PrinterNotFoundError(printer_name, f"status query failed: {e}") from e

        output, _ = await proc.communicate()
        text = output.decode(errors="replace")

        if proc.returncode != 0:
            logger.debug(f"Status query for {printer_name} exited {proc.returncode}: {text.strip()}")
            raise PrinterNotFoundError(printer_name)

        return text
