"""Tests for API endpoints."""

import pytest
from fastapi.testclient import TestClient

from printwatch.api.server import create_app
from printwatch.config import MonitorConfig, PrintConfig
from printwatch.orchestrator import PrintOrchestrator
from printwatch.printers.mock import MockStatusSource
from printwatch.printers.poller import StatusPoller
from printwatch.render.ghostscript import GhostscriptRenderer
from printwatch.render.mock import MockRenderer

PRINTER = "MP230"


@pytest.fixture
def documents(tmp_path):
    """Documents directory with two PDFs and a non-document."""
    (tmp_path / "report.pdf").write_bytes(b"%PDF-1.4\n" + b"x" * 100)
    (tmp_path / "invoice.pdf").write_bytes(b"%PDF-1.4\n")
    (tmp_path / "notes.txt").write_text("not a document")
    return tmp_path


@pytest.fixture
def source():
    """Status source with one ready printer."""
    source = MockStatusSource()
    source.set_status(PRINTER, "0", 0)
    return source


@pytest.fixture
def renderer():
    return MockRenderer()


@pytest.fixture
def client(documents, source, renderer):
    """Create test client."""
    print_config = PrintConfig(default_printer=PRINTER, documents_dir=str(documents))
    orchestrator = PrintOrchestrator(
        print_config,
        StatusPoller(source),
        renderer,
        MonitorConfig()
    )
    app = create_app(orchestrator, debug=True)
    return TestClient(app)


class TestRootEndpoint:
    def test_root(self, client):
        """Root should say the API is running."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["message"] == "Printer API is running"


class TestPrintEndpoint:
    def test_print_valid_document(self, client, renderer):
        """Ready printer and existing file should print."""
        response = client.post("/print", json={"file_name": "report.pdf", "printer": PRINTER})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Print job sent successfully"
        assert data["job_id"]
        assert len(renderer.calls) == 1

    def test_missing_file(self, client):
        """Non-existent file should return 404."""
        response = client.post("/print", json={"file_name": "nope.pdf"})

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "File not found: nope.pdf"

    def test_unknown_printer(self, client):
        """Unknown printer should return 404."""
        response = client.post("/print", json={"file_name": "report.pdf", "printer": "Ghost"})

        assert response.status_code == 404
        assert response.json()["error"] == "Printer not found: Ghost"

    def test_printer_not_ready(self, client, source):
        """Paused printer should return 503 with its status."""
        source.set_status(PRINTER, "1", 0)

        response = client.post("/print", json={"file_name": "report.pdf"})

        assert response.status_code == 503
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Printer not ready: Paused"

    def test_renderer_missing(self, client, renderer):
        renderer.installed = False

        response = client.post("/print", json={"file_name": "report.pdf"})

        assert response.status_code == 500
        assert response.json()["error"] == "Ghostscript not found"

    def test_render_failure(self, client, renderer):
        renderer.set_result(1, "GPL Ghostscript: Unrecoverable error")

        response = client.post("/print", json={"file_name": "report.pdf"})

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert "GPL Ghostscript: Unrecoverable error" in data["error"]

    def test_invalid_json(self, client):
        response = client.post(
            "/print",
            content=b"{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid request body"}

    def test_missing_file_name(self, client):
        response = client.post("/print", json={"printer": PRINTER})
        assert response.status_code == 400

    def test_wrong_body_type(self, client):
        response = client.post("/print", json=["report.pdf"])
        assert response.status_code == 400

    def test_defaults_applied(self, client, renderer):
        """Missing printer/settings fall back to defaults; copies <= 0 is 1."""
        response = client.post(
            "/print",
            json={"file_name": "report.pdf", "settings": {"copies": 0}}
        )

        assert response.status_code == 200
        args = renderer.calls[0]
        assert "-sPAPERSIZE=a4" in args
        assert "-dNumCopies=1" in args
        assert "-dDuplex=false" in args
        assert "-dOverrideICC" not in args
        assert f"-sOutputFile=%printer%{PRINTER}" in args

    def test_null_copies_is_one(self, client, renderer):
        """Explicit null copies falls back like a missing value."""
        response = client.post(
            "/print",
            json={"file_name": "report.pdf", "settings": {"copies": None}}
        )

        assert response.status_code == 200
        assert "-dNumCopies=1" in renderer.calls[0]

    def test_settings_forwarded(self, client, renderer):
        response = client.post("/print", json={
            "file_name": "report.pdf",
            "printer": PRINTER,
            "settings": {
                "paper_size": "legal",
                "color": "monochrome",
                "double_sided": True,
                "duplex_mode": "horizontal",
                "copies": 3,
            },
        })

        assert response.status_code == 200
        args = renderer.calls[0]
        assert "-sPAPERSIZE=legal" in args
        assert "-sColorConversionStrategy=Gray" in args
        assert "-dTumble=true" in args
        assert "-dNumCopies=3" in args


class TestPrinterStatusEndpoint:
    def test_get_status(self, client, source):
        source.set_status(PRINTER, "0", 2)

        response = client.get(f"/printer/status/{PRINTER}")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"]["name"] == PRINTER
        assert data["data"]["status"] == "Ready"
        assert data["data"]["jobs_in_queue"] == 2
        assert data["data"]["is_ready"] is True
        assert data["data"]["has_paper"] is True
        assert data["data"]["has_error"] is False

    def test_unknown_printer(self, client):
        response = client.get("/printer/status/Ghost")

        assert response.status_code == 404
        assert response.json()["success"] is False


class TestFilesEndpoint:
    def test_lists_documents(self, client):
        """Only PDFs are listed, sorted by name."""
        response = client.get("/files")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["count"] == 2
        assert [f["name"] for f in data["files"]] == ["invoice.pdf", "report.pdf"]

        report = data["files"][1]
        assert report["size"] == 109
        assert "modified" in report


class TestRendererStartFailure:
    def test_unstartable_renderer_returns_json_error(self, documents, source):
        """A renderer file that cannot be executed yields a structured 500."""
        not_executable = documents / "gs"
        not_executable.write_text("not a program")
        not_executable.chmod(0o644)

        print_config = PrintConfig(default_printer=PRINTER, documents_dir=str(documents))
        orchestrator = PrintOrchestrator(
            print_config,
            StatusPoller(source),
            GhostscriptRenderer({"renderer_paths": [str(not_executable)]}),
            MonitorConfig()
        )
        client = TestClient(create_app(orchestrator))

        response = client.post("/print", json={"file_name": "report.pdf"})

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"].startswith("Print failed: ")


class TestServiceJobMonitoring:
    def _make_app(self, documents, source, renderer, watch):
        print_config = PrintConfig(default_printer=PRINTER, documents_dir=str(documents))
        monitor_config = MonitorConfig(poll_interval_sec=60, watch_service_jobs=watch)
        orchestrator = PrintOrchestrator(print_config, StatusPoller(source), renderer, monitor_config)
        return orchestrator, create_app(orchestrator)

    def test_job_watched_in_background(self, documents, source, renderer):
        """The response returns while the job is still being watched."""
        orchestrator, app = self._make_app(documents, source, renderer, watch=True)

        with TestClient(app) as client:
            response = client.post("/print", json={"file_name": "report.pdf"})

            assert response.status_code == 200
            assert response.json()["success"] is True
            assert len(orchestrator._background) == 1

        # Shutdown cancels the detached watcher
        assert len(orchestrator._background) == 0

    def test_monitoring_off_by_default(self, documents, source, renderer):
        orchestrator, app = self._make_app(documents, source, renderer, watch=False)

        with TestClient(app) as client:
            response = client.post("/print", json={"file_name": "report.pdf"})

            assert response.status_code == 200
            assert len(orchestrator._background) == 0
