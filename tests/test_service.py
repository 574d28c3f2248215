import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from reactioneditor.__main__ import parse_args, settings_from_args
from reactioneditor.controller.service import HttpService, ServiceError
from reactioneditor.model.codec import encode
from reactioneditor.model.schema import Reaction


class Handler(BaseHTTPRequestHandler):
    received: list[tuple[str, bytes]] = []

    def log_message(self, format, *args):
        pass

    def _reply(self, status: int, body: bytes) -> None:
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        if self.path == "/reaction/id/ord-1/proto":
            self._reply(200, encode(Reaction(reaction_id="ord-1")))
        else:
            self._reply(404, b"")

    def do_POST(self):
        body = self.rfile.read(int(self.headers.get("Content-Length", 0)))
        Handler.received.append((self.path, body))
        if self.path.startswith("/dataset/proto/validate/"):
            self._reply(200, json.dumps({"errors": ["missing inputs"], "warnings": []}).encode())
        elif self.path.startswith("/dataset/proto/compare/"):
            self._reply(409, b"")
        else:
            self._reply(200, b"")


@pytest.fixture
def http_service(qapp):
    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    service = HttpService(f"http://127.0.0.1:{server.server_port}", timeout=5)
    yield service
    service.shutdown()
    server.shutdown()
    server.server_close()


def test_fetch_reaction(http_service):
    assert http_service.fetch_reaction("ord-1").result(timeout=5) == Reaction(reaction_id="ord-1")


def test_validate(http_service):
    output = http_service.validate("Reaction", encode(Reaction())).result(timeout=5)
    assert output.errors == ["missing inputs"]
    assert output.warnings == []
    assert Handler.received[-1][0] == "/dataset/proto/validate/Reaction"


def test_write_dataset_returns_nothing(http_service):
    assert http_service.write_dataset("a.pb", b"{}").result(timeout=5) is None


def test_error_status_raises_service_error(http_service):
    with pytest.raises(ServiceError) as excinfo:
        http_service.compare_dataset("a.pb", b"{}").result(timeout=5)
    assert excinfo.value.status == 409
    assert excinfo.value.path == "/dataset/proto/compare/a.pb"

    with pytest.raises(ServiceError):
        http_service.fetch_reaction("missing").result(timeout=5)


def test_failures_are_signalled(http_service, qapp):
    failures = []
    http_service.request_failed.connect(lambda path, message: failures.append(path))

    future = http_service.compare_dataset("a.pb", b"{}")
    assert isinstance(future.exception(timeout=5), ServiceError)
    # The signal is queued onto this thread before the future settles.
    qapp.processEvents()

    assert failures == ["/dataset/proto/compare/a.pb"]


def test_download_returns_the_body(http_service):
    assert http_service.download_reaction(b"{}").result(timeout=5) == b""


def test_cli_overrides_settings():
    args = parse_args(["--reaction-id", "ord-1", "--url", "http://example:8000", "--autosave-ms", "500", "--no-autosave"])
    settings = settings_from_args(args)
    assert settings.base_url == "http://example:8000"
    assert settings.autosave_interval_ms == 500
    assert settings.autosave is False


def test_cli_requires_a_target():
    with pytest.raises(SystemExit):
        parse_args([])
