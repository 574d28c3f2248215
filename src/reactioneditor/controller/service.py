"""
Remote Service Client
=====================
Talks to the server that stores datasets, validates records and renders
previews.

Why is this file needed?
------------------------
1. Responsiveness: HTTP requests block. They run as workers on a
   `QThreadPool` and hand back ``concurrent.futures.Future`` objects, so the
   GUI thread never waits on the network.
2. Substitution: the editor depends on the ``RemoteService`` protocol only;
   tests pass a fake that resolves futures by hand.

Classes:
    ValidationOutput: Parsed validator response.
    RemoteService: Protocol consumed by the editor.
    HttpService: urllib implementation on a Qt thread pool.
"""
from __future__ import annotations

import json
import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from PySide6.QtCore import QObject, QThreadPool, Signal

from reactioneditor.controller.workers import RequestWorker
from reactioneditor.model.codec import decode
from reactioneditor.model.schema import Dataset, Reaction

logger = logging.getLogger(__name__)


class ServiceError(RuntimeError):
    """A request failed in transport or returned a non-success status."""

    def __init__(self, path: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.status = status


@dataclass
class ValidationOutput:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> ValidationOutput:
        return cls(
            errors=[str(e) for e in data.get("errors", [])],
            warnings=[str(w) for w in data.get("warnings", [])],
        )


class RemoteService(Protocol):
    def fetch_dataset(self, file_name: str) -> Future[Dataset]: ...
    def fetch_reaction(self, reaction_id: str) -> Future[Reaction]: ...
    def validate(self, type_name: str, payload: bytes) -> Future[ValidationOutput]: ...
    def render_reaction(self, payload: bytes) -> Future[str]: ...
    def write_dataset(self, file_name: str, payload: bytes) -> Future[None]: ...
    def compare_dataset(self, file_name: str, payload: bytes) -> Future[None]: ...
    def download_reaction(self, payload: bytes) -> Future[bytes]: ...
    def upload(self, file_name: str, token: str, data: bytes) -> Future[None]: ...


class HttpService(QObject):
    """Blocking urllib requests executed as workers on a Qt thread pool."""

    # (request path, message); emitted from the pool, delivered on the GUI thread.
    request_failed = Signal(str, str)

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        max_workers: int = 4,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._pool = QThreadPool(self)
        self._pool.setMaxThreadCount(max_workers)

    def shutdown(self, wait_ms: int = 2000) -> None:
        self._pool.clear()
        if not self._pool.waitForDone(wait_ms):
            logger.warning("Requests still running at shutdown")

    # ---- transport ----

    def _request(self, method: str, path: str, payload: Optional[bytes] = None) -> bytes:
        url = self.base_url + path
        request = Request(url, data=payload, method=method)
        if payload is not None:
            request.add_header("Content-Type", "application/json")
        logger.debug(f"{method} {path} ({len(payload or b'')} bytes)")
        try:
            with urlopen(request, timeout=self.timeout) as response:
                return response.read()
        except HTTPError as e:
            logger.warning(f"{method} {path} failed with status {e.code}")
            raise ServiceError(path, e.reason, status=e.code) from e
        except URLError as e:
            logger.warning(f"{method} {path} failed: {e.reason}")
            raise ServiceError(path, str(e.reason)) from e

    def _submit(self, path: str, fn: Callable[[], Any]) -> Future:
        future: Future = Future()
        worker = RequestWorker(fn, future, path)
        worker.signals.error_occurred.connect(self.request_failed)
        self._pool.start(worker)
        return future

    def _get(self, path: str, parse: Callable[[bytes], Any]) -> Future:
        return self._submit(path, lambda: parse(self._request("GET", path)))

    def _post(self, path: str, payload: bytes, parse: Optional[Callable[[bytes], Any]] = None) -> Future:
        def call():
            body = self._request("POST", path, payload)
            return parse(body) if parse else None
        return self._submit(path, call)

    # ---- endpoints ----

    def fetch_dataset(self, file_name: str) -> Future[Dataset]:
        return self._get(f"/dataset/proto/read/{quote(file_name)}", lambda body: decode(Dataset, body))

    def fetch_reaction(self, reaction_id: str) -> Future[Reaction]:
        return self._get(f"/reaction/id/{quote(reaction_id)}/proto", lambda body: decode(Reaction, body))

    def validate(self, type_name: str, payload: bytes) -> Future[ValidationOutput]:
        return self._post(
            f"/dataset/proto/validate/{quote(type_name)}",
            payload,
            lambda body: ValidationOutput.from_json(json.loads(body)),
        )

    def render_reaction(self, payload: bytes) -> Future[str]:
        return self._post("/render/reaction", payload, json.loads)

    def write_dataset(self, file_name: str, payload: bytes) -> Future[None]:
        return self._post(f"/dataset/proto/write/{quote(file_name)}", payload)

    def compare_dataset(self, file_name: str, payload: bytes) -> Future[None]:
        return self._post(f"/dataset/proto/compare/{quote(file_name)}", payload)

    def download_reaction(self, payload: bytes) -> Future[bytes]:
        return self._post("/reaction/download", payload, bytes)

    def upload(self, file_name: str, token: str, data: bytes) -> Future[None]:
        return self._post(f"/dataset/{quote(file_name)}/upload/{quote(token)}", data)
