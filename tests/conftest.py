from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from concurrent.futures import Future

import pytest
from PySide6.QtWidgets import QApplication

from reactioneditor.config import EditorSettings
from reactioneditor.controller.service import ValidationOutput


class FakeService:
    """RemoteService whose futures are resolved by the test."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple, Future]] = []

    def _call(self, name: str, *args) -> Future:
        future: Future = Future()
        self.calls.append((name, args, future))
        return future

    def fetch_dataset(self, file_name):
        return self._call("fetch_dataset", file_name)

    def fetch_reaction(self, reaction_id):
        return self._call("fetch_reaction", reaction_id)

    def validate(self, type_name, payload):
        return self._call("validate", type_name, payload)

    def render_reaction(self, payload):
        return self._call("render_reaction", payload)

    def write_dataset(self, file_name, payload):
        return self._call("write_dataset", file_name, payload)

    def compare_dataset(self, file_name, payload):
        return self._call("compare_dataset", file_name, payload)

    def download_reaction(self, payload):
        return self._call("download_reaction", payload)

    def upload(self, file_name, token, data):
        return self._call("upload", file_name, token, data)

    # ---- helpers ----

    def pending(self, name: str) -> list[tuple[tuple, Future]]:
        return [(args, f) for n, args, f in self.calls if n == name and not f.done()]

    def pending_validations(self, type_name: str) -> list[Future]:
        return [f for args, f in self.pending("validate") if args[0] == type_name]

    def count(self, name: str) -> int:
        return sum(1 for n, _, _ in self.calls if n == name)

    def resolve_validations(self, errors=(), warnings=()) -> None:
        for _, future in self.pending("validate"):
            future.set_result(ValidationOutput(list(errors), list(warnings)))


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def settings():
    return EditorSettings(base_url="http://test", autosave_interval_ms=15000, animation_ms=0, autosave=False)


@pytest.fixture
def editor(qapp, service, settings):
    from reactioneditor.app.editor import ReactionEditor

    widget = ReactionEditor(service, settings)
    yield widget
    if widget.persistence.autosave_enabled():
        widget.persistence.toggle_autosave()
    widget.deleteLater()


@pytest.fixture
def engine(editor):
    return editor.engine
