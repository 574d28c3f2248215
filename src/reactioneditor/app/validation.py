"""
Validation & Render Pipeline
============================
Sends records to the remote validator and renders the diagnostics on the
panel that asked for them.

Why is this file needed?
------------------------
1. Rendering contract: errors, warnings and the status indicator follow one
   set of rules for every section and entry.
2. Local format errors: fields flagged by the numeric guards are reported
   next to the remote diagnostics as "Value for <field> is invalid".
3. Ordering: responses complete in any order. Each panel keeps a request
   token and ignores responses older than its latest request.

Classes:
    Diagnostics: Errors and warnings of one validation.
    ValidationPipeline: validate() and validate_reaction().
"""
from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QWidget
from shiboken6 import isValid

from reactioneditor.app.ui.widgets import EditText, ValidationPanel, in_live_tree
from reactioneditor.controller.service import RemoteService, ValidationOutput
from reactioneditor.controller.workers import MainThreadDispatcher
from reactioneditor.model.codec import encode
from reactioneditor.model.schema import Message

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine
    from reactioneditor.app.ui.preview import PreviewPanel

logger = logging.getLogger(__name__)


@dataclass
class Diagnostics:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def invalid_field_errors(scope: QWidget) -> list[str]:
    """One error per live field under `scope` flagged by the numeric guards."""
    return [
        f"Value for {edit.objectName()} is invalid"
        for edit in scope.findChildren(EditText)
        if edit.invalid and in_live_tree(edit)
    ]


class ValidationPipeline(QObject):
    preview_rendered = Signal(str)

    def __init__(
        self,
        engine: SyncEngine,
        service: RemoteService,
        dispatcher: MainThreadDispatcher,
        reaction_panel: ValidationPanel,
        preview: Optional[PreviewPanel] = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.engine = engine
        self.service = service
        self.dispatcher = dispatcher
        self.reaction_panel = reaction_panel
        self.preview = preview
        reaction_panel.validate_button.clicked.connect(lambda *_: self.validate_reaction())

    def validate(
        self, message: Message, type_name: str, scope: QWidget, panel: Optional[ValidationPanel] = None
    ) -> Future:
        """
        Validates `message` remotely and renders the outcome on `panel`.

        Args:
            message: Record to validate.
            type_name: Codec name of the record type, e.g. "ReactionSetup".
            scope: Widget whose flagged fields add synthesized errors.
            panel: Target panel; defaults to the first one under `scope`.

        Returns:
            Future resolving to the Diagnostics, rendered or not.
        """
        if panel is None:
            panel = scope.findChild(ValidationPanel)
        if panel is None:
            raise LookupError(f"No validation panel under '{scope.objectName()}'")

        panel.request_token += 1
        token = panel.request_token
        result: Future = Future()
        result.set_running_or_notify_cancel()

        def on_result(output: ValidationOutput) -> None:
            if not isValid(panel) or not isValid(scope):
                result.set_result(Diagnostics(output.errors, output.warnings))
                return
            diagnostics = Diagnostics(output.errors + invalid_field_errors(scope), list(output.warnings))
            if token != panel.request_token:
                logger.debug(f"Dropping stale {type_name} diagnostics for '{panel.objectName()}'")
            else:
                panel.render(diagnostics.errors, diagnostics.warnings)
            result.set_result(diagnostics)

        def on_error(error: BaseException) -> None:
            logger.warning(f"Validation of {type_name} failed: {error}")
            result.set_exception(error)

        self.dispatcher.when_done(self.service.validate(type_name, encode(message)), on_result, on_error)
        return result

    def validate_reaction(self) -> Future:
        """Validates the whole reaction, every visible section, and refreshes the preview."""
        reaction = self.engine.unload_reaction()
        future = self.validate(reaction, "Reaction", self.engine.root, self.reaction_panel)
        # Trigger all sub-records to validate.
        for panel in self.engine.root.findChildren(ValidationPanel):
            if panel is self.reaction_panel or not panel.isVisibleTo(self.engine.root):
                continue
            if not in_live_tree(panel):
                continue
            panel.validate_button.click()
        self.render_preview(reaction)
        return future

    def render_preview(self, reaction: Message) -> None:
        def on_result(html: str) -> None:
            if self.preview is not None and isValid(self.preview):
                self.preview.set_html(html)
            self.preview_rendered.emit(html)

        self.dispatcher.when_done(self.service.render_reaction(encode(reaction)), on_result)
