from __future__ import annotations

from typing import TYPE_CHECKING

from reactioneditor.app.ui.metric import format_float, parse_float, read_metric, write_metric
from reactioneditor.app.ui.sections.base import SectionEditor
from reactioneditor.app.ui.sections.registry import register_section
from reactioneditor.app.ui.selectors import (
    get_optional_bool, get_selector, set_optional_bool, set_selector,
)
from reactioneditor.app.ui.templates import connect_validation, register_template
from reactioneditor.app.ui.widgets import FieldKind, Fragment, field_text, find_field, set_field_text
from reactioneditor.model.emptiness import is_empty_message
from reactioneditor.model.schema import ReactionWorkup, Time

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine


@register_template("workup")
def build_workup(engine: SyncEngine) -> Fragment:
    fragment = Fragment("workup", with_validation=True)
    fragment.add_selector("workup_type", "Type:", "ReactionWorkup_ReactionWorkupType")
    fragment.add_text("workup_details", "Details:")
    fragment.add_metric("workup_duration", "Duration:", "Time_TimeUnit")
    fragment.add_text("workup_keep_phase", "Keep phase:", help="e.g. organic, aqueous")
    fragment.add_text("workup_target_ph", "Target pH:", FieldKind.FLOAT)
    fragment.add_optional_bool("workup_automated", "Automated:")
    fragment.add_remove_button(lambda button: engine.remove_slowly(button, "workup"))
    connect_validation(fragment, engine, "ReactionWorkup", unload_workup)
    return fragment


def load_workup(fragment: Fragment, workup: ReactionWorkup) -> None:
    set_selector(find_field(fragment, "workup_type"), workup.type)
    set_field_text(fragment, "workup_details", workup.details)
    write_metric("workup_duration", workup.duration, fragment)
    set_field_text(fragment, "workup_keep_phase", workup.keep_phase)
    if workup.target_ph is not None:
        set_field_text(fragment, "workup_target_ph", format_float(workup.target_ph))
    set_optional_bool(find_field(fragment, "workup_automated"), workup.is_automated)


def unload_workup(fragment: Fragment) -> ReactionWorkup:
    workup = ReactionWorkup()
    workup.type = get_selector(find_field(fragment, "workup_type"))
    workup.details = field_text(fragment, "workup_details")
    duration = read_metric("workup_duration", Time(), fragment)
    if not is_empty_message(duration):
        workup.duration = duration
    workup.keep_phase = field_text(fragment, "workup_keep_phase")
    workup.target_ph = parse_float(field_text(fragment, "workup_target_ph"))
    workup.is_automated = get_optional_bool(find_field(fragment, "workup_automated"))
    return workup


@register_section
class WorkupsSection(SectionEditor):
    KEY = "workups"
    TITLE = "Workups"

    def _build_ui(self) -> None:
        self.entries = self.add_collection("workups", "Workups", self.add)

    def add(self, collection=None) -> Fragment:
        return self._add_entry("workup", self.entries)

    def load(self, workups: list[ReactionWorkup]) -> None:
        for workup in workups:
            load_workup(self.add(), workup)

    def unload(self) -> list[ReactionWorkup]:
        return self._unload_entries(self.entries, unload_workup)
