from __future__ import annotations

from typing import TYPE_CHECKING

from reactioneditor.app.ui.metric import read_metric, write_metric
from reactioneditor.app.ui.sections.base import SectionEditor
from reactioneditor.app.ui.sections.registry import register_section
from reactioneditor.app.ui.templates import connect_validation, register_template
from reactioneditor.app.ui.widgets import Fragment, field_text, set_field_text
from reactioneditor.model.emptiness import is_empty_message
from reactioneditor.model.schema import ReactionObservation, Time

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine


@register_template("observation")
def build_observation(engine: SyncEngine) -> Fragment:
    fragment = Fragment("observation", with_validation=True)
    fragment.add_metric("observation_time", "Time:", "Time_TimeUnit")
    fragment.add_text("observation_comment", "Comment:")
    fragment.add_remove_button(lambda button: engine.remove_slowly(button, "observation"))
    connect_validation(fragment, engine, "ReactionObservation", unload_observation)
    return fragment


def load_observation(fragment: Fragment, observation: ReactionObservation) -> None:
    write_metric("observation_time", observation.time, fragment)
    set_field_text(fragment, "observation_comment", observation.comment)


def unload_observation(fragment: Fragment) -> ReactionObservation:
    observation = ReactionObservation()
    time = read_metric("observation_time", Time(), fragment)
    if not is_empty_message(time):
        observation.time = time
    observation.comment = field_text(fragment, "observation_comment")
    return observation


@register_section
class ObservationsSection(SectionEditor):
    KEY = "observations"
    TITLE = "Observations"
    STARTS_COLLAPSED = True

    def _build_ui(self) -> None:
        self.entries = self.add_collection("observations", "Observations", self.add)

    def add(self, collection=None) -> Fragment:
        return self._add_entry("observation", self.entries)

    def load(self, observations: list[ReactionObservation]) -> None:
        for observation in observations:
            load_observation(self.add(), observation)

    def unload(self) -> list[ReactionObservation]:
        return self._unload_entries(self.entries, unload_observation)
