from __future__ import annotations

from typing import TYPE_CHECKING

from reactioneditor.app.ui.metric import read_metric, write_metric
from reactioneditor.app.ui.sections.base import SectionEditor
from reactioneditor.app.ui.sections.compounds import load_product, unload_product
from reactioneditor.app.ui.sections.registry import register_section
from reactioneditor.app.ui.templates import connect_validation, register_template
from reactioneditor.app.ui.widgets import Fragment
from reactioneditor.model.emptiness import is_empty_message
from reactioneditor.model.schema import Percentage, ReactionOutcome, Time

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine


@register_template("outcome")
def build_outcome(engine: SyncEngine) -> Fragment:
    fragment = Fragment("outcome", with_validation=True)
    fragment.add_metric("outcome_time", "Reaction time:", "Time_TimeUnit")
    fragment.add_metric("outcome_conversion", "Conversion (%):")
    fragment.products = fragment.add_collection(
        "outcome_products", "Products",
        lambda collection: engine.add_slowly("product", collection),
    )
    fragment.add_remove_button(lambda button: engine.remove_slowly(button, "outcome"))
    connect_validation(fragment, engine, "ReactionOutcome", unload_outcome)
    return fragment


def load_outcome(engine: SyncEngine, fragment: Fragment, outcome: ReactionOutcome) -> None:
    write_metric("outcome_time", outcome.reaction_time, fragment)
    write_metric("outcome_conversion", outcome.conversion, fragment)
    for product in outcome.products:
        load_product(engine, engine.add_slowly("product", fragment.products), product)


def unload_outcome(fragment: Fragment) -> ReactionOutcome:
    outcome = ReactionOutcome()
    reaction_time = read_metric("outcome_time", Time(), fragment)
    if not is_empty_message(reaction_time):
        outcome.reaction_time = reaction_time
    conversion = read_metric("outcome_conversion", Percentage(), fragment)
    if not is_empty_message(conversion):
        outcome.conversion = conversion
    for product_fragment in fragment.products.live("product"):
        product = unload_product(product_fragment)
        if not is_empty_message(product):
            outcome.products.append(product)
    return outcome


@register_section
class OutcomesSection(SectionEditor):
    KEY = "outcomes"
    TITLE = "Outcomes"

    def _build_ui(self) -> None:
        self.entries = self.add_collection("outcomes", "Outcomes", self.add)

    def add(self, collection=None) -> Fragment:
        return self._add_entry("outcome", self.entries)

    def load(self, outcomes: list[ReactionOutcome]) -> None:
        for outcome in outcomes:
            load_outcome(self.engine, self.add(), outcome)

    def unload(self) -> list[ReactionOutcome]:
        return self._unload_entries(self.entries, unload_outcome)
