"""
Compound entries shared by the inputs and outcomes sections.

Templates:
    compound_identifier: One CompoundIdentifier.
    component: One Compound of a reaction input.
    product: One ProductCompound of a reaction outcome.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from reactioneditor.app.ui.metric import read_metric, write_metric
from reactioneditor.app.ui.selectors import (
    get_optional_bool, get_selector, set_optional_bool, set_selector,
)
from reactioneditor.app.ui.templates import connect_validation, register_template
from reactioneditor.app.ui.widgets import (
    Fragment, FragmentList, field_text, find_field, set_field_text,
)
from reactioneditor.model.emptiness import is_empty_message
from reactioneditor.model.schema import Compound, CompoundIdentifier, Mass, ProductCompound

if TYPE_CHECKING:
    from reactioneditor.app.engine import SyncEngine


# ==========================================
# IDENTIFIERS
# ==========================================

@register_template("compound_identifier")
def build_compound_identifier(engine: SyncEngine) -> Fragment:
    fragment = Fragment("compound_identifier")
    fragment.add_selector("compound_identifier_type", "Type:", "CompoundIdentifier_CompoundIdentifierType")
    fragment.add_text("compound_identifier_value", "Value:", help="e.g. a SMILES string or a name")
    fragment.add_upload_button("compound_identifier_value")
    fragment.add_text("compound_identifier_details", "Details:")
    fragment.add_remove_button(lambda button: engine.remove_slowly(button, "compound_identifier"))
    return fragment


def load_identifier(fragment: Fragment, identifier: CompoundIdentifier) -> None:
    set_selector(find_field(fragment, "compound_identifier_type"), identifier.type)
    set_field_text(fragment, "compound_identifier_value", identifier.value)
    set_field_text(fragment, "compound_identifier_details", identifier.details)


def unload_identifier(fragment: Fragment) -> CompoundIdentifier:
    identifier = CompoundIdentifier()
    identifier.type = get_selector(find_field(fragment, "compound_identifier_type"))
    identifier.value = field_text(fragment, "compound_identifier_value")
    identifier.details = field_text(fragment, "compound_identifier_details")
    return identifier


def _load_identifiers(engine: SyncEngine, collection: FragmentList, identifiers: list[CompoundIdentifier]) -> None:
    for identifier in identifiers:
        load_identifier(engine.add_slowly("compound_identifier", collection), identifier)


def _unload_identifiers(collection: FragmentList) -> list[CompoundIdentifier]:
    identifiers = []
    for fragment in collection.live("compound_identifier"):
        identifier = unload_identifier(fragment)
        if not is_empty_message(identifier):
            identifiers.append(identifier)
    return identifiers


# ==========================================
# COMPONENTS
# ==========================================

@register_template("component")
def build_component(engine: SyncEngine) -> Fragment:
    fragment = Fragment("component", with_validation=True)
    fragment.identifiers = fragment.add_collection(
        "component_identifiers", "Identifiers",
        lambda collection: engine.add_slowly("compound_identifier", collection),
    )
    fragment.add_selector("component_role", "Reaction role:", "ReactionRole_ReactionRoleType")
    fragment.add_metric("component_mass", "Mass:", "Mass_MassUnit")
    fragment.add_optional_bool("component_limiting", "Limiting:")
    fragment.add_remove_button(lambda button: engine.remove_slowly(button, "component"))
    connect_validation(fragment, engine, "Compound", unload_component)
    return fragment


def load_component(engine: SyncEngine, fragment: Fragment, compound: Compound) -> None:
    _load_identifiers(engine, fragment.identifiers, compound.identifiers)
    set_selector(find_field(fragment, "component_role"), compound.reaction_role)
    write_metric("component_mass", compound.mass, fragment)
    set_optional_bool(find_field(fragment, "component_limiting"), compound.is_limiting)


def unload_component(fragment: Fragment) -> Compound:
    compound = Compound()
    compound.identifiers = _unload_identifiers(fragment.identifiers)
    compound.reaction_role = get_selector(find_field(fragment, "component_role"))
    mass = read_metric("component_mass", Mass(), fragment)
    if not is_empty_message(mass):
        compound.mass = mass
    compound.is_limiting = get_optional_bool(find_field(fragment, "component_limiting"))
    return compound


# ==========================================
# PRODUCTS
# ==========================================

@register_template("product")
def build_product(engine: SyncEngine) -> Fragment:
    fragment = Fragment("product", with_validation=True)
    fragment.identifiers = fragment.add_collection(
        "product_identifiers", "Identifiers",
        lambda collection: engine.add_slowly("compound_identifier", collection),
    )
    fragment.add_optional_bool("product_desired", "Desired product:")
    fragment.add_text("product_color", "Isolated color:")
    fragment.add_remove_button(lambda button: engine.remove_slowly(button, "product"))
    connect_validation(fragment, engine, "ProductCompound", unload_product)
    return fragment


def load_product(engine: SyncEngine, fragment: Fragment, product: ProductCompound) -> None:
    _load_identifiers(engine, fragment.identifiers, product.identifiers)
    set_optional_bool(find_field(fragment, "product_desired"), product.is_desired_product)
    set_field_text(fragment, "product_color", product.isolated_color)


def unload_product(fragment: Fragment) -> ProductCompound:
    product = ProductCompound()
    product.identifiers = _unload_identifiers(fragment.identifiers)
    product.is_desired_product = get_optional_bool(find_field(fragment, "product_desired"))
    product.isolated_color = field_text(fragment, "product_color")
    return product
