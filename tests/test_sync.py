from PySide6.QtWidgets import QComboBox, QPushButton

from reactioneditor.app.state import EditState
from reactioneditor.app.ui.widgets import EditText, FragmentState, field_text, find_field, set_field_text
from reactioneditor.model.schema import (
    Compound, CompoundIdentifier, CompoundIdentifierType, DateTime, Mass, MassUnit, Percentage,
    Person, ProductCompound, Reaction, ReactionConditions, ReactionIdentifier,
    ReactionIdentifierType, ReactionInput, ReactionNotes, ReactionObservation, ReactionOutcome,
    ReactionProvenance, ReactionRoleType, ReactionSetup, ReactionWorkup, ReactionWorkupType,
    StirringConditions, StirringMethodType, StirringRate, Temperature, TemperatureConditions,
    TemperatureControlType, TemperatureUnit, Time, TimeUnit, Vessel, VesselType, Volume, VolumeUnit,
)


def make_reaction() -> Reaction:
    ethanol = CompoundIdentifier(type=CompoundIdentifierType.SMILES, value="CCO")
    return Reaction(
        identifiers=[ReactionIdentifier(type=ReactionIdentifierType.REACTION_SMILES, value="CCO>>CC=O")],
        inputs={
            "ethanol": ReactionInput(
                components=[
                    Compound(
                        identifiers=[ethanol],
                        reaction_role=ReactionRoleType.REACTANT,
                        mass=Mass(value=1.5, units=MassUnit.GRAM, precision=0.01),
                        is_limiting=True,
                    )
                ],
                addition_order=1,
                addition_time=Time(value=5.0, units=TimeUnit.MINUTE),
            ),
        },
        setup=ReactionSetup(
            vessel=Vessel(type=VesselType.ROUND_BOTTOM_FLASK, volume=Volume(value=50.0, units=VolumeUnit.MILLILITER)),
            is_automated=False,
        ),
        conditions=ReactionConditions(
            temperature=TemperatureConditions(
                control_type=TemperatureControlType.OIL_BATH,
                setpoint=Temperature(value=78.0, units=TemperatureUnit.CELSIUS),
            ),
            stirring=StirringConditions(
                type=StirringMethodType.STIR_BAR, rate=StirringRate(rpm=300)
            ),
            ph=7.5,
            details="under reflux",
        ),
        notes=ReactionNotes(is_exothermic=True, safety_notes="flammable"),
        observations=[ReactionObservation(time=Time(value=1.0, units=TimeUnit.HOUR), comment="turned yellow")],
        workups=[ReactionWorkup(type=ReactionWorkupType.ADDITION, details="quench", target_ph=2.0)],
        outcomes=[
            ReactionOutcome(
                reaction_time=Time(value=2.0, units=TimeUnit.HOUR),
                conversion=Percentage(value=87.5),
                products=[ProductCompound(identifiers=[ethanol], is_desired_product=True, isolated_color="white")],
            )
        ],
        provenance=ReactionProvenance(
            experimenter=Person(name="A. Chemist", email="chemist@example.com"),
            experiment_start=DateTime(value="2020-01-31T14:00:00"),
            doi="10.1000/xyz",
        ),
        reaction_id="ord-0123456789",
    )


def test_round_trip(editor, engine):
    reaction = make_reaction()
    editor.init(reaction)
    assert engine.unload_reaction() == reaction


def test_init_leaves_the_form_clean(editor, engine, service):
    editor.init(make_reaction())
    assert engine.save_button.isHidden()
    assert editor.store.state == EditState.LOADED
    assert editor.is_ready
    assert service.count("render_reaction") == 1


def test_empty_reaction_is_seeded_but_unloads_empty(editor, engine):
    editor.init(Reaction())

    assert len(engine.sections["inputs"].entries.live("input")) == 1
    assert len(engine.sections["outcomes"].entries.live("outcome")) == 1

    reaction = engine.unload_reaction()
    assert reaction == Reaction()
    assert reaction.reaction_id is None
    assert reaction.setup is None
    assert reaction.inputs == {}


def test_floats_are_rounded_to_seven_digits(editor, engine):
    reaction = make_reaction()
    reaction.inputs["ethanol"].components[0].mass.value = 12.3456789
    editor.init(reaction)

    component = engine.sections["inputs"].entries.live("input")[0].components.live("component")[0]
    assert field_text(component, "component_mass_value") == "12.34568"
    assert engine.unload_reaction().inputs["ethanol"].components[0].mass.value == 12.34568


def test_empty_reaction_id_is_never_written(editor, engine):
    editor.init(make_reaction())
    engine.reaction_id_field.setText("   ")
    assert engine.unload_reaction().reaction_id is None


def test_user_edit_marks_dirty_before_validation(editor, engine, service):
    editor.init(make_reaction())
    setup = engine.sections["setup"]
    before = service.count("validate")

    details = find_field(setup, "setup_vessel_details")
    details.setText("oven-dried")
    details.editingFinished.emit()

    assert not engine.save_button.isHidden()
    assert editor.store.state == EditState.DIRTY
    # Setup validates itself live.
    assert service.count("validate") == before + 1
    assert engine.unload_reaction().setup.vessel.details == "oven-dried"


def test_programmatic_changes_do_not_mark_dirty(editor, engine):
    editor.init(make_reaction())
    combo = find_field(engine.sections["setup"], "setup_vessel_type").findChild(QComboBox)
    combo.setCurrentIndex(0)
    assert engine.save_button.isHidden()


def test_add_entry_is_live_and_wired(editor, engine):
    editor.init(make_reaction())
    workups = engine.sections["workups"]

    fragment = workups.add()
    assert fragment.state is FragmentState.LIVE
    assert not engine.save_button.isHidden()

    set_field_text(fragment, "workup_details", "filter")
    target_ph = find_field(fragment, "workup_target_ph")
    target_ph.setText("abc")
    target_ph.editingFinished.emit()
    assert isinstance(target_ph, EditText) and target_ph.invalid

    details = [w.details for w in engine.unload_reaction().workups]
    assert details == ["quench", "filter"]


def test_add_button_adds_an_entry(editor, engine):
    editor.init(make_reaction())
    identifiers = engine.sections["identifiers"]
    before = len(identifiers.entries.live())

    identifiers.findChild(QPushButton, "add").click()

    assert len(identifiers.entries.live()) == before + 1
