import pytest

from reactioneditor.app.ui.widgets import ValidationPanel, find_field
from reactioneditor.controller.service import ServiceError, ValidationOutput
from reactioneditor.model.codec import decode
from reactioneditor.model.schema import Reaction, ReactionSetup


@pytest.fixture
def loaded(editor, service):
    editor.init(Reaction(reaction_id="ord-1"))
    service.resolve_validations()
    return editor


def test_render_contract(qapp):
    panel = ValidationPanel("setup_validate")

    panel.render(["bad vessel", "bad volume"], [])
    assert panel.state == "error"
    assert panel.status.text() == "⚠ 2"
    assert panel.error_items() == ["bad vessel", "bad volume"]
    assert not panel.messages.isHidden()
    assert panel.warnings.isHidden()

    panel.render([], ["consider adding a volume"])
    assert panel.state == "ok"
    assert panel.error_items() == []
    assert panel.messages.isHidden()
    assert panel.warning_items() == ["consider adding a volume"]
    assert not panel.warnings.isHidden()


def test_toggle_message(qapp):
    panel = ValidationPanel()
    panel.render(["oops"], [])
    panel.toggle_message()
    assert panel.messages.isHidden()
    panel.status.click()
    assert not panel.messages.isHidden()


def test_validate_sends_the_encoded_record(loaded, service):
    setup = loaded.engine.sections["setup"]
    find_field(setup, "setup_platform").setText("ChemSpeed")

    setup.validate()

    (type_name, payload), future = service.pending("validate")[-1]
    assert type_name == "ReactionSetup"
    assert decode(ReactionSetup, payload).automation_platform == "ChemSpeed"


def test_synthesized_errors_for_invalid_fields(loaded, service):
    setup = loaded.engine.sections["setup"]
    volume = find_field(setup, "setup_vessel_volume_value")
    volume.setText("a lot")
    volume.editingFinished.emit()

    future = service.pending_validations("ReactionSetup")[-1]
    future.set_result(ValidationOutput(errors=["server error"], warnings=[]))

    panel = setup.validation_panel
    assert panel.error_items() == ["server error", "Value for setup_vessel_volume_value is invalid"]
    assert panel.state == "error"


def test_stale_responses_are_dropped(loaded, service):
    setup = loaded.engine.sections["setup"]
    first = setup.validate()
    second = setup.validate()
    old, new = service.pending_validations("ReactionSetup")

    new.set_result(ValidationOutput(errors=[], warnings=[]))
    old.set_result(ValidationOutput(errors=["outdated"], warnings=[]))

    assert setup.validation_panel.state == "ok"
    assert first.result().errors == ["outdated"]
    assert second.result().errors == []


def test_cascaded_validations_complete_in_any_order(editor, service):
    editor.init(Reaction(reaction_id="ord-1"))
    sections = editor.engine.sections
    pending = {
        args[0]: future for args, future in service.pending("validate")
    }
    assert {"Reaction", "ReactionSetup", "ReactionConditions", "ReactionNotes"} <= set(pending)

    # Resolve in reverse dispatch order.
    for type_name in reversed(list(pending)):
        errors = ["setup is incomplete"] if type_name == "ReactionSetup" else []
        pending[type_name].set_result(ValidationOutput(errors=errors, warnings=[]))

    assert sections["setup"].validation_panel.state == "error"
    assert sections["notes"].validation_panel.state == "ok"
    assert editor.reaction_panel.state == "ok"


def test_transport_failure_keeps_last_state(loaded, service):
    setup = loaded.engine.sections["setup"]
    assert setup.validation_panel.state == "ok"

    future = setup.validate()
    service.pending_validations("ReactionSetup")[-1].set_exception(ServiceError("/x", "boom"))

    assert setup.validation_panel.state == "ok"
    assert isinstance(future.exception(), ServiceError)


def test_validate_reaction_renders_preview(loaded, service):
    loaded.pipeline.validate_reaction()
    _, future = service.pending("render_reaction")[-1]
    future.set_result("<p>ethanol oxidation</p>")
    assert "ethanol oxidation" in loaded.preview.html()
