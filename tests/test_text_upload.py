import pytest
from PySide6.QtWidgets import QPushButton

from reactioneditor.app.ui import widgets
from reactioneditor.app.ui.widgets import find_field
from reactioneditor.model.schema import Reaction


@pytest.fixture
def pick_file(monkeypatch, tmp_path):
    """Makes the open-file dialog return a file holding `contents`."""
    def pick(contents: str):
        path = tmp_path / "identifier.txt"
        path.write_text(contents)

        class Dialog:
            @staticmethod
            def getOpenFileName(*args, **kwargs):
                return str(path), ""

        monkeypatch.setattr(widgets, "QFileDialog", Dialog)
    return pick


def test_identifier_value_from_file(editor, engine, pick_file):
    editor.init(Reaction())
    fragment = engine.sections["identifiers"].add()
    pick_file("[CH3:1][OH:2]>>[CH2:1]=[O:2]\n")

    find_field(fragment, "text_upload").click()

    assert engine.unload_reaction().identifiers[0].value == "[CH3:1][OH:2]>>[CH2:1]=[O:2]"
    assert not engine.save_button.isHidden()


def test_compound_identifier_value_from_file(editor, engine, pick_file):
    editor.init(Reaction())
    reaction_input = engine.sections["inputs"].entries.live("input")[0]
    component = engine.add_slowly("component", reaction_input.components)
    compound_identifier = engine.add_slowly("compound_identifier", component.identifiers)
    pick_file("CCO")

    find_field(compound_identifier, "text_upload").click()

    (unloaded,) = engine.unload_reaction().inputs.values()
    assert unloaded.components[0].identifiers[0].value == "CCO"


def test_cancelled_dialog_leaves_field(editor, engine, monkeypatch):
    class Dialog:
        @staticmethod
        def getOpenFileName(*args, **kwargs):
            return "", ""

    monkeypatch.setattr(widgets, "QFileDialog", Dialog)
    editor.init(Reaction())
    fragment = engine.sections["identifiers"].add()

    find_field(fragment, "text_upload").click()

    assert widgets.field_text(fragment, "identifier_value") == ""


def test_freeze_hides_upload_buttons(editor, engine):
    editor.init(Reaction())
    engine.sections["identifiers"].add()
    editor.freeze()
    buttons = engine.root.findChildren(QPushButton, "text_upload")
    assert buttons
    assert all(button.isHidden() for button in buttons)
