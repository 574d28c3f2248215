from PySide6.QtWidgets import QPushButton

from reactioneditor.app.ui.widgets import FragmentState, find_field
from reactioneditor.model.schema import Reaction, ReactionIdentifier, ReactionIdentifierType


def reaction_with_identifiers(*values: str) -> Reaction:
    return Reaction(
        identifiers=[ReactionIdentifier(type=ReactionIdentifierType.CUSTOM, value=v) for v in values],
    )


def undo_buttons(section) -> list[QPushButton]:
    return [b for b in section.findChildren(QPushButton, "undo")]


def identifier_values(engine) -> list[str]:
    return [i.value for i in engine.unload_reaction().identifiers]


def test_remove_then_undo_restores_the_entry(editor, engine):
    editor.init(reaction_with_identifiers("A", "B"))
    section = engine.sections["identifiers"]
    first = section.entries.live()[0]

    find_field(first, "remove").click()

    assert first.state is FragmentState.PENDING_UNDO
    assert first.isHidden()
    assert identifier_values(engine) == ["B"]
    assert len(undo_buttons(section)) == 1
    # Removal marks dirty right away.
    assert not engine.save_button.isHidden()

    undo_buttons(section)[0].click()

    assert first.state is FragmentState.LIVE
    assert identifier_values(engine) == ["A", "B"]
    assert undo_buttons(section) == []
    assert engine.undo.fragment is None


def test_undo_buffer_is_single_slot(editor, engine):
    editor.init(reaction_with_identifiers("A", "B", "C"))
    section = engine.sections["identifiers"]
    a, b, _ = section.entries.live()

    find_field(a, "remove").click()
    find_field(b, "remove").click()

    # A is gone for good; only B can come back.
    assert a not in list(section.entries.fragments())
    assert len(undo_buttons(section)) == 1
    assert engine.undo.fragment is b

    engine.undo_slowly()
    assert identifier_values(engine) == ["B", "C"]


def test_undo_without_buffer_is_noop(editor, engine):
    editor.init(reaction_with_identifiers("A"))
    engine.undo_slowly()
    assert identifier_values(engine) == ["A"]
    assert engine.save_button.isHidden()


def test_remove_revalidates_enclosing_entry(editor, engine, service):
    editor.init(Reaction())
    reaction_input = engine.sections["inputs"].entries.live("input")[0]
    component = engine.add_slowly("component", reaction_input.components)
    before = len(service.pending_validations("ReactionInput"))

    find_field(component, "remove").click()

    # The enclosing input's validate button is clicked once the entry is gone.
    assert len(service.pending_validations("ReactionInput")) == before + 1
    assert reaction_input.components.live() == []


def test_undo_does_not_revalidate(editor, engine, service):
    editor.init(Reaction())
    reaction_input = engine.sections["inputs"].entries.live("input")[0]
    component = engine.add_slowly("component", reaction_input.components)
    find_field(component, "remove").click()
    before = service.count("validate")

    engine.undo_slowly()

    assert reaction_input.components.live() == [component]
    assert service.count("validate") == before


def test_discarding_a_hiding_entry_finishes_its_animation(qapp, service):
    from reactioneditor.app.editor import ReactionEditor
    from reactioneditor.config import EditorSettings

    editor = ReactionEditor(service, EditorSettings(animation_ms=400, autosave=False))
    editor.init(reaction_with_identifiers("A", "B"))
    engine = editor.engine
    animator = engine.animator
    a, b = engine.sections["identifiers"].entries.live()

    find_field(a, "remove").click()
    assert animator.is_running(a)

    # Removing B drops A for good while A is still sliding out.
    find_field(b, "remove").click()

    assert not animator.is_running(a)
    assert animator.is_running(b)
    assert engine.undo.fragment is b
    editor.deleteLater()
