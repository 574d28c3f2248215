import pytest

from reactioneditor.app.state import EditState
from reactioneditor.app.ui.widgets import find_field
from reactioneditor.controller.service import ServiceError
from reactioneditor.model.codec import decode
from reactioneditor.model.schema import Dataset, Reaction


def edit_details(editor, text="oven-dried"):
    field = find_field(editor.engine.sections["setup"], "setup_vessel_details")
    field.setText(text)
    field.editingFinished.emit()


@pytest.fixture
def dataset_editor(editor, service):
    dataset = Dataset(name="test", reactions=[Reaction(reaction_id="ord-a"), Reaction(reaction_id="ord-b")])
    editor.init_from_dataset("test.pb", 1)
    (_, future), = service.pending("fetch_dataset")
    future.set_result(dataset)
    return editor


def test_init_from_dataset(dataset_editor):
    assert dataset_editor.is_ready
    assert dataset_editor.reaction_id.text() == "ord-b"
    assert dataset_editor.session.index == 1
    assert not dataset_editor.dataset_context.isHidden()


def test_init_from_reaction_id_hides_dataset_context(editor, service):
    ready = []
    editor.ready.connect(lambda: ready.append(True))
    editor.init_from_reaction_id("ord-x")
    (args, future), = service.pending("fetch_reaction")
    assert args == ("ord-x",)
    future.set_result(Reaction(reaction_id="ord-x"))

    assert ready == [True]
    assert editor.dataset_context.isHidden()
    assert editor.session.dataset is None


def test_commit_writes_the_dataset(dataset_editor, service):
    edit_details(dataset_editor)
    dataset_editor.save_button.click()

    assert dataset_editor.save_button.text() == "saving"
    (file_name, payload), future = service.pending("write_dataset")[0]
    assert file_name == "test.pb"
    written = decode(Dataset, payload)
    assert written.reactions[1].setup.vessel.details == "oven-dried"
    assert written.reactions[0].reaction_id == "ord-a"

    future.set_result(None)
    assert dataset_editor.save_button.isHidden()
    assert dataset_editor.store.state == EditState.LOADED


def test_edit_during_save_keeps_indicator(dataset_editor, service):
    edit_details(dataset_editor)
    dataset_editor.save_button.click()
    edit_details(dataset_editor, "flame-dried")

    (_, future), = service.pending("write_dataset")
    future.set_result(None)

    assert not dataset_editor.save_button.isHidden()
    assert dataset_editor.save_button.text() == "save"
    assert dataset_editor.store.state == EditState.DIRTY


def test_pending_uploads_follow_the_write(dataset_editor, service):
    dataset_editor.session.uploads["token-1"] = b"spectrum"
    edit_details(dataset_editor)
    dataset_editor.save_button.click()
    assert service.pending("upload") == []

    service.pending("write_dataset")[0][1].set_result(None)

    (args, _), = service.pending("upload")
    assert args == ("test.pb", "token-1", b"spectrum")
    assert dataset_editor.session.uploads == {}


def test_commit_without_dataset_is_noop(editor, service):
    editor.init(Reaction(reaction_id="ord-x"))
    edit_details(editor)

    assert editor.persistence.commit() is None
    assert service.count("write_dataset") == 0


def test_click_save_guards_against_overlap(dataset_editor, service):
    dataset_editor.persistence.click_save()
    assert service.count("write_dataset") == 0  # nothing to save

    edit_details(dataset_editor)
    dataset_editor.persistence.click_save()
    dataset_editor.persistence.click_save()  # "saving": skipped
    assert service.count("write_dataset") == 1


def test_toggle_autosave(editor):
    persistence = editor.persistence
    persistence.toggle_autosave()
    timer = editor.session.timers["short"]
    assert timer is not None and timer.isActive()
    assert timer.interval() == 15000
    assert editor.autosave_button.text() == "autosave: on"

    persistence.toggle_autosave()
    assert editor.session.timers["short"] is None
    assert editor.autosave_button.text() == "autosave: off"


def test_failed_save_can_be_retried(dataset_editor, service):
    edit_details(dataset_editor)
    dataset_editor.save_button.click()
    service.pending("write_dataset")[0][1].set_exception(ServiceError("/dataset/proto/write/test.pb", "boom", 500))

    assert dataset_editor.save_button.text() == "save"
    assert not dataset_editor.save_button.isHidden()


def test_compare_dataset_reports_mismatch(editor, service):
    future = editor.persistence.compare_dataset("test.pb", Dataset(name="test"))
    (args, pending), = service.pending("compare_dataset")
    assert args[0] == "test.pb"
    pending.set_exception(ServiceError("/dataset/proto/compare/test.pb", "CONFLICT", 409))
    assert future.exception().status == 409


def test_download_reaction(editor, service, tmp_path):
    editor.init(Reaction(reaction_id="ord-x"))
    destination = tmp_path / "reaction.pbtxt"
    future = editor.persistence.download_reaction(destination)

    (_, pending), = service.pending("download_reaction")
    pending.set_result(b'reaction_id: "ord-x"\n')

    assert future.result() == destination
    assert destination.read_bytes() == b'reaction_id: "ord-x"\n'


def test_freeze_leaves_only_download(dataset_editor):
    dataset_editor.freeze()
    assert not dataset_editor.download_button.isHidden()
    assert dataset_editor.autosave_button.isHidden()
    assert dataset_editor.reaction_id.isReadOnly()
    assert dataset_editor.engine.sections["setup"].validation_panel.isHidden()
