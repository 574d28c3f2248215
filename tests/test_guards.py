import pytest

from reactioneditor.app.ui.guards import check_field, is_valid_float, is_valid_integer
from reactioneditor.app.ui.widgets import EditText, FieldKind


@pytest.mark.parametrize("text", ["", "  ", "0", "-3", "3.14", "-0.5", ".5", "1e5", "1.5E-3", " 42 "])
def test_valid_floats(text):
    assert is_valid_float(text)


@pytest.mark.parametrize("text", ["abc", "3.", "1e", "1.2.3", "--1", "+1", "1,5", "e5"])
def test_invalid_floats(text):
    assert not is_valid_float(text)


@pytest.mark.parametrize("text,valid", [("", True), ("7", True), ("-12", True), ("1.0", False), ("x", False)])
def test_integers(text, valid):
    assert is_valid_integer(text) is valid


def test_check_field_flags_and_clears(qapp):
    edit = EditText("mass_value", FieldKind.FLOAT)
    edit.setText("12abc")
    check_field(edit)
    assert edit.invalid
    assert edit.property("invalid") is True

    edit.setText("12")
    check_field(edit)
    assert not edit.invalid


def test_check_field_ignores_text_fields(qapp):
    edit = EditText("details")
    edit.setText("not a number")
    check_field(edit)
    assert not edit.invalid


def test_integer_field(qapp):
    edit = EditText("rpm", FieldKind.INTEGER)
    edit.setText("12.5")
    check_field(edit)
    assert edit.invalid
