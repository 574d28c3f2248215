import pytest
from PySide6.QtWidgets import QWidget

from reactioneditor.app.ui.metric import (
    format_float, parse_float, parse_int, prepare_float, read_metric, write_metric,
)
from reactioneditor.app.ui.selectors import get_selector, init_selectors, set_selector
from reactioneditor.app.ui.widgets import Fragment, field_text, find_field, set_field_text
from reactioneditor.model.schema import Mass, MassUnit, Percentage


@pytest.mark.parametrize(
    "value,text",
    [(12.3456789, "12.34568"), (2e10, "20000000000"), (0.01, "0.01"), (0.0, "0"), (-1.5, "-1.5"), (25.0, "25")],
)
def test_format_float(value, text):
    assert format_float(value) == text


def test_prepare_float_rounds_to_seven_digits():
    assert prepare_float(0.1 + 0.2) == 0.3
    assert prepare_float(123456789.0) == 123456800.0


@pytest.mark.parametrize("text,value", [("3.5", 3.5), ("3.5 g", 3.5), ("  -2e3", -2000.0), ("abc", None), ("", None)])
def test_parse_float(text, value):
    assert parse_float(text) == value


def test_parse_int():
    assert parse_int("42") == 42
    assert parse_int("7 min") == 7
    assert parse_int("") is None


@pytest.fixture
def mass_row(qapp):
    fragment = Fragment("component")
    fragment.add_metric("mass", "Mass:", "Mass_MassUnit")
    init_selectors(fragment)
    return fragment


@pytest.fixture
def percent_row(qapp):
    fragment = Fragment("outcome")
    fragment.add_metric("conversion", "Conversion:")
    return fragment


def test_read_metric(mass_row):
    set_field_text(mass_row, "mass_value", "1.25")
    set_field_text(mass_row, "mass_precision", "0.01")
    set_selector(find_field(mass_row, "mass_units"), MassUnit.GRAM)

    mass = read_metric("mass", Mass(), mass_row)
    assert mass == Mass(value=1.25, precision=0.01, units=MassUnit.GRAM)


def test_read_metric_leaves_unparsable_fields_unset(mass_row):
    set_field_text(mass_row, "mass_value", "lots")

    mass = read_metric("mass", Mass(), mass_row)
    assert mass.value is None
    assert mass.precision is None
    assert mass.units == MassUnit.UNSPECIFIED


def test_write_metric_only_writes_set_fields(mass_row):
    write_metric("mass", Mass(value=0.0, units=MassUnit.MILLIGRAM), mass_row)

    assert field_text(mass_row, "mass_value") == "0"
    assert field_text(mass_row, "mass_precision") == ""
    assert get_selector(find_field(mass_row, "mass_units")) == MassUnit.MILLIGRAM


def test_write_metric_none_is_noop(mass_row):
    set_field_text(mass_row, "mass_value", "5")
    write_metric("mass", None, mass_row)
    assert field_text(mass_row, "mass_value") == "5"


def test_metric_without_units(percent_row):
    write_metric("conversion", Percentage(value=87.5), percent_row)
    assert field_text(percent_row, "conversion_value") == "87.5"
    assert percent_row.findChild(QWidget, "conversion_units") is None

    assert read_metric("conversion", Percentage(), percent_row) == Percentage(value=87.5)


def test_write_then_read_rounds_to_seven_digits(mass_row):
    write_metric("mass", Mass(value=12.3456789, units=MassUnit.GRAM, precision=0.01), mass_row)

    assert field_text(mass_row, "mass_value") == "12.34568"
    mass = read_metric("mass", Mass(), mass_row)
    assert mass == Mass(value=12.34568, units=MassUnit.GRAM, precision=0.01)
