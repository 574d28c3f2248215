import logging

import pytest

from reactioneditor.app.ui.selectors import (
    get_optional_bool, get_selector, get_selector_text, init_optional_bool, init_selector,
    set_optional_bool, set_selector,
)
from reactioneditor.app.ui.widgets import OptionalBoolSelector, Selector
from reactioneditor.model.registry import UnknownEnumError, list_type_paths, lookup_enum
from reactioneditor.model.schema import MassUnit, TemperatureUnit


def test_registry_lookup():
    assert lookup_enum("Mass_MassUnit") is MassUnit
    assert "Temperature_TemperatureUnit" in list_type_paths()


def test_registry_unknown_path():
    with pytest.raises(UnknownEnumError) as excinfo:
        lookup_enum("Nope_NopeType")
    assert excinfo.value.type_path == "Nope_NopeType"


def test_init_selector_starts_unspecified(qapp):
    selector = Selector("units", "Temperature_TemperatureUnit")
    init_selector(selector)

    assert selector.combo.count() == len(TemperatureUnit)
    assert get_selector_text(selector) == "UNSPECIFIED"
    assert get_selector(selector) == 0


def test_set_and_get_selector(qapp):
    selector = Selector("units", "Temperature_TemperatureUnit")
    init_selector(selector)

    set_selector(selector, TemperatureUnit.KELVIN)
    assert get_selector(selector) == TemperatureUnit.KELVIN
    assert get_selector_text(selector) == "KELVIN"


def test_unknown_path_leaves_selector_empty(qapp, caplog):
    selector = Selector("mystery", "Nope_NopeType")
    with caplog.at_level(logging.WARNING, logger="reactioneditor"):
        init_selector(selector)

    assert selector.combo.count() == 0
    assert get_selector(selector) == 0
    assert "Nope_NopeType" in caplog.text


def test_optional_bool_is_tri_state(qapp):
    selector = OptionalBoolSelector("limiting")
    init_optional_bool(selector)
    assert get_optional_bool(selector) is None

    for value in (True, False, None):
        set_optional_bool(selector, value)
        assert get_optional_bool(selector) is value
