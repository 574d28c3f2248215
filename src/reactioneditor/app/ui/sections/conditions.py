"""
Conditions section and its sub-sections.

Each sub-section (temperature, pressure, stirring, illumination,
electrochemistry, flow) validates its own record live; the conditions section
attaches a sub-record only when it is not empty.
"""
from __future__ import annotations

from reactioneditor.app.ui.metric import format_float, parse_float, parse_int, read_metric, write_metric
from reactioneditor.app.ui.sections.base import SectionEditor
from reactioneditor.app.ui.sections.registry import register_section
from reactioneditor.app.ui.selectors import (
    get_optional_bool, get_selector, set_optional_bool, set_selector,
)
from reactioneditor.app.ui.widgets import FieldKind, field_text, find_field, set_field_text
from reactioneditor.model.emptiness import is_empty_message
from reactioneditor.model.schema import (
    Current, ElectrochemistryConditions, FlowConditions, IlluminationConditions, Length,
    Pressure, PressureConditions, ReactionConditions, StirringConditions, StirringRate,
    Temperature, TemperatureConditions, Tubing, Voltage, Wavelength,
)

SUBSECTIONS = ["temperature", "pressure", "stirring", "illumination", "electrochemistry", "flow"]


@register_section
class ConditionsSection(SectionEditor):
    KEY = "conditions"
    TITLE = "Conditions"
    MESSAGE_TYPE = "ReactionConditions"
    LIVE_VALIDATE = True

    def _build_ui(self) -> None:
        self.subsections: dict[str, SectionEditor] = {}
        for key in SUBSECTIONS:
            self.subsections[key] = self._add_subsection(key)
        self.add_optional_bool("conditions_reflux", "Reflux:")
        self.add_text("conditions_ph", "pH:", FieldKind.FLOAT)
        self.add_optional_bool("conditions_dynamic", "Conditions are dynamic:")
        self.add_text("conditions_details", "Details:")

    def load(self, conditions: ReactionConditions) -> None:
        for key, section in self.subsections.items():
            value = getattr(conditions, key)
            if value is not None:
                section.load(value)
        set_optional_bool(find_field(self, "conditions_reflux"), conditions.reflux)
        if conditions.ph is not None:
            set_field_text(self, "conditions_ph", format_float(conditions.ph))
        set_optional_bool(find_field(self, "conditions_dynamic"), conditions.conditions_are_dynamic)
        set_field_text(self, "conditions_details", conditions.details)

    def unload(self) -> ReactionConditions:
        conditions = ReactionConditions()
        for key, section in self.subsections.items():
            value = section.unload()
            if not is_empty_message(value):
                setattr(conditions, key, value)
        conditions.reflux = get_optional_bool(find_field(self, "conditions_reflux"))
        conditions.ph = parse_float(field_text(self, "conditions_ph"))
        conditions.conditions_are_dynamic = get_optional_bool(find_field(self, "conditions_dynamic"))
        conditions.details = field_text(self, "conditions_details")
        return conditions


# ==========================================
# SUB-SECTIONS
# ==========================================

@register_section
class TemperatureSection(SectionEditor):
    KEY = "temperature"
    TITLE = "Temperature"
    MESSAGE_TYPE = "TemperatureConditions"
    LIVE_VALIDATE = True

    def _build_ui(self) -> None:
        self.add_selector(
            "temperature_control_type", "Control:",
            "TemperatureConditions_TemperatureControl_TemperatureControlType",
        )
        self.add_text("temperature_control_details", "Control details:")
        self.add_metric("temperature_setpoint", "Setpoint:", "Temperature_TemperatureUnit")

    def load(self, temperature: TemperatureConditions) -> None:
        set_selector(find_field(self, "temperature_control_type"), temperature.control_type)
        set_field_text(self, "temperature_control_details", temperature.control_details)
        write_metric("temperature_setpoint", temperature.setpoint, self)

    def unload(self) -> TemperatureConditions:
        temperature = TemperatureConditions()
        temperature.control_type = get_selector(find_field(self, "temperature_control_type"))
        temperature.control_details = field_text(self, "temperature_control_details")
        setpoint = read_metric("temperature_setpoint", Temperature(), self)
        if not is_empty_message(setpoint):
            temperature.setpoint = setpoint
        return temperature


@register_section
class PressureSection(SectionEditor):
    KEY = "pressure"
    TITLE = "Pressure"
    MESSAGE_TYPE = "PressureConditions"
    LIVE_VALIDATE = True
    STARTS_COLLAPSED = True

    def _build_ui(self) -> None:
        self.add_selector(
            "pressure_control_type", "Control:", "PressureConditions_PressureControl_PressureControlType"
        )
        self.add_text("pressure_control_details", "Control details:")
        self.add_metric("pressure_setpoint", "Setpoint:", "Pressure_PressureUnit")
        self.add_selector("pressure_atmosphere", "Atmosphere:", "PressureConditions_Atmosphere_AtmosphereType")

    def load(self, pressure: PressureConditions) -> None:
        set_selector(find_field(self, "pressure_control_type"), pressure.control_type)
        set_field_text(self, "pressure_control_details", pressure.control_details)
        write_metric("pressure_setpoint", pressure.setpoint, self)
        set_selector(find_field(self, "pressure_atmosphere"), pressure.atmosphere)

    def unload(self) -> PressureConditions:
        pressure = PressureConditions()
        pressure.control_type = get_selector(find_field(self, "pressure_control_type"))
        pressure.control_details = field_text(self, "pressure_control_details")
        setpoint = read_metric("pressure_setpoint", Pressure(), self)
        if not is_empty_message(setpoint):
            pressure.setpoint = setpoint
        pressure.atmosphere = get_selector(find_field(self, "pressure_atmosphere"))
        return pressure


@register_section
class StirringSection(SectionEditor):
    KEY = "stirring"
    TITLE = "Stirring"
    MESSAGE_TYPE = "StirringConditions"
    LIVE_VALIDATE = True
    STARTS_COLLAPSED = True

    def _build_ui(self) -> None:
        self.add_selector("stirring_type", "Method:", "StirringConditions_StirringMethodType")
        self.add_text("stirring_details", "Details:")
        self.add_selector("stirring_rate_type", "Rate:", "StirringConditions_StirringRate_StirringRateType")
        self.add_text("stirring_rate_details", "Rate details:")
        self.add_text("stirring_rpm", "RPM:", FieldKind.INTEGER)

    def load(self, stirring: StirringConditions) -> None:
        set_selector(find_field(self, "stirring_type"), stirring.type)
        set_field_text(self, "stirring_details", stirring.details)
        rate = stirring.rate
        if rate is not None:
            set_selector(find_field(self, "stirring_rate_type"), rate.type)
            set_field_text(self, "stirring_rate_details", rate.details)
            if rate.rpm is not None:
                set_field_text(self, "stirring_rpm", str(rate.rpm))

    def unload(self) -> StirringConditions:
        stirring = StirringConditions()
        stirring.type = get_selector(find_field(self, "stirring_type"))
        stirring.details = field_text(self, "stirring_details")
        rate = StirringRate()
        rate.type = get_selector(find_field(self, "stirring_rate_type"))
        rate.details = field_text(self, "stirring_rate_details")
        rate.rpm = parse_int(field_text(self, "stirring_rpm"))
        if not is_empty_message(rate):
            stirring.rate = rate
        return stirring


@register_section
class IlluminationSection(SectionEditor):
    KEY = "illumination"
    TITLE = "Illumination"
    MESSAGE_TYPE = "IlluminationConditions"
    LIVE_VALIDATE = True
    STARTS_COLLAPSED = True

    def _build_ui(self) -> None:
        self.add_selector("illumination_type", "Type:", "IlluminationConditions_IlluminationType")
        self.add_text("illumination_details", "Details:")
        self.add_metric("illumination_wavelength", "Peak wavelength:", "Wavelength_WavelengthUnit")
        self.add_text("illumination_color", "Color:")
        self.add_metric("illumination_distance", "Distance to vessel:", "Length_LengthUnit")

    def load(self, illumination: IlluminationConditions) -> None:
        set_selector(find_field(self, "illumination_type"), illumination.type)
        set_field_text(self, "illumination_details", illumination.details)
        write_metric("illumination_wavelength", illumination.peak_wavelength, self)
        set_field_text(self, "illumination_color", illumination.color)
        write_metric("illumination_distance", illumination.distance_to_vessel, self)

    def unload(self) -> IlluminationConditions:
        illumination = IlluminationConditions()
        illumination.type = get_selector(find_field(self, "illumination_type"))
        illumination.details = field_text(self, "illumination_details")
        wavelength = read_metric("illumination_wavelength", Wavelength(), self)
        if not is_empty_message(wavelength):
            illumination.peak_wavelength = wavelength
        illumination.color = field_text(self, "illumination_color")
        distance = read_metric("illumination_distance", Length(), self)
        if not is_empty_message(distance):
            illumination.distance_to_vessel = distance
        return illumination


@register_section
class ElectrochemistrySection(SectionEditor):
    KEY = "electrochemistry"
    TITLE = "Electrochemistry"
    MESSAGE_TYPE = "ElectrochemistryConditions"
    LIVE_VALIDATE = True
    STARTS_COLLAPSED = True

    def _build_ui(self) -> None:
        self.add_selector("electro_type", "Type:", "ElectrochemistryConditions_ElectrochemistryType")
        self.add_text("electro_details", "Details:")
        self.add_metric("electro_current", "Current:", "Current_CurrentUnit")
        self.add_metric("electro_voltage", "Voltage:", "Voltage_VoltageUnit")
        self.add_text("electro_anode", "Anode material:")
        self.add_text("electro_cathode", "Cathode material:")

    def load(self, electro: ElectrochemistryConditions) -> None:
        set_selector(find_field(self, "electro_type"), electro.type)
        set_field_text(self, "electro_details", electro.details)
        write_metric("electro_current", electro.current, self)
        write_metric("electro_voltage", electro.voltage, self)
        set_field_text(self, "electro_anode", electro.anode_material)
        set_field_text(self, "electro_cathode", electro.cathode_material)

    def unload(self) -> ElectrochemistryConditions:
        electro = ElectrochemistryConditions()
        electro.type = get_selector(find_field(self, "electro_type"))
        electro.details = field_text(self, "electro_details")
        current = read_metric("electro_current", Current(), self)
        if not is_empty_message(current):
            electro.current = current
        voltage = read_metric("electro_voltage", Voltage(), self)
        if not is_empty_message(voltage):
            electro.voltage = voltage
        electro.anode_material = field_text(self, "electro_anode")
        electro.cathode_material = field_text(self, "electro_cathode")
        return electro


@register_section
class FlowSection(SectionEditor):
    KEY = "flow"
    TITLE = "Flow"
    MESSAGE_TYPE = "FlowConditions"
    LIVE_VALIDATE = True
    STARTS_COLLAPSED = True

    def _build_ui(self) -> None:
        self.add_selector("flow_type", "Type:", "FlowConditions_FlowType")
        self.add_text("flow_details", "Details:")
        self.add_text("flow_pump", "Pump type:")
        self.add_selector("flow_tubing_type", "Tubing:", "FlowConditions_Tubing_TubingMaterialType")
        self.add_text("flow_tubing_details", "Tubing details:")
        self.add_metric("flow_tubing_diameter", "Tubing diameter:", "Length_LengthUnit")

    def load(self, flow: FlowConditions) -> None:
        set_selector(find_field(self, "flow_type"), flow.type)
        set_field_text(self, "flow_details", flow.details)
        set_field_text(self, "flow_pump", flow.pump_type)
        tubing = flow.tubing
        if tubing is not None:
            set_selector(find_field(self, "flow_tubing_type"), tubing.type)
            set_field_text(self, "flow_tubing_details", tubing.details)
            write_metric("flow_tubing_diameter", tubing.diameter, self)

    def unload(self) -> FlowConditions:
        flow = FlowConditions()
        flow.type = get_selector(find_field(self, "flow_type"))
        flow.details = field_text(self, "flow_details")
        flow.pump_type = field_text(self, "flow_pump")
        tubing = Tubing()
        tubing.type = get_selector(find_field(self, "flow_tubing_type"))
        tubing.details = field_text(self, "flow_tubing_details")
        diameter = read_metric("flow_tubing_diameter", Length(), self)
        if not is_empty_message(diameter):
            tubing.diameter = diameter
        if not is_empty_message(tubing):
            flow.tubing = tubing
        return flow
