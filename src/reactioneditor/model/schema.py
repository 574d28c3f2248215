"""
Reaction Schema
===============
Typed nested records edited by the form.

Why is this file needed?
------------------------
1. Typing: every record the editor loads, unloads, validates or saves is
   declared here once, with explicit presence for optional scalars
   (``None`` means "unset", ``0.0`` is a real value).
2. Serialization: the records are pydantic models, so the transport
   encoding (``model_dump_json``/``model_validate_json``) comes for free.
3. Enums: unit and type enums are registered by type path so selectors can
   be populated from a name written on the widget.

Classes:
    Message: Base of all records.
    Reaction: The top-level record.
    Dataset: A named collection of reactions.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from reactioneditor.model.registry import register_enum


class Message(BaseModel):
    """Base class for records. Assignments are validated so selector ints become enums."""
    model_config = ConfigDict(validate_assignment=True, extra="forbid")


def has_units(message: Message) -> bool:
    """Whether the record type carries a ``units`` field."""
    return "units" in type(message).model_fields


# ==========================================
# UNIT ENUMS
# ==========================================

@register_enum("Temperature_TemperatureUnit")
class TemperatureUnit(IntEnum):
    UNSPECIFIED = 0
    CELSIUS = 1
    FAHRENHEIT = 2
    KELVIN = 3


@register_enum("Pressure_PressureUnit")
class PressureUnit(IntEnum):
    UNSPECIFIED = 0
    BAR = 1
    ATMOSPHERE = 2
    PSI = 3
    KPSI = 4
    PASCAL = 5
    KILOPASCAL = 6
    TORR = 7
    MM_HG = 8


@register_enum("Time_TimeUnit")
class TimeUnit(IntEnum):
    UNSPECIFIED = 0
    DAY = 4
    HOUR = 1
    MINUTE = 2
    SECOND = 3


@register_enum("Mass_MassUnit")
class MassUnit(IntEnum):
    UNSPECIFIED = 0
    KILOGRAM = 1
    GRAM = 2
    MILLIGRAM = 3
    MICROGRAM = 4


@register_enum("Volume_VolumeUnit")
class VolumeUnit(IntEnum):
    UNSPECIFIED = 0
    LITER = 1
    MILLILITER = 2
    MICROLITER = 3
    NANOLITER = 4


@register_enum("Length_LengthUnit")
class LengthUnit(IntEnum):
    UNSPECIFIED = 0
    CENTIMETER = 1
    MILLIMETER = 2
    METER = 3
    INCH = 4
    FOOT = 5


@register_enum("Wavelength_WavelengthUnit")
class WavelengthUnit(IntEnum):
    UNSPECIFIED = 0
    NANOMETER = 1
    WAVENUMBER = 2


@register_enum("Current_CurrentUnit")
class CurrentUnit(IntEnum):
    UNSPECIFIED = 0
    AMPERE = 1
    MILLIAMPERE = 2


@register_enum("Voltage_VoltageUnit")
class VoltageUnit(IntEnum):
    UNSPECIFIED = 0
    VOLT = 1
    MILLIVOLT = 2


# ==========================================
# METRICS (value, units, precision)
# ==========================================

class Temperature(Message):
    value: Optional[float] = None
    precision: Optional[float] = None
    units: TemperatureUnit = TemperatureUnit.UNSPECIFIED


class Pressure(Message):
    value: Optional[float] = None
    precision: Optional[float] = None
    units: PressureUnit = PressureUnit.UNSPECIFIED


class Time(Message):
    value: Optional[float] = None
    precision: Optional[float] = None
    units: TimeUnit = TimeUnit.UNSPECIFIED


class Mass(Message):
    value: Optional[float] = None
    precision: Optional[float] = None
    units: MassUnit = MassUnit.UNSPECIFIED


class Volume(Message):
    value: Optional[float] = None
    precision: Optional[float] = None
    units: VolumeUnit = VolumeUnit.UNSPECIFIED


class Length(Message):
    value: Optional[float] = None
    precision: Optional[float] = None
    units: LengthUnit = LengthUnit.UNSPECIFIED


class Wavelength(Message):
    value: Optional[float] = None
    precision: Optional[float] = None
    units: WavelengthUnit = WavelengthUnit.UNSPECIFIED


class Current(Message):
    value: Optional[float] = None
    precision: Optional[float] = None
    units: CurrentUnit = CurrentUnit.UNSPECIFIED


class Voltage(Message):
    value: Optional[float] = None
    precision: Optional[float] = None
    units: VoltageUnit = VoltageUnit.UNSPECIFIED


class Percentage(Message):
    """A percentage has no units."""
    value: Optional[float] = None
    precision: Optional[float] = None


class DateTime(Message):
    value: str = ""


# ==========================================
# IDENTIFIERS & COMPOUNDS
# ==========================================

@register_enum("ReactionIdentifier_ReactionIdentifierType")
class ReactionIdentifierType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    REACTION_SMILES = 2
    REACTION_CXSMILES = 6
    RDFILE = 3
    RINCHI = 4
    NAME = 5


@register_enum("CompoundIdentifier_CompoundIdentifierType")
class CompoundIdentifierType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    SMILES = 2
    INCHI = 3
    MOLBLOCK = 4
    IUPAC_NAME = 5
    NAME = 6
    CAS_NUMBER = 7
    PUBCHEM_CID = 8


@register_enum("ReactionRole_ReactionRoleType")
class ReactionRoleType(IntEnum):
    UNSPECIFIED = 0
    REACTANT = 1
    REAGENT = 2
    SOLVENT = 3
    CATALYST = 4
    WORKUP = 5
    INTERNAL_STANDARD = 6
    AUTHENTIC_STANDARD = 7
    PRODUCT = 8


class ReactionIdentifier(Message):
    type: ReactionIdentifierType = ReactionIdentifierType.UNSPECIFIED
    value: str = ""
    details: str = ""


class CompoundIdentifier(Message):
    type: CompoundIdentifierType = CompoundIdentifierType.UNSPECIFIED
    value: str = ""
    details: str = ""


class Compound(Message):
    identifiers: list[CompoundIdentifier] = Field(default_factory=list)
    reaction_role: ReactionRoleType = ReactionRoleType.UNSPECIFIED
    mass: Optional[Mass] = None
    is_limiting: Optional[bool] = None


class ProductCompound(Message):
    identifiers: list[CompoundIdentifier] = Field(default_factory=list)
    is_desired_product: Optional[bool] = None
    isolated_color: str = ""


# ==========================================
# INPUTS & SETUP
# ==========================================

class ReactionInput(Message):
    components: list[Compound] = Field(default_factory=list)
    addition_order: Optional[int] = None
    addition_time: Optional[Time] = None


@register_enum("Vessel_VesselType")
class VesselType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    ROUND_BOTTOM_FLASK = 2
    VIAL = 3
    WELL_PLATE = 4
    MICROWAVE_VIAL = 5
    TUBE = 6
    CONTINUOUS_STIRRED_TANK_REACTOR = 7
    PACKED_BED_REACTOR = 8
    NMR_TUBE = 9
    PRESSURE_FLASK = 10
    PRESSURE_REACTOR = 11


@register_enum("ReactionEnvironment_ReactionEnvironmentType")
class ReactionEnvironmentType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    FUME_HOOD = 2
    BENCH_TOP = 3
    GLOVE_BOX = 4
    GLOVE_BAG = 5


class Vessel(Message):
    type: VesselType = VesselType.UNSPECIFIED
    details: str = ""
    volume: Optional[Volume] = None


class ReactionEnvironment(Message):
    type: ReactionEnvironmentType = ReactionEnvironmentType.UNSPECIFIED
    details: str = ""


class ReactionSetup(Message):
    vessel: Optional[Vessel] = None
    is_automated: Optional[bool] = None
    automation_platform: str = ""
    environment: Optional[ReactionEnvironment] = None


# ==========================================
# CONDITIONS
# ==========================================

@register_enum("TemperatureConditions_TemperatureControl_TemperatureControlType")
class TemperatureControlType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    AMBIENT = 2
    OIL_BATH = 3
    WATER_BATH = 4
    SAND_BATH = 5
    ICE_BATH = 6
    DRY_ALUMINUM_PLATE = 7
    MICROWAVE = 8
    DRY_ICE_BATH = 9
    AIR_FAN = 10
    LIQUID_NITROGEN = 11


@register_enum("PressureConditions_PressureControl_PressureControlType")
class PressureControlType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    AMBIENT = 2
    SLIGHT_POSITIVE = 3
    SEALED = 4
    PRESSURIZED = 5


@register_enum("PressureConditions_Atmosphere_AtmosphereType")
class AtmosphereType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    AIR = 2
    NITROGEN = 3
    ARGON = 4
    OXYGEN = 5
    HYDROGEN = 6
    CARBON_MONOXIDE = 7
    CARBON_DIOXIDE = 8
    METHANE = 9
    AMMONIA = 10
    OZONE = 11
    ETHYLENE = 12
    ACETYLENE = 13


@register_enum("StirringConditions_StirringMethodType")
class StirringMethodType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    NONE = 2
    STIR_BAR = 3
    OVERHEAD_MIXER = 4
    AGITATION = 5
    BALL_MILLING = 6
    SONICATION = 7


@register_enum("StirringConditions_StirringRate_StirringRateType")
class StirringRateType(IntEnum):
    UNSPECIFIED = 0
    HIGH = 1
    MEDIUM = 2
    LOW = 3


@register_enum("IlluminationConditions_IlluminationType")
class IlluminationType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    AMBIENT = 2
    DARK = 3
    LED = 4
    HALOGEN_LAMP = 5
    DEUTERIUM_LAMP = 6
    SOLAR_SIMULATOR = 7
    BROAD_SPECTRUM = 8


@register_enum("ElectrochemistryConditions_ElectrochemistryType")
class ElectrochemistryType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    CONSTANT_CURRENT = 2
    CONSTANT_VOLTAGE = 3


@register_enum("FlowConditions_FlowType")
class FlowType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    PLUG_FLOW_REACTOR = 2
    CONTINUOUS_STIRRED_TANK_REACTOR = 3
    PACKED_BED_REACTOR = 4


@register_enum("FlowConditions_Tubing_TubingMaterialType")
class TubingMaterialType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    STEEL = 2
    COPPER = 3
    PFA = 4
    FEP = 5
    TEFLONAF = 6
    PTFE = 7
    GLASS = 8
    QUARTZ = 9
    SILICON = 10
    PDMS = 11


class TemperatureConditions(Message):
    control_type: TemperatureControlType = TemperatureControlType.UNSPECIFIED
    control_details: str = ""
    setpoint: Optional[Temperature] = None


class PressureConditions(Message):
    control_type: PressureControlType = PressureControlType.UNSPECIFIED
    control_details: str = ""
    setpoint: Optional[Pressure] = None
    atmosphere: AtmosphereType = AtmosphereType.UNSPECIFIED


class StirringRate(Message):
    type: StirringRateType = StirringRateType.UNSPECIFIED
    details: str = ""
    rpm: Optional[int] = None


class StirringConditions(Message):
    type: StirringMethodType = StirringMethodType.UNSPECIFIED
    details: str = ""
    rate: Optional[StirringRate] = None


class IlluminationConditions(Message):
    type: IlluminationType = IlluminationType.UNSPECIFIED
    details: str = ""
    peak_wavelength: Optional[Wavelength] = None
    color: str = ""
    distance_to_vessel: Optional[Length] = None


class ElectrochemistryConditions(Message):
    type: ElectrochemistryType = ElectrochemistryType.UNSPECIFIED
    details: str = ""
    current: Optional[Current] = None
    voltage: Optional[Voltage] = None
    anode_material: str = ""
    cathode_material: str = ""


class Tubing(Message):
    type: TubingMaterialType = TubingMaterialType.UNSPECIFIED
    details: str = ""
    diameter: Optional[Length] = None


class FlowConditions(Message):
    type: FlowType = FlowType.UNSPECIFIED
    details: str = ""
    pump_type: str = ""
    tubing: Optional[Tubing] = None


class ReactionConditions(Message):
    temperature: Optional[TemperatureConditions] = None
    pressure: Optional[PressureConditions] = None
    stirring: Optional[StirringConditions] = None
    illumination: Optional[IlluminationConditions] = None
    electrochemistry: Optional[ElectrochemistryConditions] = None
    flow: Optional[FlowConditions] = None
    reflux: Optional[bool] = None
    ph: Optional[float] = None
    conditions_are_dynamic: Optional[bool] = None
    details: str = ""


# ==========================================
# NOTES, OBSERVATIONS, WORKUPS
# ==========================================

class ReactionNotes(Message):
    is_heterogeneous: Optional[bool] = None
    forms_precipitate: Optional[bool] = None
    is_exothermic: Optional[bool] = None
    offgasses: Optional[bool] = None
    is_sensitive_to_moisture: Optional[bool] = None
    is_sensitive_to_oxygen: Optional[bool] = None
    is_sensitive_to_light: Optional[bool] = None
    safety_notes: str = ""
    procedure_details: str = ""


class ReactionObservation(Message):
    time: Optional[Time] = None
    comment: str = ""


@register_enum("ReactionWorkup_ReactionWorkupType")
class ReactionWorkupType(IntEnum):
    UNSPECIFIED = 0
    CUSTOM = 1
    ADDITION = 2
    ALIQUOT = 3
    TEMPERATURE = 4
    CONCENTRATION = 5
    EXTRACTION = 6
    FILTRATION = 7
    WASH = 8
    DRY_IN_VACUUM = 9
    DRY_WITH_MATERIAL = 10
    FLASH_CHROMATOGRAPHY = 11
    OTHER_CHROMATOGRAPHY = 12
    SCAVENGING = 13
    WAIT = 14
    STIRRING = 15
    PH_ADJUST = 16
    DISSOLUTION = 17
    DISTILLATION = 18


class ReactionWorkup(Message):
    type: ReactionWorkupType = ReactionWorkupType.UNSPECIFIED
    details: str = ""
    duration: Optional[Time] = None
    keep_phase: str = ""
    target_ph: Optional[float] = None
    is_automated: Optional[bool] = None


# ==========================================
# OUTCOMES & PROVENANCE
# ==========================================

class ReactionOutcome(Message):
    reaction_time: Optional[Time] = None
    conversion: Optional[Percentage] = None
    products: list[ProductCompound] = Field(default_factory=list)


class Person(Message):
    username: str = ""
    name: str = ""
    orcid: str = ""
    organization: str = ""
    email: str = ""


class ReactionProvenance(Message):
    experimenter: Optional[Person] = None
    city: str = ""
    experiment_start: Optional[DateTime] = None
    doi: str = ""
    patent: str = ""
    publication_url: str = ""


# ==========================================
# TOP LEVEL
# ==========================================

class Reaction(Message):
    identifiers: list[ReactionIdentifier] = Field(default_factory=list)
    inputs: dict[str, ReactionInput] = Field(default_factory=dict)
    setup: Optional[ReactionSetup] = None
    conditions: Optional[ReactionConditions] = None
    notes: Optional[ReactionNotes] = None
    observations: list[ReactionObservation] = Field(default_factory=list)
    workups: list[ReactionWorkup] = Field(default_factory=list)
    outcomes: list[ReactionOutcome] = Field(default_factory=list)
    provenance: Optional[ReactionProvenance] = None
    # Oneof-like: never set to "".
    reaction_id: Optional[str] = None


class Dataset(Message):
    name: str = ""
    description: str = ""
    reactions: list[Reaction] = Field(default_factory=list)
    dataset_id: str = ""
