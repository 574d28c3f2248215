from __future__ import annotations

from reactioneditor.app.ui.metric import read_metric, write_metric
from reactioneditor.app.ui.sections.base import SectionEditor
from reactioneditor.app.ui.sections.registry import register_section
from reactioneditor.app.ui.selectors import (
    get_optional_bool, get_selector, set_optional_bool, set_selector,
)
from reactioneditor.app.ui.widgets import field_text, find_field, set_field_text
from reactioneditor.model.emptiness import is_empty_message
from reactioneditor.model.schema import ReactionEnvironment, ReactionSetup, Vessel, Volume


@register_section
class SetupSection(SectionEditor):
    KEY = "setup"
    TITLE = "Setup"
    MESSAGE_TYPE = "ReactionSetup"
    LIVE_VALIDATE = True

    def _build_ui(self) -> None:
        self.add_selector("setup_vessel_type", "Vessel:", "Vessel_VesselType")
        self.add_text("setup_vessel_details", "Vessel details:")
        self.add_metric("setup_vessel_volume", "Vessel volume:", "Volume_VolumeUnit")
        self.add_optional_bool("setup_automated", "Automated:")
        self.add_text("setup_platform", "Automation platform:")
        self.add_selector("setup_environment_type", "Environment:", "ReactionEnvironment_ReactionEnvironmentType")
        self.add_text("setup_environment_details", "Environment details:")

    def load(self, setup: ReactionSetup) -> None:
        vessel = setup.vessel
        if vessel is not None:
            set_selector(find_field(self, "setup_vessel_type"), vessel.type)
            set_field_text(self, "setup_vessel_details", vessel.details)
            write_metric("setup_vessel_volume", vessel.volume, self)
        set_optional_bool(find_field(self, "setup_automated"), setup.is_automated)
        set_field_text(self, "setup_platform", setup.automation_platform)
        environment = setup.environment
        if environment is not None:
            set_selector(find_field(self, "setup_environment_type"), environment.type)
            set_field_text(self, "setup_environment_details", environment.details)

    def unload(self) -> ReactionSetup:
        setup = ReactionSetup()

        vessel = Vessel()
        vessel.type = get_selector(find_field(self, "setup_vessel_type"))
        vessel.details = field_text(self, "setup_vessel_details")
        volume = read_metric("setup_vessel_volume", Volume(), self)
        if not is_empty_message(volume):
            vessel.volume = volume
        if not is_empty_message(vessel):
            setup.vessel = vessel

        setup.is_automated = get_optional_bool(find_field(self, "setup_automated"))
        setup.automation_platform = field_text(self, "setup_platform")

        environment = ReactionEnvironment()
        environment.type = get_selector(find_field(self, "setup_environment_type"))
        environment.details = field_text(self, "setup_environment_details")
        if not is_empty_message(environment):
            setup.environment = environment
        return setup
