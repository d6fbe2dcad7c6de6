"""
Configuration schema - Pydantic models for the `reveal` config section

Pydantic checks shape and types of the YAML data. Range rules live in the
domain objects built from it (ObservedRegion, StaggerOptions, opacities).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models.animation import StaggerOptions
from models.enums import RestartMode
from models.region import ObservedRegion
from models.target import VisualState


class StateSettings(BaseModel):
    """One visual state in the config"""
    model_config = ConfigDict(extra="forbid")

    opacity: float
    offset_y: float

    def to_state(self) -> VisualState:
        return VisualState(opacity=self.opacity, offset_y=self.offset_y)


class VisibilitySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    threshold: float = Field(0.5, description="Visible-area ratio that triggers the reveal")
    fire_once: bool = Field(False, description="Release the observation after the first reveal")


class StaggerSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    interval: float = Field(0.1, description="Seconds between letter starts")
    duration: float = Field(1.5, description="Seconds per letter")
    ease: str = Field("elastic.out(1, 0.3)", description="GSAP-style easing name")
    from_state: StateSettings = Field(
        default_factory=lambda: StateSettings(opacity=0.0, offset_y=50.0),
        alias="from",
    )
    to_state: StateSettings = Field(
        default_factory=lambda: StateSettings(opacity=1.0, offset_y=0.0),
        alias="to",
    )
    restart_from: Literal["initial", "current"] = "initial"

    def to_options(self) -> StaggerOptions:
        """
        Raises:
            InvalidStaggerConfig: Out-of-range values
        """
        return StaggerOptions(
            stagger_interval=self.interval,
            duration=self.duration,
            ease=self.ease,
            from_state=self.from_state.to_state(),
            to_state=self.to_state.to_state(),
            restart_from=RestartMode[self.restart_from.upper()],
        )


class SelectionSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    background_opacity: float = 0.7
    foreground_opacity: float = 1.0
    class_name: str = "inverted-selection"


class ClockSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    fps: int = 60


class SectionSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    region_id: str = "aboutme"
    heading: str = "About me."


class ThemeSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    primary: str = "black"
    background: str = "white"


class RevealSettings(BaseModel):
    """Root of the `reveal` config section"""
    model_config = ConfigDict(extra="forbid")

    visibility: VisibilitySettings = Field(default_factory=VisibilitySettings)
    stagger: StaggerSettings = Field(default_factory=StaggerSettings)
    selection: SelectionSettings = Field(default_factory=SelectionSettings)
    clock: ClockSettings = Field(default_factory=ClockSettings)
    section: SectionSettings = Field(default_factory=SectionSettings)
    theme: ThemeSettings = Field(default_factory=ThemeSettings)

    def to_region(self) -> ObservedRegion:
        """
        Raises:
            InvalidThreshold: Threshold outside [0, 1]
        """
        return ObservedRegion(self.section.region_id, self.visibility.threshold)
