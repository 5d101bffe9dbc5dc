"""
Configuration Schema for Slide Export Toolkit

Pydantic models describing pdf-export.config.json. The file uses the
camelCase keys written by the installer; the models expose snake_case
attributes and accept either spelling on input.
"""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class _ConfigModel(BaseModel):
    """Base for every config section: immutable, unknown keys ignored."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra='ignore')


class SubSlideSpec(_ConfigModel):
    """Secondary states of one slide.

    ``subSlide`` states are zero-based (``0..max``) and displayed one-based;
    ``step`` states are one-based (``1..max``) and displayed as-is.
    """
    type: Literal['subSlide', 'step'] = Field(description="Numbering convention of the secondary states")
    max: int = Field(ge=0, description="Last sub-slide index or last step number")
    comment: Optional[str] = Field(None, description="Free-form note, e.g. how the entry was detected")

    @property
    def start(self) -> int:
        return 0 if self.type == 'subSlide' else 1

    @property
    def count(self) -> int:
        return max(self.max - self.start + 1, 0)

    @property
    def label(self) -> str:
        return 'sub-slides' if self.type == 'subSlide' else 'steps'

    def indices(self) -> List[int]:
        """All sub-states in export order."""
        return list(range(self.start, self.max + 1))

    def display_number(self, sub_index: int) -> int:
        """Number used in filenames and progress output."""
        return sub_index + 1 if self.type == 'subSlide' else sub_index


class SpecialSlide(_ConfigModel):
    """Per-slide timing override, merged over the defaults."""
    typewriter_effect: bool = Field(False, alias='typewriterEffect', description="Slide reveals text with a typing animation")
    typewriter_wait_time: Optional[int] = Field(
        None, alias='typewriterWaitTime', ge=0,
        description="Poll timeout and extra wait in ms (default 3000)"
    )
    comment: Optional[str] = Field(None, description="Free-form note")

    @property
    def effective_wait_time(self) -> int:
        return self.typewriter_wait_time or DEFAULT_TYPEWRITER_WAIT_TIME


class Viewport(_ConfigModel):
    """Browser viewport in CSS pixels."""
    width: int = Field(1920, gt=0)
    height: int = Field(1080, gt=0)


class Selectors(_ConfigModel):
    """CSS selectors locating the presentation chrome."""
    progress_bar: str = Field('[role="progressbar"]', alias='progressBar', description="Element carrying aria-valuenow")
    main_content: str = Field('main', alias='mainContent', description="Element whose opacity signals a settled slide")
    header: str = Field('header', description="Header hidden before screenshots")
    navigation: str = Field('nav', description="Navigation hidden before screenshots")


class ExportConfig(_ConfigModel):
    """Complete configuration for one PDF export run."""

    dev_server_url: str = Field(alias='devServerUrl', min_length=1, description="URL serving the presentation")
    total_slides: int = Field(alias='totalSlides', gt=0, description="Number of top-level slides")

    slides_with_sub_slides: Dict[str, SubSlideSpec] = Field(
        default_factory=dict,
        alias='slidesWithSubSlides',
        description="Zero-based slide index -> sub-slide specification"
    )

    # Kept for compatibility with the installer; pages follow the screenshot size.
    pdf_format: str = Field('A4', alias='pdfFormat')
    landscape: bool = Field(True)

    hide_ui_elements: bool = Field(True, alias='hideUIElements', description="Hide header/nav/progress before capture")

    animation_wait_time: int = Field(2000, alias='animationWaitTime', ge=0, description="Default settle wait in ms")
    slide_transition_wait_time: int = Field(1000, alias='slideTransitionWaitTime', ge=0)
    sub_slide_transition_wait_time: int = Field(2000, alias='subSlideTransitionWaitTime', ge=0)

    viewport: Viewport = Field(default_factory=Viewport)
    selectors: Selectors = Field(default_factory=Selectors)

    special_slides: Dict[str, SpecialSlide] = Field(
        default_factory=dict,
        alias='specialSlides',
        description="Zero-based slide index -> timing override"
    )

    @field_validator('slides_with_sub_slides', 'special_slides', mode='before')
    @classmethod
    def stringify_slide_keys(cls, v):
        """YAML files may use bare integers as keys."""
        if isinstance(v, dict):
            return {str(k): v_val for k, v_val in v.items()}
        return v

    def sub_slides_for(self, slide_index: int) -> Optional[SubSlideSpec]:
        """Get the sub-slide specification of a slide, if any."""
        return self.slides_with_sub_slides.get(str(slide_index))

    def special_for(self, slide_index: int) -> SpecialSlide:
        """Get the timing override of a slide, or the defaults."""
        return self.special_slides.get(str(slide_index), DEFAULT_SPECIAL_SLIDE)


DEFAULT_TYPEWRITER_WAIT_TIME = 3000

DEFAULT_SPECIAL_SLIDE = SpecialSlide()
