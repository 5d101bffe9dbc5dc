"""Configuration module for Slide Export Toolkit."""

from .schema import (
    ExportConfig,
    SubSlideSpec,
    SpecialSlide,
    Viewport,
    Selectors,
    DEFAULT_SPECIAL_SLIDE,
    DEFAULT_TYPEWRITER_WAIT_TIME,
)
from .loader import (
    DEFAULT_CONFIG_FILENAME,
    load_config,
    save_config,
    parse_config,
    create_default_config,
)

__all__ = [
    'ExportConfig',
    'SubSlideSpec',
    'SpecialSlide',
    'Viewport',
    'Selectors',
    'DEFAULT_SPECIAL_SLIDE',
    'DEFAULT_TYPEWRITER_WAIT_TIME',
    'DEFAULT_CONFIG_FILENAME',
    'load_config',
    'save_config',
    'parse_config',
    'create_default_config',
]
