"""
Configuration Loader for Slide Export Toolkit

Loads export configuration from JSON (the installer's format) or YAML files.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .schema import (
    ExportConfig,
    Selectors,
    SubSlideSpec,
    SpecialSlide,
    Viewport,
)


DEFAULT_CONFIG_FILENAME = 'pdf-export.config.json'


def load_config(config_path: Optional[Union[str, Path]] = None) -> ExportConfig:
    """Load export configuration from a JSON or YAML file.

    Args:
        config_path: Path to configuration file (.json, .yaml or .yml).
            Defaults to pdf-export.config.json in the working directory.

    Returns:
        ExportConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config format is unsupported, malformed or missing
            required fields
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    suffix = config_path.suffix.lower()

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            if suffix in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            elif suffix == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported config format: {suffix}. Use .json, .yaml, or .yml")
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Malformed configuration file {config_path.name}: {e}") from e

    return parse_config(data)


def parse_config(data: Any) -> ExportConfig:
    """Parse configuration data into an ExportConfig model.

    Unknown keys are ignored. Slide indices in the sub-slide and special-slide
    mappings are not range-checked against totalSlides.

    Args:
        data: Raw configuration dictionary

    Returns:
        ExportConfig instance
    """
    if not isinstance(data, dict):
        raise ValueError("Invalid configuration: expected a mapping at the top level")

    missing = [key for key in ('devServerUrl', 'totalSlides')
               if not data.get(key) and not data.get(_snake(key))]
    if missing:
        raise ValueError(f"Invalid configuration: missing required fields: {', '.join(missing)}")

    return ExportConfig.model_validate(data)


def save_config(config: ExportConfig, output_path: Union[str, Path]) -> None:
    """Save export configuration to a JSON or YAML file.

    Keys are written in the installer's camelCase spelling.

    Args:
        config: ExportConfig instance to save
        output_path: Path for output file
    """
    output_path = Path(output_path)
    suffix = output_path.suffix.lower()

    data = config.model_dump(by_alias=True, exclude_none=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        elif suffix == '.json':
            json.dump(data, f, indent=2)
            f.write('\n')
        else:
            raise ValueError(f"Unsupported config format: {suffix}")


def create_default_config(
    dev_server_url: str,
    total_slides: int,
    slides_with_sub_slides: Optional[Dict[str, SubSlideSpec]] = None,
    special_slides: Optional[Dict[str, SpecialSlide]] = None,
    hide_ui_elements: bool = True,
    pdf_format: str = 'A4',
    landscape: bool = True,
) -> ExportConfig:
    """Create an export configuration with the installer's defaults.

    Args:
        dev_server_url: URL of the running dev server
        total_slides: Number of top-level slides
        slides_with_sub_slides: Slide index -> sub-slide specification
        special_slides: Slide index -> timing override
        hide_ui_elements: Hide presentation chrome before capture

    Returns:
        ExportConfig instance with defaults applied
    """
    return ExportConfig(
        dev_server_url=dev_server_url,
        total_slides=total_slides,
        slides_with_sub_slides=slides_with_sub_slides or {},
        pdf_format=pdf_format,
        landscape=landscape,
        hide_ui_elements=hide_ui_elements,
        viewport=Viewport(),
        selectors=Selectors(),
        special_slides=special_slides or {},
    )


def _snake(name: str) -> str:
    return ''.join('_' + c.lower() if c.isupper() else c for c in name)
