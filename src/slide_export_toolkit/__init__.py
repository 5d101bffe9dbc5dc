"""
Slide Export Toolkit

Developer tools for React presentations generated by Figma Make: export a
running presentation to PDF slide by slide, and repair PNG assets that were
saved as base64 text.
"""

__version__ = "0.1.0"

from .config import (
    ExportConfig,
    SubSlideSpec,
    SpecialSlide,
    load_config,
    save_config,
    create_default_config,
)

from .export import (
    ExportResult,
    export_slides,
    expected_page_count,
    run_export,
)

from .images import (
    fix_png_file,
    fix_project_images,
    is_base64_png,
)

from .scan import (
    build_config,
    scan_project,
)

__all__ = [
    # Config
    'ExportConfig',
    'SubSlideSpec',
    'SpecialSlide',
    'load_config',
    'save_config',
    'create_default_config',
    # Export
    'ExportResult',
    'export_slides',
    'expected_page_count',
    'run_export',
    # Image repair
    'fix_png_file',
    'fix_project_images',
    'is_base64_png',
    # Setup
    'build_config',
    'scan_project',
]
