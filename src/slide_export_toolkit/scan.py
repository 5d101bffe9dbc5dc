"""
Project Scanner

Inspects a Figma Make React project to pre-fill the export configuration:
slide count, dev-server URL, slides with sub-slides or steps, and slides
with a typewriter effect. Detection is regex-based and only knows the
structures Figma Make generates.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from .config import ExportConfig, SpecialSlide, SubSlideSpec, create_default_config

APP_FILES = [
    'src/App.tsx',
    'src/app.tsx',
    'App.tsx',
]
SLIDES_DIR = 'src/components/slides'
VITE_CONFIG = 'vite.config.ts'

DEFAULT_DEV_SERVER_URL = 'http://localhost:3000'
DEFAULT_STEP_MAX = 3
DEFAULT_TYPEWRITER_WAIT = 3000

SLIDES_ARRAY_PATTERN = re.compile(r'const\s+slides\s*=\s*\[([\s\S]*?)\];')
SLIDE_ENTRY_PATTERN = re.compile(r'\{[^}]*id\s*:\s*\d+[^}]*\}')
COMPONENT_PATTERN = re.compile(r'component:\s*(\w+)')
PORT_PATTERN = re.compile(r'port:\s*(\d+)')

SUB_SLIDE_STATE_PATTERN = re.compile(r'const\s+\[subSlide[^\]]*\]\s*=\s*useState\((\d+)\)')
SUB_SLIDE_BOUND_PATTERN = re.compile(r'subSlide\s*[<>=]\s*(\d+)')
STEP_STATE_PATTERN = re.compile(r'useState<1\s*\|\s*2\s*\|\s*3>\s*\(1\)')
CONTENT_TO_DOCUMENT_PATTERN = re.compile(
    r'ContentToDocumentSlide|from\s+[\'"].*ContentToDocumentSlide|import.*ContentToDocumentSlide'
)
TYPEWRITER_PATTERN = re.compile(r'[Tt]ypewriter|className=["\'][^"\']*[Tt]erminal')


@dataclass
class ScanResult:
    """What could be detected about a project."""
    app_file: Path
    total_slides: int = 0
    dev_server_url: str = DEFAULT_DEV_SERVER_URL
    component_indices: Dict[str, int] = field(default_factory=dict)
    slides_with_sub_slides: Dict[str, SubSlideSpec] = field(default_factory=dict)
    special_slides: Dict[str, SpecialSlide] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)


def find_app_file(project_root: Path) -> Optional[Path]:
    for candidate in APP_FILES:
        path = project_root / candidate
        if path.exists():
            return path
    return None


def count_slides(app_content: str) -> int:
    """Count ``{ ... id: N ... }`` entries in ``const slides = [...]``."""
    match = SLIDES_ARRAY_PATTERN.search(app_content)
    if not match:
        return 0
    return len(SLIDE_ENTRY_PATTERN.findall(match.group(1)))


def detect_dev_server_url(project_root: Path) -> Optional[str]:
    vite_config = project_root / VITE_CONFIG
    if not vite_config.exists():
        return None
    match = PORT_PATTERN.search(vite_config.read_text(encoding='utf-8'))
    if match:
        return f"http://localhost:{match.group(1)}"
    return None


def map_components(app_content: str) -> Dict[str, int]:
    """Map slide component names to slide indices in declaration order."""
    indices = {}
    for index, match in enumerate(COMPONENT_PATTERN.finditer(app_content)):
        indices[match.group(1)] = index
    return indices


def detect_sub_slides(content: str, source_name: str) -> Optional[SubSlideSpec]:
    """Detect a sub-slide or step state machine in a slide component.

    A step state wins over a subSlide state in the same component.
    """
    if STEP_STATE_PATTERN.search(content):
        return SubSlideSpec(type='step', max=DEFAULT_STEP_MAX, comment=f"Auto-detected from {source_name}")

    if SUB_SLIDE_STATE_PATTERN.search(content):
        bounds = [int(m) for m in SUB_SLIDE_BOUND_PATTERN.findall(content)]
        max_value = max(bounds, default=0)
        if max_value > 0:
            return SubSlideSpec(type='subSlide', max=max_value, comment=f"Auto-detected from {source_name}")

    if CONTENT_TO_DOCUMENT_PATTERN.search(content):
        return SubSlideSpec(
            type='step',
            max=DEFAULT_STEP_MAX,
            comment=f"Auto-detected: uses ContentToDocumentSlide ({DEFAULT_STEP_MAX} steps)"
        )

    return None


def detect_typewriter(content: str, source_name: str) -> Optional[SpecialSlide]:
    if TYPEWRITER_PATTERN.search(content):
        return SpecialSlide(
            typewriter_effect=True,
            typewriter_wait_time=DEFAULT_TYPEWRITER_WAIT,
            comment=f"{source_name} has a typewriter effect that needs extra wait time"
        )
    return None


def scan_project(project_root: Union[str, Path], verbose: bool = True) -> ScanResult:
    """Scan a React project for its slide structure.

    Args:
        project_root: Root of the Figma Make project
        verbose: Print what was detected

    Returns:
        ScanResult

    Raises:
        FileNotFoundError: if no App.tsx can be found
    """
    project_root = Path(project_root)
    app_file = find_app_file(project_root)
    if app_file is None:
        raise FileNotFoundError(
            f"Could not find App.tsx in {project_root}. Please ensure you are in a React project."
        )

    if verbose:
        print(f"Found main component: {app_file.relative_to(project_root)}")

    app_content = app_file.read_text(encoding='utf-8')
    result = ScanResult(app_file=app_file)

    result.total_slides = count_slides(app_content)
    if result.total_slides:
        if verbose:
            print(f"Detected {result.total_slides} slides in slides array")
    else:
        result.warnings.append("Could not auto-detect slides. You will need to enter the count manually.")

    url = detect_dev_server_url(project_root)
    if url:
        result.dev_server_url = url
        if verbose:
            print(f"Detected dev server URL: {url}")

    result.component_indices = map_components(app_content)
    if not result.component_indices:
        result.warnings.append("Could not map component names to slide indices")

    slides_dir = project_root / SLIDES_DIR
    if slides_dir.is_dir():
        slide_files = sorted(p for p in slides_dir.iterdir() if p.suffix in ('.tsx', '.ts'))
        if verbose:
            print(f"\nScanning {len(slide_files)} slide components for sub-slides...")

        for slide_file in slide_files:
            component = slide_file.stem
            slide_index = result.component_indices.get(component)
            if slide_index is None:
                continue

            content = slide_file.read_text(encoding='utf-8')
            key = str(slide_index)

            spec = detect_sub_slides(content, slide_file.name)
            if spec:
                result.slides_with_sub_slides[key] = spec
                if verbose:
                    print(f"   Slide {slide_index} ({component}): {spec.type} {spec.start}-{spec.max} ({spec.count} {spec.label})")

            special = detect_typewriter(content, component)
            if special:
                result.special_slides[key] = special
                if verbose:
                    print(f"   Slide {slide_index} ({component}): typewriter effect")

    if verbose:
        for warning in result.warnings:
            print(f"Warning: {warning}")

    return result


def build_config(
    scan: ScanResult,
    dev_server_url: Optional[str] = None,
    total_slides: Optional[int] = None,
    hide_ui_elements: bool = True,
    include_sub_slides: bool = True,
) -> ExportConfig:
    """Combine scan results and user overrides into an ExportConfig."""
    return create_default_config(
        dev_server_url=dev_server_url or scan.dev_server_url,
        total_slides=total_slides or scan.total_slides,
        slides_with_sub_slides=scan.slides_with_sub_slides if include_sub_slides else {},
        special_slides=scan.special_slides,
        hide_ui_elements=hide_ui_elements,
    )
