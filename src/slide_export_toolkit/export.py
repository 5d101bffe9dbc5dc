"""
Presentation Export

Walks every slide and sub-slide of a running presentation, screenshots each
state and merges the screenshots into a single PDF.

Output layout (relative to the output directory):
    screenshots/slide-<n>[-<type>-<k>].png
    presentation.pdf
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from playwright.sync_api import Page

from .browser import open_browser_session, open_presentation
from .capture import screenshot_filename, take_screenshot
from .config import ExportConfig, SubSlideSpec
from .navigator import SlideNavigator
from .pdf import PdfAssembler
from .readiness import hide_ui_elements
from .server import ServerUnavailableError, check_server

DEFAULT_OUTPUT_DIR = 'exports'
SCREENSHOTS_DIRNAME = 'screenshots'
PDF_FILENAME = 'presentation.pdf'


@dataclass
class ExportResult:
    """Files produced by an export run."""
    pdf_path: Path
    screenshot_dir: Path
    screenshots: List[Path] = field(default_factory=list)
    page_count: int = 0


def expected_page_count(config: ExportConfig) -> int:
    """Number of PDF pages an export of ``config`` produces."""
    total = 0
    for slide_index in range(config.total_slides):
        spec = config.sub_slides_for(slide_index)
        total += spec.count if spec else 1
    return total


def export_slides(page: Page, config: ExportConfig, output_dir: Union[str, Path]) -> ExportResult:
    """Export every slide of an already loaded presentation.

    Screenshots are written as they are taken. The PDF is written once, after
    the last slide; an error before that leaves only the screenshots behind.

    Args:
        page: Page showing the presentation
        config: Export configuration
        output_dir: Directory receiving screenshots/ and presentation.pdf

    Returns:
        ExportResult describing the written files
    """
    output_dir = Path(output_dir)
    screenshot_dir = output_dir / SCREENSHOTS_DIRNAME
    screenshot_dir.mkdir(parents=True, exist_ok=True)

    result = ExportResult(pdf_path=output_dir / PDF_FILENAME, screenshot_dir=screenshot_dir)
    navigator = SlideNavigator(page, config)
    assembler = PdfAssembler()

    try:
        for slide_index in range(config.total_slides):
            print(f"Exporting slide {slide_index + 1}/{config.total_slides}...")
            navigator.go_to_slide(slide_index)

            spec = config.sub_slides_for(slide_index)
            if spec:
                print(f"   Found {spec.count} {spec.label}")
                for sub_index in spec.indices():
                    if sub_index > spec.start:
                        navigator.next_sub_slide()
                    _export_page(page, config, assembler, result, slide_index, spec, sub_index)
                    print(f"      Exported {spec.type} {spec.display_number(sub_index)}")
                navigator.reset_sub_slides(spec)
            else:
                _export_page(page, config, assembler, result, slide_index)
                print("   Exported")

        print(f"\nSaving PDF ({assembler.page_count} pages)...")
        assembler.save(result.pdf_path)
        result.page_count = assembler.page_count
    finally:
        assembler.close()

    return result


def _export_page(
    page: Page,
    config: ExportConfig,
    assembler: PdfAssembler,
    result: ExportResult,
    slide_index: int,
    spec: Optional[SubSlideSpec] = None,
    sub_index: Optional[int] = None,
) -> None:
    if config.hide_ui_elements:
        hide_ui_elements(page, config)

    screenshot = take_screenshot(page, slide_index, config)
    path = result.screenshot_dir / screenshot_filename(slide_index, spec, sub_index)
    path.write_bytes(screenshot)
    result.screenshots.append(path)

    assembler.add_screenshot(screenshot)


def run_export(config: ExportConfig, output_dir: Optional[Union[str, Path]] = None) -> ExportResult:
    """Check the dev server, open a browser and export the presentation.

    Raises:
        ServerUnavailableError: if the dev server does not answer; raised
            before any browser is launched
        BrowserLaunchError: if Chromium cannot be started
    """
    output_dir = Path(output_dir) if output_dir is not None else Path.cwd() / DEFAULT_OUTPUT_DIR

    print("Checking if dev server is running...")
    if not check_server(config.dev_server_url):
        raise ServerUnavailableError(config.dev_server_url)
    print("Dev server is running\n")

    output_dir.mkdir(parents=True, exist_ok=True)

    print("Launching browser...")
    with open_browser_session(config) as page:
        print(f"Navigating to {config.dev_server_url}...")
        open_presentation(page, config)
        print("Presentation loaded\n")

        return export_slides(page, config, output_dir)
