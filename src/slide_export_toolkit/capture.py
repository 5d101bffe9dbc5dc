"""Full-page screenshot capture."""

from typing import Optional

from playwright.sync_api import Page

from .config import ExportConfig, SubSlideSpec
from .readiness import wait_for_slide_content


def take_screenshot(page: Page, slide_index: int, config: ExportConfig) -> bytes:
    """Capture the whole document as PNG once the slide has settled.

    The viewport is re-applied on every call since navigation may change it.
    Nothing is written to disk here.
    """
    page.set_viewport_size({
        'width': config.viewport.width,
        'height': config.viewport.height,
    })

    wait_for_slide_content(page, slide_index, config)

    return page.screenshot(type='png', full_page=True)


def screenshot_filename(
    slide_index: int,
    spec: Optional[SubSlideSpec] = None,
    sub_index: Optional[int] = None
) -> str:
    """Build the PNG filename for a slide or one of its sub-states.

    Examples:
        slide-3.png, slide-2-subSlide-1.png, slide-5-step-3.png
    """
    if spec is None or sub_index is None:
        return f"slide-{slide_index + 1}.png"
    return f"slide-{slide_index + 1}-{spec.type}-{spec.display_number(sub_index)}.png"
