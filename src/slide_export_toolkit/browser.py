"""
Headless Browser Session

One Chromium instance and one page are used for a whole export. After the
initial page load all movement between slides happens through key presses.
"""

import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from playwright.sync_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    sync_playwright,
)

from .config import ExportConfig
from .readiness import wait_for_animation

logger = logging.getLogger(__name__)

LAUNCH_TIMEOUT = 60000
PAGE_TIMEOUT = 60000
GOTO_TIMEOUT = 30000
PROGRESS_BAR_TIMEOUT = 10000
INITIAL_SETTLE_DELAY = 1000

LAUNCH_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-gpu',
    '--disable-software-rasterizer',
]

CHROME_PATHS = {
    'darwin': [
        '/Applications/Google Chrome.app/Contents/MacOS/Google Chrome',
        '/Applications/Chromium.app/Contents/MacOS/Chromium',
    ],
    'win32': [
        'C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe',
        'C:\\Program Files (x86)\\Google\\Chrome\\Application\\chrome.exe',
    ],
}


class BrowserLaunchError(RuntimeError):
    """No usable Chromium executable could be started."""


def find_chrome_executable(platform: Optional[str] = None) -> Optional[str]:
    """Find an installed Chrome/Chromium on macOS or Windows.

    Returns None on other platforms or when nothing is installed, in which
    case Playwright's bundled Chromium is used.
    """
    platform = platform or sys.platform
    for candidate in CHROME_PATHS.get(platform, []):
        if os.path.exists(candidate):
            return candidate
    return None


@contextmanager
def open_browser_session(config: ExportConfig, executable_path: Optional[str] = None) -> Iterator[Page]:
    """Launch headless Chromium and yield its single page.

    The browser is closed when the block exits, whether or not it raised.

    Raises:
        BrowserLaunchError: if Chromium cannot be launched
    """
    executable_path = executable_path or find_chrome_executable()
    if executable_path:
        print(f"   Using Chrome: {executable_path}")

    with sync_playwright() as playwright:
        try:
            browser = playwright.chromium.launch(
                headless=True,
                args=LAUNCH_ARGS,
                executable_path=executable_path,
                timeout=LAUNCH_TIMEOUT,
            )
        except PlaywrightError as e:
            raise BrowserLaunchError(
                f"Could not launch Chromium: {e}\n"
                "   Install a browser with: python -m playwright install chromium"
            ) from e

        try:
            page = browser.new_page(viewport={
                'width': config.viewport.width,
                'height': config.viewport.height,
            })
            page.set_default_timeout(PAGE_TIMEOUT)
            page.set_default_navigation_timeout(PAGE_TIMEOUT)
            yield page
        finally:
            browser.close()


def open_presentation(page: Page, config: ExportConfig) -> None:
    """Load the presentation once and wait for it to render."""
    page.goto(config.dev_server_url, wait_until='networkidle', timeout=GOTO_TIMEOUT)

    try:
        page.wait_for_selector(config.selectors.progress_bar, timeout=PROGRESS_BAR_TIMEOUT)
    except PlaywrightTimeoutError:
        logger.warning("Progress bar '%s' not found, continuing anyway", config.selectors.progress_bar)

    wait_for_animation(page, config, INITIAL_SETTLE_DELAY)
