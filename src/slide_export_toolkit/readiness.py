"""
Animation and Content Readiness

Heuristics deciding when a slide is safe to screenshot. Every wait here is
best effort: a poll that times out is logged and the export carries on with
whatever the page currently shows.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from playwright.sync_api import Page, TimeoutError as PlaywrightTimeoutError

from .config import ExportConfig

logger = logging.getLogger(__name__)

ANIMATION_POLL_TIMEOUT = 3000
CONTENT_VISIBLE_TIMEOUT = 5000
CONTENT_SETTLE_DELAY = 1500
HIDE_UI_SETTLE_DELAY = 300


@dataclass(frozen=True)
class ReadinessPredicate:
    """A browser-side check polled until it returns true.

    ``expression`` is a JavaScript function taking a single argument.
    """
    name: str
    expression: str

    def poll(self, page: Page, arg: Any = None, timeout: int = ANIMATION_POLL_TIMEOUT) -> bool:
        """Poll the predicate; return False instead of raising on timeout."""
        try:
            page.wait_for_function(self.expression, arg=arg, timeout=timeout)
        except PlaywrightTimeoutError:
            logger.debug("Readiness check '%s' timed out after %d ms", self.name, timeout)
            return False
        return True


MAIN_CONTENT_OPAQUE = ReadinessPredicate(
    name='main-content-opaque',
    expression="""(selector) => {
        const main = document.querySelector(selector);
        if (!main) return false;
        return parseFloat(window.getComputedStyle(main).opacity) > 0.9;
    }""",
)

# A finished typewriter effect leaves many lines in the terminal element.
TERMINAL_FILLED = ReadinessPredicate(
    name='terminal-filled',
    expression="""(minLines) => {
        const terminal = document.querySelector('[class*="Terminal"]') ||
                         document.querySelector('[class*="terminal"]');
        if (!terminal) return true;
        return terminal.querySelectorAll('div, p, span').length > minLines;
    }""",
)
TERMINAL_MIN_LINES = 20

_HIDE_UI_SCRIPT = """(selectors) => {
    for (const selector of [selectors.header, selectors.navigation, selectors.progressBar]) {
        const element = document.querySelector(selector);
        if (element) element.style.display = 'none';
    }
    document.querySelectorAll('[class*="fixed bottom"]').forEach((indicator) => {
        if (indicator.textContent && indicator.textContent.includes('/')) {
            indicator.style.display = 'none';
        }
    });
}"""


def wait_for_animation(page: Page, config: ExportConfig, delay: Optional[int] = None) -> None:
    """Sleep for ``delay`` ms (default: animationWaitTime), then wait up to 3s
    for the main content to become opaque."""
    page.wait_for_timeout(delay or config.animation_wait_time)
    MAIN_CONTENT_OPAQUE.poll(page, config.selectors.main_content, timeout=ANIMATION_POLL_TIMEOUT)


def wait_for_slide_content(page: Page, slide_index: int, config: ExportConfig) -> None:
    """Wait until a slide's content has rendered.

    Stacks a visibility wait, the slide's typewriter override (if any) and a
    final settle wait.
    """
    try:
        page.wait_for_selector(config.selectors.main_content, state='visible', timeout=CONTENT_VISIBLE_TIMEOUT)
    except PlaywrightTimeoutError:
        logger.debug("Main content '%s' not visible on slide %d", config.selectors.main_content, slide_index + 1)

    special = config.special_for(slide_index)
    if special.typewriter_effect:
        wait_time = special.effective_wait_time
        TERMINAL_FILLED.poll(page, TERMINAL_MIN_LINES, timeout=wait_time)
        page.wait_for_timeout(wait_time)

    wait_for_animation(page, config, CONTENT_SETTLE_DELAY)


def hide_ui_elements(page: Page, config: ExportConfig) -> None:
    """Hide header, navigation, progress bar and slide-counter badges.

    Not reverted; the presentation re-renders its chrome on navigation.
    """
    page.evaluate(_HIDE_UI_SCRIPT, config.selectors.model_dump(by_alias=True))
    wait_for_animation(page, config, HIDE_UI_SETTLE_DELAY)
