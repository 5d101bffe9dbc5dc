"""
Slide Navigation

Moves the presentation between slides and sub-slides with synthetic key
presses. The current slide is read back from the page's progress indicator
rather than tracked locally, so the presentation stays the source of truth.
"""

import logging

from playwright.sync_api import Page

from .config import ExportConfig, SubSlideSpec
from .readiness import wait_for_animation

logger = logging.getLogger(__name__)

NEXT_SLIDE_KEY = 'ArrowRight'
PREVIOUS_SLIDE_KEY = 'ArrowLeft'
NEXT_SUB_SLIDE_KEY = 'ArrowDown'
PREVIOUS_SUB_SLIDE_KEY = 'ArrowUp'

SAME_SLIDE_DELAY = 500

_CURRENT_SLIDE_SCRIPT = """(selector) => {
    const progressBar = document.querySelector(selector);
    const value = progressBar ? progressBar.getAttribute('aria-valuenow') : null;
    const parsed = value ? parseInt(value, 10) : NaN;
    return isNaN(parsed) ? 0 : parsed - 1;
}"""


class SlideNavigator:
    """Keyboard-driven navigation for one presentation page."""

    def __init__(self, page: Page, config: ExportConfig):
        self.page = page
        self.config = config

    def current_slide(self) -> int:
        """Zero-based slide index shown by the progress indicator (0 if absent)."""
        return int(self.page.evaluate(_CURRENT_SLIDE_SCRIPT, self.config.selectors.progress_bar))

    def go_to_slide(self, slide_index: int) -> int:
        """Press next/previous until ``slide_index`` is reached.

        Each key press gets its own settle wait; the presentation drops keys
        sent during a transition.

        Returns:
            Signed number of key presses sent
        """
        steps = slide_index - self.current_slide()
        if steps == 0:
            wait_for_animation(self.page, self.config, SAME_SLIDE_DELAY)
            return 0

        key = NEXT_SLIDE_KEY if steps > 0 else PREVIOUS_SLIDE_KEY
        logger.debug("Navigating %d step(s) to slide %d", steps, slide_index + 1)
        for _ in range(abs(steps)):
            self._press(key, self.config.slide_transition_wait_time)
        return steps

    def next_sub_slide(self) -> None:
        self._press(NEXT_SUB_SLIDE_KEY, self.config.sub_slide_transition_wait_time)

    def previous_sub_slide(self) -> None:
        self._press(PREVIOUS_SUB_SLIDE_KEY, self.config.sub_slide_transition_wait_time)

    def reset_sub_slides(self, spec: SubSlideSpec) -> None:
        """Return a slide to its first sub-state after its last one was shown.

        Sub-slides are walked back one by one. Steps wrap around, so a single
        extra "down" brings the slide back to step 1.
        """
        if spec.type == 'subSlide':
            for _ in range(spec.max):
                self.previous_sub_slide()
        else:
            self.next_sub_slide()

    def _press(self, key: str, settle_delay: int) -> None:
        self.page.keyboard.press(key)
        wait_for_animation(self.page, self.config, settle_delay)
