"""Shared fixtures: a scripted stand-in for a Playwright page."""

import fitz
import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from slide_export_toolkit.config import ExportConfig


def make_png(width: int = 8, height: int = 6) -> bytes:
    """Create a small white PNG."""
    pixmap = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pixmap.clear_with(255)
    return pixmap.tobytes("png")


class FakeKeyboard:
    def __init__(self, page):
        self.page = page

    def press(self, key):
        self.page.events.append(('press', key))
        if key == 'ArrowRight':
            self.page.slide += 1
        elif key == 'ArrowLeft':
            self.page.slide -= 1


class FakePage:
    """Records every interaction; moves its slide on left/right presses."""

    def __init__(self, slide=0, png=None, polls_time_out=False, fail_on_screenshot=None):
        self.events = []
        self.keyboard = FakeKeyboard(self)
        self.slide = slide
        self.png = png or make_png()
        self.polls_time_out = polls_time_out
        self.fail_on_screenshot = fail_on_screenshot
        self.screenshots_taken = 0

    def evaluate(self, script, arg=None):
        if 'aria-valuenow' in script:
            return self.slide
        self.events.append(('evaluate', arg))
        return None

    def wait_for_timeout(self, ms):
        self.events.append(('wait', ms))

    def wait_for_function(self, expression, arg=None, timeout=None):
        self.events.append(('poll', arg, timeout))
        if self.polls_time_out:
            raise PlaywrightTimeoutError("Timeout exceeded")

    def wait_for_selector(self, selector, state=None, timeout=None):
        self.events.append(('selector', selector, timeout))
        if self.polls_time_out:
            raise PlaywrightTimeoutError("Timeout exceeded")

    def set_viewport_size(self, size):
        self.events.append(('viewport', size['width'], size['height']))

    def goto(self, url, wait_until=None, timeout=None):
        self.events.append(('goto', url))

    def screenshot(self, type=None, full_page=False):
        self.screenshots_taken += 1
        if self.fail_on_screenshot == self.screenshots_taken:
            raise RuntimeError("Target page, context or browser has been closed")
        self.events.append(('screenshot', full_page))
        return self.png

    def named(self, kind):
        return [e for e in self.events if e[0] == kind]

    def presses(self):
        return [e[1] for e in self.events if e[0] == 'press']


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def config_data():
    return {
        "devServerUrl": "http://localhost:3000",
        "totalSlides": 3,
        "slidesWithSubSlides": {
            "1": {"type": "subSlide", "max": 2, "comment": "Auto-detected from IntroSlide.tsx"}
        },
        "animationWaitTime": 2000,
        "slideTransitionWaitTime": 1000,
        "subSlideTransitionWaitTime": 2000,
    }


@pytest.fixture
def config(config_data):
    return ExportConfig.model_validate(config_data)
