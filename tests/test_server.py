"""Tests for the dev-server probe and browser discovery."""

import requests

from slide_export_toolkit import browser, server
from slide_export_toolkit.server import check_server


class _Response:
    def __init__(self, status_code):
        self.status_code = status_code


def test_server_up(monkeypatch):
    calls = []

    def fake_get(url, timeout, **kwargs):
        calls.append((url, timeout, kwargs))
        return _Response(200)

    monkeypatch.setattr(server.requests, "get", fake_get)
    assert check_server("http://localhost:3000") is True
    assert calls == [("http://localhost:3000", 2.0, {"allow_redirects": False})]


def test_error_status_is_unavailable(monkeypatch):
    monkeypatch.setattr(server.requests, "get", lambda url, timeout, **kwargs: _Response(500))
    assert check_server("http://localhost:3000") is False


def test_redirect_is_unavailable(monkeypatch):
    """A 302 counts as down even if the redirect target would answer 200."""
    def fake_get(url, timeout, allow_redirects=True):
        return _Response(200 if allow_redirects else 302)

    monkeypatch.setattr(server.requests, "get", fake_get)
    assert check_server("http://localhost:3000") is False


def test_timeout_is_unavailable(monkeypatch):
    def fake_get(url, timeout, **kwargs):
        raise requests.Timeout("timed out")

    monkeypatch.setattr(server.requests, "get", fake_get)
    assert check_server("http://localhost:3000") is False


def test_connection_refused_is_unavailable(monkeypatch):
    def fake_get(url, timeout, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(server.requests, "get", fake_get)
    assert check_server("http://localhost:3000") is False


def test_chrome_found_on_macos(monkeypatch):
    chromium = '/Applications/Chromium.app/Contents/MacOS/Chromium'
    monkeypatch.setattr(browser.os.path, "exists", lambda path: path == chromium)
    assert browser.find_chrome_executable('darwin') == chromium


def test_chrome_falls_back_to_bundled(monkeypatch):
    monkeypatch.setattr(browser.os.path, "exists", lambda path: False)
    assert browser.find_chrome_executable('darwin') is None
    assert browser.find_chrome_executable('win32') is None


def test_linux_delegates_to_playwright(monkeypatch):
    monkeypatch.setattr(browser.os.path, "exists", lambda path: True)
    assert browser.find_chrome_executable('linux') is None
