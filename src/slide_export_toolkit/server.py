"""Dev-server liveness probe."""

import logging

import requests

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 2.0


class ServerUnavailableError(RuntimeError):
    """The presentation's dev server did not answer the liveness probe."""

    def __init__(self, url: str):
        super().__init__(f"Dev server is not running at {url}")
        self.url = url


def check_server(url: str, timeout: float = PROBE_TIMEOUT) -> bool:
    """Return True if ``url`` answers a plain GET with HTTP 200.

    Redirects are not followed. Error pages, redirects, refused connections
    and timeouts all count as unavailable.
    """
    try:
        response = requests.get(url, timeout=timeout, allow_redirects=False)
    except requests.RequestException as e:
        logger.debug("Probe of %s failed: %s", url, e)
        return False
    logger.debug("Probe of %s returned HTTP %s", url, response.status_code)
    return response.status_code == 200
