"""Network reachability check run before every remote AI call."""

from __future__ import annotations

import logging
from typing import Callable

import requests

from assistant_app.config import DEFAULT_CONNECTIVITY_URL
from logic.errors import ConnectivityError

LOGGER = logging.getLogger(__name__)

ConnectivityCheck = Callable[[], bool]


class ConnectivityProbe:
    """Reports whether the AI provider host is reachable.

    Any HTTP answer, including an error status, counts as online; only
    connection failures and timeouts count as offline.
    """

    def __init__(
        self,
        url: str = DEFAULT_CONNECTIVITY_URL,
        timeout_seconds: float = 3.0,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def __call__(self) -> bool:
        try:
            self.session.head(self.url, timeout=self.timeout_seconds, allow_redirects=False)
        except (requests.ConnectionError, requests.Timeout) as exc:
            LOGGER.warning("Connectivity probe failed", extra={"error": str(exc)})
            return False
        return True


def require_online(check: ConnectivityCheck) -> None:
    """Raise :class:`ConnectivityError` when ``check`` reports no network path."""

    if not check():
        raise ConnectivityError()


__all__ = ["ConnectivityCheck", "ConnectivityProbe", "require_online"]
