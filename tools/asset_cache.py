"""Best-effort offline cache for static GET requests.

Navigation requests go to the network first and fall back to the cached app
shell. Every other GET is served from the cache first and filled on a miss.
Responses from the generative AI provider are never cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional
from urllib.parse import urljoin, urlparse

import requests

LOGGER = logging.getLogger(__name__)

CACHE_VERSION = "smart-outfit-assistant-v2"
EXCLUDED_HOSTS = ("generativelanguage.googleapis.com",)
APP_SHELL_PATH = "/index.html"


@dataclass
class CachedResponse:
    url: str
    status_code: int
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    from_cache: bool = False


class OfflineAssetCache:
    """In-process cache keyed by version, then by absolute URL."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        version: str = CACHE_VERSION,
        entries: Optional[Dict[str, Dict[str, CachedResponse]]] = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.base_url = base_url
        self.session = session or requests.Session()
        self.version = version
        self.timeout_seconds = timeout_seconds
        self._entries: Dict[str, Dict[str, CachedResponse]] = entries if entries is not None else {}
        self._entries.setdefault(version, {})

    @property
    def _current(self) -> Dict[str, CachedResponse]:
        return self._entries[self.version]

    def _absolute(self, url: str) -> str:
        return urljoin(self.base_url, url)

    @staticmethod
    def is_cacheable(url: str) -> bool:
        host = urlparse(url).hostname or ""
        return not any(host == excluded or host.endswith("." + excluded) for excluded in EXCLUDED_HOSTS)

    def _network(self, url: str, method: str = "GET") -> CachedResponse:
        response = self.session.request(method, url, timeout=self.timeout_seconds)
        return CachedResponse(
            url=url,
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    def _store(self, response: CachedResponse) -> None:
        if response.status_code != 200 or not self.is_cacheable(response.url):
            return
        self._current[response.url] = response

    def match(self, url: str) -> Optional[CachedResponse]:
        cached = self._current.get(self._absolute(url))
        if cached is None:
            return None
        return CachedResponse(
            url=cached.url,
            status_code=cached.status_code,
            content=cached.content,
            headers=dict(cached.headers),
            from_cache=True,
        )

    def precache(self, urls: Iterable[str]) -> None:
        for url in urls:
            self._store(self._network(self._absolute(url)))

    def fetch(self, url: str, method: str = "GET", navigate: bool = False) -> CachedResponse:
        absolute = self._absolute(url)
        if method.upper() != "GET":
            return self._network(absolute, method=method)

        if navigate:
            try:
                return self._network(absolute)
            except requests.RequestException:
                shell = self.match(APP_SHELL_PATH)
                if shell is None:
                    raise
                LOGGER.info("Serving cached app shell", extra={"url": absolute})
                return shell

        cached = self.match(absolute)
        if cached is not None:
            return cached
        response = self._network(absolute)
        self._store(response)
        return response

    def activate(self) -> int:
        """Drop every cache version except the current one; returns how many were removed."""

        stale = [version for version in self._entries if version != self.version]
        for version in stale:
            del self._entries[version]
        return len(stale)


__all__ = ["CachedResponse", "OfflineAssetCache", "CACHE_VERSION", "APP_SHELL_PATH", "EXCLUDED_HOSTS"]
