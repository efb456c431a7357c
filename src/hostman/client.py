"""HTTP client for the hostman service."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import requests

from .exceptions import ErrorHandler, NetworkError
from .table import Table

logger = logging.getLogger("hostman.client")

__all__ = ["SyncClient"]


class SyncClient:
    """Talks to one hostman service.

    There is deliberately no retry: any failure raises ``NetworkError`` and
    the caller's sync cycle is aborted.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.error_handler = ErrorHandler(logger)

    def _get(self, path: str) -> Table:
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": "hostman-agent/1.0"},
            )
            response.raise_for_status()
        except requests.RequestException as e:
            self.error_handler.log_and_raise(
                NetworkError, f"Request to {url} failed", e, {"url": url}
            )

        try:
            table = Table.from_dict(response.json())
            table.validate()
        except ValueError as e:
            self.error_handler.log_and_raise(
                NetworkError, f"Invalid table received from {url}", e, {"url": url}
            )
            raise  # pragma: no cover - log_and_raise always raises
        return table

    def report(self, hostname: str, ip: str) -> Table:
        """Upsert ``hostname -> ip`` on the service and return the merged table."""
        path = f"/update/{quote(hostname, safe='')}/{quote(ip, safe='')}/"
        return self._get(path)

    def fetch(self) -> Table:
        """Return the service's table without reporting anything."""
        return self._get("/get")
