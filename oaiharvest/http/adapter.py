"""Transport used by the client to fetch raw OAI-PMH responses."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

import requests

from oaiharvest.config import Settings
from oaiharvest.exceptions import HttpAdapterError

logger = logging.getLogger(__name__)


class HttpAdapter(Protocol):
    def request(self, url: str, params: Mapping[str, str]) -> str:
        """Perform a GET and return the response body; raise on failure."""


class RequestsAdapter:
    """HttpAdapter backed by a ``requests.Session``.

    Retries and backoff are left to the caller, e.g. by mounting a
    ``requests.adapters.HTTPAdapter`` with a retry policy on ``session``.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        timeout: float = Settings.timeout,
        user_agent: Optional[str] = None,
    ):
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = user_agent or Settings.user_agent
        elif user_agent:
            session.headers["User-Agent"] = user_agent
        self.session = session

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RequestsAdapter":
        settings = settings or Settings.from_env()
        return cls(timeout=settings.timeout, user_agent=settings.user_agent)

    def request(self, url: str, params: Mapping[str, str]) -> str:
        logger.debug("GET %s", url, extra={"params": dict(params)})
        try:
            response = self.session.get(url, params=dict(params), timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise HttpAdapterError(str(exc)) from exc
        if "charset" not in response.headers.get("Content-Type", "").lower():
            # XML without a declared charset is UTF-8, not ISO-8859-1.
            response.encoding = "utf-8"
        return response.text
