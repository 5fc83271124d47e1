"""Errors raised by the OAI-PMH client."""

from __future__ import annotations


class OaiHarvestError(Exception):
    """Base class for every error raised by this package."""


class MalformedResponseError(OaiHarvestError):
    """Raised when the response body cannot be parsed as XML."""


class OaipmhError(OaiHarvestError):
    """Raised when the server answers with an OAI-PMH ``<error>`` element."""

    def __init__(self, code: str, message: str):
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" if self.code else self.message


class HttpAdapterError(OaiHarvestError):
    """Raised when the remote OAI endpoint cannot be reached."""


class ResumptionTokenLoopError(OaiHarvestError):
    """Raised when the server hands back the resumption token it was just sent."""

    def __init__(self, token: str):
        super().__init__(token)
        self.token = token

    def __str__(self) -> str:
        return f"Server repeated resumption token {self.token!r}"


class ConfigError(OaiHarvestError):
    """Raised for invalid or incomplete source definitions."""
