# ABOUTME: Collaborator protocols and error taxonomy for the author lookup pipeline
# ABOUTME: HTTP and translation capabilities are injected; failures are typed exceptions

from typing import Protocol

from pydantic import BaseModel


class HttpResponse(BaseModel):
    """Outcome of one HTTP exchange as seen by the fetcher."""

    success: bool
    status_code: int
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class HttpCapability(Protocol):
    """Protocol for the transport used to reach the Wikipedia API."""

    async def send(self, method: str, uri: str) -> HttpResponse:
        """Send a request and return the response.

        Raises:
            UnavailableError: If no response could be obtained
        """
        ...


class Translator(Protocol):
    """Protocol for key/value message lookup."""

    def translate(self, key: str) -> str: ...


class AuthorInfoError(Exception):
    """Base class for author lookup failures."""

    pass


class UnavailableError(AuthorInfoError):
    """Raised when the remote API cannot be reached or answers unusably."""

    pass


class MalformedResponseError(UnavailableError):
    """Raised when a decoded response lacks the expected page structure."""

    pass


class ConfigurationError(AuthorInfoError):
    """Raised when a required collaborator is missing."""

    pass


class MalformedMarkupError(AuthorInfoError):
    """Raised when wiki markup lacks a structure the caller asked for."""

    pass
