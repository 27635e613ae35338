# ABOUTME: httpx-backed implementation of the HTTP capability consumed by the fetcher
# ABOUTME: Applies User-Agent, timeout and transport retry policy from configuration

import httpx

from authorinfo.config import get_config
from authorinfo.extraction.base import HttpResponse, UnavailableError
from authorinfo.utils.logging import get_logger
from authorinfo.utils.retry import http_retry


class HttpxCapability:
    """Send requests through an ``httpx.AsyncClient``.

    Transport failures are retried; once attempts are exhausted they surface as
    ``UnavailableError``. Any response, whatever its status, is returned with
    ``success`` reflecting a 2xx status.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        max_attempts: int | None = None,
        retry_wait: float = 0.5,
    ):
        config = get_config()
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": config.user_agent},
            timeout=config.http_timeout,
            follow_redirects=True,
        )
        self.max_attempts = max_attempts or config.http_max_attempts
        self.logger = get_logger(__name__)
        self._send_with_retry = http_retry(
            max_attempts=self.max_attempts, min_wait=retry_wait, max_wait=retry_wait * 10
        )(self._send_once)

    async def send(self, method: str, uri: str) -> HttpResponse:
        """Perform one logical request, retrying transport errors."""
        try:
            response = await self._send_with_retry(method, uri)
        except httpx.TransportError as e:
            self.logger.warning("HTTP request failed", method=method, uri=uri, error=str(e))
            raise UnavailableError(f"{method} {uri} failed: {e}") from e

        return HttpResponse(
            success=response.is_success,
            status_code=response.status_code,
            body=response.content,
        )

    async def _send_once(self, method: str, uri: str) -> httpx.Response:
        return await self.http_client.request(method, uri)

    async def close(self) -> None:
        """Close the underlying client."""
        await self.http_client.aclose()
