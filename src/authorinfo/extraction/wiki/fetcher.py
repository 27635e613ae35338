# ABOUTME: MediaWiki API client for page wikitext and image metadata
# ABOUTME: Decodes JSON responses into nested mappings and recovers image URLs from raw text

import json
import re
from typing import Any

import httpx

from authorinfo.config import get_config
from authorinfo.extraction.base import HttpCapability, HttpResponse, MalformedResponseError, UnavailableError
from authorinfo.utils.logging import get_logger, log_api_call

# Page id the API uses for titles it does not have locally
NOT_FOUND_PAGE_ID = "-1"

# Last resort for image metadata: first quoted absolute URL in the response
URL_LITERAL_RE = re.compile(r'"(https?:[^"]*)"')


class WikipediaFetcher:
    """Fetch page content and image URLs from a language-specific Wikipedia."""

    def __init__(
        self,
        http: HttpCapability,
        api_url_template: str | None = None,
        image_width: int | None = None,
    ):
        config = get_config()
        self.http = http
        self.api_url_template = api_url_template or config.api_url_template
        self.image_width = image_width or config.image_width
        self.logger = get_logger(__name__)

    def api_url(self, language: str) -> str:
        return self.api_url_template.format(lang=language)

    def page_uri(self, title: str, language: str) -> str:
        """Query for the latest revision content of exactly ``title``."""
        params = {
            "action": "query",
            "prop": "revisions",
            "rvprop": "content",
            "format": "json",
            "titles": title,
        }
        return str(httpx.URL(self.api_url(language), params=params))

    def image_uri(self, image_name: str, language: str) -> str:
        """Query for the file URL of ``image_name``."""
        params = {
            "action": "query",
            "prop": "imageinfo",
            "iiprop": "url",
            "iiurlwidth": str(self.image_width),
            "format": "json",
            "titles": f"Image:{image_name}",
        }
        return str(httpx.URL(self.api_url(language), params=params))

    async def fetch_page(self, title: str, language: str) -> dict[str, Any]:
        """Fetch and decode the API response for ``title``.

        Raises:
            UnavailableError: On transport failure, a non-success status, an
                undecodable body or an API-level error
        """
        response = await self._get(self.page_uri(title, language))
        if not response.success:
            raise UnavailableError(f"Wikipedia answered HTTP {response.status_code} for {title!r}")

        try:
            data = json.loads(response.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UnavailableError(f"Undecodable response for {title!r}: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponseError(f"Unexpected response type {type(data).__name__} for {title!r}")

        if "error" in data:
            error = data["error"]
            info = error.get("info") if isinstance(error, dict) else error
            raise UnavailableError(f"Wikipedia API error for {title!r}: {info}")

        self.logger.debug("Fetched page", title=title, language=language, response_bytes=len(response.body))
        return data

    async def fetch_image_url(self, image_name: str, language: str) -> str | None:
        """Look up the URL of an image file.

        Returns None when the request fails or no URL can be found; a missing
        image never fails the surrounding lookup.
        """
        try:
            response = await self._get(self.image_uri(image_name, language))
        except UnavailableError as e:
            self.logger.warning("Image lookup failed", image_name=image_name, error=str(e))
            return None

        if not response.success:
            self.logger.warning("Image lookup rejected", image_name=image_name, status_code=response.status_code)
            return None

        raw = response.text
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            data = None

        url = _imageinfo_url(data) if isinstance(data, dict) else None
        if url is None:
            url = _scan_for_url(raw)
            if url:
                self.logger.debug("Recovered image URL from raw response", image_name=image_name, url=url)

        return url

    @log_api_call("mediawiki")
    async def _get(self, uri: str) -> HttpResponse:
        return await self.http.send("GET", uri)


def _imageinfo_url(data: dict[str, Any]) -> str | None:
    """Read ``query.pages.<id>.imageinfo[0].url``, preferring the not-found page id."""
    query = data.get("query")
    pages = query.get("pages") if isinstance(query, dict) else None
    if not isinstance(pages, dict):
        return None

    ordered = sorted(pages.items(), key=lambda item: item[0] != NOT_FOUND_PAGE_ID)
    for _, page in ordered:
        if not isinstance(page, dict):
            continue
        imageinfo = page.get("imageinfo")
        if isinstance(imageinfo, list) and imageinfo and isinstance(imageinfo[0], dict):
            url = imageinfo[0].get("url")
            if isinstance(url, str) and url:
                return url
    return None


def _scan_for_url(raw: str) -> str | None:
    match = URL_LITERAL_RE.search(raw)
    if not match:
        return None
    return match.group(1).replace("\\/", "/")
