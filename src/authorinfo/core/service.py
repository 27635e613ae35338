# ABOUTME: High-level service API for author lookups against Wikipedia
# ABOUTME: Runs the fetch / redirect / extract loop with redirect cycle protection

from __future__ import annotations

from pydantic import ValidationError

from authorinfo.config import get_config
from authorinfo.core.models import (
    AuthorInfo,
    LookupOutcome,
    LookupRequest,
    LookupState,
    PageNotFound,
    Redirect,
    ResolvedPage,
)
from authorinfo.extraction.base import HttpCapability, Translator, UnavailableError
from authorinfo.extraction.wiki import (
    WikiBodySanitizer,
    WikipediaFetcher,
    extract_body_text,
    extract_infobox,
    find_image,
    resolve_redirect,
)
from authorinfo.services.http import HttpxCapability
from authorinfo.utils.logging import get_logger, with_lookup_context


class AuthorInfoService:
    """Look up author information on Wikipedia.

    Every call starts with an empty visited set, so nothing learned during one
    lookup affects the next. Transport failures, missing pages and redirect
    loops all end in an empty result; a missing translator is raised.
    """

    def __init__(
        self,
        http: HttpCapability | None = None,
        translator: Translator | None = None,
        language: str | None = None,
        max_redirects: int | None = None,
        fetcher: WikipediaFetcher | None = None,
    ):
        config = get_config()
        self._owns_http = http is None and fetcher is None
        if fetcher is None:
            if http is None:
                http = HttpxCapability()
            fetcher = WikipediaFetcher(http)
        self.http = http
        self.fetcher = fetcher
        self.sanitizer = WikiBodySanitizer(translator)
        self.language = language or config.language
        self.max_redirects = config.max_redirects if max_redirects is None else max_redirects
        self.logger = get_logger(__name__)

    def set_language(self, language: str) -> None:
        """Change the default Wikipedia language for later lookups."""
        self.language = language

    async def get(self, author: str, language: str | None = None) -> AuthorInfo | None:
        """Return author information, or None when nothing usable was found."""
        try:
            request = LookupRequest(subject_title=author, language=language or self.language)
        except ValidationError as e:
            self.logger.info("Rejected lookup request", author=author, errors=e.error_count())
            return None
        return await self.lookup(request)

    async def lookup(self, request: LookupRequest) -> AuthorInfo | None:
        outcome = await self.resolve(request)
        return outcome.author_info

    async def resolve(self, request: LookupRequest) -> LookupOutcome:
        """Run a lookup and report the state it ended in."""
        visited: set[str] = set()
        tried: list[str] = []
        title = request.subject_title
        redirects = 0

        with with_lookup_context(request.subject_title, request.language) as logger:
            while True:
                if title in visited:
                    logger.info("Redirect loop detected", title=title, titles_tried=tried)
                    return LookupOutcome(state=LookupState.ALREADY_VISITED, titles_tried=tried)
                visited.add(title)
                tried.append(title)

                try:
                    raw_page = await self.fetcher.fetch_page(title, request.language)
                    outcome = resolve_redirect(raw_page)
                except UnavailableError as e:
                    logger.warning("Wikipedia unavailable", title=title, error=str(e), error_type=type(e).__name__)
                    return LookupOutcome(state=LookupState.FAILED, titles_tried=tried, error=str(e))

                if isinstance(outcome, PageNotFound):
                    logger.info("No such page", title=title)
                    return LookupOutcome(state=LookupState.FAILED, titles_tried=tried, error="page not found")

                if isinstance(outcome, Redirect):
                    redirects += 1
                    if redirects > self.max_redirects:
                        logger.warning("Too many redirects", title=title, max_redirects=self.max_redirects)
                        return LookupOutcome(
                            state=LookupState.FAILED, titles_tried=tried, error="too many redirects"
                        )
                    logger.debug("Following redirect", source=title, target=outcome.target)
                    title = outcome.target
                    continue

                info = await self._extract(outcome, request.language)
                logger.info(
                    "Author lookup complete",
                    name=info.name,
                    has_image=info.has_image,
                    description_length=len(info.description),
                )
                return LookupOutcome(state=LookupState.DONE, author_info=info, titles_tried=tried)

    async def _extract(self, page: ResolvedPage, language: str) -> AuthorInfo:
        infobox = extract_infobox(page.text)
        body = extract_body_text(page.text, infobox)
        info = AuthorInfo(name=page.title, description=self.sanitizer.sanitize(body), language=language)

        image = find_image(page.text, infobox)
        if image is None:
            return info

        url = await self.fetcher.fetch_image_url(image.name, language)
        if url is None:
            self.logger.debug("Image URL unavailable", image_name=image.name)
            return info
        return info.model_copy(update={"image": url, "image_caption": image.caption})

    async def close(self) -> None:
        """Release the HTTP client when this service created it."""
        if self._owns_http and self.http is not None:
            await self.http.close()
