# ABOUTME: Redirect detection for fetched pages
# ABOUTME: Picks the canonical page of a response or the title it redirects to

import re
from collections.abc import Mapping
from typing import Any

from authorinfo.core.models import PageNotFound, Redirect, RedirectOutcome, ResolvedPage
from authorinfo.extraction.base import MalformedResponseError
from authorinfo.extraction.wiki.fetcher import NOT_FOUND_PAGE_ID

REDIRECT_MARKER = "#redirect"
REDIRECT_TARGET_RE = re.compile(r"\[\[(.*)\]\]")


def resolve_redirect(raw_page: Mapping[str, Any]) -> RedirectOutcome:
    """Decide what a page response stands for.

    Pages are examined in response order. The first page that is not a
    redirect wins. If every page redirects, the last page's target is used.

    Raises:
        MalformedResponseError: If the response has no pages or a page has no revisions
    """
    pages = _pages(raw_page)
    if NOT_FOUND_PAGE_ID in pages:
        return PageNotFound()

    title = text = target = None
    for page in pages.values():
        if not isinstance(page, Mapping):
            raise MalformedResponseError(f"Unexpected page entry of type {type(page).__name__}")
        title = page.get("title", "")
        text = _latest_revision_text(page)
        target = redirect_target(text)
        if target is None:
            break

    if target is not None:
        return Redirect(target=target)
    return ResolvedPage(title=title, text=text)


def redirect_target(text: str) -> str | None:
    """Return the redirect target named on the first line of ``text``, if any."""
    first_line = text.split("\n", 1)[0]
    if REDIRECT_MARKER not in first_line.lower():
        return None

    match = REDIRECT_TARGET_RE.search(first_line)
    if not match:
        return None

    # Section anchors are not part of the title
    target = match.group(1).split("#", 1)[0].strip()
    return target or None


def _pages(raw_page: Mapping[str, Any]) -> dict[str, Any]:
    query = raw_page.get("query")
    pages = query.get("pages") if isinstance(query, Mapping) else None
    if not isinstance(pages, Mapping) or not pages:
        raise MalformedResponseError("Response has no query.pages mapping")
    return dict(pages)


def _latest_revision_text(page: Mapping[str, Any]) -> str:
    revisions = page.get("revisions")
    if not isinstance(revisions, list) or not revisions:
        raise MalformedResponseError(f"Page {page.get('title')!r} has no revisions")

    content = revisions[0].get("*") if isinstance(revisions[0], Mapping) else None
    if not isinstance(content, str):
        raise MalformedResponseError(f"Page {page.get('title')!r} revision has no content")
    return content
