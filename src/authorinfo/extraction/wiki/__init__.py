from .fetcher import WikipediaFetcher
from .infobox import (
    extract_body_text,
    extract_image_from_body,
    extract_image_from_infobox,
    extract_infobox,
    find_image,
    iter_balanced,
)
from .redirects import resolve_redirect
from .sanitizer import BASE_URL_PLACEHOLDER, WikiBodySanitizer, substitute_base_url

__all__ = [
    "BASE_URL_PLACEHOLDER",
    "WikiBodySanitizer",
    "WikipediaFetcher",
    "extract_body_text",
    "extract_image_from_body",
    "extract_image_from_infobox",
    "extract_infobox",
    "find_image",
    "iter_balanced",
    "resolve_redirect",
    "substitute_base_url",
]
