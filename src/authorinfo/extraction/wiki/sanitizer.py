# ABOUTME: Turns the lead section of an article into a display-ready HTML fragment
# ABOUTME: Ordered rewrite rules: links, templates, citations, comments, emphasis, whitespace

import re
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import quote

from authorinfo.core.models import BASE_URL_PLACEHOLDER, substitute_base_url
from authorinfo.extraction.base import ConfigurationError, Translator
from authorinfo.extraction.wiki.infobox import TRIM_CHARS, iter_balanced

HEADING_MARKER = "=="
FILE_LINK_PREFIXES = ("[[file:", "[[image:")

__all__ = [
    "BASE_URL_PLACEHOLDER",
    "RewriteRule",
    "WikiBodySanitizer",
    "search_link",
    "strip_file_links",
    "substitute_base_url",
    "truncate_at_heading",
]


@dataclass(frozen=True, slots=True)
class RewriteRule:
    """One global substitution pass over the text."""

    name: str
    pattern: re.Pattern[str]
    replacement: str | Callable[[re.Match[str]], str]

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def search_link(target: str, text: str) -> str:
    """Anchor pointing at a catalog search for ``target``."""
    return f'<a href="{BASE_URL_PLACEHOLDER}?lookfor=%22{quote(target, safe="")}%22&amp;type=AllFields">{text}</a>'


def truncate_at_heading(body: str) -> str:
    """Keep the text before the first section heading.

    A body without headings is kept whole.
    """
    index = body.find(HEADING_MARKER)
    if index != -1:
        body = body[:index]
    return body.strip(TRIM_CHARS)


def strip_file_links(body: str) -> str:
    """Remove [[File:...]] and [[Image:...]] links, including anything nested in them."""
    pieces: list[str] = []
    last = 0
    for start, end in iter_balanced(body, "[", "]"):
        if body[start:end].lower().startswith(FILE_LINK_PREFIXES):
            pieces.append(body[last:start])
            last = end
    pieces.append(body[last:])
    return "".join(pieces)


class WikiBodySanitizer:
    """Sanitize wiki markup of an article's lead section.

    The rules run strictly in order; later rules rely on earlier ones having
    already turned links into anchors and removed citation noise.
    """

    def __init__(self, translator: Translator | None = None):
        self.translator = translator
        self.rules = self._build_rules()

    def sanitize(self, body: str) -> str:
        text = strip_file_links(truncate_at_heading(body))
        for rule in self.rules:
            text = rule.apply(text)
        return text

    def _pronunciation(self, match: re.Match[str]) -> str:
        if self.translator is None:
            raise ConfigurationError("A translator is required to render pronunciation templates")
        return f"{self.translator.translate('pronounced')} /{match.group(1)}/"

    def _build_rules(self) -> list[RewriteRule]:
        return [
            RewriteRule(
                "wiki_link",
                re.compile(r"\[\[([^\]|]*?)\]\]"),
                lambda m: search_link(m.group(1), m.group(1)),
            ),
            RewriteRule(
                "piped_wiki_link",
                re.compile(r"\[\[([^\]]*?)\|([^\]]*?)\]\]"),
                lambda m: search_link(m.group(1), m.group(2)),
            ),
            RewriteRule("pronunciation", re.compile(r"\{\{pron-en\|([^}]*?)\}\}"), self._pronunciation),
            RewriteRule("ndash", re.compile(r"\{\{ndash\}\}"), " - "),
            RewriteRule("template", re.compile(r"\{\{[^}]*?\}\}"), ""),
            RewriteRule("ref_pair", re.compile(r"<ref[^/]*?>.*?</ref>", re.DOTALL), ""),
            RewriteRule("ref_self_closing", re.compile(r"<ref.*?/>", re.DOTALL), ""),
            RewriteRule("comment", re.compile(r"<!--.*?-->\n*", re.DOTALL), ""),
            RewriteRule("bold", re.compile(r"'''([^']*?)'''"), r"<strong>\1</strong>"),
            RewriteRule("leading_newlines", re.compile(r"\A\n+"), ""),
            RewriteRule("paragraph_breaks", re.compile(r"\n{2,}"), "<br/><br/>"),
        ]
