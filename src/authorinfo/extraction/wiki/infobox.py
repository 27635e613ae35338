# ABOUTME: Balanced bracket scanning plus infobox and image discovery in wiki markup
# ABOUTME: Infobox image fields take priority; the first [[Image:...]] link is the fallback

import re
from collections.abc import Iterator

from authorinfo.core.models import ImageRef, InfoboxSpan
from authorinfo.extraction.base import MalformedMarkupError
from authorinfo.utils.logging import get_logger

logger = get_logger(__name__)

INFOBOX_PREFIX = "{{Infobox"
BODY_IMAGE_PREFIX = "[[Image:"

IMAGE_NAME_KEYS = frozenset({"img", "image", "image:", "image_name"})
IMAGE_CAPTION_KEYS = frozenset({"caption", "img_capt", "image_caption"})

# Characters trimmed around infobox keys and values
TRIM_CHARS = " \t\n\r\0\x0b"

TEMPLATE_REMNANT_RE = re.compile(r"\{\{.*?\}\}")
TAG_RE = re.compile(r"<[^>]*>")


def iter_balanced(text: str, opener: str = "[", closer: str = "]") -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` for every top-level balanced group in ``text``.

    Nesting depth is unbounded. An opener that is never closed is skipped, so
    groups nested inside it are still found. Closers without an opener are
    ignored. Runs in linear time.
    """
    openers: list[int] = []
    match_end: dict[int, int] = {}
    stack: list[int] = []
    for index, char in enumerate(text):
        if char == opener:
            openers.append(index)
            stack.append(index)
        elif char == closer and stack:
            match_end[stack.pop()] = index + 1

    # Matched pairs nest or are disjoint, so the outermost ones are those
    # starting at or after the end of the previous outermost pair
    last_end = 0
    for start in openers:
        end = match_end.get(start)
        if end is not None and start >= last_end:
            yield start, end
            last_end = end


def split_top_level(text: str, separator: str = "|") -> list[str]:
    """Split on ``separator`` wherever it is not inside [[...]] or {{...}}."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char in "[{":
            depth += 1
        elif char in "]}" and depth > 0:
            depth -= 1
        elif char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def extract_infobox(body: str) -> InfoboxSpan | None:
    """Find the first top-level ``{{Infobox ...}}`` template."""
    for start, end in iter_balanced(body, "{", "}"):
        if body.startswith(INFOBOX_PREFIX, start):
            return InfoboxSpan(text=body[start:end], start=start, end=end)
    return None


def infobox_rows(infobox: InfoboxSpan) -> list[tuple[str, str]]:
    """Split an infobox into trimmed ``(key, value)`` rows.

    Raises:
        MalformedMarkupError: If the span is not wrapped in double braces
    """
    text = infobox.text
    if len(text) < 4 or not text.startswith("{{") or not text.endswith("}}"):
        raise MalformedMarkupError("Infobox text is not a {{...}} template")

    rows = []
    for row in text[2:-2].split("\n|"):
        key, _, value = row.partition("=")
        rows.append((key.strip(TRIM_CHARS), value.strip(TRIM_CHARS)))
    return rows


def extract_image_from_infobox(infobox: InfoboxSpan) -> ImageRef | None:
    """Read the image name and caption rows of an infobox.

    When a field appears more than once the last row wins.
    """
    try:
        rows = infobox_rows(infobox)
    except MalformedMarkupError as e:
        logger.debug("Skipping infobox image", reason=str(e))
        return None

    name = caption = None
    for key, value in rows:
        key = key.lower()
        if key in IMAGE_NAME_KEYS:
            name = value.replace(" ", "_")
        elif key in IMAGE_CAPTION_KEYS:
            caption = value

    if not name:
        return None
    return ImageRef(name=name, caption=caption or None)


def extract_image_from_body(body: str) -> ImageRef | None:
    """Use the first ``[[Image:...]]`` link of the page.

    The last ``|`` segment is the caption, cleaned of templates and tags.
    """
    for start, end in iter_balanced(body, "[", "]"):
        if not body.startswith(BODY_IMAGE_PREFIX, start):
            continue

        parts = split_top_level(body[start + len(BODY_IMAGE_PREFIX) : end - 2])
        name = parts[0].strip(TRIM_CHARS).replace(" ", "_")
        if not name:
            return None

        caption = None
        if len(parts) > 1:
            caption = TAG_RE.sub("", TEMPLATE_REMNANT_RE.sub("", parts[-1])).strip(TRIM_CHARS) or None
        return ImageRef(name=name, caption=caption)
    return None


def find_image(body: str, infobox: InfoboxSpan | None) -> ImageRef | None:
    """Pick the page image: infobox first, then the body."""
    image = extract_image_from_infobox(infobox) if infobox else None
    return image or extract_image_from_body(body)


def extract_body_text(body: str, infobox: InfoboxSpan | None) -> str:
    """Text following the infobox, or the whole body when there is none."""
    if infobox is None:
        return body
    return body[infobox.end :]
