# ABOUTME: Domain models for author lookups - requests, intermediate values and final results
# ABOUTME: Pipeline state enum plus the AuthorInfo record consumed by the rendering layer

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Stands in for the catalog search path inside generated links
BASE_URL_PLACEHOLDER = "___baseurl___"


def substitute_base_url(text: str, base_url: str) -> str:
    """Replace the link placeholder with the application's search path."""
    return text.replace(BASE_URL_PLACEHOLDER, base_url)


class LookupState(str, Enum):
    """Terminal states of a single author lookup."""

    DONE = "done"
    FAILED = "failed"
    ALREADY_VISITED = "already_visited"


class LookupRequest(BaseModel):
    """Author lookup parameters, fixed for the duration of one call."""

    model_config = ConfigDict(frozen=True)

    subject_title: str = Field(min_length=1, description="Author name or page title to look up")
    language: str = Field(default="en", min_length=1, description="Wikipedia language subdomain")


class InfoboxSpan(BaseModel):
    """Infobox template text and its position within the page body."""

    model_config = ConfigDict(frozen=True)

    text: str
    start: int = Field(ge=0)
    end: int = Field(ge=0, description="Exclusive end offset")


class ImageRef(BaseModel):
    """Image file referenced by a page, with an optional caption."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="File name with spaces replaced by underscores")
    caption: str | None = None


class ResolvedPage(BaseModel):
    """Terminal page of a redirect chain."""

    model_config = ConfigDict(frozen=True)

    title: str
    text: str


class Redirect(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: str


class PageNotFound(BaseModel):
    model_config = ConfigDict(frozen=True)


RedirectOutcome = ResolvedPage | Redirect | PageNotFound


class AuthorInfo(BaseModel):
    """Author information ready for display.

    ``description`` is an HTML fragment whose search links still carry
    ``BASE_URL_PLACEHOLDER``; use :meth:`with_base_url` before rendering.
    """

    name: str = Field(description="Title of the resolved Wikipedia page")
    description: str = Field(description="Sanitized lead section as an HTML fragment")
    language: str = Field(description="Wikipedia language the text came from")
    image: str | None = Field(default=None, description="Image URL, when one could be resolved")
    image_caption: str | None = Field(default=None, description="Caption for the image")

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def with_base_url(self, base_url: str) -> "AuthorInfo":
        """Return a copy whose links point at ``base_url``."""
        return self.model_copy(update={"description": substitute_base_url(self.description, base_url)})

    def to_legacy_dict(self) -> dict[str, Any]:
        """Key layout used by the catalog's author templates."""
        legacy: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "wiki_lang": self.language,
        }
        if self.image:
            legacy["image"] = self.image
            if self.image_caption is not None:
                legacy["altimage"] = self.image_caption
        return legacy


class LookupOutcome(BaseModel):
    """Terminal state of a lookup along with what it produced."""

    state: LookupState
    author_info: AuthorInfo | None = None
    titles_tried: list[str] = Field(default_factory=list, description="Titles fetched, in order")
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.state == LookupState.DONE and self.author_info is not None
