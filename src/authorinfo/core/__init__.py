# ABOUTME: Business logic and orchestration layer
# ABOUTME: Author lookup state machine and the models it produces

"""
Core Layer: Author lookup orchestration

This layer handles:
- The lookup loop: fetch, follow redirects, extract
- Redirect loop protection with a per-call visited set
- Domain models handed to the rendering layer

Data Flow: author name → extraction layer → AuthorInfo
"""

from .models import (
    BASE_URL_PLACEHOLDER,
    AuthorInfo,
    ImageRef,
    InfoboxSpan,
    LookupOutcome,
    LookupRequest,
    LookupState,
    PageNotFound,
    Redirect,
    ResolvedPage,
    substitute_base_url,
)

# Import service on-demand to avoid circular imports
# Use: from authorinfo.core.service import AuthorInfoService

__all__ = [
    "BASE_URL_PLACEHOLDER",
    "AuthorInfo",
    "ImageRef",
    "InfoboxSpan",
    "LookupOutcome",
    "LookupRequest",
    "LookupState",
    "PageNotFound",
    "Redirect",
    "ResolvedPage",
    "substitute_base_url",
]
