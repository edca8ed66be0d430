"""Service-layer helpers for resolving and fetching fallback content."""

from .content_fetcher import (
    ContentFetcher,
    FetchResult,
    Fetched,
    NotFound,
    Skipped,
    TransportFailure,
    build_fetch_uri,
)
from .path_localizer import PathLocalizer, RequestContext, capture_dimension_segments

__all__ = [
    "ContentFetcher",
    "FetchResult",
    "Fetched",
    "NotFound",
    "PathLocalizer",
    "RequestContext",
    "Skipped",
    "TransportFailure",
    "build_fetch_uri",
    "capture_dimension_segments",
]
