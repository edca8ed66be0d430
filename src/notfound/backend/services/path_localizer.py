"""Prefix fallback content paths with the dimension segment of the current request.

A request for ``/de/about`` on a site whose first URI segment encodes the
language dimension should receive the German ``404`` content, so the
candidate path ``404`` is rewritten to ``de/404`` before it is fetched.
Several dimensions share one segment joined by ``_`` (``de_fr/about``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from flask import Request

from notfound.backend.config.schema import DimensionPresetTable, PresetRecord

from .content_fetcher import ContentFetcher, FetchResult, Skipped, build_fetch_uri

SEGMENT_DELIMITER = "_"


class PresetSource(Protocol):
    """Read-only access to the configured dimension presets."""

    def get_all_presets(self) -> DimensionPresetTable: ...

    def find_preset_by_uri_segment(
        self, dimension_name: str, uri_segment: str
    ) -> PresetRecord | None: ...


@dataclass(frozen=True)
class RequestContext:
    """The parts of the inbound request that influence content resolution."""

    path: str
    user_agent: str | None
    base_url: str

    @classmethod
    def from_request(cls, req: Request) -> RequestContext:
        return cls(
            path=req.path,
            user_agent=req.headers.get("User-Agent"),
            base_url=req.host_url,
        )


def capture_dimension_segments(request_path: str) -> str | None:
    """Return the leading part of ``request_path`` that may encode dimensions.

    The capture ends at the first ``/`` or ``@``; an empty capture means the
    path carries no dimension prefix at all.
    """

    path = request_path.lstrip("/")
    captured = path.split("/", 1)[0].split("@", 1)[0]
    return captured or None


def prefix_with_default_segments(table: DimensionPresetTable, candidate_path: str) -> str:
    """Prepend the default preset segment of every dimension to ``candidate_path``."""

    segments = SEGMENT_DELIMITER.join(table.default_uri_segments())
    return f"{segments}/{candidate_path}"


class PathLocalizer:
    """Resolve and fetch dimension-aware fallback content."""

    def __init__(
        self,
        preset_source: PresetSource,
        fetcher: ContentFetcher,
        *,
        support_empty_segments: bool = False,
    ) -> None:
        self._preset_source = preset_source
        self._fetcher = fetcher
        self._support_empty_segments = support_empty_segments

    @property
    def support_empty_segments(self) -> bool:
        return self._support_empty_segments

    def is_internal_request(self, context: RequestContext) -> bool:
        """Return ``True`` when the request was issued by this application itself."""

        user_agent = context.user_agent
        return bool(user_agent) and user_agent.startswith(self._fetcher.signature)

    def resolve_path(self, candidate_path: str, request_path: str) -> str:
        """Return ``candidate_path`` prefixed with the request's dimension segment."""

        captured = capture_dimension_segments(request_path)
        if captured is None:
            return candidate_path

        table = self._preset_source.get_all_presets()
        if table.is_empty:
            return candidate_path

        tokens = captured.split(SEGMENT_DELIMITER)
        if self._support_empty_segments:
            # Unlike the positional branch, an unknown token disables
            # localization instead of substituting defaults.
            if not self._each_token_names_a_preset(tokens, table):
                return candidate_path
        elif not self._tokens_match_positionally(tokens, table):
            return prefix_with_default_segments(table, candidate_path)

        return f"{captured}/{candidate_path}"

    def resolve_and_fetch(self, candidate_path: str, context: RequestContext) -> FetchResult:
        """Localize ``candidate_path`` for ``context`` and fetch it from this application."""

        if self.is_internal_request(context):
            return Skipped()

        resolved_path = self.resolve_path(candidate_path, context.path)
        return self._fetcher.fetch(build_fetch_uri(context.base_url, resolved_path))

    def _each_token_names_a_preset(
        self, tokens: Sequence[str], table: DimensionPresetTable
    ) -> bool:
        for token in tokens:
            if not any(
                self._preset_source.find_preset_by_uri_segment(name, token) is not None
                for name in table.names
            ):
                return False
        return True

    def _tokens_match_positionally(
        self, tokens: Sequence[str], table: DimensionPresetTable
    ) -> bool:
        if len(tokens) != len(table.names):
            return False
        return all(
            self._preset_source.find_preset_by_uri_segment(name, token) is not None
            for name, token in zip(table.names, tokens)
        )


__all__ = [
    "PathLocalizer",
    "PresetSource",
    "RequestContext",
    "SEGMENT_DELIMITER",
    "capture_dimension_segments",
    "prefix_with_default_segments",
]
