"""Fetch rendered pages from the running application over HTTP."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from http import HTTPStatus

import httpx

from notfound.backend.version import get_version_branch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fetched:
    """The page was served; ``body`` is the decoded response text."""

    uri: str
    status_code: int
    body: str


@dataclass(frozen=True)
class NotFound:
    """The fetched URI itself answered with HTTP 404."""

    uri: str


@dataclass(frozen=True)
class TransportFailure:
    """The request failed below the HTTP layer."""

    uri: str
    cause: httpx.RequestError = field(compare=False)


@dataclass(frozen=True)
class Skipped:
    """No request was issued because the caller is this application itself."""

    reason: str = "internal request"


FetchResult = Fetched | NotFound | TransportFailure | Skipped


def build_fetch_uri(base_url: str, path: str) -> str:
    """Replace the path of ``base_url`` with ``path``."""

    return str(httpx.URL(base_url).copy_with(path="/" + path.lstrip("/")))


class ContentFetcher:
    """Issue GET requests identified by the application's own User-Agent."""

    def __init__(
        self,
        client: httpx.Client,
        *,
        signature: str = "NotFound",
        version: str | None = None,
    ) -> None:
        self._client = client
        self.signature = signature
        self.user_agent = f"{signature}/{get_version_branch(version)}"

    def fetch(self, uri: str) -> FetchResult:
        logger.debug("Fetching fallback content from %s", uri)
        try:
            response = self._client.get(uri, headers={"User-Agent": self.user_agent})
        except httpx.RequestError as error:
            logger.debug("Fetching %s failed: %s", uri, error)
            return TransportFailure(uri=uri, cause=error)

        if response.status_code == HTTPStatus.NOT_FOUND:
            return NotFound(uri=uri)

        return Fetched(uri=uri, status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self._client.close()


__all__ = [
    "ContentFetcher",
    "FetchResult",
    "Fetched",
    "NotFound",
    "Skipped",
    "TransportFailure",
    "build_fetch_uri",
]
