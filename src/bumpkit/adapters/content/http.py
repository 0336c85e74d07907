"""Content source fetching raw file text over HTTP."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from bumpkit.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from bumpkit.config.content import RawContentConfig
    from bumpkit.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class ContentFetchError(RuntimeError):
    """Raised when the raw content endpoint fails with anything but 404."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class HttpContentSource:
    """Fetch files from a raw-content URL template.

    The client is opened on first use; close it with ``aclose`` or use the
    source as an async context manager.
    """

    config: RawContentConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> HttpContentSource:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_file(self, path: str, *, branch: str | None = None) -> str | None:
        url = self.config.url_for(path, branch)
        try:
            response = await self._get_client().get(url)
        except httpx.HTTPError as exc:
            raise ContentFetchError(f"Failed to fetch {path}: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            log.debug("%s not found at %s", path, url)
            return None
        if response.is_error:
            raise ContentFetchError(
                f"Failed to fetch {path}: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response.text

    def _get_client(self) -> ResilientClient:
        if self._client is None:
            self._client = self.client_factory(self.config.resilience)
        return self._client
