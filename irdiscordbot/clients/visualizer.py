"""
HTTP client for the remote data the bot reads.

- fetch_series(): the visualizer's /series_json listing
- fetch_joke(type): one joke from the apekool joke API

Both map every transport, status and parse problem onto the engine's error
types so the dispatcher only has to catch those.
"""

from __future__ import annotations

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from irdiscordbot.config.logging import get_logger
from irdiscordbot.config.settings import APISettings
from irdiscordbot.engine.errors import CatalogFetchError, JokeFetchError
from irdiscordbot.engine.models import Series

logger = get_logger(__name__)

SERIES_PATH = "/series_json"

_SERIES_LIST = TypeAdapter(list[Series])


class _JokePayload(BaseModel):
    joke: str = ""


class VisualizerClient:
    """
    Async client for the series listing and the joke API.

    Use as an async context manager when the client should own its
    httpx.AsyncClient; pass `http` to share an existing one instead.

    Args:
        settings: URLs and timeout
        http: Optional pre-built httpx client (not closed by this class)
    """

    def __init__(self, settings: APISettings, http: httpx.AsyncClient | None = None):
        self._settings = settings
        self._http = http
        self._owns_http = http is None

    async def __aenter__(self) -> VisualizerClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._settings.timeout)
        return self

    async def __aexit__(self, *_args) -> None:
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    @property
    def series_url(self) -> str:
        return self._settings.visualizer_url.rstrip("/") + SERIES_PATH

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("VisualizerClient used outside of its async context")
        return self._http

    async def fetch_series(self) -> list[Series]:
        """
        Fetch all series with their current season.

        Raises:
            CatalogFetchError: request failed, non-200 status or unexpected JSON
        """
        try:
            resp = await self._client().get(self.series_url)
        except httpx.HTTPError as e:
            raise CatalogFetchError(f"failed request: {e}") from e

        if resp.status_code != httpx.codes.OK:
            raise CatalogFetchError(f"status code: {resp.status_code}")

        try:
            return _SERIES_LIST.validate_json(resp.content)
        except ValidationError as e:
            logger.error(f"could not parse series json data: {resp.content[:200]!r}")
            raise CatalogFetchError(f"could not parse series json data: {e}") from e

    async def fetch_joke(self, joke_type: str) -> str:
        """
        Fetch one joke of the given type ("xxx" or "nl").

        Returns the joke text, which may be empty.

        Raises:
            JokeFetchError: request failed, non-200 status or unexpected JSON
        """
        try:
            resp = await self._client().get(self._settings.joke_url, params={"type": joke_type})
        except httpx.HTTPError as e:
            raise JokeFetchError(f"failed joke request: {e}") from e

        if resp.status_code != httpx.codes.OK:
            raise JokeFetchError(f"joke status code: {resp.status_code}")

        try:
            return _JokePayload.model_validate_json(resp.content).joke
        except ValidationError as e:
            logger.error(f"could not parse joke json data: {resp.content[:200]!r}")
            raise JokeFetchError(f"could not parse joke json data: {e}") from e
