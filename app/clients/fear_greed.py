"""Alternative.me Fear & Greed index client."""

import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import ValidationError

from app.clients.errors import UpstreamUnavailableError
from core.models import SentimentIndex

logger = logging.getLogger(__name__)


class FearGreedClient:
    """Fetches the latest global crypto Fear & Greed reading."""

    URL = "https://api.alternative.me/fng/"

    def __init__(self, url: str | None = None, timeout: float = 30.0):
        self.url = url or self.URL
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _fetch(self) -> Any:
        client = await self._get_client()
        try:
            response = await client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailableError(
                f"Failed to fetch market sentiment data: HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(
                f"Failed to fetch market sentiment data: {e}"
            ) from e
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamUnavailableError(
                "Malformed Fear & Greed payload: body is not JSON"
            ) from e

    async def get_index(self) -> SentimentIndex:
        """
        Fetch the current index.

        Returns:
            SentimentIndex with value in [0, 100]

        Raises:
            UpstreamUnavailableError: On HTTP failure, an empty payload or a
                value the index cannot hold.
        """
        payload = await self._fetch()
        if not isinstance(payload, dict):
            raise UpstreamUnavailableError(
                f"Malformed Fear & Greed payload: expected an object, got {type(payload).__name__}"
            )
        entries = payload.get("data") or []
        if not entries:
            raise UpstreamUnavailableError("No market sentiment data available")

        try:
            latest = entries[0]
            as_of = None
            if latest.get("timestamp"):
                as_of = datetime.fromtimestamp(int(latest["timestamp"]), tz=timezone.utc)
            index = SentimentIndex(
                value=int(latest["value"]),
                classification=latest.get("value_classification", ""),
                as_of=as_of,
                time_until_update=latest.get("time_until_update"),
            )
        except (KeyError, IndexError, TypeError, AttributeError, ValueError, ValidationError) as e:
            raise UpstreamUnavailableError(f"Malformed Fear & Greed payload: {e}") from e

        logger.debug(f"Fear & Greed index: {index.value} ({index.classification})")
        return index
