"""oEmbed lookups against the YouTube endpoint."""

import httpx
import structlog

from core.exceptions import OEmbedLookupError
from domain.services.video_enrichment import OEmbedResult

logger = structlog.get_logger()


class OEmbedClient:
    """Implements ``IOEmbedProvider`` over HTTP."""

    def __init__(
        self,
        endpoint: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport

    async def lookup(self, url: str) -> OEmbedResult:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(
                    self._endpoint, params={"url": url, "format": "json"}
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise OEmbedLookupError(url, str(exc)) from exc
        except ValueError as exc:
            raise OEmbedLookupError(url, "invalid json") from exc

        if not isinstance(data, dict):
            raise OEmbedLookupError(url, "unexpected payload")

        logger.debug("oembed_lookup_succeeded", url=url)
        return OEmbedResult(
            title=str(data.get("title") or ""),
            thumbnail_url=str(data.get("thumbnail_url") or ""),
        )
