"""HTTP client for the remote creator backend."""

from dataclasses import replace

import httpx
import structlog

from core.exceptions import CreatorNotFoundError, UpstreamUnavailableError
from domain.entities.profile import Profile
from domain.services.theme_resolver import as_published_theme
from infrastructure.creator_api.documents import profile_from_json

logger = structlog.get_logger()

SERVICE_NAME = "creator_api"


class CreatorApiClient:
    """Fetches published profiles from ``<base_url>/v2/getCreatorLinks/{id}``.

    ``transport`` lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def profile_url(self, creator_id: str) -> str:
        return f"{self._base_url}/v2/getCreatorLinks/{creator_id}"

    async def fetch_profile(self, creator_id: str) -> Profile:
        url = self.profile_url(creator_id)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("creator_api_request_failed", creator_id=creator_id, error=str(exc))
            raise UpstreamUnavailableError(SERVICE_NAME, str(exc)) from exc

        if not response.is_success:
            logger.info(
                "creator_api_not_found",
                creator_id=creator_id,
                status_code=response.status_code,
            )
            raise CreatorNotFoundError(creator_id)

        try:
            profile = profile_from_json(response.json())
        except ValueError as exc:
            logger.warning("creator_api_invalid_payload", creator_id=creator_id, error=str(exc))
            raise UpstreamUnavailableError(SERVICE_NAME, "invalid payload") from exc

        return replace(profile, theme=as_published_theme(profile.theme))
