"""Twitch Helix live-status provider.

Uses an app access token from the client-credentials grant and asks
``GET /helix/streams`` which of the requested logins are broadcasting.
"""

import time
from collections.abc import Callable, Sequence

import httpx
import structlog

from core.exceptions import LiveStatusUnavailableError

logger = structlog.get_logger()

TOKEN_URL = "https://id.twitch.tv/oauth2/token"
HELIX_STREAMS_URL = "https://api.twitch.tv/helix/streams"
MAX_LOGINS_PER_REQUEST = 100
# Refresh this long before the token actually expires.
TOKEN_EXPIRY_MARGIN_SECONDS = 60


class TwitchLiveStatusClient:
    """Implements ``ILiveStatusProvider`` against the Twitch API."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._transport = transport
        self._clock = clock
        self._token: str | None = None
        self._token_expires_at = 0.0

    @property
    def is_configured(self) -> bool:
        return bool(self._client_id and self._client_secret)

    async def fetch_live_status(self, usernames: Sequence[str]) -> dict[str, bool]:
        logins = sorted({username.lower() for username in usernames if username})
        if not logins:
            return {}
        if not self.is_configured:
            raise LiveStatusUnavailableError("twitch credentials not configured")

        status = {login: False for login in logins}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                token = await self._get_token(client)
                for start in range(0, len(logins), MAX_LOGINS_PER_REQUEST):
                    batch = logins[start : start + MAX_LOGINS_PER_REQUEST]
                    for login in await self._live_logins(client, token, batch):
                        if login in status:
                            status[login] = True
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 401:
                self._token = None
            raise LiveStatusUnavailableError(
                f"twitch returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise LiveStatusUnavailableError(str(exc)) from exc
        except (ValueError, KeyError, TypeError) as exc:
            raise LiveStatusUnavailableError("invalid twitch payload") from exc

        logger.debug("twitch_live_status_fetched", live=[k for k, v in status.items() if v])
        return status

    async def _get_token(self, client: httpx.AsyncClient) -> str:
        if self._token and self._clock() < self._token_expires_at:
            return self._token

        response = await client.post(
            TOKEN_URL,
            data={
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "grant_type": "client_credentials",
            },
        )
        response.raise_for_status()
        payload = response.json()
        self._token = str(payload["access_token"])
        expires_in = float(payload.get("expires_in", 0))
        self._token_expires_at = self._clock() + max(
            expires_in - TOKEN_EXPIRY_MARGIN_SECONDS, 0
        )
        logger.info("twitch_token_refreshed", expires_in=expires_in)
        return self._token

    async def _live_logins(
        self, client: httpx.AsyncClient, token: str, logins: Sequence[str]
    ) -> list[str]:
        response = await client.get(
            HELIX_STREAMS_URL,
            params=[("user_login", login) for login in logins]
            + [("first", str(MAX_LOGINS_PER_REQUEST))],
            headers={
                "Client-Id": self._client_id,
                "Authorization": f"Bearer {token}",
            },
        )
        response.raise_for_status()
        streams = response.json()["data"]
        return [
            str(stream["user_login"]).lower()
            for stream in streams
            if stream.get("type") == "live"
        ]
