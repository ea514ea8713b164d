"""Unit tests for the upstream HTTP clients (creator backend, oEmbed, Twitch)."""

import httpx
import pytest

from core.exceptions import (
    CreatorNotFoundError,
    LiveStatusUnavailableError,
    OEmbedLookupError,
    UpstreamUnavailableError,
)
from domain.entities.theme import CUSTOM_THEME_ID
from infrastructure.creator_api.client import CreatorApiClient
from infrastructure.oembed.client import OEmbedClient
from infrastructure.twitch.client import HELIX_STREAMS_URL, TOKEN_URL, TwitchLiveStatusClient

PROFILE_PAYLOAD = {
    "username": "ninja",
    "displayName": "Ninja",
    "theme": {"id": "neon-nights", "name": "Neon Nights", "isCustom": False},
    "links": [{"id": "l1", "url": "https://twitch.tv/ninja", "twStatus": True}],
}


class TestCreatorApiClient:
    """Tests for CreatorApiClient."""

    @pytest.mark.asyncio
    async def test_fetches_versioned_endpoint(self) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, json=PROFILE_PAYLOAD)

        client = CreatorApiClient("https://api.example.com/", transport=httpx.MockTransport(handler))
        profile = await client.fetch_profile("creator-1")

        assert requested == ["https://api.example.com/v2/getCreatorLinks/creator-1"]
        assert profile.username == "ninja"
        assert profile.links[0].tw_status is True

    @pytest.mark.asyncio
    async def test_published_theme_is_marked_custom(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=PROFILE_PAYLOAD))

        profile = await CreatorApiClient("https://api", transport=transport).fetch_profile("c")

        assert profile.theme.is_custom is True
        assert profile.theme.id == CUSTOM_THEME_ID

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [404, 500])
    async def test_non_success_is_not_found(self, status_code: int) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(status_code))

        with pytest.raises(CreatorNotFoundError):
            await CreatorApiClient("https://api", transport=transport).fetch_profile("c")

    @pytest.mark.asyncio
    async def test_transport_error_is_upstream_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = CreatorApiClient("https://api", transport=httpx.MockTransport(handler))

        with pytest.raises(UpstreamUnavailableError):
            await client.fetch_profile("c")

    @pytest.mark.asyncio
    async def test_invalid_json_is_upstream_unavailable(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await CreatorApiClient("https://api", transport=transport).fetch_profile("c")

        assert exc_info.value.details["reason"] == "invalid payload"


class TestOEmbedClient:
    """Tests for OEmbedClient."""

    @pytest.mark.asyncio
    async def test_lookup_passes_url_and_format(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"title": "Clip", "thumbnail_url": "https://i.ytimg.com/vi/x/hq.jpg"},
            )

        client = OEmbedClient("https://www.youtube.com/oembed", transport=httpx.MockTransport(handler))
        result = await client.lookup("https://youtu.be/abc")

        assert result.title == "Clip"
        assert result.thumbnail_url == "https://i.ytimg.com/vi/x/hq.jpg"
        assert seen[0].url.params["url"] == "https://youtu.be/abc"
        assert seen[0].url.params["format"] == "json"

    @pytest.mark.asyncio
    async def test_http_error_raises_lookup_error(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(404))

        with pytest.raises(OEmbedLookupError):
            await OEmbedClient("https://oembed", transport=transport).lookup("https://x")

    @pytest.mark.asyncio
    async def test_non_object_payload_raises_lookup_error(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=["x"]))

        with pytest.raises(OEmbedLookupError):
            await OEmbedClient("https://oembed", transport=transport).lookup("https://x")


class TwitchHandler:
    """Mock Twitch: token endpoint plus helix streams."""

    def __init__(self, live: set[str], streams_status: int = 200) -> None:
        self.live = live
        self.streams_status = streams_status
        self.token_requests = 0
        self.stream_requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == TOKEN_URL:
            self.token_requests += 1
            return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
        if str(request.url).startswith(HELIX_STREAMS_URL):
            self.stream_requests.append(request)
            if self.streams_status != 200:
                return httpx.Response(self.streams_status)
            logins = request.url.params.get_list("user_login")
            return httpx.Response(
                200,
                json={
                    "data": [
                        {"user_login": login, "type": "live"}
                        for login in logins
                        if login in self.live
                    ]
                },
            )
        return httpx.Response(404)


class TestTwitchLiveStatusClient:
    """Tests for TwitchLiveStatusClient."""

    @pytest.mark.asyncio
    async def test_reports_live_and_offline_channels(self) -> None:
        handler = TwitchHandler(live={"ninja"})
        client = TwitchLiveStatusClient("id", "secret", transport=httpx.MockTransport(handler))

        status = await client.fetch_live_status(["Ninja", "shroud"])

        assert status == {"ninja": True, "shroud": False}
        request = handler.stream_requests[0]
        assert request.headers["Client-Id"] == "id"
        assert request.headers["Authorization"] == "Bearer tok"

    @pytest.mark.asyncio
    async def test_token_is_reused(self) -> None:
        handler = TwitchHandler(live=set())
        client = TwitchLiveStatusClient("id", "secret", transport=httpx.MockTransport(handler))

        await client.fetch_live_status(["a"])
        await client.fetch_live_status(["b"])

        assert handler.token_requests == 1

    @pytest.mark.asyncio
    async def test_logins_are_batched(self) -> None:
        handler = TwitchHandler(live={"user0", "user150"})
        client = TwitchLiveStatusClient("id", "secret", transport=httpx.MockTransport(handler))

        status = await client.fetch_live_status([f"user{i}" for i in range(150)] + ["user150"])

        assert len(handler.stream_requests) == 2
        assert status["user0"] is True
        assert status["user150"] is True
        assert status["user1"] is False

    @pytest.mark.asyncio
    async def test_empty_request_skips_network(self) -> None:
        handler = TwitchHandler(live=set())
        client = TwitchLiveStatusClient("", "", transport=httpx.MockTransport(handler))

        assert await client.fetch_live_status([]) == {}
        assert handler.token_requests == 0

    @pytest.mark.asyncio
    async def test_unconfigured_client_is_unavailable(self) -> None:
        client = TwitchLiveStatusClient("", "")

        assert client.is_configured is False
        with pytest.raises(LiveStatusUnavailableError):
            await client.fetch_live_status(["ninja"])

    @pytest.mark.asyncio
    async def test_unauthorized_drops_token(self) -> None:
        handler = TwitchHandler(live=set(), streams_status=401)
        client = TwitchLiveStatusClient("id", "secret", transport=httpx.MockTransport(handler))

        with pytest.raises(LiveStatusUnavailableError):
            await client.fetch_live_status(["ninja"])
        handler.streams_status = 200
        await client.fetch_live_status(["ninja"])

        assert handler.token_requests == 2
