"""Integration tests for the public creator page API."""

from collections.abc import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.services.live_status import BackendLiveStatusSource
from domain.services.profile_loader import ProfileLoader
from domain.services.public_profile_service import PublicProfileService
from domain.services.video_enrichment import VideoEnricher
from infrastructure.creator_api.client import CreatorApiClient
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.oembed.client import OEmbedClient

CREATOR_PAYLOAD = {
    "username": "ninja",
    "displayName": "Ninja",
    "bio": "Streaming every day",
    "avatar": "",
    "theme": {
        "id": "neon-nights",
        "name": "Neon Nights",
        "backgroundColor": "#0d0d0d",
        "cardColor": "#222",
        "cardTextColor": "#fff",
        "textColor": "#fff",
        "buttonStyle": "pill",
        "fontFamily": "Open Sans",
        "customFontUrl": "https://fonts.example.com/open-sans.css",
    },
    "links": [
        {
            "id": "l1",
            "title": "Watch live",
            "url": "https://twitch.tv/Ninja",
            "enabled": True,
            "badge": "NEW",
            "twStatus": True,
        },
        {"id": "l2", "title": "Hidden", "url": "https://x.com/ninja", "enabled": False},
    ],
    "featuredVideo": {
        "url": "https://youtu.be/dQw4w9WgXcQ",
        "title": "",
        "thumbnail": "",
        "platform": "youtube",
        "type": 2,
    },
}


class FakeBackend:
    """Creator backend double: serves known creators until switched off."""

    def __init__(self) -> None:
        self.online = True
        self.requests = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests += 1
        if not self.online:
            raise httpx.ConnectError("backend down", request=request)
        if request.url.path.endswith("/ninja"):
            return httpx.Response(200, json=CREATOR_PAYLOAD)
        return httpx.Response(404, json={"error": "not found"})


def _oembed(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "title": "Never Gonna Give You Up",
            "thumbnail_url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg",
        },
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def loader(
    backend: FakeBackend, session_factory: async_sessionmaker[AsyncSession]
) -> ProfileLoader:
    return ProfileLoader(
        CreatorApiClient("https://backend.test", transport=httpx.MockTransport(backend)),
        lambda: SQLAlchemyUnitOfWork(session_factory),
        homepage_url="https://example.com",
    )


@pytest.fixture
async def creators_client(loader: ProfileLoader) -> AsyncGenerator[AsyncClient, None]:
    """Public API client wired to fake upstreams and the test database."""
    from api.v1.dependencies import get_public_profile_service
    from main import create_app

    service = PublicProfileService(
        loader,
        VideoEnricher(OEmbedClient("https://oembed.test", transport=httpx.MockTransport(_oembed))),
        BackendLiveStatusSource(),
        site_name="LinkPulse",
        default_image="https://example.com/og.png",
        homepage_url="https://example.com",
    )

    app = create_app()
    app.dependency_overrides[get_public_profile_service] = lambda: service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


class TestCreatorPage:
    """GET /api/v1/creators/{creator_id}."""

    @pytest.mark.asyncio
    async def test_renders_published_profile(self, creators_client: AsyncClient) -> None:
        response = await creators_client.get("/api/v1/creators/ninja")

        assert response.status_code == 200
        page = response.json()["data"]
        assert page["source"] == "network"
        assert page["profile"]["theme"]["isCustom"] is True

        view = page["view"]
        assert view["header"]["handle"] == "@ninja"
        assert view["header"]["display_name"] == "Ninja"
        assert [link["id"] for link in view["links"]] == ["l1"]
        assert view["links"][0]["is_live"] is True
        assert view["links"][0]["badge"]["text"] == "NEW"
        assert view["style"]["font_stack"] == '"Open Sans", system-ui, sans-serif'

    @pytest.mark.asyncio
    async def test_legacy_video_is_migrated_and_enriched(
        self, creators_client: AsyncClient
    ) -> None:
        response = await creators_client.get("/api/v1/creators/ninja")

        page = response.json()["data"]
        assert "featuredVideo" not in page["profile"]
        videos = page["view"]["videos"]
        assert len(videos) == 1
        assert videos[0]["title"] == "Never Gonna Give You Up"
        assert videos[0]["variant"] == 2
        assert videos[0]["border_radius"] == "16px"

    @pytest.mark.asyncio
    async def test_head_and_share(self, creators_client: AsyncClient) -> None:
        response = await creators_client.get("/api/v1/creators/ninja")

        page = response.json()["data"]
        assert page["head"]["title"] == "Ninja (@ninja) | LinkPulse"
        assert page["head"]["stylesheets"] == [
            {"id": "custom-profile-font", "href": "https://fonts.example.com/open-sans.css"}
        ]
        assert page["share"]["url"].endswith("/ninja")

    @pytest.mark.asyncio
    async def test_unknown_creator_is_404(self, creators_client: AsyncClient) -> None:
        response = await creators_client.get("/api/v1/creators/ghost")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "PROFILE_NOT_FOUND"
        assert body["details"]["homepage_url"] == "https://example.com"

    @pytest.mark.asyncio
    async def test_invalid_creator_id_is_rejected(self, creators_client: AsyncClient) -> None:
        response = await creators_client.get("/api/v1/creators/bad.id")

        assert response.status_code == 422


class TestOfflineFallback:
    """The persisted copy is served when the backend is unreachable."""

    @pytest.mark.asyncio
    async def test_cached_copy_served_when_backend_down(
        self,
        creators_client: AsyncClient,
        backend: FakeBackend,
        loader: ProfileLoader,
    ) -> None:
        await creators_client.get("/api/v1/creators/ninja")
        backend.online = False
        loader.invalidate("ninja")

        response = await creators_client.get("/api/v1/creators/ninja")

        assert response.status_code == 200
        page = response.json()["data"]
        assert page["source"] == "cache"
        assert page["view"]["header"]["username"] == "ninja"

    @pytest.mark.asyncio
    async def test_fresh_window_avoids_refetch(
        self, creators_client: AsyncClient, backend: FakeBackend
    ) -> None:
        await creators_client.get("/api/v1/creators/ninja")
        await creators_client.get("/api/v1/creators/ninja")

        assert backend.requests == 1

    @pytest.mark.asyncio
    async def test_cached_endpoint(self, creators_client: AsyncClient) -> None:
        missing = await creators_client.get("/api/v1/creators/ninja/cached")
        await creators_client.get("/api/v1/creators/ninja")
        cached = await creators_client.get("/api/v1/creators/ninja/cached")

        assert missing.status_code == 404
        assert cached.status_code == 200
        data = cached.json()["data"]
        assert data["creator_id"] == "ninja"
        assert data["profile"]["featuredVideos"][0]["url"] == "https://youtu.be/dQw4w9WgXcQ"
