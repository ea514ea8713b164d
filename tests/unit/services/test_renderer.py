"""Unit tests for profile rendering."""

from dataclasses import replace

from domain.entities.profile import Link, Platform, Profile, Video, VideoType
from domain.entities.theme import ButtonStyle, default_theme
from domain.services.renderer import render_profile


def _profile(**overrides: object) -> Profile:
    base = Profile(
        username="ninja",
        display_name="Ninja",
        bio="Streaming every day",
        links=[
            Link(id="l1", title="Twitch", url="https://twitch.tv/Ninja"),
            Link(id="l2", title="Hidden", url="https://example.com", enabled=False),
            Link(id="l3", title="YouTube", url="https://youtube.com/@ninja"),
        ],
    )
    return replace(base, **overrides)


class TestHeader:
    """Header composition."""

    def test_display_name_shown_when_different_from_username(self) -> None:
        view = render_profile(_profile())

        assert view.header.handle == "@ninja"
        assert view.header.display_name == "Ninja"
        assert view.header.avatar_initial == "N"

    def test_display_name_hidden_when_equal_to_username(self) -> None:
        view = render_profile(_profile(display_name="ninja"))
        assert view.header.display_name is None

    def test_display_name_hidden_when_empty(self) -> None:
        view = render_profile(_profile(display_name=""))
        assert view.header.display_name is None
        assert view.header.avatar_initial == ""

    def test_blank_avatar_is_none(self) -> None:
        assert render_profile(_profile()).header.avatar is None


class TestLinks:
    """Link list composition."""

    def test_only_enabled_links_in_original_order(self) -> None:
        view = render_profile(_profile())
        assert [link.id for link in view.links] == ["l1", "l3"]

    def test_platform_detected_from_url(self) -> None:
        view = render_profile(_profile())
        assert view.links[0].platform == Platform.TWITCH
        assert view.links[1].platform == Platform.YOUTUBE

    def test_live_flag_uses_lowercased_username(self) -> None:
        view = render_profile(_profile(), {"ninja": True})
        assert view.links[0].is_live is True
        assert view.links[1].is_live is False

    def test_not_live_without_status(self) -> None:
        view = render_profile(_profile())
        assert all(link.is_live is False for link in view.links)

    def test_non_twitch_link_never_live(self) -> None:
        profile = _profile(links=[Link(id="x", url="https://youtube.com/ninja")])
        view = render_profile(profile, {"ninja": True})
        assert view.links[0].is_live is False


class TestVideos:
    """Featured video composition."""

    def test_no_videos(self) -> None:
        assert render_profile(_profile()).videos == ()

    def test_embed_without_youtube_id_falls_back_to_row(self) -> None:
        video = Video(
            id="v1",
            url="https://twitch.tv/videos/123",
            platform=Platform.TWITCH,
            type=VideoType.EMBED,
        )
        view = render_profile(_profile(featured_videos=[video]))

        assert view.videos[0].variant == VideoType.SMALL_ROW
        assert view.videos[0].embed_url is None

    def test_embed_with_youtube_id(self) -> None:
        video = Video(id="v1", url="https://youtu.be/dQw4w9WgXcQ", type=VideoType.EMBED)
        view = render_profile(_profile(featured_videos=[video]))

        assert view.videos[0].variant == VideoType.EMBED
        assert view.videos[0].embed_url == "https://www.youtube.com/embed/dQw4w9WgXcQ"

    def test_missing_thumbnail_and_title_are_derived(self) -> None:
        video = Video(id="v1", url="https://youtube.com/watch?v=dQw4w9WgXcQ")
        view = render_profile(_profile(featured_videos=[video]))

        assert view.videos[0].thumbnail == (
            "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"
        )
        assert view.videos[0].title == "Video"

    def test_cover_uses_video_radius(self) -> None:
        theme = replace(default_theme(), button_style=ButtonStyle.PILL)
        videos = [
            Video(id="v1", url="https://youtu.be/dQw4w9WgXcQ", type=VideoType.LARGE_COVER),
            Video(id="v2", url="https://youtu.be/dQw4w9WgXcQ", type=VideoType.SMALL_ROW),
        ]
        view = render_profile(_profile(theme=theme, featured_videos=videos))

        assert view.videos[0].border_radius == "16px"
        assert view.videos[1].border_radius == "9999px"
