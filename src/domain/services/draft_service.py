"""Draft service layer: editor operations over an owner's profile drafts."""

from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import DraftNotFoundError, InvalidOrderError
from domain.entities.draft import ProfileDraft
from domain.entities.profile import Profile, clamp_bio, sanitize_username
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services import list_editor
from domain.services.theme_resolver import customize_theme, select_preset

logger = structlog.get_logger()

ProfileEdit = Callable[[Profile], Profile]


class DraftService:
    """Service layer for ProfileDraft business logic.

    Every operation loads the draft, applies a pure edit to its profile and
    persists the new revision in one unit of work. Drafts of other owners
    are reported as missing.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, owner_id: UUID) -> ProfileDraft:
        """Create a draft holding the default profile."""
        async with self._uow_factory() as uow:
            created = await uow.drafts.create(ProfileDraft(owner_id=owner_id))
            await uow.commit()
            logger.info("draft_created", draft_id=str(created.id), owner_id=str(owner_id))
            return created

    async def list_for_owner(self, owner_id: UUID) -> list[ProfileDraft]:
        async with self._uow_factory() as uow:
            return await uow.drafts.list_for_owner(owner_id)

    async def get(self, draft_id: UUID, owner_id: UUID) -> ProfileDraft:
        async with self._uow_factory() as uow:
            return await self._get_owned(uow, draft_id, owner_id)

    async def delete(self, draft_id: UUID, owner_id: UUID) -> bool:
        async with self._uow_factory() as uow:
            await self._get_owned(uow, draft_id, owner_id)
            deleted = await uow.drafts.delete(draft_id)
            await uow.commit()
            return deleted

    async def update_info(
        self,
        draft_id: UUID,
        owner_id: UUID,
        username: str | None = None,
        display_name: str | None = None,
        bio: str | None = None,
        avatar: str | None = None,
    ) -> ProfileDraft:
        """Edit the header fields. Usernames are sanitized and bios clamped."""
        changes: dict[str, Any] = {}
        if username is not None:
            changes["username"] = sanitize_username(username)
        if display_name is not None:
            changes["display_name"] = display_name
        if bio is not None:
            changes["bio"] = clamp_bio(bio)
        if avatar is not None:
            changes["avatar"] = avatar
        return await self._mutate(
            draft_id, owner_id, lambda profile: replace(profile, **changes)
        )

    async def select_preset_theme(
        self, draft_id: UUID, owner_id: UUID, theme_id: str
    ) -> ProfileDraft:
        theme = select_preset(theme_id)
        return await self._mutate(
            draft_id, owner_id, lambda profile: replace(profile, theme=theme)
        )

    async def customize_theme(
        self, draft_id: UUID, owner_id: UUID, **changes: Any
    ) -> ProfileDraft:
        return await self._mutate(
            draft_id,
            owner_id,
            lambda profile: replace(profile, theme=customize_theme(profile.theme, **changes)),
        )

    # Links

    async def add_link(self, draft_id: UUID, owner_id: UUID) -> ProfileDraft:
        return await self._mutate(
            draft_id,
            owner_id,
            lambda profile: replace(profile, links=list_editor.add_link(profile.links)),
        )

    async def update_link(
        self, draft_id: UUID, owner_id: UUID, link_id: str, **changes: Any
    ) -> ProfileDraft:
        return await self._mutate(
            draft_id,
            owner_id,
            lambda profile: replace(
                profile, links=list_editor.update_link(profile.links, link_id, **changes)
            ),
        )

    async def remove_link(self, draft_id: UUID, owner_id: UUID, link_id: str) -> ProfileDraft:
        return await self._mutate(
            draft_id,
            owner_id,
            lambda profile: replace(
                profile, links=list_editor.remove_link(profile.links, link_id)
            ),
        )

    async def reorder_links(
        self, draft_id: UUID, owner_id: UUID, link_ids: Sequence[str]
    ) -> ProfileDraft:
        def edit(profile: Profile) -> Profile:
            _require_permutation(profile.links, link_ids)
            new_order = list_editor.order_by_ids(profile.links, link_ids)
            return replace(profile, links=list_editor.reorder(profile.links, new_order))

        return await self._mutate(draft_id, owner_id, edit)

    # Videos

    async def add_video(self, draft_id: UUID, owner_id: UUID) -> ProfileDraft:
        return await self._mutate(
            draft_id,
            owner_id,
            lambda profile: replace(
                profile, featured_videos=list_editor.add_video(profile.featured_videos)
            ),
        )

    async def update_video(
        self, draft_id: UUID, owner_id: UUID, video_id: str, **changes: Any
    ) -> ProfileDraft:
        return await self._mutate(
            draft_id,
            owner_id,
            lambda profile: replace(
                profile,
                featured_videos=list_editor.update_video(
                    profile.featured_videos, video_id, **changes
                ),
            ),
        )

    async def remove_video(
        self, draft_id: UUID, owner_id: UUID, video_id: str
    ) -> ProfileDraft:
        return await self._mutate(
            draft_id,
            owner_id,
            lambda profile: replace(
                profile,
                featured_videos=list_editor.remove_video(profile.featured_videos, video_id),
            ),
        )

    async def reorder_videos(
        self, draft_id: UUID, owner_id: UUID, video_ids: Sequence[str]
    ) -> ProfileDraft:
        def edit(profile: Profile) -> Profile:
            _require_permutation(profile.featured_videos or [], video_ids)
            if profile.featured_videos is None:
                return profile
            new_order = list_editor.order_by_ids(profile.featured_videos, video_ids)
            return replace(
                profile,
                featured_videos=list_editor.reorder(profile.featured_videos, new_order) or None,
            )

        return await self._mutate(draft_id, owner_id, edit)

    async def _mutate(self, draft_id: UUID, owner_id: UUID, edit: ProfileEdit) -> ProfileDraft:
        async with self._uow_factory() as uow:
            draft = await self._get_owned(uow, draft_id, owner_id)
            draft.revise(edit(draft.profile))
            updated = await uow.drafts.update(draft)
            await uow.commit()
            return updated

    async def _get_owned(
        self, uow: IUnitOfWork, draft_id: UUID, owner_id: UUID
    ) -> ProfileDraft:
        draft = await uow.drafts.get(draft_id)
        if draft is None or draft.owner_id != owner_id:
            raise DraftNotFoundError(str(draft_id))
        return draft


def _require_permutation(entries: Sequence[Any], ids: Sequence[str]) -> None:
    expected = [entry.id for entry in entries]
    if len(ids) != len(expected) or set(ids) != set(expected):
        raise InvalidOrderError(expected, list(ids))
