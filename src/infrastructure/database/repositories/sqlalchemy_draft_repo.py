"""SQLAlchemy implementation of ProfileDraft repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.draft import ProfileDraft
from infrastructure.creator_api.documents import profile_from_json, profile_to_json
from infrastructure.database.models import ProfileDraftModel


class SQLAlchemyDraftRepository:
    """SQLAlchemy implementation of IDraftRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> ProfileDraft | None:
        """Get a draft by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def list_for_owner(self, owner_id: UUID) -> list[ProfileDraft]:
        """Get all drafts of an owner, most recently updated first."""
        stmt = (
            select(ProfileDraftModel)
            .where(ProfileDraftModel.owner_id == owner_id)
            .order_by(ProfileDraftModel.updated_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, draft: ProfileDraft) -> ProfileDraft:
        """Create a new draft."""
        model = self._to_model(draft)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, draft: ProfileDraft) -> ProfileDraft:
        """Persist a revised draft."""
        model = await self._get_model(draft.id)
        if not model:
            raise ValueError(f"Draft {draft.id} not found")

        model.document = profile_to_json(draft.profile)
        model.updated_at = draft.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a draft."""
        model = await self._get_model(id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, id: UUID) -> ProfileDraftModel | None:
        stmt = select(ProfileDraftModel).where(ProfileDraftModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: ProfileDraftModel) -> ProfileDraft:
        """Convert ORM model to domain entity."""
        return ProfileDraft(
            id=model.id,
            owner_id=model.owner_id,
            profile=profile_from_json(model.document),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: ProfileDraft) -> ProfileDraftModel:
        """Convert domain entity to ORM model."""
        return ProfileDraftModel(
            id=entity.id,
            owner_id=entity.owner_id,
            document=profile_to_json(entity.profile),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
