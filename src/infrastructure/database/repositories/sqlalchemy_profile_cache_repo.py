"""SQLAlchemy implementation of the profile cache repository."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import StorageError
from domain.entities.cached_profile import CachedProfile
from infrastructure.creator_api.documents import profile_from_json, profile_to_json
from infrastructure.database.models import ProfileCacheModel


class SQLAlchemyProfileCacheRepository:
    """SQLAlchemy implementation of IProfileCacheRepository.

    Database and decoding failures surface as ``StorageError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, key: str) -> CachedProfile | None:
        try:
            stmt = select(ProfileCacheModel).where(ProfileCacheModel.key == key)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StorageError("profile_cache.get", str(exc)) from exc
        if not model:
            return None
        try:
            return self._to_entity(model)
        except ValueError as exc:
            raise StorageError("profile_cache.decode", str(exc)) from exc

    async def put(self, entry: CachedProfile) -> None:
        """Insert or replace the entry stored under ``entry.key``."""
        try:
            model = await self._session.get(ProfileCacheModel, entry.key)
            if model is None:
                self._session.add(self._to_model(entry))
            else:
                model.document = profile_to_json(entry.profile)
                model.stored_at = entry.stored_at
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise StorageError("profile_cache.put", str(exc)) from exc

    def _to_entity(self, model: ProfileCacheModel) -> CachedProfile:
        return CachedProfile(
            key=model.key,
            profile=profile_from_json(model.document),
            stored_at=model.stored_at,
        )

    def _to_model(self, entity: CachedProfile) -> ProfileCacheModel:
        return ProfileCacheModel(
            key=entity.key,
            document=profile_to_json(entity.profile),
            stored_at=entity.stored_at,
        )
