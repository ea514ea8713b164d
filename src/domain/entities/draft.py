"""Profile draft domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.profile import Profile


@dataclass
class ProfileDraft:
    """Domain entity for a profile being composed in the editor."""

    owner_id: UUID
    profile: Profile = field(default_factory=Profile)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def revise(self, profile: Profile) -> None:
        """Replace the working profile with a new revision."""
        self.profile = profile
        self.updated_at = datetime.utcnow()

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
