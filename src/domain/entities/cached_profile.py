"""Persisted copy of a creator's last successfully fetched profile."""

from dataclasses import dataclass, field
from datetime import datetime

from domain.entities.profile import Profile


@dataclass
class CachedProfile:
    key: str
    profile: Profile
    stored_at: datetime = field(default_factory=datetime.utcnow)
