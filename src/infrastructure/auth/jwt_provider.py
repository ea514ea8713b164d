"""HS256 JWT authentication for the editor API.

Payload structure:
    {
        "sub": "creator-uuid",
        "email": "creator@example.com",
        "name": "Creator Name",
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from uuid import UUID

import structlog
from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()


class JWTAuthProvider:
    """Validates and issues shared-secret JWTs."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> TokenUser | None:
        """
        Validate a JWT and extract the creator it was issued for.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid, expired or missing a subject
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            logger.debug("token_rejected", reason=str(exc))
            return None

        subject = payload.get("sub")
        if not subject:
            return None
        try:
            user_id = UUID(str(subject))
        except ValueError:
            logger.debug("token_rejected", reason="subject is not a uuid")
            return None

        return TokenUser(
            id=user_id,
            email=payload.get("email"),
            display_name=payload.get("name"),
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Create a JWT for a creator.

        Args:
            user: The creator to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)
        payload: dict = {"sub": str(user.id), "exp": expire}
        if user.email:
            payload["email"] = user.email
        if user.display_name:
            payload["name"] = user.display_name
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
