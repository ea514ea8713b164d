"""Bearer-token identity for the editor API."""

from functools import lru_cache
from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

bearer_scheme = HTTPBearer(auto_error=False, description="Creator access token")


@lru_cache
def get_auth_provider() -> JWTAuthProvider:
    """Get the token provider."""
    return JWTAuthProvider()


async def get_current_creator(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    auth_provider: Annotated[JWTAuthProvider, Depends(get_auth_provider)],
) -> TokenUser:
    """
    Resolve the creator whose drafts the request may touch.

    The creator id is bound to the request's log context.

    Raises:
        AuthenticationError: If no token is sent or it doesn't validate
    """
    if credentials is None:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    creator = await auth_provider.validate_token(credentials.credentials)
    if creator is None:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    structlog.contextvars.bind_contextvars(creator_id=str(creator.id))
    return creator


CurrentCreator = Annotated[TokenUser, Depends(get_current_creator)]
