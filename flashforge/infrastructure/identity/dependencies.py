"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from flashforge.domain.common.value_objects import UserId
from flashforge.exceptions import CredentialsException
from flashforge.infrastructure.identity.token_service import verify_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


async def get_current_user(token: Annotated[str, Depends(oauth2_scheme)]) -> UserId:
    """
    Get the current authenticated user from the access token.

    Args:
        token: JWT access token from Authorization header

    Returns:
        The caller's user id

    Raises:
        CredentialsException: If token is invalid
    """
    user_id = verify_access_token(token)
    if user_id is None:
        raise CredentialsException
    return UserId(user_id)
