"""Access token verification.

Tokens are issued by the external identity provider and signed with a secret
shared with this service. The ``sub`` claim carries the user id.
"""

import jwt
from jwt import InvalidTokenError

from flashforge.config import get_settings


def verify_access_token(token: str) -> str | None:
    """Verify an access token and return the user_id if valid."""
    settings = get_settings()
    if not settings.SECRET_KEY:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options={"verify_aud": settings.JWT_AUDIENCE is not None},
        )
    except InvalidTokenError:
        return None
    # Refresh tokens are only accepted by the identity provider itself
    if payload.get("type") == "refresh":
        return None
    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id.strip():
        return None
    return user_id
