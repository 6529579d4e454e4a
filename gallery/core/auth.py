"""
Server-side session check for the write methods.

The browser-side identity widget hands the signed-in user a JWT signed with
the site's identity secret. Mutating requests must forward it:

    Authorization: Bearer <token>

Any valid session is an admin; there are no roles. When IDENTITY_JWT_SECRET
is not configured the check is disabled and writes are open.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from gallery.core.config import get_settings
from gallery.core.logging import get_logger

_security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_session(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_security)],
) -> dict[str, object] | None:
    """
    Dependency on every write route. Returns the session claims, or None
    when the check is disabled.
    """
    settings = get_settings()
    if not settings.IDENTITY_JWT_SECRET:
        return None

    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        claims = jwt.decode(
            credentials.credentials,
            settings.IDENTITY_JWT_SECRET,
            algorithms=settings.IDENTITY_JWT_ALGORITHMS,
            options={"verify_aud": False},
        )
    except ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except JWTError:
        raise _unauthorized("Invalid token")

    user = claims.get("email") or claims.get("sub")
    if not user:
        raise _unauthorized("Invalid token")

    request.state.user = str(user)
    get_logger(__name__, request).debug("Session verified")
    return claims
