"""Bearer-token verification for tokens issued by the hosted auth provider.

The provider signs HS256 JWTs with a shared secret; `sub` carries the user id.
Sign-up, login and refresh happen at the provider, so this module only
verifies tokens and exposes the caller's identity to write endpoints.
"""
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from plotkeeper.config import get_settings

security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None


ANONYMOUS = CurrentUser(id="anonymous")


def _decode_access_token(token: str) -> Optional[dict]:
    settings = get_settings()
    options = {"verify_aud": settings.auth_jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=["HS256"],
            audience=settings.auth_jwt_audience,
            options=options,
        )
    except JWTError:
        return None


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    settings = get_settings()
    if not settings.auth_required:
        return ANONYMOUS
    if not settings.auth_jwt_secret:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Auth is not configured")
    if not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    payload = _decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return CurrentUser(id=str(payload["sub"]), email=payload.get("email"))
