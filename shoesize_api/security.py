import time
from typing import Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings


auth_scheme = HTTPBearer(auto_error=True)


def verify_jwt_token(credentials: HTTPAuthorizationCredentials = Depends(auth_scheme)) -> dict:
    try:
        # exp is checked by PyJWT whenever the claim is present
        return jwt.decode(
            credentials.credentials,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
            audience=settings.JWT_AUD,
            issuer=settings.JWT_ISS,
            options={"require": ["sub"]},
        )
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token") from None


def create_jwt(sub: str, ttl_seconds: Optional[int] = None, aud: Optional[str] = None, iss: Optional[str] = None) -> str:
    now = int(time.time())
    ttl = settings.JWT_TTL_SECONDS if ttl_seconds is None else ttl_seconds
    payload = {"sub": sub, "iat": now, "exp": now + ttl}
    if aud or settings.JWT_AUD:
        payload["aud"] = aud or settings.JWT_AUD
    if iss or settings.JWT_ISS:
        payload["iss"] = iss or settings.JWT_ISS
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)
