# admin_console/services/auth.py
from typing import Dict

from jose import JWTError, jwt

from admin_console.config import settings


def verify_bearer(authorization: str | None) -> Dict[str, str | None]:
    """
    - Takes the token out of an `Authorization: Bearer <access_token>` header
    - verifies it with the Supabase JWT secret (HS256)
    - returns the basic claims (sub, email).
    """
    if not authorization:
        raise ValueError("missing Authorization header")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise ValueError("invalid Authorization header")

    token = parts[1].strip()
    if not token:
        raise ValueError("invalid Authorization header")

    if not settings.supabase_jwt_secret:
        raise RuntimeError("SUPABASE_JWT_SECRET is not set")

    try:
        decode_kwargs = {
            "key": settings.supabase_jwt_secret,
            "algorithms": ["HS256"],
            "options": {"verify_aud": bool(settings.supabase_jwt_audience)},
        }
        if settings.supabase_jwt_audience:
            decode_kwargs["audience"] = settings.supabase_jwt_audience
        if settings.supabase_issuer:
            decode_kwargs["issuer"] = settings.supabase_issuer

        claims = jwt.decode(token, **decode_kwargs)

    except JWTError as e:
        # get_current_admin turns this into a 401
        raise ValueError("invalid token") from e

    user_id = claims.get("sub")
    if not user_id:
        raise ValueError("invalid token: missing sub")

    return {
        "user_id": user_id,
        "email": claims.get("email"),
    }
