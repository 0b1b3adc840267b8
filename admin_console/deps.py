# admin_console/deps.py
import logging
from datetime import datetime, timezone

from fastapi import Depends, Header, HTTPException

from admin_console.errors import backend_failure
from admin_console.schemas.entities import AdminUser
from admin_console.services.auth import verify_bearer
from admin_console.services.supabase_client import (
    GatewayError,
    SupabaseGateway,
    get_supabase_gateway,
)

logger = logging.getLogger(__name__)


# ----------------------------
# backend gateway
# ----------------------------
def get_gateway() -> SupabaseGateway:
    return get_supabase_gateway()


# ----------------------------
# wall clock (overridden in tests)
# ----------------------------
def get_now() -> datetime:
    return datetime.now(timezone.utc)


# ----------------------------
# current admin
# ----------------------------
def get_current_admin(
    authorization: str | None = Header(None),
    gateway: SupabaseGateway = Depends(get_gateway),
) -> AdminUser:
    """
    The signed-in staff member, resolved per request from the access token
    and the `admin_users` table. Only active admins get through.
    """
    try:
        claims = verify_bearer(authorization)
    except ValueError as e:
        logger.warning("verify_bearer failed: %s", e)
        raise HTTPException(
            status_code=401,
            detail={"message": "unauthorized", "detail": str(e)},
        )

    try:
        rows = gateway.select("admin_users", eq={"id": claims["user_id"]}, limit=1)
    except GatewayError as e:
        raise backend_failure("AUTH", e, "Failed to load admin account")

    if not rows or not rows[0].get("is_active", False):
        raise HTTPException(
            status_code=403,
            detail={"message": "forbidden", "detail": "Admin access required"},
        )

    admin = AdminUser.model_validate(rows[0])
    if not admin.email:
        admin.email = claims.get("email")
    return admin
