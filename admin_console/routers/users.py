# admin_console/routers/users.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from admin_console.config import settings
from admin_console.deps import get_current_admin, get_gateway
from admin_console.errors import backend_failure, confirmation_required
from admin_console.schemas.entities import AdminUser
from admin_console.schemas.requests import ConfirmIn, NotesIn
from admin_console.schemas.responses import UserPage
from admin_console.services import users as svc
from admin_console.services.supabase_client import GatewayError, SupabaseGateway

router = APIRouter(prefix="/api/users", tags=["users"])


def _user_page(gateway: SupabaseGateway, search: str, message: Optional[str] = None) -> UserPage:
    try:
        fetched = svc.list_users(gateway, settings.list_limit)
    except GatewayError as e:
        raise backend_failure("USERS", e, "Failed to load users", done=message)
    items = svc.filter_users(fetched, search)
    return UserPage(
        message=message,
        search=search,
        fetched=len(fetched),
        items=items,
        empty_message=None if items else "No users found",
    )


@router.get("", response_model=UserPage)
def list_users(
    search: str = Query("", max_length=200, description="matches display name or email"),
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    """
    Newest 100 profiles, optionally narrowed by `search`.
    The search only looks inside that page; it is not a backend query.
    """
    return _user_page(gateway, search)


@router.post("/{user_id}/ban", response_model=UserPage)
def ban_user(
    user_id: str,
    payload: Optional[ConfirmIn] = None,
    search: str = Query("", max_length=200),
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    if not payload or not payload.confirm:
        raise confirmation_required("ban this user")
    try:
        svc.ban_user(gateway, user_id, payload.admin_notes)
    except GatewayError as e:
        raise backend_failure("USERS", e, "Failed to ban user")
    return _user_page(gateway, search, "User banned successfully")


@router.post("/{user_id}/unban", response_model=UserPage)
def unban_user(
    user_id: str,
    payload: Optional[NotesIn] = None,
    search: str = Query("", max_length=200),
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    try:
        svc.unban_user(gateway, user_id, payload.admin_notes if payload else None)
    except GatewayError as e:
        raise backend_failure("USERS", e, "Failed to unban user")
    return _user_page(gateway, search, "User unbanned successfully")
