# admin_console/routers/auth.py
from fastapi import APIRouter, Depends

from admin_console.deps import get_current_admin
from admin_console.schemas.entities import AdminUser
from admin_console.schemas.responses import MeOut

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me", response_model=MeOut)
def me(admin: AdminUser = Depends(get_current_admin)):
    """
    The signed-in admin (shown in the console sidebar with their role).
    - auth: Supabase access token (Authorization: Bearer <token>)
    - the account must exist in admin_users and be active
    """
    return MeOut(admin=admin)


@router.post("/logout", status_code=204)
def logout():
    """
    There is no server-side session. The browser calls supabase.auth.signOut();
    this endpoint only returns 204 for the UI.
    """
    return
