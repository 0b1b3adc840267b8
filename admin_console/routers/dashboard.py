# admin_console/routers/dashboard.py
from datetime import datetime

from fastapi import APIRouter, Depends

from admin_console.deps import get_current_admin, get_gateway, get_now
from admin_console.errors import backend_failure
from admin_console.schemas.entities import AdminUser
from admin_console.schemas.responses import DashboardSummary
from admin_console.services.dashboard import load_summary
from admin_console.services.supabase_client import GatewayError, SupabaseGateway

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
async def dashboard_summary(
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    """
    Users, pending photos, active subscriptions and moderation actions in the
    last 24h. Counts that could not be loaded are listed in `failed`.
    """
    try:
        return await load_summary(gateway, now)
    except GatewayError as e:
        raise backend_failure("DASHBOARD", e, "Failed to load dashboard")
