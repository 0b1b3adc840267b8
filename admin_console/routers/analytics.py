# admin_console/routers/analytics.py
from fastapi import APIRouter, Depends

from admin_console.config import settings
from admin_console.deps import get_current_admin, get_gateway
from admin_console.schemas.entities import AdminUser
from admin_console.schemas.responses import AnalyticsOut
from admin_console.services.analytics import load_analytics
from admin_console.services.supabase_client import SupabaseGateway

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsOut)
async def analytics(
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    # each section fails on its own; see `failed` in the response
    return await load_analytics(
        gateway,
        tz=settings.report_timezone,
        window=settings.analytics_window_days,
    )
