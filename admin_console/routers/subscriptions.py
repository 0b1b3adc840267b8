# admin_console/routers/subscriptions.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from admin_console.config import settings
from admin_console.deps import get_current_admin, get_gateway, get_now
from admin_console.errors import backend_failure, confirmation_required, transition_or_raise
from admin_console.schemas.entities import AdminUser
from admin_console.schemas.requests import ConfirmIn, PlanToggleIn, ReasonIn
from admin_console.schemas.responses import PlanPage, SubscriptionPage
from admin_console.services import subscriptions as svc
from admin_console.services.supabase_client import GatewayError, SupabaseGateway

router = APIRouter(prefix="/api/subscriptions", tags=["subscriptions"])


# ---- plans ----

def _plan_page(gateway: SupabaseGateway, message: Optional[str] = None) -> PlanPage:
    try:
        items = svc.list_plans(gateway)
    except GatewayError as e:
        raise backend_failure("SUBSCRIPTIONS", e, "Failed to load subscriptions", done=message)
    return PlanPage(message=message, items=items, empty_message=None if items else "No subscription plans")


@router.get("/plans", response_model=PlanPage)
def list_plans(
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    return _plan_page(gateway)


@router.post("/plans/{plan_id}/toggle", response_model=PlanPage)
def toggle_plan(
    plan_id: str,
    payload: PlanToggleIn,
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    try:
        message = svc.toggle_plan(gateway, plan_id, payload.current_is_active)
    except GatewayError as e:
        raise backend_failure("SUBSCRIPTIONS", e, "Failed to update plan")
    return _plan_page(gateway, message)


# ---- user subscriptions ----

def _subscription_page(
    gateway: SupabaseGateway, search: str, message: Optional[str] = None
) -> SubscriptionPage:
    try:
        fetched = svc.list_subscriptions(gateway, settings.list_limit)
    except GatewayError as e:
        raise backend_failure("SUBSCRIPTIONS", e, "Failed to load subscriptions", done=message)
    items = svc.filter_subscriptions(fetched, search)
    return SubscriptionPage(
        message=message,
        search=search,
        fetched=len(fetched),
        items=items,
        empty_message=None if items else "No subscriptions found",
    )


@router.get("", response_model=SubscriptionPage)
def list_subscriptions(
    search: str = Query("", max_length=200, description="matches user name or email"),
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    return _subscription_page(gateway, search)


@router.post("/{subscription_id}/cancel", response_model=SubscriptionPage)
def cancel_subscription(
    subscription_id: str,
    payload: Optional[ConfirmIn] = None,
    search: str = Query("", max_length=200),
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    if not payload or not payload.confirm:
        raise confirmation_required("cancel this subscription")
    transition_or_raise(
        "SUBSCRIPTIONS", "Failed to cancel subscription", gateway, svc.CANCEL, subscription_id,
        now=now, admin_id=admin.id,
    )
    return _subscription_page(gateway, search, svc.CANCEL.done_message)


@router.post("/{subscription_id}/refund", response_model=SubscriptionPage)
def refund_subscription(
    subscription_id: str,
    payload: Optional[ReasonIn] = None,
    search: str = Query("", max_length=200),
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    transition_or_raise(
        "SUBSCRIPTIONS", "Failed to refund subscription", gateway, svc.REFUND, subscription_id,
        now=now, reason=payload.reason if payload else None, admin_id=admin.id,
    )
    return _subscription_page(gateway, search, svc.REFUND.done_message)
