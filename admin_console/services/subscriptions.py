# admin_console/services/subscriptions.py
from typing import List

from admin_console.schemas.entities import SubscriptionPlan, SubscriptionStatus, UserSubscription, decode_rows
from admin_console.services.supabase_client import SupabaseGateway
from admin_console.services.transitions import Transition
from admin_console.services.users import matches_search

PLAN_TABLE = "subscription_plans"
SUB_TABLE = "user_subscriptions"

SUB_COLUMNS = (
    "*,"
    "profiles!user_subscriptions_user_id_fkey(display_name,email),"
    "subscription_plans(name,price_amount,currency)"
)

CANCEL = Transition(
    table=SUB_TABLE,
    status=SubscriptionStatus.CANCELLED.value,
    timestamp_field="cancelled_at",
    done_message="Subscription cancelled",
)
REFUND = Transition(
    table=SUB_TABLE,
    status=SubscriptionStatus.REFUNDED.value,
    timestamp_field="refunded_at",
    done_message="Subscription refunded",
    reason_field="refund_reason",
    reason_required=True,
)


# ---- plans ----

def list_plans(gateway: SupabaseGateway) -> List[SubscriptionPlan]:
    rows = gateway.select(PLAN_TABLE, "*", order="price_amount")
    return decode_rows(SubscriptionPlan, rows)


def toggle_plan(gateway: SupabaseGateway, plan_id: str, current_is_active: bool) -> str:
    """Flips `is_active` from the value the caller is looking at. No confirmation."""
    new_value = not current_is_active
    gateway.update(PLAN_TABLE, {"is_active": new_value}, id=plan_id)
    return "Plan activated" if new_value else "Plan deactivated"


# ---- user subscriptions ----

def list_subscriptions(gateway: SupabaseGateway, limit: int) -> List[UserSubscription]:
    rows = gateway.select(SUB_TABLE, SUB_COLUMNS, order="created_at", desc=True, limit=limit)
    return decode_rows(UserSubscription, rows)


def filter_subscriptions(items: List[UserSubscription], search: str) -> List[UserSubscription]:
    """
    Narrows the already-fetched page by subscriber name or email. Rows beyond
    the fetch limit are never searched.
    """
    return [
        s for s in items
        if matches_search(search, s.profile.display_name if s.profile else None,
                          s.profile.email if s.profile else None)
    ]
