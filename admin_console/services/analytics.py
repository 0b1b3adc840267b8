# admin_console/services/analytics.py
"""
Analytics page.

All series are derived here from raw rows rather than in SQL:
  - user growth: profiles per calendar day, running total over the whole
    history, last `window` days returned
  - revenue: completed payment amounts (minor units / 100) per day
  - subscription breakdown: active subscriptions per plan name
  - moderation stats: exact counts straight from the backend

The four derivations run concurrently and fail independently: a branch that
errors is logged and contributes its empty default.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List

import pandas as pd

from admin_console.schemas.responses import (
    AnalyticsOut,
    GrowthPoint,
    ModerationStats,
    PlanSlice,
    RevenuePoint,
)
from admin_console.services.formatting import approval_rate, format_percent
from admin_console.services.supabase_client import GatewayError, SupabaseGateway

logger = logging.getLogger(__name__)

UNKNOWN_PLAN = "Unknown"


def _to_local_days(values: pd.Series, tz: str) -> pd.Series:
    """ISO timestamps -> calendar dates in `tz`. Unparseable values become NaT and are dropped."""
    stamps = pd.to_datetime(values, utc=True, errors="coerce", format="ISO8601")
    return stamps.dt.tz_convert(tz).dt.date


# (1) pure derivations

def daily_user_growth(rows: List[Dict[str, Any]], tz: str = "UTC", window: int = 30) -> List[GrowthPoint]:
    if not rows:
        return []
    df = pd.DataFrame({"created_at": [r.get("created_at") for r in rows]})
    df["day"] = _to_local_days(df["created_at"], tz)
    df = df.dropna(subset=["day"])
    if df.empty:
        return []

    per_day = df.groupby("day").size().sort_index()
    cumulative = per_day.cumsum()

    return [
        GrowthPoint(date=day.isoformat(), users=int(cumulative[day]), new_users=int(count))
        for day, count in per_day.tail(window).items()
    ]


def daily_revenue(rows: List[Dict[str, Any]], tz: str = "UTC", window: int = 30) -> List[RevenuePoint]:
    if not rows:
        return []
    df = pd.DataFrame({
        "amount": [r.get("amount") for r in rows],
        "created_at": [r.get("created_at") for r in rows],
    })
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0) / 100
    df["day"] = _to_local_days(df["created_at"], tz)
    df = df.dropna(subset=["day"])
    if df.empty:
        return []

    per_day = df.groupby("day")["amount"].sum().sort_index().tail(window)
    return [
        RevenuePoint(date=day.isoformat(), revenue=round(float(total), 2))
        for day, total in per_day.items()
    ]


def subscription_breakdown(rows: List[Dict[str, Any]]) -> List[PlanSlice]:
    if not rows:
        return []
    names = pd.Series(
        [(r.get("subscription_plans") or {}).get("name") or UNKNOWN_PLAN for r in rows],
        dtype="object",
    )
    counts = names.value_counts()
    total = int(counts.sum())
    return [
        PlanSlice(name=str(name), value=int(n), share=round(int(n) / total, 4))
        for name, n in counts.items()
    ]


def moderation_stats(pending: int, approved: int, rejected: int, flags: int) -> ModerationStats:
    rate = approval_rate(approved, rejected)
    return ModerationStats(
        pending_photos=pending,
        approved_photos=approved,
        rejected_photos=rejected,
        total_flags=flags,
        total_reviewed=approved + rejected,
        approval_rate=rate,
        approval_rate_display=format_percent(rate),
    )


# (2) backend loaders

def load_user_growth(gateway: SupabaseGateway, tz: str, window: int) -> List[GrowthPoint]:
    rows = gateway.select("profiles", "created_at", order="created_at")
    return daily_user_growth(rows, tz, window)


def load_revenue(gateway: SupabaseGateway, tz: str, window: int) -> List[RevenuePoint]:
    rows = gateway.select(
        "payment_transactions",
        "amount,currency,created_at,status",
        eq={"status": "completed"},
        order="created_at",
    )
    return daily_revenue(rows, tz, window)


def load_subscription_breakdown(gateway: SupabaseGateway) -> List[PlanSlice]:
    rows = gateway.select(
        "user_subscriptions",
        "status,subscription_plans(name)",
        eq={"status": "active"},
    )
    return subscription_breakdown(rows)


async def load_moderation_stats(gateway: SupabaseGateway) -> ModerationStats:
    pending, approved, rejected, flags = await asyncio.gather(
        asyncio.to_thread(gateway.count, "photo_moderation_queue", eq={"status": "pending"}),
        asyncio.to_thread(gateway.count, "photo_moderation_queue", eq={"status": "approved"}),
        asyncio.to_thread(gateway.count, "photo_moderation_queue", eq={"status": "rejected"}),
        asyncio.to_thread(gateway.count, "content_flags"),
    )
    return moderation_stats(pending, approved, rejected, flags)


async def _isolated(name: str, coro, default: Callable[[], Any], failed: List[str]):
    try:
        return await coro
    except GatewayError as e:
        logger.error("[ANALYTICS] %s failed: %s", name, e.message)
        failed.append(name)
        return default()


async def load_analytics(gateway: SupabaseGateway, tz: str = "UTC", window: int = 30) -> AnalyticsOut:
    failed: List[str] = []
    growth, revenue, breakdown, moderation = await asyncio.gather(
        _isolated("user_growth", asyncio.to_thread(load_user_growth, gateway, tz, window), list, failed),
        _isolated("revenue", asyncio.to_thread(load_revenue, gateway, tz, window), list, failed),
        _isolated("subscription_breakdown", asyncio.to_thread(load_subscription_breakdown, gateway), list, failed),
        _isolated("moderation", load_moderation_stats(gateway), ModerationStats, failed),
    )
    return AnalyticsOut(
        user_growth=growth,
        revenue=revenue,
        subscription_breakdown=breakdown,
        moderation=moderation,
        failed=failed,
    )
