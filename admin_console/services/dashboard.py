# admin_console/services/dashboard.py
import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, List

from admin_console.schemas.responses import DashboardSummary
from admin_console.services.supabase_client import GatewayError, SupabaseGateway

logger = logging.getLogger(__name__)

RECENT_ACTIONS_WINDOW = timedelta(hours=24)


def _count_queries(gateway: SupabaseGateway, since: datetime) -> Dict[str, Callable[[], int]]:
    return {
        "total_users": lambda: gateway.count("profiles"),
        "pending_photos": lambda: gateway.count("photo_moderation_queue", eq={"status": "pending"}),
        "active_subscriptions": lambda: gateway.count("user_subscriptions", eq={"status": "active"}),
        "recent_actions": lambda: gateway.count(
            "moderation_actions", gte={"created_at": since.isoformat()}
        ),
    }


async def load_summary(gateway: SupabaseGateway, now: datetime) -> DashboardSummary:
    """
    Four exact counts fetched concurrently. Each count stands alone: one that
    fails is logged, reported as 0 and listed in `failed`. Only when every
    count fails is the first backend error raised.
    """
    since = now - RECENT_ACTIONS_WINDOW
    queries = _count_queries(gateway, since)

    results = await asyncio.gather(
        *(asyncio.to_thread(fn) for fn in queries.values()),
        return_exceptions=True,
    )

    counts: Dict[str, int] = {}
    errors: List[GatewayError] = []
    failed: List[str] = []
    for name, result in zip(queries, results):
        if isinstance(result, GatewayError):
            logger.error("[DASHBOARD] %s count failed: %s", name, result.message)
            errors.append(result)
            failed.append(name)
            counts[name] = 0
        elif isinstance(result, BaseException):
            raise result
        else:
            counts[name] = result

    if len(errors) == len(queries):
        raise errors[0]

    return DashboardSummary(since=since, failed=failed, **counts)
