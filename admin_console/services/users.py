# admin_console/services/users.py
import logging
from typing import List, Optional

from admin_console.schemas.entities import Profile, decode_rows
from admin_console.services.supabase_client import SupabaseGateway

logger = logging.getLogger(__name__)

TABLE = "profiles"

DEFAULT_BAN_REASON = "Banned by admin"
DEFAULT_UNBAN_REASON = "Unbanned by admin"


def matches_search(search: Optional[str], *fields: Optional[str]) -> bool:
    """Case-insensitive substring match on any of `fields`; a blank search matches everything."""
    term = (search or "").strip().lower()
    if not term:
        return True
    return any(f and term in f.lower() for f in fields)


def list_users(gateway: SupabaseGateway, limit: int) -> List[Profile]:
    rows = gateway.select(TABLE, "*", order="created_at", desc=True, limit=limit)
    return decode_rows(Profile, rows)


def filter_users(items: List[Profile], search: str) -> List[Profile]:
    return [u for u in items if matches_search(search, u.display_name, u.email)]


# The procedures own every side effect of a ban (sessions, visibility,
# the moderation_actions record); the console only names the target.

def ban_user(gateway: SupabaseGateway, user_id: str, admin_notes: Optional[str] = None) -> None:
    logger.info("[USERS] ban_user target=%s", user_id)
    gateway.rpc("ban_user", {
        "target_user_id": user_id,
        "ban_reason": DEFAULT_BAN_REASON,
        "admin_notes": admin_notes,
    })


def unban_user(gateway: SupabaseGateway, user_id: str, admin_notes: Optional[str] = None) -> None:
    logger.info("[USERS] unban_user target=%s", user_id)
    gateway.rpc("unban_user", {
        "target_user_id": user_id,
        "unban_reason": DEFAULT_UNBAN_REASON,
        "admin_notes": admin_notes,
    })
