# admin_console/services/transitions.py
"""
Status changes shared by the photo, compliance and subscription pages.

A transition is one conditional update filtered by the row id: the new
status, a timestamp for the action, and (where the action has one) the
reason/notes text. There is no read-before-write and no version check, so
two admins acting on the same row both succeed and the last write wins.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from admin_console.services.supabase_client import SupabaseGateway

logger = logging.getLogger(__name__)


class ReasonRequired(ValueError):
    """Raised before any backend call when a mandatory reason is blank."""

    def __init__(self, field: str):
        super().__init__(f"{field} is required")
        self.field = field


@dataclass(frozen=True)
class Transition:
    table: str
    status: str
    timestamp_field: str
    done_message: str
    reason_field: Optional[str] = None
    reason_required: bool = False
    reviewer_field: Optional[str] = None
    # written as null on every call, whatever reason is passed
    clears_field: Optional[str] = None


def clean_reason(reason: Optional[str]) -> Optional[str]:
    if reason is None:
        return None
    return reason.strip() or None


def build_patch(
    transition: Transition,
    reason: Optional[str],
    admin_id: Optional[str],
    now: datetime,
) -> Dict[str, Any]:
    cleaned = clean_reason(reason)
    if transition.reason_required and not cleaned:
        raise ReasonRequired(transition.reason_field or "reason")

    patch: Dict[str, Any] = {
        "status": transition.status,
        transition.timestamp_field: now.isoformat(),
    }
    if transition.reason_field:
        patch[transition.reason_field] = cleaned
    if transition.clears_field:
        patch[transition.clears_field] = None
    if transition.reviewer_field and admin_id:
        patch[transition.reviewer_field] = admin_id
    return patch


def apply_transition(
    gateway: SupabaseGateway,
    transition: Transition,
    entity_id: str,
    *,
    now: datetime,
    reason: Optional[str] = None,
    admin_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    patch = build_patch(transition, reason, admin_id, now)
    logger.info(
        "[TRANSITION] %s id=%s -> %s by admin=%s",
        transition.table, entity_id, transition.status, admin_id,
    )
    return gateway.update(transition.table, patch, id=entity_id)
