# admin_console/services/photo_moderation.py
from enum import Enum
from typing import List

from admin_console.schemas.entities import PhotoQueueEntry, PhotoStatus, decode_rows
from admin_console.services.supabase_client import SupabaseGateway
from admin_console.services.transitions import Transition

TABLE = "photo_moderation_queue"

APPROVE = Transition(
    table=TABLE,
    status=PhotoStatus.APPROVED.value,
    timestamp_field="reviewed_at",
    done_message="Photo approved",
    clears_field="rejection_reason",
    reviewer_field="reviewed_by",
)
REJECT = Transition(
    table=TABLE,
    status=PhotoStatus.REJECTED.value,
    timestamp_field="reviewed_at",
    done_message="Photo rejected",
    reason_field="rejection_reason",
    reason_required=True,
    reviewer_field="reviewed_by",
)


class PhotoFilter(str, Enum):
    PENDING = "pending"
    ALL = "all"


def list_photos(gateway: SupabaseGateway, photo_filter: PhotoFilter, limit: int) -> List[PhotoQueueEntry]:
    """Newest submissions first; the pending view only shows items still awaiting review."""
    eq = {"status": PhotoStatus.PENDING.value} if photo_filter == PhotoFilter.PENDING else None
    rows = gateway.select(TABLE, "*", eq=eq, order="submitted_at", desc=True, limit=limit)
    return decode_rows(PhotoQueueEntry, rows)


def pending_count(items: List[PhotoQueueEntry]) -> int:
    return sum(1 for p in items if p.status == PhotoStatus.PENDING)


def empty_message(photo_filter: PhotoFilter) -> str:
    if photo_filter == PhotoFilter.PENDING:
        return "All caught up! No photos pending review"
    return "No photos in the moderation queue"
