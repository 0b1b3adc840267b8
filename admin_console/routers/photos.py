# admin_console/routers/photos.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from admin_console.config import settings
from admin_console.deps import get_current_admin, get_gateway, get_now
from admin_console.errors import backend_failure, transition_or_raise
from admin_console.schemas.entities import AdminUser
from admin_console.schemas.requests import ReasonIn
from admin_console.schemas.responses import PhotoPage
from admin_console.services import photo_moderation as svc
from admin_console.services.photo_moderation import PhotoFilter
from admin_console.services.supabase_client import GatewayError, SupabaseGateway

router = APIRouter(prefix="/api/photos", tags=["photos"])


def _load_page(gateway: SupabaseGateway, photo_filter: PhotoFilter, message: Optional[str] = None) -> PhotoPage:
    try:
        items = svc.list_photos(gateway, photo_filter, settings.photo_list_limit)
    except GatewayError as e:
        raise backend_failure("PHOTOS", e, "Failed to load photos", done=message)
    return PhotoPage(
        filter=photo_filter.value,
        message=message,
        items=items,
        pending_count=svc.pending_count(items),
        empty_message=None if items else svc.empty_message(photo_filter),
    )


# 1) review queue
@router.get("", response_model=PhotoPage)
def list_photos(
    filter: PhotoFilter = Query(PhotoFilter.PENDING),
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    return _load_page(gateway, filter)


# 2) approve: no reason needed
@router.post("/{photo_id}/approve", response_model=PhotoPage)
def approve_photo(
    photo_id: str,
    filter: PhotoFilter = Query(PhotoFilter.PENDING),
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    transition_or_raise(
        "PHOTOS", "Failed to approve photo", gateway, svc.APPROVE, photo_id,
        now=now, admin_id=admin.id,
    )
    return _load_page(gateway, filter, svc.APPROVE.done_message)


# 3) reject: reason required, checked before anything is sent
@router.post("/{photo_id}/reject", response_model=PhotoPage)
def reject_photo(
    photo_id: str,
    payload: Optional[ReasonIn] = None,
    filter: PhotoFilter = Query(PhotoFilter.PENDING),
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    transition_or_raise(
        "PHOTOS", "Failed to reject photo", gateway, svc.REJECT, photo_id,
        now=now, reason=payload.reason if payload else None, admin_id=admin.id,
    )
    return _load_page(gateway, filter, svc.REJECT.done_message)
