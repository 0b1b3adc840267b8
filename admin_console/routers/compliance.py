# admin_console/routers/compliance.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends

from admin_console.config import settings
from admin_console.deps import get_current_admin, get_gateway, get_now
from admin_console.errors import backend_failure, transition_or_raise
from admin_console.schemas.entities import AdminUser
from admin_console.schemas.requests import ReasonIn
from admin_console.schemas.responses import AgeVerificationPage, ContentFlagPage, GdprPage
from admin_console.services import compliance as svc
from admin_console.services.supabase_client import GatewayError, SupabaseGateway

router = APIRouter(prefix="/api/compliance", tags=["compliance"])

LOAD_FAILED = "Failed to load compliance data"


def _reason(payload: Optional[ReasonIn]) -> Optional[str]:
    return payload.reason if payload else None


# ---- age verification ----

def _age_page(gateway: SupabaseGateway, message: Optional[str] = None) -> AgeVerificationPage:
    try:
        items = svc.list_age_verifications(gateway, settings.list_limit)
    except GatewayError as e:
        raise backend_failure("COMPLIANCE", e, LOAD_FAILED, done=message)
    return AgeVerificationPage(
        message=message,
        items=items,
        empty_message=None if items else "No age verification requests",
    )


@router.get("/age-verifications", response_model=AgeVerificationPage)
def list_age_verifications(
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    return _age_page(gateway)


@router.post("/age-verifications/{request_id}/approve", response_model=AgeVerificationPage)
def approve_age_verification(
    request_id: str,
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    transition_or_raise(
        "COMPLIANCE", "Failed to update age verification", gateway, svc.AGE_APPROVE, request_id,
        now=now, admin_id=admin.id,
    )
    return _age_page(gateway, svc.AGE_APPROVE.done_message)


@router.post("/age-verifications/{request_id}/reject", response_model=AgeVerificationPage)
def reject_age_verification(
    request_id: str,
    payload: Optional[ReasonIn] = None,
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    transition_or_raise(
        "COMPLIANCE", "Failed to update age verification", gateway, svc.AGE_REJECT, request_id,
        now=now, reason=_reason(payload), admin_id=admin.id,
    )
    return _age_page(gateway, svc.AGE_REJECT.done_message)


# ---- GDPR ----

def _gdpr_page(gateway: SupabaseGateway, message: Optional[str] = None) -> GdprPage:
    try:
        items = svc.list_gdpr_requests(gateway, settings.list_limit)
    except GatewayError as e:
        raise backend_failure("COMPLIANCE", e, LOAD_FAILED, done=message)
    return GdprPage(message=message, items=items, empty_message=None if items else "No GDPR requests")


@router.get("/gdpr-requests", response_model=GdprPage)
def list_gdpr_requests(
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    return _gdpr_page(gateway)


@router.post("/gdpr-requests/{request_id}/complete", response_model=GdprPage)
def complete_gdpr_request(
    request_id: str,
    payload: Optional[ReasonIn] = None,
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    transition_or_raise(
        "COMPLIANCE", "Failed to update GDPR request", gateway, svc.GDPR_COMPLETE, request_id,
        now=now, reason=_reason(payload), admin_id=admin.id,
    )
    return _gdpr_page(gateway, svc.GDPR_COMPLETE.done_message)


@router.post("/gdpr-requests/{request_id}/reject", response_model=GdprPage)
def reject_gdpr_request(
    request_id: str,
    payload: Optional[ReasonIn] = None,
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    transition_or_raise(
        "COMPLIANCE", "Failed to update GDPR request", gateway, svc.GDPR_REJECT, request_id,
        now=now, reason=_reason(payload), admin_id=admin.id,
    )
    return _gdpr_page(gateway, svc.GDPR_REJECT.done_message)


# ---- content flags ----

def _flag_page(gateway: SupabaseGateway, message: Optional[str] = None) -> ContentFlagPage:
    try:
        items = svc.list_content_flags(gateway, settings.list_limit)
    except GatewayError as e:
        raise backend_failure("COMPLIANCE", e, LOAD_FAILED, done=message)
    return ContentFlagPage(message=message, items=items, empty_message=None if items else "No content flags")


@router.get("/content-flags", response_model=ContentFlagPage)
def list_content_flags(
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
):
    return _flag_page(gateway)


@router.post("/content-flags/{flag_id}/resolve", response_model=ContentFlagPage)
def resolve_content_flag(
    flag_id: str,
    payload: Optional[ReasonIn] = None,
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    transition_or_raise(
        "COMPLIANCE", "Failed to update content flag", gateway, svc.FLAG_RESOLVE, flag_id,
        now=now, reason=_reason(payload), admin_id=admin.id,
    )
    return _flag_page(gateway, svc.FLAG_RESOLVE.done_message)


@router.post("/content-flags/{flag_id}/dismiss", response_model=ContentFlagPage)
def dismiss_content_flag(
    flag_id: str,
    payload: Optional[ReasonIn] = None,
    gateway: SupabaseGateway = Depends(get_gateway),
    admin: AdminUser = Depends(get_current_admin),
    now: datetime = Depends(get_now),
):
    transition_or_raise(
        "COMPLIANCE", "Failed to update content flag", gateway, svc.FLAG_DISMISS, flag_id,
        now=now, reason=_reason(payload), admin_id=admin.id,
    )
    return _flag_page(gateway, svc.FLAG_DISMISS.done_message)
