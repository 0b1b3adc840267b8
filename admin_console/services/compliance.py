# admin_console/services/compliance.py
"""
Compliance console: three independent review flows.

- age verification: pending -> approved | rejected (reason)
- GDPR data requests: pending -> completed | rejected (notes either way)
- content flags: pending -> resolved | dismissed (resolution notes either way)

Each list embeds the related profile(s) through the named foreign keys so the
tables can show who is involved without a second round trip.
"""
from typing import List

from admin_console.schemas.entities import (
    AgeVerificationRequest,
    AgeVerificationStatus,
    ContentFlag,
    ContentFlagStatus,
    GdprRequest,
    GdprStatus,
    decode_rows,
)
from admin_console.services.supabase_client import SupabaseGateway
from admin_console.services.transitions import Transition

AGE_TABLE = "age_verification_requests"
GDPR_TABLE = "gdpr_requests"
FLAG_TABLE = "content_flags"

AGE_COLUMNS = "*,profiles!age_verification_requests_user_id_fkey(display_name,email)"
GDPR_COLUMNS = "*,profiles!gdpr_requests_user_id_fkey(display_name,email)"
FLAG_COLUMNS = (
    "*,"
    "reporter:profiles!content_flags_reported_by_fkey(display_name,email),"
    "target_user:profiles!content_flags_target_user_id_fkey(display_name,email)"
)

# ---- age verification ----

AGE_APPROVE = Transition(
    table=AGE_TABLE,
    status=AgeVerificationStatus.APPROVED.value,
    timestamp_field="reviewed_at",
    done_message="Age verification approved",
    clears_field="rejection_reason",
    reviewer_field="reviewed_by",
)
AGE_REJECT = Transition(
    table=AGE_TABLE,
    status=AgeVerificationStatus.REJECTED.value,
    timestamp_field="reviewed_at",
    done_message="Age verification rejected",
    reason_field="rejection_reason",
    reason_required=True,
    reviewer_field="reviewed_by",
)

# ---- GDPR ----

GDPR_COMPLETE = Transition(
    table=GDPR_TABLE,
    status=GdprStatus.COMPLETED.value,
    timestamp_field="completed_at",
    done_message="GDPR request completed",
    reason_field="admin_notes",
    reason_required=True,
)
GDPR_REJECT = Transition(
    table=GDPR_TABLE,
    status=GdprStatus.REJECTED.value,
    timestamp_field="completed_at",
    done_message="GDPR request rejected",
    reason_field="admin_notes",
    reason_required=True,
)

# ---- content flags ----

FLAG_RESOLVE = Transition(
    table=FLAG_TABLE,
    status=ContentFlagStatus.RESOLVED.value,
    timestamp_field="resolved_at",
    done_message="Content flag resolved",
    reason_field="resolution",
    reason_required=True,
    reviewer_field="resolved_by",
)
FLAG_DISMISS = Transition(
    table=FLAG_TABLE,
    status=ContentFlagStatus.DISMISSED.value,
    timestamp_field="resolved_at",
    done_message="Content flag dismissed",
    reason_field="resolution",
    reason_required=True,
    reviewer_field="resolved_by",
)


def list_age_verifications(gateway: SupabaseGateway, limit: int) -> List[AgeVerificationRequest]:
    rows = gateway.select(AGE_TABLE, AGE_COLUMNS, order="submitted_at", desc=True, limit=limit)
    return decode_rows(AgeVerificationRequest, rows)


def list_gdpr_requests(gateway: SupabaseGateway, limit: int) -> List[GdprRequest]:
    rows = gateway.select(GDPR_TABLE, GDPR_COLUMNS, order="created_at", desc=True, limit=limit)
    return decode_rows(GdprRequest, rows)


def list_content_flags(gateway: SupabaseGateway, limit: int) -> List[ContentFlag]:
    rows = gateway.select(FLAG_TABLE, FLAG_COLUMNS, order="created_at", desc=True, limit=limit)
    return decode_rows(ContentFlag, rows)
