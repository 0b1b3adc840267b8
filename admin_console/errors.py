# admin_console/errors.py
import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException

from admin_console.services.supabase_client import GatewayError, SupabaseGateway
from admin_console.services.transitions import ReasonRequired, Transition, apply_transition

logger = logging.getLogger(__name__)


def backend_failure(tag: str, e: GatewayError, fallback: str, done: Optional[str] = None) -> HTTPException:
    """
    502 carrying the backend's message verbatim, or the page's fallback text.

    `done` is the confirmation of a mutation that already went through when
    only the re-fetch afterwards failed; clients must not retry it.
    """
    logger.error("[%s] %s: %s", tag, fallback, e.message)
    detail = {"message": fallback, "detail": e.message or fallback}
    if done:
        detail["done"] = done
    return HTTPException(status_code=502, detail=detail)


def reason_required(e: ReasonRequired) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"message": "reason_required", "detail": str(e)},
    )


def confirmation_required(action: str) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={
            "message": "confirmation_required",
            "detail": f"set confirm=true to {action}",
        },
    )


def transition_or_raise(
    tag: str,
    fallback: str,
    gateway: SupabaseGateway,
    transition: Transition,
    entity_id: str,
    *,
    now: datetime,
    reason: Optional[str] = None,
    admin_id: Optional[str] = None,
) -> None:
    """Runs one status transition, translating its failures into HTTP errors."""
    try:
        apply_transition(gateway, transition, entity_id, now=now, reason=reason, admin_id=admin_id)
    except ReasonRequired as e:
        logger.info("[%s] %s id=%s aborted: %s", tag, transition.status, entity_id, e)
        raise reason_required(e)
    except GatewayError as e:
        raise backend_failure(tag, e, fallback)
