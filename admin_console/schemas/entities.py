# admin_console/schemas/entities.py
"""
Row models for the backend tables the console reads.

Status columns are free text in the database. Each one is decoded into a
closed enum here; a value the console does not know becomes ``unknown``
(and is logged) instead of failing the whole list.
"""
import logging
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, computed_field

from admin_console.services.formatting import format_price, user_badge
from admin_console.services.supabase_client import GatewayError

logger = logging.getLogger(__name__)


class _BackendEnum(str, Enum):
    """str enum with an UNKNOWN member used for unexpected backend values."""

    @classmethod
    def coerce(cls, value: Any):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.warning("unexpected %s value from backend: %r", cls.__name__, value)
            return cls("unknown")


class AdminRole(_BackendEnum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MODERATOR = "moderator"
    SUPPORT = "support"
    UNKNOWN = "unknown"


class PhotoStatus(_BackendEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    FLAGGED = "flagged"
    UNKNOWN = "unknown"


class AgeVerificationStatus(_BackendEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class GdprStatus(_BackendEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class ContentFlagStatus(_BackendEnum):
    PENDING = "pending"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"
    UNKNOWN = "unknown"


class SubscriptionStatus(_BackendEnum):
    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    UNPAID = "unpaid"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    CANCELED = "canceled"  # Stripe spelling
    REFUNDED = "refunded"
    UNKNOWN = "unknown"


class ModerationActionType(_BackendEnum):
    """Closed vocabulary of `moderation_actions.action_type`; see ModerationAction."""

    BAN_USER = "ban_user"
    UNBAN_USER = "unban_user"
    SUSPEND_USER = "suspend_user"
    UNSUSPEND_USER = "unsuspend_user"
    VERIFY_USER = "verify_user"
    UNVERIFY_USER = "unverify_user"
    DELETE_PHOTO = "delete_photo"
    APPROVE_PHOTO = "approve_photo"
    REJECT_PHOTO = "reject_photo"
    RESOLVE_REPORT = "resolve_report"
    DISMISS_REPORT = "dismiss_report"
    ADD_NOTE = "add_note"
    SEND_WARNING = "send_warning"
    DELETE_ACCOUNT = "delete_account"
    GRANT_CREDITS = "grant_credits"
    REFUND_PAYMENT = "refund_payment"
    APPROVE_AGE_VERIFICATION = "approve_age_verification"
    REJECT_AGE_VERIFICATION = "reject_age_verification"
    UPDATE_SUBSCRIPTION = "update_subscription"
    FORCE_LOGOUT = "force_logout"
    EDIT_PROFILE = "edit_profile"
    OTHER = "other"
    UNKNOWN = "unknown"


RoleField = Annotated[AdminRole, BeforeValidator(AdminRole.coerce)]
PhotoStatusField = Annotated[PhotoStatus, BeforeValidator(PhotoStatus.coerce)]
AgeVerificationStatusField = Annotated[AgeVerificationStatus, BeforeValidator(AgeVerificationStatus.coerce)]
GdprStatusField = Annotated[GdprStatus, BeforeValidator(GdprStatus.coerce)]
ContentFlagStatusField = Annotated[ContentFlagStatus, BeforeValidator(ContentFlagStatus.coerce)]
SubscriptionStatusField = Annotated[SubscriptionStatus, BeforeValidator(SubscriptionStatus.coerce)]
ActionTypeField = Annotated[ModerationActionType, BeforeValidator(ModerationActionType.coerce)]


class Row(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


R = TypeVar("R", bound=Row)


def decode_rows(model: Type[R], rows: Iterable[Dict[str, Any]]) -> List[R]:
    """
    Validates backend rows into `model`. A row that does not fit (a null in a
    required column, a malformed timestamp) fails the whole list as a
    GatewayError, so it reaches the client as a 502 like any backend fault.
    """
    try:
        return [model.model_validate(r) for r in rows]
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(p) for p in first["loc"])
        logger.error("[ROWS] %s row rejected: %s", model.__name__, e)
        raise GatewayError(
            f"unexpected {model.__name__} row from backend: {where}: {first['msg']}",
            "row_validation",
        ) from e


# ---- people ----

class ProfileRef(Row):
    """Embedded `profiles` relation: only what the tables show."""
    display_name: Optional[str] = None
    email: Optional[str] = None


class Profile(Row):
    id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    date_of_birth: Optional[date] = None
    city: Optional[str] = None
    country: Optional[str] = None
    is_verified: bool = False
    is_banned: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def badge(self) -> str:
        return user_badge(self.is_banned, self.is_verified)


class AdminUser(Row):
    id: str
    email: Optional[str] = None
    role: RoleField = AdminRole.SUPPORT
    is_active: bool = True
    last_login_at: Optional[datetime] = None
    two_factor_enabled: bool = False


# ---- moderation ----

class PhotoQueueEntry(Row):
    id: str
    photo_id: str
    user_id: str
    submitted_at: datetime
    status: PhotoStatusField
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    ai_moderation_score: Optional[float] = None  # 0-1, from the external classifier
    ai_flags: Optional[List[str]] = None
    notes: Optional[str] = None


class ModerationAction(Row):
    """
    Audit row in `moderation_actions`. The console never writes these: the
    ban/unban procedures record them server-side, and the dashboard only
    counts them. The model documents the row shape for anyone reading the
    table through the gateway.
    """
    id: str
    created_at: datetime
    admin_id: str
    action_type: ActionTypeField
    target_user_id: Optional[str] = None
    target_content_id: Optional[str] = None
    reason: Optional[str] = None
    notes: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    result: str = ""


# ---- compliance ----

class AgeVerificationRequest(Row):
    id: str
    user_id: str
    verification_method: str
    status: AgeVerificationStatusField
    submitted_at: datetime
    document_url: Optional[str] = None
    document_type: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    notes: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    profile: Optional[ProfileRef] = Field(None, alias="profiles")


class GdprRequest(Row):
    id: str
    user_id: str
    request_type: str
    status: GdprStatusField
    created_at: datetime
    completed_at: Optional[datetime] = None
    data_delivered_at: Optional[datetime] = None
    admin_notes: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    profile: Optional[ProfileRef] = Field(None, alias="profiles")


class ContentFlag(Row):
    id: str
    reported_by: Optional[str] = None
    target_user_id: str
    target_content_id: Optional[str] = None
    content_type: Optional[str] = None
    flag_type: str
    description: Optional[str] = None
    status: ContentFlagStatusField
    created_at: datetime
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None
    resolution: Optional[str] = None
    reporter: Optional[ProfileRef] = None
    target_user: Optional[ProfileRef] = None


# ---- billing ----

class SubscriptionPlan(Row):
    id: str
    name: str
    description: Optional[str] = None
    duration_days: int
    price_amount: int
    currency: str = "USD"
    stripe_price_id: Optional[str] = None
    stripe_product_id: Optional[str] = None
    features: Optional[List[str]] = None
    is_active: bool = True
    display_order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def price_display(self) -> str:
        return format_price(self.price_amount, self.currency)


class PlanRef(Row):
    name: Optional[str] = None
    price_amount: Optional[int] = None
    currency: Optional[str] = None


class UserSubscription(Row):
    id: str
    user_id: str
    subscription_plan_id: str
    stripe_subscription_id: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    status: SubscriptionStatusField
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    auto_renew: bool = False
    cancelled_at: Optional[datetime] = None
    refunded_at: Optional[datetime] = None
    refund_reason: Optional[str] = None
    payment_method: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    profile: Optional[ProfileRef] = Field(None, alias="profiles")
    plan: Optional[PlanRef] = Field(None, alias="subscription_plans")

    @computed_field
    @property
    def amount_display(self) -> str:
        plan = self.plan or PlanRef()
        return format_price(plan.price_amount or 0, plan.currency)
