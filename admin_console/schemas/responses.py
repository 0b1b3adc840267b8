# admin_console/schemas/responses.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from admin_console.schemas.entities import (
    AdminUser,
    AgeVerificationRequest,
    ContentFlag,
    GdprRequest,
    PhotoQueueEntry,
    Profile,
    SubscriptionPlan,
    UserSubscription,
)

# Every page response carries the rows for the current view. Mutations return
# the same shape after a full re-fetch, with `message` set to the confirmation.


class PageOut(BaseModel):
    message: Optional[str] = None
    empty_message: Optional[str] = None


class PhotoPage(PageOut):
    filter: str
    pending_count: int = 0
    items: List[PhotoQueueEntry] = Field(default_factory=list)


class AgeVerificationPage(PageOut):
    items: List[AgeVerificationRequest] = Field(default_factory=list)


class GdprPage(PageOut):
    items: List[GdprRequest] = Field(default_factory=list)


class ContentFlagPage(PageOut):
    items: List[ContentFlag] = Field(default_factory=list)


class PlanPage(PageOut):
    items: List[SubscriptionPlan] = Field(default_factory=list)


class SubscriptionPage(PageOut):
    search: str = ""
    fetched: int = 0
    items: List[UserSubscription] = Field(default_factory=list)


class UserPage(PageOut):
    search: str = ""
    fetched: int = 0
    items: List[Profile] = Field(default_factory=list)


class MeOut(BaseModel):
    admin: AdminUser


# ---- dashboard / analytics ----

class DashboardSummary(BaseModel):
    total_users: int = 0
    pending_photos: int = 0
    active_subscriptions: int = 0
    recent_actions: int = 0
    since: datetime
    failed: List[str] = Field(default_factory=list)


class GrowthPoint(BaseModel):
    date: str
    users: int
    new_users: int


class RevenuePoint(BaseModel):
    date: str
    revenue: float


class PlanSlice(BaseModel):
    name: str
    value: int
    share: float = 0.0  # of all active subscriptions, 0-1


class ModerationStats(BaseModel):
    pending_photos: int = 0
    approved_photos: int = 0
    rejected_photos: int = 0
    total_flags: int = 0
    total_reviewed: int = 0
    approval_rate: float = 0.0
    approval_rate_display: str = "0.0%"


class AnalyticsOut(BaseModel):
    user_growth: List[GrowthPoint] = Field(default_factory=list)
    revenue: List[RevenuePoint] = Field(default_factory=list)
    subscription_breakdown: List[PlanSlice] = Field(default_factory=list)
    moderation: ModerationStats = Field(default_factory=ModerationStats)
    failed: List[str] = Field(default_factory=list)
