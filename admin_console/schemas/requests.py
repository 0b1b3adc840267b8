# admin_console/schemas/requests.py
from typing import Optional

from pydantic import BaseModel, Field


class ReasonIn(BaseModel):
    """Free-text reason / notes for actions that need one. Blank means the admin backed out."""
    reason: Optional[str] = Field(None, max_length=2000)


class ConfirmIn(BaseModel):
    confirm: bool = False
    admin_notes: Optional[str] = Field(None, max_length=2000)


class NotesIn(BaseModel):
    admin_notes: Optional[str] = Field(None, max_length=2000)


class PlanToggleIn(BaseModel):
    # the value the admin is looking at; the toggle writes its negation
    current_is_active: bool
