from pydantic import BaseModel, Field

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional


DuplicationWarningType = Literal["LINK_MATCH", "COMPANY_ROLE_MATCH"]


class DuplicationWarning(BaseModel):
    type: DuplicationWarningType
    existing_bid_id: str
    message: str


class EligibilityResult(BaseModel):
    allowed: bool
    reason: str


class FailureRecord(BaseModel):
    interview_id: str
    date: datetime
    recruiter: str
    attendees: List[str] = Field(default_factory=list)


class CompanyRoleHistory(BaseModel):
    company: str
    role: str
    failures: List[FailureRecord] = Field(default_factory=list)


@dataclass(frozen=True)
class FailureInfo:
    """What an interview contributes to company history when it fails."""
    company: str
    role: str
    recruiter: str
    attendees: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ResumeMetadata:
    """
    A saved resume as reported by the resume store.
    Only ``id`` and ``file_path`` matter to the workflows; the rest is informational.
    """
    id: str
    file_path: str
    company: Optional[str] = None
    role: Optional[str] = None
    created_at: Optional[datetime] = None
