# bid_tracker/interview.py
"""
Interview aggregate.

    SCHEDULED -> {COMPLETED_SUCCESS, COMPLETED_FAILURE, CANCELLED}

All three outcomes are terminal. An interview based on a bid (base=BID) always
carries the bid id; a LinkedIn-chat interview never needs one.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from bid_tracker.errors import InvalidTransitionError, ValidationError
from bid_tracker.models import FailureInfo
from bid_tracker.utils import as_date, is_blank


class InterviewBase(str, Enum):
    BID = "BID"
    LINKEDIN_CHAT = "LINKEDIN_CHAT"


class InterviewType(str, Enum):
    HR = "HR"
    TECH_1 = "TECH_INTERVIEW_1"
    TECH_2 = "TECH_INTERVIEW_2"
    TECH_3 = "TECH_INTERVIEW_3"
    FINAL = "FINAL_INTERVIEW"
    CLIENT = "CLIENT_INTERVIEW"

    @property
    def stage(self) -> int:
        return _STAGE_ORDER.index(self)

    def next_stage(self) -> Optional["InterviewType"]:
        i = self.stage + 1
        return _STAGE_ORDER[i] if i < len(_STAGE_ORDER) else None

    @classmethod
    def parse(cls, value: Union[str, "InterviewType"]) -> "InterviewType":
        """Accepts the enum, its value ("TECH_INTERVIEW_1") or its name ("TECH_1"), any case."""
        if isinstance(value, cls):
            return value
        key = (value or "").strip().upper()
        for t in cls:
            if key in (t.value, t.name):
                return t
        raise ValidationError(f"Unknown interview type: {value}")


_STAGE_ORDER = list(InterviewType)


class InterviewStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED_SUCCESS = "COMPLETED_SUCCESS"
    COMPLETED_FAILURE = "COMPLETED_FAILURE"
    CANCELLED = "CANCELLED"


class HRFailureReason(str, Enum):
    BILINGUAL = "Bilingual"
    NOT_REMOTE = "Not Remote"
    SELF_MISTAKE = "Self Mistake"


class TechFailureReason(str, Enum):
    LIVE_CODING = "Live Coding"
    ANSWERING = "Answering"


class FinalClientFailureReason(str, Enum):
    BACKGROUND_CHECK = "Background Check"
    CONVERSATION_ISSUE = "Conversation Issue"


InterviewFailureReason = Union[HRFailureReason, TechFailureReason, FinalClientFailureReason]

_FAILURE_REASON_TYPES = (HRFailureReason, TechFailureReason, FinalClientFailureReason)


def parse_failure_reason(value: Union[str, InterviewFailureReason, None]) -> Optional[InterviewFailureReason]:
    if value is None or isinstance(value, _FAILURE_REASON_TYPES):
        return value
    for enum_cls in _FAILURE_REASON_TYPES:
        for member in enum_cls:
            if value in (member.value, member.name):
                return member
    raise ValidationError(f"Unknown interview failure reason: {value}")


class CancellationReason(str, Enum):
    ROLE_CLOSED = "Role Closed"
    RESCHEDULED = "Rescheduled"


def parse_cancellation_reason(value: Union[str, CancellationReason, None]) -> Optional[CancellationReason]:
    if value is None or isinstance(value, CancellationReason):
        return value
    for member in CancellationReason:
        if value in (member.value, member.name):
            return member
    raise ValidationError(f"Unknown cancellation reason: {value}")


class CreateInterviewData(BaseModel):
    base: InterviewBase
    company: str = ""
    client: str = ""
    role: str = ""
    job_description: str = ""
    resume: str = ""
    interview_type: InterviewType
    recruiter: str = ""
    attendees: List[str] = Field(default_factory=list)
    detail: str = ""
    bid_id: Optional[str] = None
    date: Optional[datetime] = None


def _new_interview_id() -> str:
    return f"interview-{uuid.uuid4().hex[:16]}"


class Interview:
    def __init__(
        self,
        *,
        id: str,
        date: datetime,
        base: InterviewBase,
        company: str,
        client: str,
        role: str,
        job_description: str,
        resume: str,
        interview_type: InterviewType,
        recruiter: str,
        attendees: List[str],
        bid_id: Optional[str] = None,
        status: InterviewStatus = InterviewStatus.SCHEDULED,
        detail: str = "",
        failure_reason: Optional[InterviewFailureReason] = None,
        cancellation_reason: Optional[CancellationReason] = None,
        has_scheduled_next: bool = False,
    ):
        if base == InterviewBase.BID and not bid_id:
            raise ValidationError("Interview bidId is required when base is BID")
        if base != InterviewBase.BID and bid_id:
            raise ValidationError("Interview bidId is only allowed when base is BID")

        self.id = id
        self.date = date
        self.base = base
        self.company = company
        self.client = client
        self.role = role
        self.job_description = job_description
        self.resume = resume
        self.interview_type = interview_type
        self.recruiter = recruiter
        self.attendees = list(attendees)
        self.bid_id = bid_id

        self._status = status
        self._detail = detail
        self._failure_reason = failure_reason
        self._cancellation_reason = cancellation_reason
        self._has_scheduled_next = has_scheduled_next

    @classmethod
    def create(cls, data: CreateInterviewData) -> "Interview":
        for name, value in (
            ("company", data.company),
            ("client", data.client),
            ("role", data.role),
            ("recruiter", data.recruiter),
        ):
            if is_blank(value):
                raise ValidationError(f"Interview {name} is required")

        if data.interview_type != InterviewType.HR and not data.attendees:
            raise ValidationError("Interview attendees are required for non-HR interviews")

        return cls(
            id=_new_interview_id(),
            date=data.date or datetime.now(),
            base=data.base,
            company=data.company,
            client=data.client,
            role=data.role,
            job_description=data.job_description,
            resume=data.resume,
            interview_type=data.interview_type,
            recruiter=data.recruiter,
            attendees=data.attendees,
            bid_id=data.bid_id,
            detail=data.detail or "",
        )

    @property
    def status(self) -> InterviewStatus:
        return self._status

    @property
    def detail(self) -> str:
        return self._detail

    @property
    def failure_reason(self) -> Optional[InterviewFailureReason]:
        return self._failure_reason

    @property
    def cancellation_reason(self) -> Optional[CancellationReason]:
        return self._cancellation_reason

    @property
    def has_scheduled_next(self) -> bool:
        return self._has_scheduled_next

    def mark_as_completed(
        self,
        success: bool,
        failure_reason: Union[str, InterviewFailureReason, None] = None,
    ) -> None:
        if self._status == InterviewStatus.COMPLETED_SUCCESS:
            raise InvalidTransitionError(
                "Interview is already marked as completed successfully", self._status.value
            )
        if self._status == InterviewStatus.COMPLETED_FAILURE:
            raise InvalidTransitionError(
                "Interview is already marked as completed with failure", self._status.value
            )
        if self._status == InterviewStatus.CANCELLED:
            raise InvalidTransitionError("Cannot complete a cancelled interview", self._status.value)

        if success and failure_reason is not None:
            raise ValidationError("A failure reason only applies to a failed interview")
        self._failure_reason = parse_failure_reason(failure_reason)
        self._status = InterviewStatus.COMPLETED_SUCCESS if success else InterviewStatus.COMPLETED_FAILURE

    def mark_as_cancelled(self, reason: Union[str, CancellationReason, None] = None) -> None:
        if self._status == InterviewStatus.COMPLETED_SUCCESS:
            raise InvalidTransitionError(
                "Cannot cancel an interview that was completed successfully", self._status.value
            )
        if self._status == InterviewStatus.COMPLETED_FAILURE:
            raise InvalidTransitionError(
                "Cannot cancel an interview that was completed with failure", self._status.value
            )
        if self._status == InterviewStatus.CANCELLED:
            raise InvalidTransitionError("Interview is already cancelled", self._status.value)

        self._cancellation_reason = parse_cancellation_reason(reason)
        self._status = InterviewStatus.CANCELLED

    def is_failed(self) -> bool:
        return self._status == InterviewStatus.COMPLETED_FAILURE

    def is_date_passed(self, today: Optional[date] = None) -> bool:
        today = as_date(today) if today else date.today()
        return as_date(self.date) < today

    def get_failure_info(self) -> FailureInfo:
        return FailureInfo(
            company=self.company,
            role=self.role,
            recruiter=self.recruiter,
            attendees=list(self.attendees),
        )

    def update_detail(self, detail: str) -> None:
        if is_blank(detail):
            raise ValidationError("Interview detail cannot be empty")
        self._detail = detail

    def mark_as_scheduled_next(self) -> None:
        self._has_scheduled_next = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "base": self.base.value,
            "company": self.company,
            "client": self.client,
            "role": self.role,
            "job_description": self.job_description,
            "resume": self.resume,
            "interview_type": self.interview_type.value,
            "recruiter": self.recruiter,
            "attendees": list(self.attendees),
            "bid_id": self.bid_id,
            "status": self._status.value,
            "detail": self._detail,
            "failure_reason": self._failure_reason.value if self._failure_reason else None,
            "cancellation_reason": self._cancellation_reason.value if self._cancellation_reason else None,
            "has_scheduled_next": self._has_scheduled_next,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Interview":
        return cls(
            id=data["id"],
            date=datetime.fromisoformat(data["date"]),
            base=InterviewBase(data["base"]),
            company=data["company"],
            client=data["client"],
            role=data["role"],
            job_description=data.get("job_description") or "",
            resume=data.get("resume") or "",
            interview_type=InterviewType.parse(data["interview_type"]),
            recruiter=data["recruiter"],
            attendees=data.get("attendees") or [],
            bid_id=data.get("bid_id"),
            status=InterviewStatus(data.get("status", InterviewStatus.SCHEDULED.value)),
            detail=data.get("detail") or "",
            failure_reason=parse_failure_reason(data.get("failure_reason")),
            cancellation_reason=parse_cancellation_reason(data.get("cancellation_reason")),
            has_scheduled_next=bool(data.get("has_scheduled_next", False)),
        )

    def __repr__(self) -> str:
        return (
            f"Interview(id={self.id!r}, type={self.interview_type.value}, "
            f"company={self.company!r}, status={self._status.value})"
        )
