# bid_tracker/bid.py
"""
Bid aggregate: one job application and its lifecycle.

    NEW -> SUBMITTED -> {REJECTED, INTERVIEW_STAGE} -> {CLOSED, INTERVIEW_FAILED}

Status is private. Callers move a bid only through the mark_* methods, each of
which checks the current state first and raises InvalidTransitionError naming
the conflicting state. Two rules hold for the whole life of a bid:
  - interview_winning never goes back to False once set
  - the six layer weights sum to 1.0 (within tolerance)
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from bid_tracker.config import AUTO_REJECT_AFTER_DAYS, WEIGHT_TOLERANCE, Settings
from bid_tracker.errors import InvalidTransitionError, ValidationError
from bid_tracker.skills import (
    LayeredSkills,
    LayerWeights,
    LegacySkills,
    SkillData,
    parse_layer_weights,
    parse_skill_data,
    validate_layer_weights,
    validate_skill_data,
)
from bid_tracker.utils import as_date, is_blank, today_midnight


class BidStatus(str, Enum):
    NEW = "NEW"
    SUBMITTED = "SUBMITTED"
    REJECTED = "REJECTED"
    INTERVIEW_STAGE = "INTERVIEW_STAGE"
    INTERVIEW_FAILED = "INTERVIEW_FAILED"
    CLOSED = "CLOSED"


class BidOrigin(str, Enum):
    LINKEDIN = "LINKEDIN"
    BID = "BID"


class RejectionReason(str, Enum):
    UNSATISFIED_RESUME = "UNSATISFIED_RESUME"
    ROLE_CLOSED = "ROLE_CLOSED"
    AUTO_REJECTED = "AUTO_REJECTED"


class ResumeCheckerType(str, Enum):
    ATS = "ATS"
    RECRUITER = "RECRUITER"


class CreateBidData(BaseModel):
    """Everything Bid.create needs. Shape only; invariants are checked by the factory."""
    link: str = ""
    company: str = ""
    client: str = ""
    role: str = ""
    skills: SkillData
    layer_weights: Optional[LayerWeights] = None
    job_description_path: str = ""
    resume_path: str = ""
    origin: Optional[BidOrigin] = None
    recruiter: Optional[str] = None
    jd_spec_id: Optional[str] = None
    original_bid_id: Optional[str] = None


def _new_bid_id() -> str:
    return f"bid-{uuid.uuid4().hex[:16]}"


class Bid:
    def __init__(
        self,
        *,
        id: str,
        date: datetime,
        link: str,
        company: str,
        client: str,
        role: str,
        skills: Union[LegacySkills, LayeredSkills],
        layer_weights: LayerWeights,
        job_description_path: str,
        resume_path: str,
        origin: BidOrigin,
        recruiter: Optional[str] = None,
        jd_spec_id: Optional[str] = None,
        original_bid_id: Optional[str] = None,
        status: BidStatus = BidStatus.NEW,
        interview_winning: bool = False,
        bid_detail: str = "",
        resume_checker: Optional[ResumeCheckerType] = None,
        rejection_reason: Optional[RejectionReason] = None,
        has_been_rebid: bool = False,
    ):
        self.id = id
        self.date = date
        self.link = link
        self.company = company
        self.client = client
        self.role = role
        self.skills = skills
        self.layer_weights = layer_weights
        self.job_description_path = job_description_path
        self.resume_path = resume_path
        self.origin = origin
        self.recruiter = recruiter
        self.jd_spec_id = jd_spec_id
        self.original_bid_id = original_bid_id

        self._status = status
        self._interview_winning = interview_winning
        self._bid_detail = bid_detail
        self._resume_checker = resume_checker
        self._rejection_reason = rejection_reason
        self._has_been_rebid = has_been_rebid

    # ----------------------------
    # Factory
    # ----------------------------

    @classmethod
    def create(
        cls,
        data: CreateBidData,
        *,
        default_layer_weights: Optional[LayerWeights] = None,
        tolerance: float = WEIGHT_TOLERANCE,
    ) -> "Bid":
        """
        The single way new bids come into existence.
        Date is today at midnight, status NEW, no detail, no resume checker.
        """
        required = [
            ("link", data.link),
            ("company", data.company),
            ("client", data.client),
            ("role", data.role),
            ("jobDescriptionPath", data.job_description_path),
            ("resumePath", data.resume_path),
        ]
        for name, value in required:
            if is_blank(value):
                raise ValidationError(f"Bid {name} is required")

        if data.origin is None:
            raise ValidationError("Bid origin is required")
        if data.origin == BidOrigin.LINKEDIN and is_blank(data.recruiter):
            raise ValidationError("Recruiter name is required when origin is LINKEDIN")

        validate_skill_data(data.skills, tolerance)

        weights = data.layer_weights or default_layer_weights or Settings().default_layer_weights
        validate_layer_weights(weights, tolerance)

        return cls(
            id=_new_bid_id(),
            date=today_midnight(),
            link=data.link,
            company=data.company,
            client=data.client,
            role=data.role,
            skills=data.skills,
            layer_weights=weights.model_copy(),
            job_description_path=data.job_description_path,
            resume_path=data.resume_path,
            origin=data.origin,
            recruiter=data.recruiter or None,
            jd_spec_id=data.jd_spec_id,
            original_bid_id=data.original_bid_id,
        )

    # ----------------------------
    # Read-only state
    # ----------------------------

    @property
    def status(self) -> BidStatus:
        return self._status

    @property
    def interview_winning(self) -> bool:
        return self._interview_winning

    @property
    def bid_detail(self) -> str:
        return self._bid_detail

    @property
    def resume_checker(self) -> Optional[ResumeCheckerType]:
        return self._resume_checker

    @property
    def rejection_reason(self) -> Optional[RejectionReason]:
        return self._rejection_reason

    @property
    def has_been_rebid(self) -> bool:
        return self._has_been_rebid

    @property
    def main_stacks(self) -> List[str]:
        return self.skills.names()

    # ----------------------------
    # Transitions
    # ----------------------------

    def mark_as_submitted(self) -> None:
        if self._status != BidStatus.NEW:
            raise InvalidTransitionError(
                f"Cannot mark as submitted from status {self._status.value}", self._status.value
            )
        self._status = BidStatus.SUBMITTED

    def mark_as_rejected(self, reason: RejectionReason) -> None:
        """
        Allowed again while already REJECTED: the second call only replaces the reason.
        """
        if self._status == BidStatus.INTERVIEW_STAGE:
            raise InvalidTransitionError(
                "Cannot reject bid after interview stage has started", self._status.value
            )
        if self._status == BidStatus.INTERVIEW_FAILED:
            raise InvalidTransitionError(
                "Cannot reject bid whose interview has already failed", self._status.value
            )
        if self._status == BidStatus.CLOSED:
            raise InvalidTransitionError(
                "Cannot reject bid that is already closed", self._status.value
            )
        self._rejection_reason = RejectionReason(reason)
        self._status = BidStatus.REJECTED

    def mark_interview_started(self) -> None:
        if self._status == BidStatus.REJECTED:
            raise InvalidTransitionError("Cannot start interview for rejected bid", self._status.value)
        if self._status == BidStatus.CLOSED:
            raise InvalidTransitionError("Cannot start interview for closed bid", self._status.value)
        self._interview_winning = True
        self._status = BidStatus.INTERVIEW_STAGE

    def mark_interview_failed(self) -> None:
        if self._status != BidStatus.INTERVIEW_STAGE:
            raise InvalidTransitionError(
                "Can only mark interview as failed when bid is in INTERVIEW_STAGE "
                f"(current: {self._status.value})",
                self._status.value,
            )
        self._status = BidStatus.INTERVIEW_FAILED

    def mark_as_closed(self) -> None:
        if self._status == BidStatus.NEW:
            raise InvalidTransitionError("Cannot close bid that has not been submitted", self._status.value)
        self._status = BidStatus.CLOSED

    def restore_from_rejection(self) -> None:
        """Undo a rejection (typically an auto-rejection) and go back to SUBMITTED."""
        if self._status != BidStatus.REJECTED:
            raise InvalidTransitionError(
                f"Can only restore REJECTED bids (current: {self._status.value})", self._status.value
            )
        if self._interview_winning:
            raise InvalidTransitionError(
                "Cannot restore a bid that already reached the interview stage", self._status.value
            )
        self._rejection_reason = None
        self._status = BidStatus.SUBMITTED

    def mark_as_rebid(self) -> None:
        self._has_been_rebid = True

    # ----------------------------
    # Detail / annotations
    # ----------------------------

    def attach_warning(self, warning: str) -> None:
        if self._bid_detail:
            self._bid_detail += "\n" + warning
        else:
            self._bid_detail = warning

    def set_resume_checker(self, checker: ResumeCheckerType) -> None:
        self._resume_checker = ResumeCheckerType(checker)

    # ----------------------------
    # Queries
    # ----------------------------

    def can_rebid(self) -> bool:
        return (
            self._status == BidStatus.REJECTED
            and not self._interview_winning
            and self._rejection_reason == RejectionReason.UNSATISFIED_RESUME
        )

    def can_start_interview(self) -> bool:
        return self._status not in (BidStatus.REJECTED, BidStatus.CLOSED)

    def is_interview_started(self) -> bool:
        return self._interview_winning

    def should_auto_reject(
        self,
        today: Optional[date] = None,
        max_age_days: int = AUTO_REJECT_AFTER_DAYS,
    ) -> bool:
        if self._status not in (BidStatus.NEW, BidStatus.SUBMITTED):
            return False
        today = as_date(today) if today else date.today()
        return (today - as_date(self.date)).days > max_age_days

    # ----------------------------
    # Serialization
    # ----------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "link": self.link,
            "company": self.company,
            "client": self.client,
            "role": self.role,
            "skills": self.skills.model_dump(),
            "layer_weights": self.layer_weights.model_dump(),
            "job_description_path": self.job_description_path,
            "resume_path": self.resume_path,
            "origin": self.origin.value,
            "recruiter": self.recruiter,
            "jd_spec_id": self.jd_spec_id,
            "original_bid_id": self.original_bid_id,
            "status": self._status.value,
            "interview_winning": self._interview_winning,
            "bid_detail": self._bid_detail,
            "resume_checker": self._resume_checker.value if self._resume_checker else None,
            "rejection_reason": self._rejection_reason.value if self._rejection_reason else None,
            "has_been_rebid": self._has_been_rebid,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bid":
        """
        Rehydrate a stored bid. Only the shape is checked: weight sums were
        enforced at creation under whatever tolerance was configured then.
        """
        skills = parse_skill_data(data["skills"])
        weights = parse_layer_weights(data["layer_weights"])

        checker = data.get("resume_checker")
        reason = data.get("rejection_reason")
        return cls(
            id=data["id"],
            date=datetime.fromisoformat(data["date"]),
            link=data["link"],
            company=data["company"],
            client=data["client"],
            role=data["role"],
            skills=skills,
            layer_weights=weights,
            job_description_path=data["job_description_path"],
            resume_path=data["resume_path"],
            origin=BidOrigin(data["origin"]),
            recruiter=data.get("recruiter"),
            jd_spec_id=data.get("jd_spec_id"),
            original_bid_id=data.get("original_bid_id"),
            status=BidStatus(data.get("status", BidStatus.NEW.value)),
            interview_winning=bool(data.get("interview_winning", False)),
            bid_detail=data.get("bid_detail") or "",
            resume_checker=ResumeCheckerType(checker) if checker else None,
            rejection_reason=RejectionReason(reason) if reason else None,
            has_been_rebid=bool(data.get("has_been_rebid", False)),
        )

    def __repr__(self) -> str:
        return f"Bid(id={self.id!r}, company={self.company!r}, role={self.role!r}, status={self._status.value})"
