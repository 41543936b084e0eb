# bid_tracker/workflows/schedule_interview.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from bid_tracker.errors import IneligibleError, InvalidTransitionError, NotFoundError, ValidationError
from bid_tracker.history import CompanyHistory
from bid_tracker.interview import (
    CreateInterviewData,
    Interview,
    InterviewBase,
    InterviewStatus,
    InterviewType,
)
from bid_tracker.log import get_logger
from bid_tracker.models import EligibilityResult
from bid_tracker.policies.eligibility import InterviewEligibilityPolicy
from bid_tracker.repositories.base import BidRepository, InterviewRepository
from bid_tracker.utils import is_blank

log = get_logger(__name__)

DUPLICATE_REQUEST_REASON = "Interview already scheduled (duplicate request prevented)"


class ScheduleInterviewRequest(BaseModel):
    base: str
    bid_id: Optional[str] = None
    company: str = ""
    client: str = ""
    role: str = ""
    job_description: str = ""
    resume: str = ""
    interview_type: str = ""
    recruiter: str = ""
    attendees: Any = None
    detail: Optional[str] = None
    base_interview_id: Optional[str] = None
    date: Optional[datetime] = None


class ScheduleInterviewResponse(BaseModel):
    interview_id: str
    eligibility_result: EligibilityResult


class ScheduleInterviewWorkflow:
    """
    Flow:
      1. validate the request
      2. BID base: load the bid, take company/client/role from it
      3. same-type SCHEDULED interview already on this bid -> return it
      4. eligibility check against company history (raise if forbidden)
      5. create + save the interview
      6. HR on a bid -> bid enters the interview stage
      7. "schedule next" -> flag the interview this one follows
    """

    def __init__(
        self,
        interview_repository: InterviewRepository,
        bid_repository: BidRepository,
        eligibility_policy: InterviewEligibilityPolicy,
        company_history: CompanyHistory,
    ):
        self.interview_repository = interview_repository
        self.bid_repository = bid_repository
        self.eligibility_policy = eligibility_policy
        self.company_history = company_history

    def execute(self, request: ScheduleInterviewRequest) -> ScheduleInterviewResponse:
        base, interview_type = self._validate(request)

        company, client, role = request.company, request.client, request.role
        job_description, resume = request.job_description, request.resume
        bid = None

        if base == InterviewBase.BID:
            if is_blank(request.bid_id):
                raise ValidationError("bid_id is required when base is BID")
            bid = self.bid_repository.find_by_id(request.bid_id)
            if bid is None:
                raise NotFoundError("Bid", request.bid_id)

            company, client, role = bid.company, bid.client, bid.role
            job_description, resume = bid.job_description_path, bid.resume_path

            existing = self._find_scheduled(bid.id, interview_type)
            if existing is not None:
                log.debug("Interview %s already scheduled for bid %s; returning it", existing.id, bid.id)
                return ScheduleInterviewResponse(
                    interview_id=existing.id,
                    eligibility_result=EligibilityResult(allowed=True, reason=DUPLICATE_REQUEST_REASON),
                )

            if interview_type == InterviewType.HR and not bid.can_start_interview():
                raise InvalidTransitionError(
                    f"Cannot start interview for bid in status {bid.status.value}", bid.status.value
                )

        base_interview = None
        if not is_blank(request.base_interview_id):
            base_interview = self.interview_repository.find_by_id(request.base_interview_id)
            if base_interview is None:
                raise NotFoundError("Interview", request.base_interview_id)

        result = self.eligibility_policy.check_eligibility(
            company, role, request.recruiter, request.attendees, self.company_history
        )
        if not result.allowed:
            log.warning("Interview at %s for %s refused: %s", company, role, result.reason)
            raise IneligibleError(result)

        interview = Interview.create(
            CreateInterviewData(
                base=base,
                company=company,
                client=client,
                role=role,
                job_description=job_description,
                resume=resume,
                interview_type=interview_type,
                recruiter=request.recruiter,
                attendees=request.attendees,
                detail=request.detail or "",
                bid_id=bid.id if bid else None,
                date=request.date,
            )
        )
        self.interview_repository.save(interview)
        log.info("Scheduled %s interview %s at %s", interview_type.value, interview.id, company)

        if bid is not None and interview_type == InterviewType.HR:
            bid.mark_interview_started()
            self.bid_repository.update(bid)
            log.info("Bid %s entered interview stage", bid.id)

        if base_interview is not None:
            base_interview.mark_as_scheduled_next()
            self.interview_repository.update(base_interview)

        return ScheduleInterviewResponse(interview_id=interview.id, eligibility_result=result)

    def _find_scheduled(self, bid_id: str, interview_type: InterviewType) -> Optional[Interview]:
        for interview in self.interview_repository.find_by_bid_id(bid_id):
            if interview.interview_type == interview_type and interview.status == InterviewStatus.SCHEDULED:
                return interview
        return None

    def _validate(self, request: ScheduleInterviewRequest):
        try:
            base = InterviewBase((request.base or "").upper())
        except ValueError:
            raise ValidationError(f"Unknown interview base: {request.base}") from None

        if is_blank(request.recruiter):
            raise ValidationError("recruiter is required")

        if not isinstance(request.attendees, list):
            raise ValidationError("attendees must be a list")
        if any(not isinstance(a, str) or is_blank(a) for a in request.attendees):
            raise ValidationError("attendees must be a list of names")

        if is_blank(request.interview_type):
            raise ValidationError("interview_type is required")
        interview_type = InterviewType.parse(request.interview_type)

        if interview_type != InterviewType.HR and not request.attendees:
            raise ValidationError("attendees are required for non-HR interviews")

        if base == InterviewBase.LINKEDIN_CHAT:
            for name in ("company", "client", "role"):
                if is_blank(getattr(request, name)):
                    raise ValidationError(f"{name} is required when base is LINKEDIN_CHAT")

        return base, interview_type
