# bid_tracker/workflows/interview_outcome.py
"""
Closing out an interview: completion (success/failure) and cancellation.

Failures, and cancellations because the role closed, are recorded in company
history so later eligibility checks can see them.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from bid_tracker.bid import Bid, BidStatus
from bid_tracker.errors import NotFoundError
from bid_tracker.history import CompanyHistory
from bid_tracker.interview import CancellationReason, Interview, parse_cancellation_reason
from bid_tracker.log import get_logger
from bid_tracker.repositories.base import BidRepository, CompanyHistoryRepository, InterviewRepository
from bid_tracker.utils import is_blank

log = get_logger(__name__)


class CompleteInterviewRequest(BaseModel):
    interview_id: str
    success: bool
    failure_reason: Optional[str] = None
    detail: Optional[str] = None


class CompleteInterviewResponse(BaseModel):
    success: bool
    history_updated: bool


class CancelInterviewRequest(BaseModel):
    interview_id: str
    cancellation_reason: str


class CancelInterviewResponse(BaseModel):
    success: bool
    message: str


class _OutcomeWorkflow:
    def __init__(
        self,
        interview_repository: InterviewRepository,
        bid_repository: BidRepository,
        company_history: CompanyHistory,
        history_repository: Optional[CompanyHistoryRepository] = None,
    ):
        self.interview_repository = interview_repository
        self.bid_repository = bid_repository
        self.company_history = company_history
        self.history_repository = history_repository

    def _load(self, interview_id: str) -> Interview:
        interview = self.interview_repository.find_by_id(interview_id)
        if interview is None:
            raise NotFoundError("Interview", interview_id)
        return interview

    def _linked_bid(self, interview: Interview) -> Optional[Bid]:
        if not interview.bid_id:
            return None
        return self.bid_repository.find_by_id(interview.bid_id)

    def _record_failure(self, interview: Interview) -> None:
        info = interview.get_failure_info()
        self.company_history.record_failure(
            info.company, info.role, info.recruiter, info.attendees, interview.id
        )
        if self.history_repository is not None:
            self.history_repository.save(self.company_history)
        log.info("Recorded failure of %s at %s for %s", interview.id, info.company, info.role)

    def _fail_bid(self, bid: Optional[Bid]) -> None:
        if bid is not None and bid.status == BidStatus.INTERVIEW_STAGE:
            bid.mark_interview_failed()
            self.bid_repository.update(bid)
            log.info("Bid %s marked INTERVIEW_FAILED", bid.id)


class CompleteInterviewWorkflow(_OutcomeWorkflow):
    def execute(self, request: CompleteInterviewRequest) -> CompleteInterviewResponse:
        interview = self._load(request.interview_id)

        interview.mark_as_completed(request.success, request.failure_reason)
        if not is_blank(request.detail):
            interview.update_detail(request.detail)
        self.interview_repository.update(interview)

        bid = self._linked_bid(interview)
        history_updated = False

        if interview.is_failed():
            self._record_failure(interview)
            history_updated = True
            self._fail_bid(bid)
        elif bid is not None:
            if bid.status == BidStatus.NEW:
                log.warning("Bid %s was never submitted; leaving it open", bid.id)
            else:
                bid.mark_as_closed()
                self.bid_repository.update(bid)
                log.info("Bid %s closed after successful interview %s", bid.id, interview.id)

        return CompleteInterviewResponse(success=True, history_updated=history_updated)


class CancelInterviewWorkflow(_OutcomeWorkflow):
    def execute(self, request: CancelInterviewRequest) -> CancelInterviewResponse:
        reason = parse_cancellation_reason(request.cancellation_reason)
        interview = self._load(request.interview_id)

        interview.mark_as_cancelled(reason)
        self.interview_repository.update(interview)

        if reason == CancellationReason.ROLE_CLOSED:
            self._fail_bid(self._linked_bid(interview))
            self._record_failure(interview)
            return CancelInterviewResponse(
                success=True,
                message=(
                    "Interview cancelled due to role closure. "
                    "Bid marked as failed and recorded in company history."
                ),
            )

        return CancelInterviewResponse(
            success=True,
            message="Interview cancelled for rescheduling. Bid remains in interview stage.",
        )
