# bid_tracker/workflows/rebid.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from bid_tracker.bid import Bid, BidStatus, CreateBidData
from bid_tracker.config import Settings
from bid_tracker.errors import NotFoundError, ValidationError
from bid_tracker.history import CompanyHistory
from bid_tracker.log import get_logger
from bid_tracker.models import DuplicationWarning
from bid_tracker.policies.duplication import DuplicationDetectionPolicy
from bid_tracker.repositories.base import BidRepository
from bid_tracker.utils import is_blank

log = get_logger(__name__)


class RebidRequest(BaseModel):
    original_bid_id: str
    new_resume_path: str
    new_job_description_path: Optional[str] = None


class RebidResponse(BaseModel):
    new_bid_id: Optional[str] = None
    allowed: bool
    reason: str
    # advisory only; a rebid is never blocked by duplicates
    warnings: List[DuplicationWarning] = Field(default_factory=list)


def refusal_reason(bid: Bid) -> str:
    if bid.interview_winning:
        return "Cannot rebid - bid already reached the interview stage"
    if bid.status != BidStatus.REJECTED:
        return f"Cannot rebid - bid has not been rejected (status: {bid.status.value})"
    reason = bid.rejection_reason.value if bid.rejection_reason else "unknown reason"
    return f"Cannot rebid - bid was rejected due to {reason}"


class RebidWithNewResumeWorkflow:
    """
    Retry a job with a new resume after a resume-related rejection.

    A refused rebid is an ordinary outcome, returned as allowed=False rather
    than raised. Duplicate warnings are reported but never block.
    """

    def __init__(
        self,
        bid_repository: BidRepository,
        duplication_policy: DuplicationDetectionPolicy,
        company_history: CompanyHistory,
        settings: Optional[Settings] = None,
    ):
        self.bid_repository = bid_repository
        self.duplication_policy = duplication_policy
        self.company_history = company_history
        self.settings = settings or Settings()

    def execute(self, request: RebidRequest) -> RebidResponse:
        if is_blank(request.new_resume_path):
            raise ValidationError("Missing required field: new_resume_path")

        original = self.bid_repository.find_by_id(request.original_bid_id)
        if original is None:
            raise NotFoundError("Original bid", request.original_bid_id)

        if not original.can_rebid():
            reason = refusal_reason(original)
            log.info("Rebid of %s refused: %s", original.id, reason)
            return RebidResponse(allowed=False, reason=reason)

        jd_changed = not is_blank(request.new_job_description_path)
        new_bid = Bid.create(
            CreateBidData(
                link=original.link,
                company=original.company,
                client=original.client,
                role=original.role,
                skills=original.skills,
                layer_weights=original.layer_weights,
                job_description_path=(
                    request.new_job_description_path if jd_changed else original.job_description_path
                ),
                resume_path=request.new_resume_path,
                origin=original.origin,
                recruiter=original.recruiter,
                jd_spec_id=None if jd_changed else original.jd_spec_id,
                original_bid_id=original.id,
            ),
            tolerance=self.settings.weight_tolerance,
        )

        warnings = self.duplication_policy.check_duplication(new_bid, self.bid_repository.find_all())
        if warnings:
            log.info("Rebid of %s resembles %d existing bid(s); continuing", original.id, len(warnings))

        if self.company_history.has_failures(new_bid.company, new_bid.role):
            company_warning = self.company_history.get_warning_message(new_bid.company, new_bid.role)
            new_bid.attach_warning(company_warning)
            log.warning("Bid %s: %s", new_bid.id, company_warning)

        self.bid_repository.save(new_bid)

        original.mark_as_rebid()
        self.bid_repository.update(original)
        log.info("Rebid %s -> %s with resume %s", original.id, new_bid.id, new_bid.resume_path)

        return RebidResponse(
            new_bid_id=new_bid.id,
            allowed=True,
            reason="Rebid allowed - bid was rejected due to unsatisfied resume",
            warnings=warnings,
        )
