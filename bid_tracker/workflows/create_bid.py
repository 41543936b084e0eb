# bid_tracker/workflows/create_bid.py
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from bid_tracker.bid import Bid, BidOrigin, CreateBidData
from bid_tracker.config import Settings
from bid_tracker.errors import DuplicateBidError, NotFoundError, ValidationError
from bid_tracker.history import CompanyHistory
from bid_tracker.log import get_logger
from bid_tracker.models import DuplicationWarning
from bid_tracker.policies.duplication import DuplicationDetectionPolicy
from bid_tracker.repositories.base import BidRepository, ResumeRepository
from bid_tracker.skills import (
    LayeredSkills,
    parse_layer_weights,
    parse_skill_data,
    validate_layer_skills,
    validate_layer_weights,
)
from bid_tracker.utils import is_blank

log = get_logger(__name__)


class CreateBidRequest(BaseModel):
    link: str = ""
    company: str = ""
    client: str = ""
    role: str = ""
    # list of stack names, or a dict keyed by the six layers
    main_stacks: Any = None
    layer_weights: Any = None
    job_description_path: str = ""
    resume_path: Optional[str] = None
    resume_id: Optional[str] = None
    origin: str = BidOrigin.BID.value
    recruiter: Optional[str] = None
    jd_spec_id: Optional[str] = None


class CreateBidResponse(BaseModel):
    bid_id: str
    warnings: List[DuplicationWarning] = Field(default_factory=list)
    company_warning: Optional[str] = None


class CreateBidWorkflow:
    """
    validate -> resolve resume -> block on duplicates -> company warning -> create -> save
    """

    def __init__(
        self,
        bid_repository: BidRepository,
        duplication_policy: DuplicationDetectionPolicy,
        company_history: CompanyHistory,
        resume_repository: Optional[ResumeRepository] = None,
        settings: Optional[Settings] = None,
    ):
        self.bid_repository = bid_repository
        self.duplication_policy = duplication_policy
        self.company_history = company_history
        self.resume_repository = resume_repository
        self.settings = settings or Settings()

    def execute(self, request: CreateBidRequest) -> CreateBidResponse:
        data = self._validate(request)
        data.resume_path = self._resolve_resume_path(request)

        existing = self.bid_repository.find_all()
        warnings = self.duplication_policy.check_duplication(data, existing)
        if warnings:
            log.warning(
                "Refusing duplicate bid %s @ %s (%d warning(s))", data.role, data.company, len(warnings)
            )
            raise DuplicateBidError(warnings)

        company_warning = None
        if self.company_history.has_failures(data.company, data.role):
            company_warning = self.company_history.get_warning_message(data.company, data.role)

        bid = Bid.create(
            data,
            default_layer_weights=self.settings.default_layer_weights,
            tolerance=self.settings.weight_tolerance,
        )
        if company_warning:
            bid.attach_warning(company_warning)
            log.warning("Bid %s: %s", bid.id, company_warning)

        self.bid_repository.save(bid)
        log.info("Created bid %s: %s @ %s", bid.id, bid.role, bid.company)

        return CreateBidResponse(bid_id=bid.id, warnings=warnings, company_warning=company_warning)

    # ----------------------------
    # Validation
    # ----------------------------

    def _validate(self, request: CreateBidRequest) -> CreateBidData:
        for name in ("link", "company", "client", "role", "job_description_path"):
            if is_blank(getattr(request, name)):
                raise ValidationError(f"Missing required field: {name}")

        has_path = not is_blank(request.resume_path)
        has_id = not is_blank(request.resume_id)
        if has_path and has_id:
            raise ValidationError("Provide either resume_path or resume_id, not both")
        if not has_path and not has_id:
            raise ValidationError("Missing required field: resume_path or resume_id")

        if request.main_stacks is None:
            raise ValidationError("Missing required field: main_stacks")
        tolerance = self.settings.weight_tolerance
        skills = parse_skill_data(request.main_stacks)
        if isinstance(skills, LayeredSkills):
            validate_layer_skills(skills.layers, tolerance)
        elif not [s for s in skills.stacks if not is_blank(s)]:
            raise ValidationError("main_stacks cannot be empty")

        weights = None
        if request.layer_weights is not None:
            weights = parse_layer_weights(request.layer_weights)
            validate_layer_weights(weights, tolerance)

        try:
            origin = BidOrigin((request.origin or "").upper())
        except ValueError:
            raise ValidationError(f"Unknown bid origin: {request.origin}") from None
        if origin == BidOrigin.LINKEDIN and is_blank(request.recruiter):
            raise ValidationError("Recruiter name is required when origin is LINKEDIN")

        return CreateBidData(
            link=request.link,
            company=request.company,
            client=request.client,
            role=request.role,
            skills=skills,
            layer_weights=weights,
            job_description_path=request.job_description_path,
            origin=origin,
            recruiter=request.recruiter,
            jd_spec_id=request.jd_spec_id,
        )

    def _resolve_resume_path(self, request: CreateBidRequest) -> str:
        if not is_blank(request.resume_path):
            return request.resume_path

        if self.resume_repository is None:
            raise ValidationError("resume_id given but no resume repository is configured")

        for meta in self.resume_repository.get_all_resume_metadata():
            if meta.id == request.resume_id:
                if not self.resume_repository.file_exists(meta.file_path):
                    raise ValidationError(f"Selected resume file no longer exists: {meta.file_path}")
                return meta.file_path

        raise NotFoundError("Resume", request.resume_id)
