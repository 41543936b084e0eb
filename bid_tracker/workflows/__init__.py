# bid_tracker/workflows/__init__.py
from bid_tracker.workflows.auto_reject import AutoRejectStaleBidsWorkflow
from bid_tracker.workflows.create_bid import CreateBidRequest, CreateBidResponse, CreateBidWorkflow
from bid_tracker.workflows.interview_outcome import (
    CancelInterviewRequest,
    CancelInterviewResponse,
    CancelInterviewWorkflow,
    CompleteInterviewRequest,
    CompleteInterviewResponse,
    CompleteInterviewWorkflow,
)
from bid_tracker.workflows.rebid import RebidRequest, RebidResponse, RebidWithNewResumeWorkflow
from bid_tracker.workflows.schedule_interview import (
    ScheduleInterviewRequest,
    ScheduleInterviewResponse,
    ScheduleInterviewWorkflow,
)

__all__ = [
    "AutoRejectStaleBidsWorkflow",
    "CancelInterviewRequest",
    "CancelInterviewResponse",
    "CancelInterviewWorkflow",
    "CompleteInterviewRequest",
    "CompleteInterviewResponse",
    "CompleteInterviewWorkflow",
    "CreateBidRequest",
    "CreateBidResponse",
    "CreateBidWorkflow",
    "RebidRequest",
    "RebidResponse",
    "RebidWithNewResumeWorkflow",
    "ScheduleInterviewRequest",
    "ScheduleInterviewResponse",
    "ScheduleInterviewWorkflow",
]
