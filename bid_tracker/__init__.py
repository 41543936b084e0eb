# bid_tracker/__init__.py
from bid_tracker.bid import Bid, BidOrigin, BidStatus, RejectionReason
from bid_tracker.history import CompanyHistory
from bid_tracker.interview import Interview, InterviewBase, InterviewStatus, InterviewType

__all__ = [
    "Bid",
    "BidOrigin",
    "BidStatus",
    "CompanyHistory",
    "Interview",
    "InterviewBase",
    "InterviewStatus",
    "InterviewType",
    "RejectionReason",
]
