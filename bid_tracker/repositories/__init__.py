# bid_tracker/repositories/__init__.py
from bid_tracker.repositories.base import (
    BidFilters,
    BidRepository,
    BidSort,
    CompanyHistoryRepository,
    InterviewRepository,
    ResumeRepository,
)
from bid_tracker.repositories.memory import (
    InMemoryBidRepository,
    InMemoryCompanyHistoryRepository,
    InMemoryInterviewRepository,
    InMemoryResumeRepository,
)

__all__ = [
    "BidFilters",
    "BidRepository",
    "BidSort",
    "CompanyHistoryRepository",
    "InterviewRepository",
    "ResumeRepository",
    "InMemoryBidRepository",
    "InMemoryCompanyHistoryRepository",
    "InMemoryInterviewRepository",
    "InMemoryResumeRepository",
]
