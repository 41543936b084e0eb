import pytest

from bid_tracker.history import CompanyHistory
from bid_tracker.policies import DuplicationDetectionPolicy, InterviewEligibilityPolicy
from bid_tracker.repositories import (
    InMemoryBidRepository,
    InMemoryCompanyHistoryRepository,
    InMemoryInterviewRepository,
)


@pytest.fixture
def history():
    return CompanyHistory()


@pytest.fixture
def bid_repo():
    return InMemoryBidRepository()


@pytest.fixture
def interview_repo():
    return InMemoryInterviewRepository()


@pytest.fixture
def history_repo():
    return InMemoryCompanyHistoryRepository()


@pytest.fixture
def duplication_policy():
    return DuplicationDetectionPolicy()


@pytest.fixture
def eligibility_policy():
    return InterviewEligibilityPolicy()
