# bid_tracker/policies/__init__.py
from bid_tracker.policies.duplication import DuplicationDetectionPolicy
from bid_tracker.policies.eligibility import CompanyHistoryLike, InterviewEligibilityPolicy

__all__ = ["CompanyHistoryLike", "DuplicationDetectionPolicy", "InterviewEligibilityPolicy"]
