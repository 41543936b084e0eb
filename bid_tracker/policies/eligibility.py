# bid_tracker/policies/eligibility.py
from typing import List, Protocol

from bid_tracker.models import EligibilityResult
from bid_tracker.utils import plural, unique


class CompanyHistoryLike(Protocol):
    def has_failures(self, company: str, role: str) -> bool: ...

    def get_all_recruiters(self, company: str, role: str) -> List[str]: ...

    def get_all_attendees(self, company: str, role: str) -> List[str]: ...


class InterviewEligibilityPolicy:
    """
    Decides whether another interview at a company+role is allowed, in order:
      1. no recorded failures           -> allowed
      2. recruiter not seen before      -> allowed
      3. none of the attendees seen     -> allowed
      4. same recruiter + any overlap   -> forbidden
    """

    def check_eligibility(
        self,
        company: str,
        role: str,
        recruiter: str,
        attendees: List[str],
        history: CompanyHistoryLike,
    ) -> EligibilityResult:
        if not history.has_failures(company, role):
            return EligibilityResult(
                allowed=True,
                reason="No previous failures at this company and role",
            )

        previous_recruiters = history.get_all_recruiters(company, role)
        previous_attendees = history.get_all_attendees(company, role)

        if recruiter not in previous_recruiters:
            return EligibilityResult(
                allowed=True,
                reason=f"New recruiter (previous: {', '.join(previous_recruiters)})",
            )

        overlapping = unique(a for a in attendees or [] if a in previous_attendees)
        if not overlapping:
            return EligibilityResult(
                allowed=True,
                reason=f"All new attendees (previous: {', '.join(previous_attendees)})",
            )

        return EligibilityResult(
            allowed=False,
            reason=(
                f"Same recruiter ({recruiter}) and overlapping "
                f"{plural(len(overlapping), 'attendee')} ({', '.join(overlapping)})"
            ),
        )
