# bid_tracker/history.py
"""
Interview failures per (company, role).

Keys are lowercased on the way in and on the way out, so "ACME"/"eng" and
"Acme"/"Eng" land on the same record. Records only grow: there is no way to
remove a failure once it is recorded.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from bid_tracker.models import CompanyRoleHistory, FailureRecord
from bid_tracker.utils import history_key, plural, unique


class CompanyHistory:
    def __init__(self) -> None:
        self._histories: Dict[str, CompanyRoleHistory] = {}

    def record_failure(
        self,
        company: str,
        role: str,
        recruiter: str,
        attendees: List[str],
        interview_id: str,
        date: Optional[datetime] = None,
    ) -> None:
        record = FailureRecord(
            interview_id=interview_id,
            date=date or datetime.now(),
            recruiter=recruiter,
            attendees=list(attendees),
        )

        key = history_key(company, role)
        existing = self._histories.get(key)
        if existing is not None:
            existing.failures.append(record)
        else:
            self._histories[key] = CompanyRoleHistory(company=company, role=role, failures=[record])

    def get_history(self, company: str, role: str) -> Optional[CompanyRoleHistory]:
        """Deep copy of the stored record, or None when nothing failed here yet."""
        history = self._histories.get(history_key(company, role))
        if history is None:
            return None
        return history.model_copy(deep=True)

    def get_all_recruiters(self, company: str, role: str) -> List[str]:
        history = self._histories.get(history_key(company, role))
        if history is None:
            return []
        return unique(f.recruiter for f in history.failures)

    def get_all_attendees(self, company: str, role: str) -> List[str]:
        history = self._histories.get(history_key(company, role))
        if history is None:
            return []
        return unique(a for f in history.failures for a in f.attendees)

    def has_failures(self, company: str, role: str) -> bool:
        return history_key(company, role) in self._histories

    def get_warning_message(self, company: str, role: str) -> str:
        history = self._histories.get(history_key(company, role))
        if history is None:
            return ""

        count = len(history.failures)
        recruiters = ", ".join(self.get_all_recruiters(company, role))
        attendees = ", ".join(self.get_all_attendees(company, role))

        return (
            f"Warning: {count} previous interview {plural(count, 'failure')} at {company} for {role}. "
            f"Previous recruiters: {recruiters}. Previous attendees: {attendees}."
        )

    # ----------------------------
    # Persistence helpers
    # ----------------------------

    def to_records(self) -> List[CompanyRoleHistory]:
        return [h.model_copy(deep=True) for h in self._histories.values()]

    @classmethod
    def from_records(cls, records: Iterable[CompanyRoleHistory]) -> "CompanyHistory":
        history = cls()
        for rec in records:
            rec = CompanyRoleHistory.model_validate(rec)
            key = history_key(rec.company, rec.role)
            existing = history._histories.get(key)
            if existing is not None:
                existing.failures.extend(f.model_copy(deep=True) for f in rec.failures)
            else:
                history._histories[key] = rec.model_copy(deep=True)
        return history

    def __len__(self) -> int:
        return len(self._histories)
