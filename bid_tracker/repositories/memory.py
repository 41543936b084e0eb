# bid_tracker/repositories/memory.py
"""
Dict-backed repositories.

Each one stores serialized snapshots, not live objects: a loaded aggregate can
be mutated freely and nothing changes in the store until update() is called.
Useful for wiring and testing without a real database.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from bid_tracker.bid import Bid
from bid_tracker.errors import NotFoundError
from bid_tracker.history import CompanyHistory
from bid_tracker.interview import Interview
from bid_tracker.models import CompanyRoleHistory, ResumeMetadata
from bid_tracker.repositories.base import (
    BidFilters,
    BidRepository,
    BidSort,
    CompanyHistoryRepository,
    InterviewRepository,
    ResumeRepository,
)


def _norm(s: Optional[str]) -> str:
    return " ".join((s or "").strip().lower().split())


def _matches(bid: Bid, f: BidFilters) -> bool:
    if f.company and _norm(f.company) not in _norm(bid.company):
        return False
    if f.role and _norm(f.role) not in _norm(bid.role):
        return False
    if f.status and bid.status.value != f.status.upper():
        return False
    if f.date_from and bid.date < f.date_from:
        return False
    if f.date_to and bid.date > f.date_to:
        return False
    if f.main_stacks:
        have = {_norm(s) for s in bid.main_stacks}
        if not all(_norm(s) in have for s in f.main_stacks):
            return False
    return True


def _sort_key(field: str):
    if field == "date":
        return lambda b: b.date
    if field == "status":
        return lambda b: b.status.value
    return lambda b: _norm(getattr(b, field))


class InMemoryBidRepository(BidRepository):
    def __init__(self, bids: Iterable[Bid] = ()):
        self._rows: Dict[str, dict] = {}
        for b in bids:
            self.save(b)

    def save(self, bid: Bid) -> None:
        self._rows[bid.id] = bid.to_dict()

    def find_by_id(self, bid_id: str) -> Optional[Bid]:
        row = self._rows.get(bid_id)
        return Bid.from_dict(row) if row else None

    def find_all(self, filters: Optional[BidFilters] = None, sort: Optional[BidSort] = None) -> List[Bid]:
        bids = [Bid.from_dict(r) for r in self._rows.values()]
        if filters:
            bids = [b for b in bids if _matches(b, filters)]
        if sort:
            bids.sort(key=_sort_key(sort.by), reverse=sort.order == "desc")
        return bids

    def find_by_company_and_role(self, company: str, role: str) -> List[Bid]:
        return [
            b for b in self.find_all()
            if b.company.lower() == (company or "").lower() and b.role.lower() == (role or "").lower()
        ]

    def find_by_link(self, link: str) -> Optional[Bid]:
        for b in self.find_all():
            if b.link == link:
                return b
        return None

    def update(self, bid: Bid) -> None:
        if bid.id not in self._rows:
            raise NotFoundError("Bid", bid.id)
        self._rows[bid.id] = bid.to_dict()

    def delete(self, bid_id: str) -> None:
        self._rows.pop(bid_id, None)

    def __len__(self) -> int:
        return len(self._rows)


class InMemoryInterviewRepository(InterviewRepository):
    def __init__(self, interviews: Iterable[Interview] = ()):
        self._rows: Dict[str, dict] = {}
        for i in interviews:
            self.save(i)

    def save(self, interview: Interview) -> None:
        self._rows[interview.id] = interview.to_dict()

    def find_by_id(self, interview_id: str) -> Optional[Interview]:
        row = self._rows.get(interview_id)
        return Interview.from_dict(row) if row else None

    def find_all(self) -> List[Interview]:
        return [Interview.from_dict(r) for r in self._rows.values()]

    def find_by_bid_id(self, bid_id: str) -> List[Interview]:
        return [Interview.from_dict(r) for r in self._rows.values() if r.get("bid_id") == bid_id]

    def update(self, interview: Interview) -> None:
        if interview.id not in self._rows:
            raise NotFoundError("Interview", interview.id)
        self._rows[interview.id] = interview.to_dict()

    def delete(self, interview_id: str) -> None:
        self._rows.pop(interview_id, None)

    def __len__(self) -> int:
        return len(self._rows)


class InMemoryCompanyHistoryRepository(CompanyHistoryRepository):
    def __init__(self) -> None:
        self._records: List[dict] = []

    def save(self, history: CompanyHistory) -> None:
        self._records = [r.model_dump() for r in history.to_records()]

    def load(self) -> CompanyHistory:
        return CompanyHistory.from_records(CompanyRoleHistory(**r) for r in self._records)


class InMemoryResumeRepository(ResumeRepository):
    """Resume metadata plus the set of paths that still exist on 'disk'."""

    def __init__(self, resumes: Iterable[ResumeMetadata] = (), existing_paths: Optional[Iterable[str]] = None):
        self._resumes = list(resumes)
        if existing_paths is None:
            existing_paths = [r.file_path for r in self._resumes]
        self._existing = set(existing_paths)

    def get_all_resume_metadata(self) -> List[ResumeMetadata]:
        return list(self._resumes)

    def file_exists(self, path: str) -> bool:
        return path in self._existing

    def remove_file(self, path: str) -> None:
        self._existing.discard(path)
