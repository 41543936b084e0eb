# bid_tracker/repositories/base.py
"""
Persistence contracts the workflows are written against.

Workflows only ever talk to these interfaces. Concrete storage (a database,
files, ...) lives outside this package; ``repositories.memory`` ships
dict-backed implementations for wiring and tests.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from bid_tracker.bid import Bid
from bid_tracker.history import CompanyHistory
from bid_tracker.interview import Interview
from bid_tracker.models import ResumeMetadata


class BidFilters(BaseModel):
    company: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    main_stacks: List[str] = Field(default_factory=list)  # bid must include ALL of these


class BidSort(BaseModel):
    by: Literal["date", "company", "role", "status"] = "date"
    order: Literal["asc", "desc"] = "desc"


class BidRepository(ABC):
    @abstractmethod
    def save(self, bid: Bid) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, bid_id: str) -> Optional[Bid]:
        raise NotImplementedError

    @abstractmethod
    def find_all(self, filters: Optional[BidFilters] = None, sort: Optional[BidSort] = None) -> List[Bid]:
        raise NotImplementedError

    @abstractmethod
    def find_by_company_and_role(self, company: str, role: str) -> List[Bid]:
        raise NotImplementedError

    @abstractmethod
    def find_by_link(self, link: str) -> Optional[Bid]:
        raise NotImplementedError

    @abstractmethod
    def update(self, bid: Bid) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, bid_id: str) -> None:
        raise NotImplementedError


class InterviewRepository(ABC):
    @abstractmethod
    def save(self, interview: Interview) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, interview_id: str) -> Optional[Interview]:
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> List[Interview]:
        raise NotImplementedError

    @abstractmethod
    def find_by_bid_id(self, bid_id: str) -> List[Interview]:
        raise NotImplementedError

    @abstractmethod
    def update(self, interview: Interview) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, interview_id: str) -> None:
        raise NotImplementedError


class ResumeRepository(ABC):
    """Only needed when bids reference a saved resume by id instead of by path."""

    @abstractmethod
    def get_all_resume_metadata(self) -> List[ResumeMetadata]:
        raise NotImplementedError

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        raise NotImplementedError


class CompanyHistoryRepository(ABC):
    @abstractmethod
    def save(self, history: CompanyHistory) -> None:
        raise NotImplementedError

    @abstractmethod
    def load(self) -> CompanyHistory:
        raise NotImplementedError
