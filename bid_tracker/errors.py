# bid_tracker/errors.py
from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from bid_tracker.models import DuplicationWarning, EligibilityResult


class BidTrackerError(Exception):
    """Base class for every domain failure raised by bid_tracker."""


class ValidationError(BidTrackerError, ValueError):
    """Missing or malformed input. Nothing has been persisted."""


class NotFoundError(BidTrackerError, LookupError):
    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} with ID {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


class InvalidTransitionError(BidTrackerError):
    """A state-machine method was called from a state that forbids it."""

    def __init__(self, message: str, current_state: Optional[str] = None):
        super().__init__(message)
        self.current_state = current_state


class DuplicateBidError(BidTrackerError):
    def __init__(self, warnings: List["DuplicationWarning"]):
        joined = "; ".join(w.message for w in warnings)
        super().__init__(f"Duplicate bid detected: {joined}")
        self.warnings = list(warnings)


class IneligibleError(BidTrackerError):
    def __init__(self, result: "EligibilityResult"):
        super().__init__(f"Interview not allowed: {result.reason}")
        self.result = result
