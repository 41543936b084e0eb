# bid_tracker/workflows/auto_reject.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from bid_tracker.bid import RejectionReason
from bid_tracker.config import Settings
from bid_tracker.log import get_logger
from bid_tracker.repositories.base import BidRepository

log = get_logger(__name__)


class AutoRejectStaleBidsWorkflow:
    """
    Rejects NEW/SUBMITTED bids that have had no answer for too long.
    Returns the ids it rejected; each can be undone with restore_from_rejection().
    """

    def __init__(self, bid_repository: BidRepository, settings: Optional[Settings] = None):
        self.bid_repository = bid_repository
        self.settings = settings or Settings()

    def execute(self, today: Optional[date] = None) -> List[str]:
        rejected: List[str] = []
        for bid in self.bid_repository.find_all():
            if not bid.should_auto_reject(today=today, max_age_days=self.settings.auto_reject_after_days):
                continue
            bid.mark_as_rejected(RejectionReason.AUTO_REJECTED)
            self.bid_repository.update(bid)
            rejected.append(bid.id)

        if rejected:
            log.info("Auto-rejected %d stale bid(s)", len(rejected))
        return rejected
