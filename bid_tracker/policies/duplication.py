# bid_tracker/policies/duplication.py
from typing import Iterable, List, Protocol

from bid_tracker.models import DuplicationWarning


class BidLike(Protocol):
    link: str
    company: str
    role: str


class ExistingBid(BidLike, Protocol):
    id: str


class DuplicationDetectionPolicy:
    """
    Flags bids that look like ones we already have.

    Two independent checks per existing bid:
      - exact link match
      - company AND role match, case-insensitive
    One existing bid can therefore produce two warnings. The policy never
    blocks anything itself; callers decide what a warning means.
    """

    def check_duplication(self, new_bid: BidLike, existing_bids: Iterable[ExistingBid]) -> List[DuplicationWarning]:
        warnings: List[DuplicationWarning] = []

        for existing in existing_bids or []:
            if self._is_link_match(new_bid.link, existing.link):
                warnings.append(
                    DuplicationWarning(
                        type="LINK_MATCH",
                        existing_bid_id=existing.id,
                        message=(
                            "Duplicate link detected: This job posting URL matches "
                            f"an existing bid (ID: {existing.id})"
                        ),
                    )
                )

            if self._is_company_role_match(new_bid, existing):
                warnings.append(
                    DuplicationWarning(
                        type="COMPANY_ROLE_MATCH",
                        existing_bid_id=existing.id,
                        message=(
                            f"Duplicate company and role detected: {new_bid.company} - {new_bid.role} "
                            f"matches an existing bid (ID: {existing.id})"
                        ),
                    )
                )

        return warnings

    @staticmethod
    def _is_link_match(new_link: str, existing_link: str) -> bool:
        return new_link == existing_link

    @staticmethod
    def _is_company_role_match(new_bid: BidLike, existing: BidLike) -> bool:
        return (
            (new_bid.company or "").lower() == (existing.company or "").lower()
            and (new_bid.role or "").lower() == (existing.role or "").lower()
        )
