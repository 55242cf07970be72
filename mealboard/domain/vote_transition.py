"""
Toggle semantics of the vote ledger.

Repeating the active vote retracts it, voting the other way switches it,
and a first vote creates it. Every outcome is expressed as the resulting
vote plus the counter deltas to apply to the dish in the same
transaction.
"""

from dataclasses import dataclass
from typing import Optional

from mealboard.models.base.enums import VoteType


@dataclass(frozen=True)
class VoteTransition:
    previous: Optional[VoteType]
    result: Optional[VoteType]
    like_delta: int
    dislike_delta: int

    @property
    def is_retraction(self) -> bool:
        return self.previous is not None and self.result is None

    @property
    def is_switch(self) -> bool:
        return self.previous is not None and self.result is not None


def _delta(vote: Optional[VoteType], kind: VoteType) -> int:
    return 1 if vote is kind else 0


def resolve_vote(existing: Optional[VoteType], requested: VoteType) -> VoteTransition:
    """
    Compute the ledger transition for a like/dislike request.

    >>> resolve_vote(None, VoteType.LIKE).like_delta
    1
    >>> resolve_vote(VoteType.LIKE, VoteType.LIKE).result is None
    True
    """
    result = None if existing is requested else requested

    return VoteTransition(
        previous=existing,
        result=result,
        like_delta=_delta(result, VoteType.LIKE) - _delta(existing, VoteType.LIKE),
        dislike_delta=_delta(result, VoteType.DISLIKE) - _delta(existing, VoteType.DISLIKE),
    )
