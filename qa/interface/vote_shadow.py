"""Optimistic client-side copy of a vote button's state.

Reference model for client code such as the web UI's vote button. The
server never imports it; clients reconcile it against the next server read.
"""

from typing import Optional

from qa.domain.service import resolve_transition
from qa.domain.value import VoteCounts, VoteTransition, VoteType


class VoteShadow:
    """Local counters and vote status shown before the server answers.

    press() applies the same transition table the server uses, so the
    shadow usually predicts the committed result. It is never
    authoritative: reconcile() replaces it with the values from the next
    full read, whatever the shadow believed.
    """

    def __init__(
        self, counts: VoteCounts | None = None, vote_status: Optional[VoteType] = None
    ) -> None:
        self.counts = counts or VoteCounts()
        self.vote_status = vote_status

    def press(self, vote_type: VoteType | str) -> VoteTransition:
        """Apply a button press locally and return the predicted transition."""
        transition = resolve_transition(self.vote_status, VoteType.parse(vote_type))
        self.counts = VoteCounts(
            # Stale shadows may disagree with the server; never show negatives
            upvote_count=max(0, self.counts.upvote_count + transition.delta.upvote),
            downvote_count=max(
                0, self.counts.downvote_count + transition.delta.downvote
            ),
        )
        self.vote_status = transition.current
        return transition

    def reconcile(
        self, counts: VoteCounts, vote_status: Optional[VoteType]
    ) -> None:
        """Adopt server truth."""
        self.counts = counts
        self.vote_status = vote_status

    @property
    def net_votes(self) -> int:
        return self.counts.net_votes
