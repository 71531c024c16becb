"""Unit tests for the optimistic vote button state."""

import pytest

from qa.domain.error import InvalidVoteTypeError
from qa.domain.value import VoteCounts, VoteType
from qa.interface.vote_shadow import VoteShadow


class TestVoteShadow:
    def test_predicts_server_sequence(self):
        shadow = VoteShadow(VoteCounts(upvote_count=5, downvote_count=2))

        shadow.press("upvote")
        assert (shadow.counts.upvote_count, shadow.counts.downvote_count) == (6, 2)
        assert shadow.vote_status == VoteType.UPVOTE

        shadow.press(VoteType.UPVOTE)
        assert (shadow.counts.upvote_count, shadow.counts.downvote_count) == (5, 2)
        assert shadow.vote_status is None

        transition = shadow.press("downvote")
        assert (shadow.counts.upvote_count, shadow.counts.downvote_count) == (5, 3)
        assert transition.message == "Vote recorded"
        assert shadow.net_votes == 2

    def test_stale_shadow_never_goes_negative(self):
        # Believes it upvoted, but the server count already dropped to zero
        shadow = VoteShadow(VoteCounts(), vote_status=VoteType.UPVOTE)

        shadow.press("downvote")

        assert shadow.counts.upvote_count == 0
        assert shadow.counts.downvote_count == 1

    def test_reconcile_adopts_server_values(self):
        shadow = VoteShadow()
        shadow.press("upvote")

        shadow.reconcile(VoteCounts(upvote_count=9, downvote_count=4), None)

        assert shadow.vote_status is None
        assert shadow.net_votes == 5

    def test_rejects_unknown_vote_type(self):
        shadow = VoteShadow()

        with pytest.raises(InvalidVoteTypeError):
            shadow.press("sideways")
        assert shadow.counts == VoteCounts()
