"""Vote transition table.

Each (voter, target) pair is a three-state machine: no vote, upvote or
downvote. Repeating the current vote retracts it; the opposite vote
switches directly without passing through "no vote".
"""

from typing import Optional

from qa.domain.value import CountDelta, VoteTransition, VoteType

UP = VoteType.UPVOTE
DOWN = VoteType.DOWNVOTE

# (existing, requested) -> (next state, counter delta)
TRANSITIONS: dict[
    tuple[Optional[VoteType], VoteType], tuple[Optional[VoteType], CountDelta]
] = {
    (None, UP): (UP, CountDelta(upvote=1)),
    (None, DOWN): (DOWN, CountDelta(downvote=1)),
    (UP, UP): (None, CountDelta(upvote=-1)),
    (DOWN, DOWN): (None, CountDelta(downvote=-1)),
    (UP, DOWN): (DOWN, CountDelta(upvote=-1, downvote=1)),
    (DOWN, UP): (UP, CountDelta(upvote=1, downvote=-1)),
}


def resolve_transition(
    existing: Optional[VoteType], requested: VoteType
) -> VoteTransition:
    """Decide the next vote state and the counter delta for a vote request.

    Args:
        existing: The voter's current vote on the target (None if no vote)
        requested: The vote type the voter clicked

    Returns:
        Transition with the previous state, next state and counter delta
    """
    current, delta = TRANSITIONS[(existing, requested)]
    return VoteTransition(
        previous=existing, requested=requested, current=current, delta=delta
    )
