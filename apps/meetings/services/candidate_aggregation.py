"""
Candidate aggregation.

Turns the votes of a roulette meeting into a probability distribution
over its candidates:

    weight(c)      = max(vote_count(c), epsilon)
    probability(c) = weight(c) / sum(weight(c') for every candidate c')

A candidate nobody voted for keeps a small chance, so the draw is never
fully decided by the vote. The distribution keeps candidate order.
"""

import math
from collections import Counter
from typing import Hashable, List, Mapping, NamedTuple, Optional, Sequence

from django.conf import settings

from .exceptions import InvalidCandidateSetError

DEFAULT_EPSILON = 0.1
MIN_CANDIDATES = 2


class Candidate(NamedTuple):
    restaurant_id: Hashable
    name: str


class WeightedCandidate(NamedTuple):
    restaurant_id: Hashable
    name: str
    vote_count: int
    probability: float


def aggregate_candidates(
    candidates: Sequence[Candidate],
    votes: Mapping[Hashable, Hashable],
    *,
    epsilon: float = DEFAULT_EPSILON
) -> List[WeightedCandidate]:
    """
    Compute the roulette distribution for a candidate list.

    Args:
        candidates: Ordered candidates, at least two, no duplicates
        votes: Mapping of voter id to the restaurant id they voted for.
            Votes for restaurants outside `candidates` are ignored.
        epsilon: Weight of a candidate with zero votes, in (0, 1]

    Returns:
        One WeightedCandidate per candidate, same order, probabilities
        strictly positive and summing to 1

    Raises:
        InvalidCandidateSetError: Fewer than two candidates, or duplicates
        ValueError: If epsilon is outside (0, 1]
    """
    if not 0 < epsilon <= 1:
        raise ValueError(f"epsilon must be in (0, 1], got {epsilon}")

    if len(candidates) < MIN_CANDIDATES:
        raise InvalidCandidateSetError(
            f"At least {MIN_CANDIDATES} candidates are required, got {len(candidates)}"
        )

    ids = [c.restaurant_id for c in candidates]
    if len(set(ids)) != len(ids):
        raise InvalidCandidateSetError("Candidate list contains duplicates")

    tally = Counter(votes.values())
    counts = [tally.get(restaurant_id, 0) for restaurant_id in ids]
    weights = [max(count, epsilon) for count in counts]
    total = math.fsum(weights)

    return [
        WeightedCandidate(
            restaurant_id=candidate.restaurant_id,
            name=candidate.name,
            vote_count=count,
            probability=weight / total,
        )
        for candidate, count, weight in zip(candidates, counts, weights)
    ]


def get_zero_vote_weight() -> float:
    return getattr(settings, 'ROULETTE_ZERO_VOTE_WEIGHT', DEFAULT_EPSILON)


def get_candidate_distribution(*, meeting, epsilon: Optional[float] = None) -> List[WeightedCandidate]:
    """
    Load candidates and votes of a meeting and aggregate them.

    Args:
        meeting: Roulette Meeting instance
        epsilon: Zero-vote weight, defaults to ROULETTE_ZERO_VOTE_WEIGHT

    Returns:
        The meeting's current distribution

    Raises:
        InvalidCandidateSetError: If the meeting has fewer than two candidates
    """
    candidates = [
        Candidate(restaurant_id=c.restaurant_id, name=c.restaurant.name)
        for c in meeting.candidates.select_related('restaurant').order_by('position')
    ]
    votes = dict(meeting.votes.values_list('user_id', 'restaurant_id'))

    return aggregate_candidates(
        candidates,
        votes,
        epsilon=get_zero_vote_weight() if epsilon is None else epsilon,
    )
