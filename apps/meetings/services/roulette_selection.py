"""
Roulette selection.

The draw walks the cumulative probabilities of the distribution in
candidate order and picks the first candidate whose cumulative value
exceeds the random number r in [0, 1). Given the same distribution and
the same r the winner is always the same, so a stored result can be
replayed from its snapshot.
"""

import logging
import secrets
from typing import List, NamedTuple, Sequence
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.meetings.models import MeetingStatus, RouletteResult

from .candidate_aggregation import WeightedCandidate, get_candidate_distribution
from .context import load_participation_context, load_meeting_state
from .exceptions import (
    AlreadySpunError,
    InvalidCandidateSetError,
    NoCandidatesError,
    translate_storage_errors,
)
from .meeting_management import lock_meeting
from .participation_guard import check_spin

logger = logging.getLogger(__name__)


class Draw(NamedTuple):
    random_value: float
    winner: WeightedCandidate
    distribution: List[WeightedCandidate]


def select_winner(distribution: Sequence[WeightedCandidate], r: float) -> WeightedCandidate:
    """
    Pick the candidate whose cumulative range contains r.

    Raises:
        ValueError: If r is outside [0, 1) or the distribution is empty
    """
    if not 0.0 <= r < 1.0:
        raise ValueError(f"r must be in [0, 1), got {r}")
    if not distribution:
        raise ValueError("Cannot draw from an empty distribution")

    cumulative = 0.0
    for candidate in distribution:
        cumulative += candidate.probability
        if r < cumulative:
            return candidate

    # Rounding left the total just under r; the last real range wins.
    for candidate in reversed(distribution):
        if candidate.probability > 0:
            return candidate
    raise ValueError("Distribution has no candidate with positive probability")


def draw(distribution: Sequence[WeightedCandidate], rng=None) -> Draw:
    """Sample r from `rng.random()` and select the winner."""
    rng = rng or secrets.SystemRandom()
    r = rng.random()
    return Draw(random_value=r, winner=select_winner(distribution, r), distribution=list(distribution))


def snapshot(distribution: Sequence[WeightedCandidate]) -> List[dict]:
    return [
        {
            'restaurant_id': str(c.restaurant_id),
            'restaurant_name': c.name,
            'vote_count': c.vote_count,
            'probability': c.probability,
        }
        for c in distribution
    ]


@translate_storage_errors
@transaction.atomic
def spin_roulette(*, meeting_id: UUID, user: User, rng=None) -> RouletteResult:
    """
    Draw the restaurant of a roulette meeting. Happens once per meeting.

    Args:
        meeting_id: UUID of the roulette meeting
        user: Host spinning the roulette
        rng: Object with a random() method, defaults to SystemRandom

    Returns:
        The stored RouletteResult

    Raises:
        NotAuthenticatedError: If user is not logged in
        MeetingNotFoundError: If meeting doesn't exist
        NotAuthorizedError: If user is not the host
        AlreadySpunError: If the roulette was already spun
        NotARouletteMeetingError: If the meeting has a fixed restaurant
        MeetingNotRecruitingError: If the meeting is not recruiting
        NoCandidatesError: If there is nothing to draw from
    """
    ctx = load_participation_context(user)
    meeting = lock_meeting(meeting_id)
    check_spin(ctx, load_meeting_state(meeting))

    try:
        distribution = get_candidate_distribution(meeting=meeting)
    except InvalidCandidateSetError as e:
        raise NoCandidatesError(str(e)) from e

    result_draw = draw(distribution, rng)
    winner = result_draw.winner

    try:
        with transaction.atomic():
            result = RouletteResult.objects.create(
                meeting=meeting,
                random_value=result_draw.random_value,
                candidates=snapshot(result_draw.distribution),
                selected_restaurant_id=winner.restaurant_id,
                spun_by=user,
            )
    except IntegrityError:
        raise AlreadySpunError("The roulette has already been spun")

    meeting.selected_restaurant_id = winner.restaurant_id
    meeting.status = MeetingStatus.CLOSED
    meeting.save(update_fields=['selected_restaurant', 'status', 'updated_at'])

    logger.info(
        "User %s spun meeting %s: r=%.6f -> %s (%s)",
        user.id, meeting.id, result_draw.random_value, winner.name, winner.restaurant_id,
    )
    return result
