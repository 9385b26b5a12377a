"""Voting on roulette candidates."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.meetings.models import Meeting, MeetingVote

from .context import load_participation_context, load_meeting_state
from .exceptions import translate_storage_errors
from .meeting_management import lock_meeting
from .participation_guard import check_vote

logger = logging.getLogger(__name__)


@translate_storage_errors
@transaction.atomic
def cast_vote(*, meeting_id: UUID, user: User, restaurant_id: UUID) -> MeetingVote:
    """
    Vote for a candidate, replacing any earlier vote of the user.

    Args:
        meeting_id: UUID of the roulette meeting
        user: Voting participant
        restaurant_id: UUID of a candidate restaurant

    Returns:
        The user's MeetingVote

    Raises:
        NotAuthenticatedError: If user is not logged in
        MeetingNotFoundError: If meeting doesn't exist
        MeetingNotRecruitingError: If voting has closed
        NotACandidateError: If restaurant is not on the ballot
        NotAParticipantError: If user has not joined the meeting
    """
    ctx = load_participation_context(user)
    meeting = lock_meeting(meeting_id)
    check_vote(ctx, load_meeting_state(meeting), restaurant_id)

    vote, created = MeetingVote.objects.update_or_create(
        meeting=meeting,
        user=user,
        defaults={'restaurant_id': restaurant_id},
    )

    logger.info(
        "User %s %s restaurant %s in meeting %s",
        user.id, 'voted for' if created else 'changed vote to', restaurant_id, meeting.id,
    )
    return vote


def get_user_vote(*, meeting: Meeting, user: User) -> Optional[UUID]:
    """Restaurant id the user currently votes for, or None."""
    if not user.is_authenticated:
        return None
    return (
        MeetingVote.objects
        .filter(meeting=meeting, user=user)
        .values_list('restaurant_id', flat=True)
        .first()
    )
