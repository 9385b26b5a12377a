"""
Membership management service.

Joining and leaving meetings. A user takes part in at most one active
meeting; the partial unique index on active participations enforces
this even when two joins race.
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.meetings.models import Meeting, MeetingParticipant, MeetingVote, ParticipantRole

from .context import load_participation_context, load_meeting_state
from .exceptions import (
    AlreadyParticipatingError,
    MeetingNotFoundError,
    translate_storage_errors,
)
from .meeting_management import lock_meeting
from .participation_guard import check_join, check_leave

logger = logging.getLogger(__name__)


@translate_storage_errors
@transaction.atomic
def join_meeting(*, meeting_id: UUID, user: User) -> MeetingParticipant:
    """
    Join a recruiting meeting.

    Args:
        meeting_id: UUID of meeting to join
        user: User joining

    Returns:
        Created MeetingParticipant

    Raises:
        NotAuthenticatedError: If user is not logged in
        MeetingNotFoundError: If meeting doesn't exist
        AlreadyParticipatingError: If user is in this or another active meeting
        MeetingNotRecruitingError: If meeting is closed or completed
    """
    ctx = load_participation_context(user)
    meeting = lock_meeting(meeting_id)
    check_join(ctx, load_meeting_state(meeting))

    try:
        with transaction.atomic():
            participant = MeetingParticipant.objects.create(
                meeting=meeting,
                user=user,
                role=ParticipantRole.PARTICIPANT,
            )
    except IntegrityError:
        raise AlreadyParticipatingError("You are already participating in a meeting")

    logger.info("User %s joined meeting %s", user.id, meeting.id)
    return participant


@translate_storage_errors
@transaction.atomic
def leave_meeting(*, meeting_id: UUID, user: User) -> None:
    """
    Leave a meeting. While recruiting, the user's vote is withdrawn too.

    Raises:
        NotAuthenticatedError: If user is not logged in
        MeetingNotFoundError: If meeting doesn't exist
        NotAParticipantError: If user is not a participant
        HostCannotLeaveError: If user is the host
        InvalidStatusTransitionError: If meeting is completed
    """
    ctx = load_participation_context(user)
    meeting = lock_meeting(meeting_id)
    state = load_meeting_state(meeting)
    check_leave(ctx, state)

    MeetingParticipant.objects.filter(meeting=meeting, user=user).delete()
    if state.is_recruiting:
        MeetingVote.objects.filter(meeting=meeting, user=user).delete()

    logger.info("User %s left meeting %s", user.id, meeting.id)


@translate_storage_errors
def get_meeting_participants(*, meeting_id: UUID) -> List[MeetingParticipant]:
    """
    Participants in join order, host first.

    Raises:
        MeetingNotFoundError: If meeting doesn't exist
    """
    if not Meeting.objects.filter(id=meeting_id).exists():
        raise MeetingNotFoundError(f"Meeting with ID {meeting_id} not found")

    return list(
        MeetingParticipant.objects
        .filter(meeting_id=meeting_id)
        .select_related('user')
        .order_by('joined_at')
    )
