"""Loading of participation snapshots from the database."""

from apps.meetings.models import Meeting, MeetingParticipant, MeetingStatus, RouletteResult

from .exceptions import NotAuthenticatedError
from .participation_guard import ParticipationContext, MeetingState


def load_participation_context(user) -> ParticipationContext:
    """
    Raises:
        NotAuthenticatedError: If there is no logged-in user
    """
    if user is None or not user.is_authenticated:
        raise NotAuthenticatedError("Authentication required")

    active = MeetingParticipant.objects.filter(
        user=user,
        is_active=True,
    ).values_list('meeting_id', flat=True)

    hosted = Meeting.objects.filter(
        host=user,
        status=MeetingStatus.RECRUITING,
    ).values_list('id', flat=True)

    return ParticipationContext(
        user_id=user.id,
        active_meeting_ids=frozenset(active),
        hosted_recruiting_meeting_ids=frozenset(hosted),
    )


def load_meeting_state(meeting: Meeting) -> MeetingState:
    return MeetingState(
        id=meeting.id,
        host_id=meeting.host_id,
        type=meeting.type,
        status=meeting.status,
        participant_ids=frozenset(meeting.participants.values_list('user_id', flat=True)),
        candidate_ids=frozenset(meeting.candidates.values_list('restaurant_id', flat=True)),
        spun=RouletteResult.objects.filter(meeting=meeting).exists(),
    )
