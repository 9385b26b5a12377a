"""
Meeting management service.

Creation, lookup, dissolution and host-side status changes. Every write
locks the meeting row and re-checks the participation rules inside the
transaction.
"""

import datetime
import logging
from typing import Dict, List, Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Count, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.meetings.models import (
    Meeting,
    MeetingCandidate,
    MeetingParticipant,
    MeetingStatus,
    MeetingType,
    ParticipantRole,
)
from apps.restaurants.models import Restaurant

from .context import load_participation_context, load_meeting_state
from .exceptions import (
    MeetingNotFoundError,
    CannotCreateMeetingError,
    InvalidCandidateSetError,
    RestaurantNotFoundError,
    translate_storage_errors,
)
from .participation_guard import (
    check_create,
    check_dissolve,
    check_close,
    check_complete,
    check_transfer,
)
from .plans import FixedPlan, RoulettePlan, MeetingPlan
from .candidate_aggregation import MIN_CANDIDATES

logger = logging.getLogger(__name__)


def iso_week(date: datetime.date) -> int:
    return date.isocalendar()[1]


def _with_counts(queryset: QuerySet[Meeting]) -> QuerySet[Meeting]:
    return queryset.select_related('host', 'selected_restaurant').annotate(
        participant_count=Count('participants', distinct=True),
        vote_count=Count('votes', distinct=True),
    )


def lock_meeting(meeting_id: UUID) -> Meeting:
    """
    Fetch a meeting with its row locked until the transaction ends.

    Raises:
        MeetingNotFoundError: If meeting doesn't exist
    """
    try:
        return Meeting.objects.select_for_update().get(id=meeting_id)
    except Meeting.DoesNotExist:
        raise MeetingNotFoundError(f"Meeting with ID {meeting_id} not found")


@translate_storage_errors
@transaction.atomic
def create_meeting(
    *,
    host: User,
    date: datetime.date,
    time: datetime.time,
    plan: MeetingPlan,
    week: Optional[int] = None
) -> Meeting:
    """
    Create a meeting and register its host as the first participant.

    Args:
        host: User creating the meeting
        date: Day of the meeting
        time: Time of the meeting
        plan: FixedPlan with the chosen restaurant, or RoulettePlan
            with the ordered candidate list
        week: Week bucket, defaults to the ISO week of `date`

    Returns:
        Created Meeting instance

    Raises:
        NotAuthenticatedError: If host is not logged in
        CannotCreateMeetingError: If host already hosts or participates
        RestaurantNotFoundError: If a referenced restaurant doesn't exist
        InvalidCandidateSetError: If the roulette ballot is invalid
    """
    ctx = load_participation_context(host)
    check_create(ctx)

    if isinstance(plan, FixedPlan):
        meeting_type = MeetingType.FIXED
        selected = Restaurant.objects.filter(id=plan.restaurant_id).first()
        if selected is None:
            raise RestaurantNotFoundError(f"Restaurant with ID {plan.restaurant_id} not found")
        candidate_ids = []
    elif isinstance(plan, RoulettePlan):
        meeting_type = MeetingType.ROULETTE
        selected = None
        candidate_ids = list(plan.candidate_ids)
        if len(candidate_ids) < MIN_CANDIDATES:
            raise InvalidCandidateSetError(
                f"At least {MIN_CANDIDATES} candidates are required, got {len(candidate_ids)}"
            )
        if len(set(candidate_ids)) != len(candidate_ids):
            raise InvalidCandidateSetError("Candidate list contains duplicates")
        found = set(Restaurant.objects.filter(id__in=candidate_ids).values_list('id', flat=True))
        missing = [str(c) for c in candidate_ids if c not in found]
        if missing:
            raise RestaurantNotFoundError(f"Restaurants not found: {', '.join(missing)}")
    else:
        raise TypeError(f"Unsupported meeting plan: {plan!r}")

    try:
        with transaction.atomic():
            meeting = Meeting.objects.create(
                host=host,
                date=date,
                time=time,
                week=iso_week(date) if week is None else week,
                type=meeting_type,
                selected_restaurant=selected,
            )
            MeetingParticipant.objects.create(
                meeting=meeting,
                user=host,
                role=ParticipantRole.HOST,
            )
    except IntegrityError:
        raise CannotCreateMeetingError("You are already hosting or participating in a meeting")

    MeetingCandidate.objects.bulk_create([
        MeetingCandidate(meeting=meeting, restaurant_id=restaurant_id, position=position)
        for position, restaurant_id in enumerate(candidate_ids)
    ])

    logger.info(
        "User %s created %s meeting %s for %s %s",
        host.id, meeting_type, meeting.id, date, time,
    )
    return meeting


@translate_storage_errors
def get_meeting_by_id(*, meeting_id: UUID) -> Meeting:
    """
    Get a meeting with participant_count and vote_count annotated.

    Raises:
        MeetingNotFoundError: If meeting doesn't exist
    """
    try:
        return _with_counts(Meeting.objects.all()).get(id=meeting_id)
    except Meeting.DoesNotExist:
        raise MeetingNotFoundError(f"Meeting with ID {meeting_id} not found")


@translate_storage_errors
@transaction.atomic
def dissolve_meeting(*, meeting_id: UUID, user: User) -> None:
    """
    Delete a meeting. Participants, candidates, votes and the roulette
    result go with it.

    Raises:
        MeetingNotFoundError: If meeting doesn't exist
        NotAuthorizedError: If user is not the host
    """
    meeting = lock_meeting(meeting_id)
    check_dissolve(load_participation_context(user), load_meeting_state(meeting))

    meeting.delete()
    logger.info("User %s dissolved meeting %s", user.id, meeting_id)


@translate_storage_errors
@transaction.atomic
def close_recruitment(*, meeting_id: UUID, user: User) -> Meeting:
    """
    Stop recruiting for a fixed meeting.

    Raises:
        MeetingNotFoundError: If meeting doesn't exist
        NotAuthorizedError: If user is not the host
        InvalidStatusTransitionError: If the meeting is a roulette
            meeting or is not recruiting
    """
    meeting = lock_meeting(meeting_id)
    check_close(load_participation_context(user), load_meeting_state(meeting))

    meeting.status = MeetingStatus.CLOSED
    meeting.save(update_fields=['status', 'updated_at'])

    logger.info("User %s closed recruitment of meeting %s", user.id, meeting.id)
    return meeting


@translate_storage_errors
@transaction.atomic
def complete_meeting(*, meeting_id: UUID, user: User) -> Meeting:
    """
    Mark a closed meeting as held. All participations become inactive,
    so everybody is free to join or host the next one.

    Raises:
        MeetingNotFoundError: If meeting doesn't exist
        NotAuthorizedError: If user is not the host
        InvalidStatusTransitionError: If the meeting is not closed
    """
    meeting = lock_meeting(meeting_id)
    check_complete(load_participation_context(user), load_meeting_state(meeting))

    meeting.status = MeetingStatus.COMPLETED
    meeting.save(update_fields=['status', 'updated_at'])
    released = meeting.participants.filter(is_active=True).update(is_active=False)

    logger.info(
        "User %s completed meeting %s (%d participations released)",
        user.id, meeting.id, released,
    )
    return meeting


@translate_storage_errors
@transaction.atomic
def transfer_host(*, meeting_id: UUID, user: User, new_host_id: UUID) -> Meeting:
    """
    Hand the host role to another participant.

    Raises:
        MeetingNotFoundError: If meeting doesn't exist
        NotAuthorizedError: If user is not the host
        NotAParticipantError: If the new host is not a participant
        InvalidStatusTransitionError: If the meeting is completed
        CannotCreateMeetingError: If the new host already hosts a
            recruiting meeting
    """
    meeting = lock_meeting(meeting_id)
    check_transfer(load_participation_context(user), load_meeting_state(meeting), new_host_id)

    try:
        with transaction.atomic():
            meeting.participants.filter(user_id=meeting.host_id).update(role=ParticipantRole.PARTICIPANT)
            meeting.participants.filter(user_id=new_host_id).update(role=ParticipantRole.HOST)
            meeting.host_id = new_host_id
            meeting.save(update_fields=['host', 'updated_at'])
    except IntegrityError:
        raise CannotCreateMeetingError("The new host already hosts a recruiting meeting")

    logger.info("User %s transferred meeting %s to %s", user.id, meeting.id, new_host_id)
    return meeting


def list_week_meetings(*, week: Optional[int] = None) -> QuerySet[Meeting]:
    """
    Recruiting meetings of a week, newest first.

    Args:
        week: ISO week number, defaults to the current week
    """
    if week is None:
        week = iso_week(timezone.localdate())

    return _with_counts(
        Meeting.objects.filter(week=week, status=MeetingStatus.RECRUITING)
    ).order_by('-created_at')


def _active_meetings(user: User, role: str) -> List[Meeting]:
    memberships = MeetingParticipant.objects.filter(user=user, is_active=True, role=role)
    queryset = Meeting.objects.filter(id__in=memberships.values('meeting_id'))
    return list(_with_counts(queryset).order_by('-created_at'))


@translate_storage_errors
def get_user_meetings(*, user: User) -> Dict[str, List[Meeting]]:
    """
    Meetings the user is currently tied to, i.e. not yet completed.

    A host stays tied to a closed meeting until they complete it, so
    hosted meetings are listed whatever their status.

    Returns:
        {'hosted': active meetings hosted by the user,
         'participating': active meetings the user joined as a guest}
    """
    return {
        'hosted': _active_meetings(user, ParticipantRole.HOST),
        'participating': _active_meetings(user, ParticipantRole.PARTICIPANT),
    }


def get_meeting_history(
    *,
    user: User,
    role: Optional[str] = None,
    status: Optional[str] = None
) -> QuerySet[Meeting]:
    """
    Closed and completed meetings the user hosted or joined.

    Args:
        user: Whose history to list
        role: 'host' or 'participant' to restrict by the user's role
        status: 'closed' or 'completed' to restrict by status

    Returns:
        QuerySet ordered by date and time, newest first
    """
    finished = [MeetingStatus.CLOSED, MeetingStatus.COMPLETED]
    if status in finished:
        finished = [status]

    # Subquery keeps the join out of the participant count annotation
    memberships = MeetingParticipant.objects.filter(user=user)
    if role in ParticipantRole.values:
        memberships = memberships.filter(role=role)

    queryset = Meeting.objects.filter(
        id__in=memberships.values('meeting_id'),
        status__in=finished,
    )

    return _with_counts(queryset).order_by('-date', '-time')
