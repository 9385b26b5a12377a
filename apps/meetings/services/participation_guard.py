"""
Meeting participation rules.

Pure checks deciding who may create, join, leave, dissolve, vote on,
spin or manage a meeting. They work on plain snapshots so they can be
tested without a database; the services load the snapshots under a row
lock and the database constraints back every rule up.

Each check raises the first violated rule and returns None otherwise.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Hashable

from apps.meetings.models import MeetingStatus, MeetingType

from .candidate_aggregation import MIN_CANDIDATES
from .exceptions import (
    NotAuthorizedError,
    AlreadyParticipatingError,
    MeetingNotRecruitingError,
    NotAParticipantError,
    NotACandidateError,
    NoCandidatesError,
    AlreadySpunError,
    CannotCreateMeetingError,
    HostCannotLeaveError,
    NotARouletteMeetingError,
    InvalidStatusTransitionError,
)


@dataclass(frozen=True)
class ParticipationContext:
    """What the acting user is already involved in."""
    user_id: Hashable
    active_meeting_ids: FrozenSet[Hashable] = frozenset()
    hosted_recruiting_meeting_ids: FrozenSet[Hashable] = frozenset()


@dataclass(frozen=True)
class MeetingState:
    """Snapshot of a meeting taken inside the locking transaction."""
    id: Hashable
    host_id: Hashable
    type: str
    status: str
    participant_ids: FrozenSet[Hashable] = frozenset()
    candidate_ids: FrozenSet[Hashable] = frozenset()
    spun: bool = False

    @property
    def is_recruiting(self):
        return self.status == MeetingStatus.RECRUITING

    @property
    def is_roulette(self):
        return self.type == MeetingType.ROULETTE


def can_create_meeting(ctx: ParticipationContext) -> bool:
    """A user may host when they neither host nor take part in anything active."""
    return not ctx.hosted_recruiting_meeting_ids and not ctx.active_meeting_ids


def check_create(ctx: ParticipationContext) -> None:
    if ctx.hosted_recruiting_meeting_ids:
        raise CannotCreateMeetingError("You are already hosting a recruiting meeting")
    if ctx.active_meeting_ids:
        raise CannotCreateMeetingError("You are already participating in a meeting")


def check_join(ctx: ParticipationContext, meeting: MeetingState) -> None:
    if meeting.id in ctx.active_meeting_ids:
        raise AlreadyParticipatingError("You are already participating in this meeting")
    if ctx.active_meeting_ids:
        raise AlreadyParticipatingError("You are already participating in another meeting")
    if not meeting.is_recruiting:
        raise MeetingNotRecruitingError("This meeting is no longer recruiting")
    # Rows of a recruiting meeting are all active
    if ctx.user_id in meeting.participant_ids:
        raise AlreadyParticipatingError("You are already participating in this meeting")


def check_leave(ctx: ParticipationContext, meeting: MeetingState) -> None:
    if ctx.user_id not in meeting.participant_ids:
        raise NotAParticipantError("You are not a participant of this meeting")
    if ctx.user_id == meeting.host_id:
        raise HostCannotLeaveError("The host cannot leave; dissolve the meeting instead")
    if meeting.status == MeetingStatus.COMPLETED:
        raise InvalidStatusTransitionError("Completed meetings cannot be left")


def check_dissolve(ctx: ParticipationContext, meeting: MeetingState) -> None:
    if ctx.user_id != meeting.host_id:
        raise NotAuthorizedError("Only the host can dissolve this meeting")


def check_manage(ctx: ParticipationContext, meeting: MeetingState) -> None:
    if ctx.user_id != meeting.host_id:
        raise NotAuthorizedError("Only the host can manage this meeting")


def check_vote(ctx: ParticipationContext, meeting: MeetingState, restaurant_id: Hashable) -> None:
    if not meeting.is_recruiting:
        raise MeetingNotRecruitingError("Voting is closed for this meeting")
    if restaurant_id not in meeting.candidate_ids:
        raise NotACandidateError("This restaurant is not a candidate of the meeting")
    if ctx.user_id not in meeting.participant_ids:
        raise NotAParticipantError("Only participants can vote")


def check_spin(ctx: ParticipationContext, meeting: MeetingState) -> None:
    if ctx.user_id != meeting.host_id:
        raise NotAuthorizedError("Only the host can spin the roulette")
    if meeting.spun:
        raise AlreadySpunError("The roulette has already been spun")
    if not meeting.is_roulette:
        raise NotARouletteMeetingError("This meeting has a fixed restaurant")
    if not meeting.is_recruiting:
        raise MeetingNotRecruitingError("This meeting is no longer recruiting")
    if len(meeting.candidate_ids) < MIN_CANDIDATES:
        raise NoCandidatesError("The meeting has no candidates to draw from")


def check_close(ctx: ParticipationContext, meeting: MeetingState) -> None:
    check_manage(ctx, meeting)
    if meeting.is_roulette:
        raise InvalidStatusTransitionError("Roulette meetings are closed by spinning")
    if not meeting.is_recruiting:
        raise InvalidStatusTransitionError(f"Cannot close a {meeting.status} meeting")


def check_complete(ctx: ParticipationContext, meeting: MeetingState) -> None:
    check_manage(ctx, meeting)
    if meeting.status != MeetingStatus.CLOSED:
        raise InvalidStatusTransitionError(f"Cannot complete a {meeting.status} meeting")


def check_transfer(ctx: ParticipationContext, meeting: MeetingState, new_host_id: Hashable) -> None:
    check_manage(ctx, meeting)
    if meeting.status == MeetingStatus.COMPLETED:
        raise InvalidStatusTransitionError("Cannot transfer a completed meeting")
    if new_host_id == meeting.host_id or new_host_id not in meeting.participant_ids:
        raise NotAParticipantError("New host must be another participant of the meeting")
