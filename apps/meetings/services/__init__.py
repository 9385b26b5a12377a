"""
Meetings app services layer.

The candidate aggregator and the roulette selector are pure functions;
the participation guard holds the pure access rules. Everything that
touches the database runs in one transaction per call.
"""

from .exceptions import (
    MeetingsServiceError,
    NotAuthenticatedError,
    NotAuthorizedError,
    AlreadyParticipatingError,
    MeetingNotRecruitingError,
    NotAParticipantError,
    NotACandidateError,
    InvalidCandidateSetError,
    NoCandidatesError,
    AlreadySpunError,
    ServerError,
    MeetingNotFoundError,
    CannotCreateMeetingError,
    HostCannotLeaveError,
    NotARouletteMeetingError,
    InvalidStatusTransitionError,
    RestaurantNotFoundError,
)

from .plans import FixedPlan, RoulettePlan

from .candidate_aggregation import (
    DEFAULT_EPSILON,
    Candidate,
    WeightedCandidate,
    aggregate_candidates,
    get_candidate_distribution,
)

from .roulette_selection import (
    Draw,
    select_winner,
    draw,
    spin_roulette,
)

from .participation_guard import (
    ParticipationContext,
    MeetingState,
    can_create_meeting,
    check_join,
    check_leave,
    check_dissolve,
    check_vote,
    check_spin,
    check_manage,
)

from .context import load_participation_context, load_meeting_state

from .meeting_management import (
    create_meeting,
    get_meeting_by_id,
    dissolve_meeting,
    close_recruitment,
    complete_meeting,
    transfer_host,
    list_week_meetings,
    get_user_meetings,
    get_meeting_history,
)

from .membership_management import (
    join_meeting,
    leave_meeting,
    get_meeting_participants,
)

from .voting import cast_vote, get_user_vote


__all__ = [
    # Exceptions
    'MeetingsServiceError',
    'NotAuthenticatedError',
    'NotAuthorizedError',
    'AlreadyParticipatingError',
    'MeetingNotRecruitingError',
    'NotAParticipantError',
    'NotACandidateError',
    'InvalidCandidateSetError',
    'NoCandidatesError',
    'AlreadySpunError',
    'ServerError',
    'MeetingNotFoundError',
    'CannotCreateMeetingError',
    'HostCannotLeaveError',
    'NotARouletteMeetingError',
    'InvalidStatusTransitionError',
    'RestaurantNotFoundError',

    # Plans
    'FixedPlan',
    'RoulettePlan',

    # Candidate aggregation
    'DEFAULT_EPSILON',
    'Candidate',
    'WeightedCandidate',
    'aggregate_candidates',
    'get_candidate_distribution',

    # Roulette
    'Draw',
    'select_winner',
    'draw',
    'spin_roulette',

    # Participation rules
    'ParticipationContext',
    'MeetingState',
    'can_create_meeting',
    'check_join',
    'check_leave',
    'check_dissolve',
    'check_vote',
    'check_spin',
    'check_manage',
    'load_participation_context',
    'load_meeting_state',

    # Meeting management
    'create_meeting',
    'get_meeting_by_id',
    'dissolve_meeting',
    'close_recruitment',
    'complete_meeting',
    'transfer_host',
    'list_week_meetings',
    'get_user_meetings',
    'get_meeting_history',

    # Membership
    'join_meeting',
    'leave_meeting',
    'get_meeting_participants',

    # Voting
    'cast_vote',
    'get_user_vote',
]
