"""
Domain-specific exceptions for meetings app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses. Each one
carries a stable `code` that clients can switch on.
"""

import functools
import logging

from django.db import DatabaseError

logger = logging.getLogger(__name__)


class MeetingsServiceError(Exception):
    """Base exception for all meetings service errors."""
    code = 'meetings_error'


class NotAuthenticatedError(MeetingsServiceError):
    """Raised when an operation requires a logged-in user."""
    code = 'not_authenticated'


class NotAuthorizedError(MeetingsServiceError):
    """Raised when a non-host attempts a host-only operation."""
    code = 'not_authorized'


class AlreadyParticipatingError(MeetingsServiceError):
    """Raised when the user already participates in an active meeting."""
    code = 'already_participating'


class MeetingNotRecruitingError(MeetingsServiceError):
    """Raised when the meeting no longer accepts joins, votes or spins."""
    code = 'meeting_not_recruiting'


class NotAParticipantError(MeetingsServiceError):
    """Raised when a non-participant tries to vote or leave."""
    code = 'not_a_participant'


class NotACandidateError(MeetingsServiceError):
    """Raised when voting for a restaurant that is not on the ballot."""
    code = 'not_a_candidate'


class InvalidCandidateSetError(MeetingsServiceError):
    """Raised when a candidate list is too short or has duplicates."""
    code = 'invalid_candidate_set'


class NoCandidatesError(MeetingsServiceError):
    """Raised when a roulette meeting has nothing to draw from."""
    code = 'no_candidates'


class AlreadySpunError(MeetingsServiceError):
    """Raised when the roulette of a meeting has already been drawn."""
    code = 'already_spun'


class ServerError(MeetingsServiceError):
    """Raised when storage fails for reasons other than a business rule."""
    code = 'server_error'


class MeetingNotFoundError(MeetingsServiceError):
    """Raised when meeting does not exist."""
    code = 'meeting_not_found'


class CannotCreateMeetingError(MeetingsServiceError):
    """Raised when the user already hosts or participates in a meeting."""
    code = 'cannot_create_meeting'


class HostCannotLeaveError(MeetingsServiceError):
    """Raised when the host tries to leave instead of dissolving."""
    code = 'host_cannot_leave'


class NotARouletteMeetingError(MeetingsServiceError):
    """Raised when spinning or voting on a fixed meeting."""
    code = 'not_a_roulette_meeting'


class InvalidStatusTransitionError(MeetingsServiceError):
    """Raised when a status change is not allowed from the current status."""
    code = 'invalid_status_transition'


class RestaurantNotFoundError(MeetingsServiceError):
    """Raised when a referenced restaurant does not exist."""
    code = 'restaurant_not_found'


def translate_storage_errors(func):
    """
    Re-raise unexpected database failures as ServerError.

    Must wrap the outside of @transaction.atomic so the transaction is
    already rolled back when the error is translated. IntegrityError is
    handled inside each service and never reaches this point.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as e:
            logger.exception("Storage failure in %s", func.__name__)
            raise ServerError("Storage is temporarily unavailable") from e
    return wrapper
