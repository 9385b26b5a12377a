"""
Preference management service.

A preference is a user's private rating of a restaurant. Rated
restaurants are listed first, highest score first.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import F, QuerySet

from apps.accounts.models import User
from apps.restaurants.models import Restaurant, RestaurantPreference

from .exceptions import (
    RestaurantNotFoundError,
    InvalidPreferenceError,
    PreferenceNotFoundError,
)

logger = logging.getLogger(__name__)

MIN_SCORE = 0.0
MAX_SCORE = 5.0


@transaction.atomic
def set_preference(
    *,
    user: User,
    restaurant_id: UUID,
    score: Optional[float] = None,
    status: str = '',
    note: str = ''
) -> RestaurantPreference:
    """
    Create or replace the user's preference for a restaurant.

    Args:
        user: User rating the restaurant
        restaurant_id: UUID of the restaurant
        score: Rating between 0 and 5, or None to keep it unrated
        status: Optional short label
        note: Optional free-form note

    Returns:
        The stored RestaurantPreference

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
        InvalidPreferenceError: If score is out of range
    """
    if score is not None and not MIN_SCORE <= score <= MAX_SCORE:
        raise InvalidPreferenceError(
            f"Score must be between {MIN_SCORE} and {MAX_SCORE}, got {score}"
        )

    if not Restaurant.objects.filter(id=restaurant_id).exists():
        raise RestaurantNotFoundError(f"Restaurant with ID {restaurant_id} not found")

    preference, _ = RestaurantPreference.objects.update_or_create(
        user=user,
        restaurant_id=restaurant_id,
        defaults={'score': score, 'status': status, 'note': note},
    )

    logger.info("User %s rated restaurant %s: %s", user.id, restaurant_id, score)
    return preference


@transaction.atomic
def clear_preference(*, user: User, restaurant_id: UUID) -> None:
    """
    Raises:
        PreferenceNotFoundError: If the user has no preference for it
    """
    deleted, _ = RestaurantPreference.objects.filter(
        user=user,
        restaurant_id=restaurant_id,
    ).delete()

    if not deleted:
        raise PreferenceNotFoundError("No preference set for this restaurant")


def get_user_preferences(*, user: User, rated_only: bool = False) -> QuerySet[RestaurantPreference]:
    """
    Get the user's preferences, rated first and best first.

    Args:
        user: Owner of the preferences
        rated_only: Skip entries without a score

    Returns:
        QuerySet of RestaurantPreference with restaurant preloaded
    """
    queryset = RestaurantPreference.objects.filter(user=user).select_related('restaurant')

    if rated_only:
        queryset = queryset.filter(score__isnull=False)

    return queryset.order_by(F('score').desc(nulls_last=True), 'restaurant__name')
