"""
Restaurants app services layer.

Catalog lookups and personal preference management.
"""

from .exceptions import (
    RestaurantsServiceError,
    RestaurantNotFoundError,
    DuplicateRestaurantError,
    InvalidPreferenceError,
    PreferenceNotFoundError,
)

from .restaurant_catalog import (
    create_restaurant,
    get_restaurant_by_id,
    search_restaurants,
    get_categories,
)

from .preference_management import (
    set_preference,
    clear_preference,
    get_user_preferences,
)


__all__ = [
    # Exceptions
    'RestaurantsServiceError',
    'RestaurantNotFoundError',
    'DuplicateRestaurantError',
    'InvalidPreferenceError',
    'PreferenceNotFoundError',

    # Catalog
    'create_restaurant',
    'get_restaurant_by_id',
    'search_restaurants',
    'get_categories',

    # Preferences
    'set_preference',
    'clear_preference',
    'get_user_preferences',
]
