"""
Domain-specific exceptions for restaurants app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class RestaurantsServiceError(Exception):
    """Base exception for all restaurants service errors."""
    pass


class RestaurantNotFoundError(RestaurantsServiceError):
    """Raised when a restaurant does not exist."""
    pass


class DuplicateRestaurantError(RestaurantsServiceError):
    """Raised when a restaurant with the same name already exists."""
    pass


class InvalidPreferenceError(RestaurantsServiceError):
    """Raised when a preference score is outside the 0-5 range."""
    pass


class PreferenceNotFoundError(RestaurantsServiceError):
    """Raised when clearing a preference the user never set."""
    pass
