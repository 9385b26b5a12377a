"""
Restaurant catalog service.

Restaurants are shared reference data: created once, read by everyone.
"""

import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.restaurants.models import Restaurant

from .exceptions import RestaurantNotFoundError, DuplicateRestaurantError

logger = logging.getLogger(__name__)


def create_restaurant(
    *,
    name: str,
    category: str = '',
    description: str = '',
    map_url: str = ''
) -> Restaurant:
    """
    Add a restaurant to the catalog.

    Args:
        name: Display name, unique in the catalog
        category: Cuisine category (e.g. "한식", "중식")
        description: Free-form description
        map_url: Link to the restaurant on an external map

    Returns:
        Created Restaurant instance

    Raises:
        DuplicateRestaurantError: If a restaurant with this name exists
    """
    name = name.strip()
    try:
        with transaction.atomic():
            restaurant = Restaurant.objects.create(
                name=name,
                category=category.strip(),
                description=description,
                map_url=map_url,
            )
    except IntegrityError:
        raise DuplicateRestaurantError(f"Restaurant '{name}' already exists")

    logger.info("Created restaurant %s (%s)", restaurant.id, restaurant.name)
    return restaurant


def get_restaurant_by_id(*, restaurant_id: UUID) -> Restaurant:
    """
    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
    """
    try:
        return Restaurant.objects.get(id=restaurant_id)
    except Restaurant.DoesNotExist:
        raise RestaurantNotFoundError(f"Restaurant with ID {restaurant_id} not found")


def search_restaurants(
    *,
    query: Optional[str] = None,
    category: Optional[str] = None
) -> QuerySet[Restaurant]:
    """
    Search the catalog.

    Args:
        query: Case-insensitive substring matched against name and category
        category: Exact category filter

    Returns:
        QuerySet of matching restaurants ordered by name
    """
    queryset = Restaurant.objects.all()

    if query:
        queryset = queryset.filter(
            Q(name__icontains=query) | Q(category__icontains=query)
        )

    if category:
        queryset = queryset.filter(category=category)

    return queryset.order_by('name')


def get_categories() -> List[str]:
    """Distinct non-empty categories present in the catalog."""
    return list(
        Restaurant.objects
        .exclude(category='')
        .order_by('category')
        .values_list('category', flat=True)
        .distinct()
    )
