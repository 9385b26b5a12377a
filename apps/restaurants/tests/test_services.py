"""
Service layer unit tests for restaurants app.
"""

import pytest
from uuid import uuid4
from django.core.management import call_command

from apps.restaurants.models import Restaurant, RestaurantPreference
from apps.restaurants.services import (
    create_restaurant,
    get_restaurant_by_id,
    search_restaurants,
    get_categories,
    set_preference,
    clear_preference,
    get_user_preferences,
)
from apps.restaurants.services.exceptions import (
    RestaurantNotFoundError,
    DuplicateRestaurantError,
    InvalidPreferenceError,
    PreferenceNotFoundError,
)


# =============================================================================
# Catalog Service Tests
# =============================================================================

@pytest.mark.django_db
class TestRestaurantCatalog:

    def test_create_restaurant(self, db):
        restaurant = create_restaurant(name='  해오름 ', category='한식')

        assert restaurant.name == '해오름'
        assert Restaurant.objects.filter(name='해오름').exists()

    def test_create_duplicate_name(self, restaurant):
        with pytest.raises(DuplicateRestaurantError):
            create_restaurant(name=restaurant.name)

        assert Restaurant.objects.filter(name=restaurant.name).count() == 1

    def test_get_restaurant_by_id(self, restaurant):
        assert get_restaurant_by_id(restaurant_id=restaurant.id) == restaurant

    def test_get_restaurant_not_found(self, db):
        with pytest.raises(RestaurantNotFoundError):
            get_restaurant_by_id(restaurant_id=uuid4())

    def test_search_by_name(self, restaurants):
        results = search_restaurants(query='교자')

        assert [r.name for r in results] == ['상해교자']

    def test_search_matches_category(self, restaurants):
        results = search_restaurants(query='한식')

        assert {r.name for r in results} == {'해오름', '탐솥'}

    def test_filter_by_category(self, restaurants):
        results = search_restaurants(category='햄버거')

        assert results.count() == 1

    def test_get_categories(self, restaurants):
        assert get_categories() == sorted({'면류', '햄버거', '중식', '한식'})


# =============================================================================
# Preference Service Tests
# =============================================================================

@pytest.mark.django_db
class TestPreferenceManagement:

    def test_set_preference_creates(self, user, restaurant):
        preference = set_preference(user=user, restaurant_id=restaurant.id, score=3.0)

        assert preference.score == 3.0
        assert RestaurantPreference.objects.filter(user=user).count() == 1

    def test_set_preference_replaces(self, user, restaurant, preference):
        set_preference(user=user, restaurant_id=restaurant.id, score=1.0, note='meh')

        preference.refresh_from_db()
        assert preference.score == 1.0
        assert preference.note == 'meh'
        assert RestaurantPreference.objects.filter(user=user).count() == 1

    def test_set_preference_out_of_range(self, user, restaurant):
        with pytest.raises(InvalidPreferenceError):
            set_preference(user=user, restaurant_id=restaurant.id, score=5.5)

    def test_set_preference_unknown_restaurant(self, user):
        with pytest.raises(RestaurantNotFoundError):
            set_preference(user=user, restaurant_id=uuid4(), score=2.0)

    def test_clear_preference(self, user, restaurant, preference):
        clear_preference(user=user, restaurant_id=restaurant.id)

        assert not RestaurantPreference.objects.filter(id=preference.id).exists()

    def test_clear_missing_preference(self, user, restaurant):
        with pytest.raises(PreferenceNotFoundError):
            clear_preference(user=user, restaurant_id=restaurant.id)

    def test_preferences_ordered_by_score(self, user, restaurants):
        set_preference(user=user, restaurant_id=restaurants[1].id, score=2.0)
        set_preference(user=user, restaurant_id=restaurants[2].id, score=None)
        set_preference(user=user, restaurant_id=restaurants[3].id, score=4.0)

        scores = [p.score for p in get_user_preferences(user=user)]

        assert scores == [4.0, 2.0, None]

    def test_rated_only(self, user, restaurants):
        set_preference(user=user, restaurant_id=restaurants[1].id, score=2.0)
        set_preference(user=user, restaurant_id=restaurants[2].id, score=None)

        assert get_user_preferences(user=user, rated_only=True).count() == 1

    def test_preferences_are_private(self, user, other_user, preference):
        assert get_user_preferences(user=other_user).count() == 0


@pytest.mark.django_db
class TestLoadSampleRestaurants:

    def test_loads_catalog(self, db):
        call_command('load_sample_restaurants')

        assert Restaurant.objects.count() == 5

    def test_is_idempotent(self, db):
        call_command('load_sample_restaurants')
        call_command('load_sample_restaurants')

        assert Restaurant.objects.count() == 5
