import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.restaurants.models import Restaurant, RestaurantPreference


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(nickname='diner', password='TestPass123!')


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(nickname='guest', password='TestPass123!')


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def restaurant(db):
    """Create and return a test restaurant."""
    return Restaurant.objects.create(
        name='순이',
        category='면류',
        description='해산물 라멘 전문점',
    )


@pytest.fixture
def restaurants(db, restaurant):
    """A small catalog across several categories."""
    return [
        restaurant,
        Restaurant.objects.create(name='맘스터치', category='햄버거'),
        Restaurant.objects.create(name='상해교자', category='중식'),
        Restaurant.objects.create(name='해오름', category='한식'),
        Restaurant.objects.create(name='탐솥', category='한식'),
    ]


@pytest.fixture
def preference(db, user, restaurant):
    """Create and return a rated preference."""
    return RestaurantPreference.objects.create(
        user=user,
        restaurant=restaurant,
        score=4.5,
        status='favorite',
    )
