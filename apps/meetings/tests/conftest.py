import datetime

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.restaurants.models import Restaurant
from apps.meetings.services import create_meeting, FixedPlan, RoulettePlan


MEETING_DATE = datetime.date(2025, 3, 12)  # ISO week 11
MEETING_TIME = datetime.time(12, 0)


class FixedRandom:
    """Stand-in RNG returning a preset value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def client_for(user):
    """Return an API client authenticated as `user` using JWT."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def host_user(db):
    """Create and return the meeting host."""
    return User.objects.create_user(nickname='host', password='TestPass123!')


@pytest.fixture
def guest_user(db):
    """Create and return a user who joins meetings."""
    return User.objects.create_user(nickname='guest', password='TestPass123!')


@pytest.fixture
def third_user(db):
    """Create and return a user not in any meeting."""
    return User.objects.create_user(nickname='third', password='TestPass123!')


@pytest.fixture
def host_client(host_user):
    return client_for(host_user)


@pytest.fixture
def guest_client(guest_user):
    return client_for(guest_user)


@pytest.fixture
def restaurants(db):
    """Three restaurants in catalog order."""
    return [
        Restaurant.objects.create(name='순이', category='면류'),
        Restaurant.objects.create(name='맘스터치', category='햄버거'),
        Restaurant.objects.create(name='상해교자', category='중식'),
    ]


@pytest.fixture
def roulette_meeting(host_user, restaurants):
    """A recruiting roulette meeting with all three restaurants on the ballot."""
    return create_meeting(
        host=host_user,
        date=MEETING_DATE,
        time=MEETING_TIME,
        plan=RoulettePlan(candidate_ids=tuple(r.id for r in restaurants)),
    )


@pytest.fixture
def fixed_meeting(host_user, restaurants):
    """A recruiting meeting at the first restaurant."""
    return create_meeting(
        host=host_user,
        date=MEETING_DATE,
        time=MEETING_TIME,
        plan=FixedPlan(restaurant_id=restaurants[0].id),
    )
