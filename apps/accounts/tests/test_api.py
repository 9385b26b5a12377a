import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'nickname': 'newbie',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'profile_icon': '🦊',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['profile_icon'] == '🦊'
        assert User.objects.filter(nickname='newbie').exists()

    def test_register_default_icon(self, api_client):
        """Profile icon is optional."""
        url = reverse('users:register')
        data = {
            'nickname': 'plain',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(nickname='plain').profile_icon == '👤'

    def test_register_duplicate_nickname(self, api_client, user):
        """Cannot register with a taken nickname."""
        url = reverse('users:register')
        data = {
            'nickname': user.nickname,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already taken' in response.data['error']

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'nickname': 'mismatch',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_unknown_icon(self, api_client):
        """Only the predefined profile icons are accepted."""
        url = reverse('users:register')
        data = {
            'nickname': 'iconic',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'profile_icon': 'X',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'nickname': 'tester', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert response.data['user']['nickname'] == 'tester'

    def test_login_wrong_password(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'nickname': 'tester', 'password': 'WrongPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_nonexistent_user(self, api_client):
        url = reverse('users:login')
        response = api_client.post(url, {'nickname': 'ghost', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        url = reverse('users:login')
        response = api_client.post(url, {'nickname': 'sleeper', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_updates_last_login(self, api_client, user):
        assert user.last_login is None

        url = reverse('users:login')
        api_client.post(url, {'nickname': 'tester', 'password': 'TestPass123!'})

        user.refresh_from_db()
        assert user.last_login is not None


# =============================================================================
# Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestProfile:
    """Tests for /api/auth/user/ endpoints."""

    def test_get_current_user(self, authenticated_client, user):
        response = authenticated_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['nickname'] == user.nickname

    def test_get_current_user_unauthenticated(self, api_client):
        response = api_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_profile_icon(self, authenticated_client, user):
        url = reverse('users:update-profile')
        response = authenticated_client.patch(url, {'profile_icon': '🐼'})

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.profile_icon == '🐼'

    def test_cannot_update_nickname(self, authenticated_client, user):
        url = reverse('users:update-profile')
        authenticated_client.patch(url, {'nickname': 'renamed'})

        user.refresh_from_db()
        assert user.nickname == 'tester'

    def test_get_user_by_id(self, authenticated_client, other_user):
        url = reverse('users:user-detail', kwargs={'pk': other_user.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['nickname'] == 'other'


# =============================================================================
# Model Tests
# =============================================================================

@pytest.mark.django_db
class TestUserModel:

    def test_create_user_hashes_password(self, db):
        user = User.objects.create_user(nickname='hashed', password='Secret123!')

        assert user.password != 'Secret123!'
        assert user.check_password('Secret123!')

    def test_create_user_requires_nickname(self, db):
        with pytest.raises(ValueError):
            User.objects.create_user(nickname='', password='Secret123!')

    def test_create_superuser(self, db):
        admin = User.objects.create_superuser(nickname='boss', password='Secret123!')

        assert admin.is_staff is True
        assert admin.is_superuser is True

    def test_user_str(self, user):
        assert str(user) == 'tester'
