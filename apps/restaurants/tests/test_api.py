import pytest
from django.urls import reverse
from rest_framework import status
from apps.restaurants.models import Restaurant, RestaurantPreference


@pytest.mark.django_db
class TestRestaurantCatalogAPI:
    """Tests for /api/restaurants/"""

    def test_list_is_public(self, api_client, restaurants):
        response = api_client.get(reverse('restaurants:restaurant-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 5

    def test_search(self, api_client, restaurants):
        url = reverse('restaurants:restaurant-list')
        response = api_client.get(url, {'search': '맘스'})

        assert response.status_code == status.HTTP_200_OK
        assert [r['name'] for r in response.data['results']] == ['맘스터치']

    def test_retrieve(self, api_client, restaurant):
        url = reverse('restaurants:restaurant-detail', kwargs={'pk': restaurant.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['category'] == '면류'

    def test_retrieve_not_found(self, api_client, db):
        url = reverse('restaurants:restaurant-detail', kwargs={'pk': '00000000-0000-0000-0000-000000000000'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_requires_auth(self, api_client):
        response = api_client.post(reverse('restaurants:restaurant-list'), {'name': '새집'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create(self, authenticated_client):
        url = reverse('restaurants:restaurant-list')
        response = authenticated_client.post(url, {'name': '새집', 'category': '분식'})

        assert response.status_code == status.HTTP_201_CREATED
        assert Restaurant.objects.filter(name='새집').exists()

    def test_create_duplicate(self, authenticated_client, restaurant):
        url = reverse('restaurants:restaurant-list')
        response = authenticated_client.post(url, {'name': restaurant.name})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_categories(self, api_client, restaurants):
        response = api_client.get(reverse('restaurants:restaurant-categories'))

        assert response.status_code == status.HTTP_200_OK
        assert '한식' in response.data


@pytest.mark.django_db
class TestPreferenceAPI:
    """Tests for preference endpoints."""

    def test_set_preference(self, authenticated_client, user, restaurant):
        url = reverse('restaurants:restaurant-preference', kwargs={'pk': restaurant.id})
        response = authenticated_client.put(url, {'score': 4.0, 'status': 'favorite'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['score'] == 4.0
        assert RestaurantPreference.objects.get(user=user).status == 'favorite'

    def test_set_preference_out_of_range(self, authenticated_client, restaurant):
        url = reverse('restaurants:restaurant-preference', kwargs={'pk': restaurant.id})
        response = authenticated_client.put(url, {'score': 9}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_set_preference_requires_auth(self, api_client, restaurant):
        url = reverse('restaurants:restaurant-preference', kwargs={'pk': restaurant.id})
        response = api_client.put(url, {'score': 4.0}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_clear_preference(self, authenticated_client, restaurant, preference):
        url = reverse('restaurants:restaurant-preference', kwargs={'pk': restaurant.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not RestaurantPreference.objects.filter(id=preference.id).exists()

    def test_clear_missing_preference(self, authenticated_client, restaurant):
        url = reverse('restaurants:restaurant-preference', kwargs={'pk': restaurant.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_my_preferences(self, authenticated_client, preference):
        response = authenticated_client.get(reverse('restaurants:restaurant-preferences'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['restaurant']['name'] == '순이'

    def test_retrieve_uppercase_id(self, api_client, restaurant):
        url = f"{reverse('restaurants:restaurant-list')}{str(restaurant.id).upper()}/"
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == restaurant.name
