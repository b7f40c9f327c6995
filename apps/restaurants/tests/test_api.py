import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestRestaurantCatalogue:

    def test_list_is_public(self, api_client, restaurant, other_restaurant, burger, salad):
        response = api_client.get(reverse('restaurants:restaurant-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        by_name = {r['name']: r for r in response.data['results']}
        assert by_name['Burger Barn']['menu_item_count'] == 2
        assert by_name['Taco Fiesta']['menu_item_count'] == 0

    def test_search(self, api_client, restaurant, other_restaurant):
        response = api_client.get(reverse('restaurants:restaurant-list'), {'search': 'taco'})

        assert [r['name'] for r in response.data['results']] == ['Taco Fiesta']

    def test_retrieve_with_menu(self, api_client, restaurant, burger, fries):
        response = api_client.get(reverse('restaurants:restaurant-detail', kwargs={'pk': restaurant.id}))

        assert response.status_code == status.HTTP_200_OK
        assert [m['name'] for m in response.data['menu_items']] == ['Classic Burger', 'Fries']

    def test_menu_items_available_filter(self, api_client, restaurant, burger, fries):
        fries.is_available = False
        fries.save()
        url = reverse('restaurants:restaurant-menu-items', kwargs={'pk': restaurant.id})

        assert len(api_client.get(url).data) == 2
        assert [m['name'] for m in api_client.get(url, {'available': 'true'}).data] == ['Classic Burger']

    def test_unknown_restaurant(self, api_client):
        response = api_client.get(reverse('restaurants:restaurant-detail', kwargs={'pk': uuid4()}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['kind'] == 'not_found'
