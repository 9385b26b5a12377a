from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination

from .serializers import (
    RestaurantSerializer,
    RestaurantCreateSerializer,
    RestaurantPreferenceSerializer,
    PreferenceUpdateSerializer,
)

from apps.restaurants.services import (
    create_restaurant,
    get_restaurant_by_id,
    search_restaurants,
    get_categories,
    set_preference,
    clear_preference,
    get_user_preferences,
    # Exceptions
    RestaurantNotFoundError,
    DuplicateRestaurantError,
    InvalidPreferenceError,
    PreferenceNotFoundError,
)


class RestaurantPagination(PageNumberPagination):
    """Custom pagination for restaurants."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class RestaurantViewSet(viewsets.GenericViewSet):
    """
    Restaurant catalog.

    list: Search restaurants (?search=, ?category=)
    create: Add a restaurant
    retrieve: Get a specific restaurant
    """

    serializer_class = RestaurantSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = RestaurantPagination
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        return search_restaurants(
            query=self.request.query_params.get('search'),
            category=self.request.query_params.get('category'),
        )

    def list(self, request):
        """Search the catalog."""
        page = self.paginate_queryset(self.get_queryset())
        serializer = RestaurantSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request, pk=None):
        """Get a single restaurant."""
        try:
            restaurant = get_restaurant_by_id(restaurant_id=pk)
        except RestaurantNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(RestaurantSerializer(restaurant).data)

    def create(self, request):
        """Add a restaurant to the catalog."""
        serializer = RestaurantCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            restaurant = create_restaurant(**serializer.validated_data)
        except DuplicateRestaurantError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RestaurantSerializer(restaurant).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def categories(self, request):
        """List categories present in the catalog."""
        return Response(get_categories())

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated])
    def preferences(self, request):
        """List the current user's preferences, best rated first."""
        rated_only = request.query_params.get('rated') in ('1', 'true')
        preferences = get_user_preferences(user=request.user, rated_only=rated_only)
        serializer = RestaurantPreferenceSerializer(preferences, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['put', 'delete'], permission_classes=[IsAuthenticated])
    def preference(self, request, pk=None):
        """Set (PUT) or clear (DELETE) the current user's preference."""
        if request.method == 'DELETE':
            try:
                clear_preference(user=request.user, restaurant_id=pk)
            except PreferenceNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = PreferenceUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            preference = set_preference(
                user=request.user,
                restaurant_id=pk,
                **serializer.validated_data
            )
        except RestaurantNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidPreferenceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RestaurantPreferenceSerializer(preference).data)
