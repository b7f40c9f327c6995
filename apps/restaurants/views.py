from django.db.models import Count, Q
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.routing import UUID_LOOKUP_REGEX
from .models import Restaurant
from .serializers import (
    MenuItemSerializer,
    RestaurantListSerializer,
    RestaurantSerializer,
)


class RestaurantPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class RestaurantViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Restaurant catalogue.

    list: All restaurants (optional ?search=)
    retrieve: A restaurant with its full menu
    menu_items: Menu of a restaurant (optional ?available=true)
    """

    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = RestaurantPagination
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_queryset(self):
        if self.action == 'list':
            queryset = Restaurant.objects.annotate(
                menu_item_count=Count('menu_items', filter=Q(menu_items__is_available=True))
            )
            search = self.request.query_params.get('search')
            if search:
                queryset = queryset.filter(name__icontains=search.strip())
            return queryset
        return Restaurant.objects.prefetch_related('menu_items')

    def get_serializer_class(self):
        if self.action == 'list':
            return RestaurantListSerializer
        return RestaurantSerializer

    @extend_schema(
        parameters=[OpenApiParameter('available', bool, required=False)],
        responses=MenuItemSerializer(many=True),
    )
    @action(detail=True, methods=['get'], url_path='menu-items')
    def menu_items(self, request, pk=None):
        """
        GET /api/restaurants/{id}/menu-items/
        """
        restaurant = self.get_object()
        items = restaurant.menu_items.all()
        if request.query_params.get('available', '').lower() in ('1', 'true'):
            items = items.filter(is_available=True)
        return Response(MenuItemSerializer(items, many=True).data)
