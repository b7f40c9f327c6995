from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.principal import AuthenticatedPrincipal
from apps.common.routing import UUID_LOOKUP_REGEX
from .serializers import (
    PlaceOrderInputSerializer,
    OrderStatusInputSerializer,
    MerchantOrdersFilterSerializer,
    OrderSerializer,
    PlacedOrderSerializer,
)
from .services import (
    place_order,
    update_order_status,
    list_user_orders,
    get_order,
    list_restaurant_orders,
)


class OrderViewSet(viewsets.ViewSet):
    """
    Orders of the authenticated user.

    list: Orders the user placed or contributed to
    create: Check out the personal cart or a group's shared cart
    retrieve: Get a specific order
    update_status: Restaurant owner changes the order status
    merchant: Restaurant owner lists the restaurant's orders
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP_REGEX

    @extend_schema(responses=OrderSerializer(many=True))
    def list(self, request):
        principal = AuthenticatedPrincipal.from_request(request)
        orders = list_user_orders(principal=principal)
        return Response(OrderSerializer(orders, many=True).data)

    @extend_schema(request=PlaceOrderInputSerializer, responses={201: PlacedOrderSerializer})
    def create(self, request):
        """
        Place an order from a cart.

        POST /api/orders/
        Body: {"group_id": "<uuid>"}  (optional)
        """
        principal = AuthenticatedPrincipal.from_request(request)
        serializer = PlaceOrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        placed = place_order(
            principal=principal,
            group_id=serializer.validated_data.get('group_id'),
        )
        return Response(PlacedOrderSerializer(placed).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses=OrderSerializer)
    def retrieve(self, request, pk=None):
        principal = AuthenticatedPrincipal.from_request(request)
        order = get_order(principal=principal, order_id=pk)
        return Response(OrderSerializer(order).data)

    @extend_schema(request=OrderStatusInputSerializer, responses=OrderSerializer)
    @action(detail=True, methods=['patch'], url_path='status')
    def update_status(self, request, pk=None):
        """
        Change the status of an order (restaurant owner only).

        PATCH /api/orders/{id}/status/
        Body: {"status": "ready_for_pickup"}
        """
        principal = AuthenticatedPrincipal.from_request(request)
        serializer = OrderStatusInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = update_order_status(
            principal=principal,
            order_id=pk,
            status=serializer.validated_data['status'],
        )
        return Response(OrderSerializer(order).data)

    @extend_schema(
        parameters=[OpenApiParameter('restaurant_id', str, required=True)],
        responses=OrderSerializer(many=True),
    )
    @action(detail=False, methods=['get'])
    def merchant(self, request):
        """
        List all orders of a restaurant owned by the user.

        GET /api/orders/merchant/?restaurant_id=<uuid>
        """
        principal = AuthenticatedPrincipal.from_request(request)
        filter_serializer = MerchantOrdersFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        orders = list_restaurant_orders(
            principal=principal,
            restaurant_id=filter_serializer.validated_data['restaurant_id'],
        )
        return Response(OrderSerializer(orders, many=True).data)
