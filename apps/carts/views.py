from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.principal import AuthenticatedPrincipal
from .serializers import (
    AddToCartInputSerializer,
    CartContentsSerializer,
    CartFilterSerializer,
    CartItemSerializer,
)
from .services import add_to_cart, get_cart_contents


@extend_schema(request=AddToCartInputSerializer, responses={201: CartItemSerializer})
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def add_cart_item(request):
    """
    Add a menu item to the personal cart or a group's shared cart.

    POST /api/cart/
    Body: {"menu_item_id": "<uuid>", "quantity": 2, "group_id": "<uuid>"}
    """
    principal = AuthenticatedPrincipal.from_request(request)
    serializer = AddToCartInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    item = add_to_cart(
        principal=principal,
        menu_item_id=data['menu_item_id'],
        quantity=data['quantity'],
        special_request=data['special_request'],
        group_id=data.get('group_id'),
    )
    return Response(CartItemSerializer(item).data, status=status.HTTP_201_CREATED)


@extend_schema(
    parameters=[OpenApiParameter('group_id', str, required=False)],
    responses=CartContentsSerializer,
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def cart_items(request):
    """
    List the items of the personal cart, or of a group's shared cart.

    GET /api/cart/items/?group_id=<uuid>
    """
    principal = AuthenticatedPrincipal.from_request(request)
    filter_serializer = CartFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)

    contents = get_cart_contents(
        principal=principal,
        group_id=filter_serializer.validated_data.get('group_id'),
    )
    return Response(CartContentsSerializer(contents).data)
