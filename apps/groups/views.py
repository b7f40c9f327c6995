from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.principal import AuthenticatedPrincipal
from apps.common.routing import UUID_LOOKUP_REGEX
from .serializers import (
    AddMemberSerializer,
    GroupCreateSerializer,
    GroupMemberSerializer,
    GroupSerializer,
)
from .services import (
    add_member_by_email,
    create_group,
    get_group_for_member,
    list_user_groups,
)


class GroupViewSet(viewsets.ViewSet):
    """
    Groups sharing a cart.

    All business logic is handled by services.

    list: Groups the user is a member of
    create: Create a group (creator becomes owner)
    retrieve: Get a group the user is a member of
    members: Owner adds a user by email
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP_REGEX

    @extend_schema(responses=GroupSerializer(many=True))
    def list(self, request):
        principal = AuthenticatedPrincipal.from_request(request)
        return Response(GroupSerializer(list_user_groups(principal=principal), many=True).data)

    @extend_schema(request=GroupCreateSerializer, responses={201: GroupSerializer})
    def create(self, request):
        """
        Create a new group with its shared cart.

        POST /api/groups/
        Body: {"name": "Lunch Crew", "description": "..."}
        """
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(
            name=serializer.validated_data['name'],
            owner=request.user,
            description=serializer.validated_data['description'],
        )
        return Response(GroupSerializer(group).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses=GroupSerializer)
    def retrieve(self, request, pk=None):
        principal = AuthenticatedPrincipal.from_request(request)
        group = get_group_for_member(principal=principal, group_id=pk)
        return Response(GroupSerializer(group).data)

    @extend_schema(request=AddMemberSerializer, responses={201: GroupMemberSerializer})
    @action(detail=True, methods=['post'])
    def members(self, request, pk=None):
        """
        Add a user to the group (owner only).

        POST /api/groups/{id}/members/
        Body: {"email": "bob@example.com"}
        """
        principal = AuthenticatedPrincipal.from_request(request)
        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = add_member_by_email(
            principal=principal,
            group_id=pk,
            email=serializer.validated_data['email'],
        )
        return Response(GroupMemberSerializer(membership).data, status=status.HTTP_201_CREATED)
