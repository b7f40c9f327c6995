from rest_framework import serializers
from .models import Group, GroupMembership
from apps.accounts.serializers import UserMinimalSerializer


# =============================================================================
# Input Serializers
# =============================================================================

class GroupCreateSerializer(serializers.Serializer):
    """
    Validate input for creating a group.

    Fields:
        name (str): Group name
        description (str): Optional description
    """

    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')


class AddMemberSerializer(serializers.Serializer):
    email = serializers.EmailField()


# =============================================================================
# Output Serializers
# =============================================================================


class GroupMemberSerializer(serializers.ModelSerializer):
    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['id', 'user', 'role', 'joined_at']
        read_only_fields = fields


class GroupSerializer(serializers.ModelSerializer):
    owner = UserMinimalSerializer(read_only=True)
    members = GroupMemberSerializer(source='memberships', many=True, read_only=True)

    class Meta:
        model = Group
        fields = ['id', 'name', 'description', 'owner', 'members', 'created_at']
        read_only_fields = fields
