"""
Service layer tests for groups app.
"""

import pytest
from uuid import uuid4

from apps.carts.models import Cart
from apps.groups.models import GroupMembership, GroupRole
from apps.groups.services import (
    add_member,
    create_group,
    ensure_member,
    get_group_by_id,
)
from apps.groups.services.exceptions import (
    AlreadyMemberError,
    GroupNotFoundError,
    NotMemberError,
)


@pytest.mark.django_db
class TestGroupManagement:

    def test_create_group_success(self, alice):
        """Creating a group also creates owner membership and shared cart."""
        group = create_group(name='Lunch Crew', owner=alice, description='Fridays')

        assert group.name == 'Lunch Crew'
        assert group.owner == alice
        membership = GroupMembership.objects.get(group=group, user=alice)
        assert membership.role == GroupRole.OWNER
        assert Cart.objects.filter(group=group, user__isnull=True).count() == 1

    def test_add_member(self, lunch_group, carol):
        membership = add_member(group_id=lunch_group.id, user=carol)

        assert membership.role == GroupRole.MEMBER
        assert GroupMembership.objects.filter(group=lunch_group, user=carol).exists()

    def test_add_existing_member_raises(self, lunch_group, bob):
        with pytest.raises(AlreadyMemberError):
            add_member(group_id=lunch_group.id, user=bob)

    def test_get_group_not_found(self, db):
        with pytest.raises(GroupNotFoundError):
            get_group_by_id(group_id=uuid4())


@pytest.mark.django_db
class TestEnsureMember:

    def test_member_passes(self, lunch_group, bob):
        membership = ensure_member(group_id=lunch_group.id, user_id=bob.id)
        assert membership.user_id == bob.id

    def test_non_member_forbidden(self, lunch_group, carol):
        with pytest.raises(NotMemberError):
            ensure_member(group_id=lunch_group.id, user_id=carol.id)

    def test_unknown_group_reported_as_non_member(self, carol):
        with pytest.raises(NotMemberError):
            ensure_member(group_id=uuid4(), user_id=carol.id)
