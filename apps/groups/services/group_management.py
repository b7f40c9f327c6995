"""
Group management service.

Creates groups together with their owner membership and shared cart, and
answers the membership questions asked by order placement.
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Prefetch

from apps.accounts.models import User
from apps.accounts.principal import AuthenticatedPrincipal
from apps.carts.models import Cart
from apps.groups.models import Group, GroupMembership, GroupRole

from .exceptions import (
    AlreadyMemberError,
    GroupNotFoundError,
    NotGroupOwnerError,
    NotMemberError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def create_group(*, name: str, owner: User, description: str = '') -> Group:
    """
    Create a new group and add the creator as owner.

    This is a multi-step operation wrapped in a transaction:
    1. Create the group
    2. Create owner membership
    3. Create the group's shared cart

    Args:
        name: Group name
        owner: User who will own the group
        description: Optional group description

    Returns:
        Created Group instance
    """
    group = Group.objects.create(
        name=name,
        owner=owner,
        description=description,
    )

    GroupMembership.objects.create(
        user=owner,
        group=group,
        role=GroupRole.OWNER
    )

    Cart.objects.create(group=group)

    return group


def add_member(*, group_id: UUID, user: User) -> GroupMembership:
    """
    Add a user to a group as a regular member.

    Raises:
        GroupNotFoundError: If group doesn't exist
        AlreadyMemberError: If user is already a member
    """
    group = get_group_by_id(group_id=group_id)

    try:
        with transaction.atomic():
            return GroupMembership.objects.create(
                user=user,
                group=group,
                role=GroupRole.MEMBER
            )
    except IntegrityError:
        raise AlreadyMemberError()


def get_group_by_id(*, group_id: UUID) -> Group:
    """
    Get a group by ID with its memberships prefetched.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        return (
            Group.objects
            .select_related('owner')
            .prefetch_related(
                Prefetch(
                    'memberships',
                    queryset=GroupMembership.objects.select_related('user')
                )
            )
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError()


def ensure_member(*, group_id: UUID, user_id: UUID) -> GroupMembership:
    """
    Return the user's membership in the group.

    An unknown group is reported the same way as a missing membership so
    that group ids cannot be probed by non-members.

    Raises:
        NotMemberError: If the user holds no membership in the group
    """
    try:
        return GroupMembership.objects.get(group_id=group_id, user_id=user_id)
    except GroupMembership.DoesNotExist:
        raise NotMemberError()


def list_user_groups(*, principal: AuthenticatedPrincipal) -> List[Group]:
    """Groups the principal belongs to, newest first."""
    return list(
        Group.objects
        .filter(memberships__user_id=principal.user_id)
        .select_related('owner')
        .prefetch_related('memberships__user')
        .distinct()
    )


def get_group_for_member(*, principal: AuthenticatedPrincipal, group_id: UUID) -> Group:
    """
    Get a group the principal belongs to.

    Raises:
        NotMemberError: If principal isn't a member (or the group is unknown)
    """
    ensure_member(group_id=group_id, user_id=principal.user_id)
    return get_group_by_id(group_id=group_id)


def add_member_by_email(*, principal: AuthenticatedPrincipal, group_id: UUID, email: str) -> GroupMembership:
    """
    Owner adds another registered user to the group.

    Args:
        principal: Group owner
        group_id: UUID of the group
        email: Email of the user to add

    Returns:
        Created GroupMembership

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotGroupOwnerError: If principal doesn't own the group
        UserNotFoundError: If no user has this email
        AlreadyMemberError: If user is already a member
    """
    group = get_group_by_id(group_id=group_id)
    if group.owner_id != principal.user_id:
        raise NotGroupOwnerError()

    try:
        user = User.objects.get(email__iexact=email.strip())
    except User.DoesNotExist:
        raise UserNotFoundError()

    membership = add_member(group_id=group.id, user=user)
    logger.info("User %s added to group %s by %s", user.id, group.id, principal.user_id)
    return membership
