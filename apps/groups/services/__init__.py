"""
Groups app services layer.

Group creation provisions the shared cart; the rest covers membership,
which gates the shared cart and group checkout.
"""

from .exceptions import (
    GroupNotFoundError,
    NotMemberError,
    NotGroupOwnerError,
    AlreadyMemberError,
    UserNotFoundError,
)

from .group_management import (
    create_group,
    add_member,
    add_member_by_email,
    get_group_by_id,
    get_group_for_member,
    list_user_groups,
    ensure_member,
)


__all__ = [
    # Exceptions
    'GroupNotFoundError',
    'NotMemberError',
    'NotGroupOwnerError',
    'AlreadyMemberError',
    'UserNotFoundError',

    # Group Management
    'create_group',
    'add_member',
    'add_member_by_email',
    'get_group_by_id',
    'get_group_for_member',
    'list_user_groups',
    'ensure_member',
]
