"""
Domain-specific exceptions for groups app.
"""
from apps.common.exceptions import ConflictError, ForbiddenError, NotFoundError


class GroupNotFoundError(NotFoundError):
    """Raised when a group does not exist."""
    default_detail = 'Group not found.'
    default_code = 'group_not_found'


class NotMemberError(ForbiddenError):
    """Raised when a user tries to perform an action requiring membership."""
    default_detail = 'You are not a member of this group.'
    default_code = 'not_group_member'


class AlreadyMemberError(ConflictError):
    """Raised when a user is added to a group they're already in."""
    default_detail = 'User is already a member of this group.'
    default_code = 'already_member'


class NotGroupOwnerError(ForbiddenError):
    """Raised when a non-owner tries to manage the group's members."""
    default_detail = 'Only the group owner can add members.'
    default_code = 'not_group_owner'


class UserNotFoundError(NotFoundError):
    default_detail = 'No user with this email.'
    default_code = 'user_not_found'
