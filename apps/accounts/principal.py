"""
Authenticated principal passed explicitly to every service operation.

Views resolve the principal once from the request; services never look at
request objects or session state.
"""
from dataclasses import dataclass
from uuid import UUID

from rest_framework.exceptions import NotAuthenticated


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    """Identity of the user an operation is performed for."""

    user_id: UUID
    email: str
    display_name: str = ''

    @classmethod
    def from_user(cls, user) -> 'AuthenticatedPrincipal':
        return cls(
            user_id=user.id,
            email=user.email,
            display_name=user.get_display_name(),
        )

    @classmethod
    def from_request(cls, request) -> 'AuthenticatedPrincipal':
        """
        Build the principal for an incoming request.

        Raises:
            NotAuthenticated: If the request carries no authenticated user
        """
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            raise NotAuthenticated()
        return cls.from_user(user)
