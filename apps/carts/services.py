"""
Cart store.

Carts are created lazily. The API adds to a cart through
:func:`add_to_cart` and reads it with :func:`get_cart_contents`; both resolve
the personal cart, or a group's shared cart after a membership check.

Order placement reads a cart through :func:`lock_cart` / :func:`get_cart_items`
and empties it with :func:`clear_cart`; the cart row itself is never deleted
here.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.accounts.principal import AuthenticatedPrincipal
from apps.carts.models import Cart, CartItem
from apps.carts.exceptions import (
    MenuItemNotFoundError,
    MenuItemUnavailableError,
    MixedRestaurantCartError,
)
from apps.common.money import to_cents
from apps.groups.services import ensure_member
from apps.restaurants.models import MenuItem

logger = logging.getLogger(__name__)


def get_or_create_user_cart(*, user) -> Cart:
    cart, _ = Cart.objects.get_or_create(user=user)
    return cart


def get_or_create_group_cart(*, group) -> Cart:
    cart, _ = Cart.objects.get_or_create(group=group)
    return cart


@transaction.atomic
def add_item(
    *,
    cart: Cart,
    menu_item,
    user,
    quantity: int = 1,
    special_request: str = ''
) -> CartItem:
    """
    Add a menu item to a cart on behalf of a contributing user.

    All items of a cart must come from the same restaurant.

    Raises:
        MenuItemUnavailableError: If the menu item is switched off
        MixedRestaurantCartError: If the cart holds another restaurant's items
    """
    if not menu_item.is_available:
        raise MenuItemUnavailableError()

    Cart.objects.select_for_update().get(pk=cart.pk)

    other_restaurant = (
        CartItem.objects
        .filter(cart=cart)
        .exclude(menu_item__restaurant_id=menu_item.restaurant_id)
        .exists()
    )
    if other_restaurant:
        raise MixedRestaurantCartError()

    return CartItem.objects.create(
        cart=cart,
        menu_item=menu_item,
        user=user,
        quantity=quantity,
        special_request=special_request,
    )


def lock_cart(*, user_id: Optional[UUID] = None, group_id: Optional[UUID] = None) -> Optional[Cart]:
    """
    Fetch and row-lock the cart of a group (if given) or of a user.

    Must be called inside a transaction. Returns None when the cart has not
    been created yet.
    """
    queryset = Cart.objects.select_for_update()
    if group_id is not None:
        return queryset.filter(group_id=group_id).first()
    return queryset.filter(user_id=user_id).first()


def get_cart_items(cart: Cart) -> List[CartItem]:
    return list(
        cart.items
        .select_related('menu_item', 'menu_item__restaurant', 'user')
        .order_by('added_at')
    )


def clear_cart(cart: Cart) -> int:
    """Delete every item of the cart and return how many were removed."""
    deleted, _ = CartItem.objects.filter(cart=cart).delete()
    logger.debug("Cleared %d item(s) from cart %s", deleted, cart.pk)
    return deleted


@dataclass(frozen=True)
class CartContents:
    cart: Cart
    items: List[CartItem]

    @property
    def total(self) -> Decimal:
        return to_cents(sum(
            (item.menu_item.price * item.quantity for item in self.items),
            Decimal('0')
        ))


def resolve_cart(*, principal: AuthenticatedPrincipal, group_id: Optional[UUID] = None) -> Cart:
    """
    Return the principal's personal cart, or the group's shared cart.

    Raises:
        NotMemberError: If group_id is given and principal isn't a member
    """
    if group_id is not None:
        membership = ensure_member(group_id=group_id, user_id=principal.user_id)
        return get_or_create_group_cart(group=membership.group)
    return get_or_create_user_cart(user=User.objects.get(id=principal.user_id))


def get_cart_contents(*, principal: AuthenticatedPrincipal, group_id: Optional[UUID] = None) -> CartContents:
    cart = resolve_cart(principal=principal, group_id=group_id)
    return CartContents(cart=cart, items=get_cart_items(cart))


def add_to_cart(
    *,
    principal: AuthenticatedPrincipal,
    menu_item_id: UUID,
    quantity: int = 1,
    special_request: str = '',
    group_id: Optional[UUID] = None
) -> CartItem:
    """
    Add a menu item to the principal's cart or to a group's shared cart.

    The principal is recorded as the item's contributor, which decides who
    owes what once the group order is placed.

    Args:
        principal: Contributing user
        menu_item_id: UUID of the menu item
        quantity: Number of portions (at least 1)
        special_request: Free-text note for the kitchen
        group_id: Shared cart of this group instead of the personal cart

    Returns:
        Created CartItem

    Raises:
        NotMemberError: If group_id is given and principal isn't a member
        MenuItemNotFoundError: If the menu item doesn't exist
        MenuItemUnavailableError: If the menu item is switched off
        MixedRestaurantCartError: If the cart holds another restaurant's items
    """
    cart = resolve_cart(principal=principal, group_id=group_id)

    try:
        menu_item = MenuItem.objects.select_related('restaurant').get(id=menu_item_id)
    except MenuItem.DoesNotExist:
        raise MenuItemNotFoundError()

    item = add_item(
        cart=cart,
        menu_item=menu_item,
        user=User.objects.get(id=principal.user_id),
        quantity=quantity,
        special_request=special_request,
    )

    logger.info(
        "User %s added %dx %s to cart %s",
        principal.user_id, quantity, menu_item.id, cart.pk,
    )
    return item
