"""
Custom exceptions for the carts app.
"""
from apps.common.exceptions import InvalidInputError, NotFoundError


class MenuItemUnavailableError(InvalidInputError):
    default_detail = 'Menu item is not available.'
    default_code = 'menu_item_unavailable'


class MixedRestaurantCartError(InvalidInputError):
    """Cart already holds items from another restaurant."""
    default_detail = 'Cart already contains items from a different restaurant.'
    default_code = 'mixed_restaurant_cart'


class MenuItemNotFoundError(NotFoundError):
    default_detail = 'Menu item not found.'
    default_code = 'menu_item_not_found'
