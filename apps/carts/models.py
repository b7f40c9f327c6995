# ==========================================
# apps/carts/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
import uuid


class Cart(models.Model):
    """
    Pending items for either one user or one group.

    Exactly one of ``user`` / ``group`` is set. The row outlives order
    placement; only its items are cleared.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='cart'
    )
    group = models.OneToOneField(
        'groups.Group',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='cart'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'carts'
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(user__isnull=False, group__isnull=True)
                    | Q(user__isnull=True, group__isnull=False)
                ),
                name='cart_exactly_one_owner',
            ),
        ]

    def __str__(self):
        if self.group_id:
            return f"Cart of group {self.group_id}"
        return f"Cart of user {self.user_id}"

    @property
    def is_group_cart(self):
        return self.group_id is not None


class CartItem(models.Model):
    """A menu item added to a cart by a contributing user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name='items')
    menu_item = models.ForeignKey(
        'restaurants.MenuItem',
        on_delete=models.CASCADE,
        related_name='cart_items'
    )
    # Attribution key for cost splitting, not necessarily the cart owner
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='cart_items'
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    special_request = models.TextField(blank=True)
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'cart_items'
        ordering = ['added_at']

    def __str__(self):
        return f"{self.quantity}x {self.menu_item.name}"
