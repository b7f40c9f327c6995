# ==========================================
# apps/orders/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    READY_FOR_PICKUP = 'ready_for_pickup', 'Ready for Pickup'
    PICKED_UP = 'picked_up', 'Picked Up'
    CANCELLED = 'cancelled', 'Cancelled'


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'
    COMPLETED = 'completed', 'Completed'
    FAILED = 'failed', 'Failed'


# Only these count toward settlement
VALID_PAYMENT_STATUSES = (PaymentStatus.PAID, PaymentStatus.COMPLETED)


class Order(models.Model):
    """
    An order placed from a personal or group cart.

    Everything except ``status`` and ``payment_method`` is fixed at
    placement time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    restaurant = models.ForeignKey(
        'restaurants.Restaurant',
        on_delete=models.PROTECT,
        related_name='orders'
    )

    # Source group (null for personal carts)
    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )

    placed_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='orders_placed'
    )

    total_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING
    )
    payment_method = models.ForeignKey(
        'accounts.PaymentMethod',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )

    order_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['restaurant', 'order_date'], name='orders_restaur_7c1e2f_idx'),
            models.Index(fields=['placed_by', 'order_date'], name='orders_placed__a3b5d9_idx'),
        ]
        ordering = ['-order_date']

    def __str__(self):
        return f"Order {self.id} - {self.restaurant.name} ({self.total_price})"


class OrderItem(models.Model):
    """Snapshot of a menu item at order time, attributed to its contributor."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')

    # Source menu item; the snapshot fields below are authoritative
    menu_item = models.ForeignKey(
        'restaurants.MenuItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items'
    )
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='order_items'
    )

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    image_url = models.URLField(blank=True)
    price_at_order = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)
    special_request = models.TextField(blank=True)

    class Meta:
        db_table = 'order_items'
        indexes = [
            models.Index(fields=['order', 'user'], name='order_items_order_i_1f4c6b_idx'),
        ]

    def __str__(self):
        return f"{self.quantity}x {self.name}"

    @property
    def line_total(self):
        return self.price_at_order * self.quantity


class OrderParticipant(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='participants')
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='order_participations'
    )

    class Meta:
        db_table = 'order_participants'
        constraints = [
            models.UniqueConstraint(fields=['order', 'user'], name='unique_order_participant'),
        ]

    def __str__(self):
        return f"{self.user} in {self.order_id}"


class Payment(models.Model):
    """Money received for an order from one payer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='payments')
    payer = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='payments'
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payments'
        indexes = [
            models.Index(fields=['order', 'status'], name='payments_order_i_9e2a7c_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.payer} paid {self.amount} ({self.status})"

    @property
    def is_valid(self):
        return self.status in VALID_PAYMENT_STATUSES
