import pytest
from apps.orders.services import place_order


@pytest.fixture
def group_order(shared_cart, lunch_group, alice_principal):
    """Group order: alice and bob contributed $15 each, alice paid $30."""
    return place_order(principal=alice_principal, group_id=lunch_group.id).order


@pytest.fixture
def personal_order(personal_cart, alice_principal):
    return place_order(principal=alice_principal).order
