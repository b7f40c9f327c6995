import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, PaymentMethod
from apps.accounts.principal import AuthenticatedPrincipal
from apps.carts.services import add_item, get_or_create_user_cart
from apps.groups.services import create_group, add_member
from apps.restaurants.models import Restaurant, MenuItem


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def make_client():
    """Return a factory building an API client authenticated as a user."""
    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return client
    return _make_client


@pytest.fixture
def alice(db):
    return User.objects.create_user(
        email='alice@example.com',
        password='TestPass123!',
        display_name='Alice',
    )


@pytest.fixture
def bob(db):
    return User.objects.create_user(
        email='bob@example.com',
        password='TestPass123!',
        display_name='Bob',
    )


@pytest.fixture
def carol(db):
    """User outside the group."""
    return User.objects.create_user(
        email='carol@example.com',
        password='TestPass123!',
        display_name='Carol',
    )


@pytest.fixture
def restaurant_owner(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Restaurant Owner',
    )


@pytest.fixture
def alice_principal(alice):
    return AuthenticatedPrincipal.from_user(alice)


@pytest.fixture
def bob_principal(bob):
    return AuthenticatedPrincipal.from_user(bob)


@pytest.fixture
def carol_principal(carol):
    return AuthenticatedPrincipal.from_user(carol)


@pytest.fixture
def owner_principal(restaurant_owner):
    return AuthenticatedPrincipal.from_user(restaurant_owner)


@pytest.fixture
def alice_payment_method(alice):
    return PaymentMethod.objects.create(user=alice, account_number='**** 1111')


@pytest.fixture
def bob_payment_method(bob):
    return PaymentMethod.objects.create(user=bob, account_number='**** 2222')


@pytest.fixture
def restaurant(restaurant_owner):
    return Restaurant.objects.create(
        owner=restaurant_owner,
        name='Burger Barn',
        description='Classic American burgers',
    )


@pytest.fixture
def other_restaurant(restaurant_owner):
    return Restaurant.objects.create(owner=restaurant_owner, name='Taco Fiesta')


@pytest.fixture
def burger(restaurant):
    return MenuItem.objects.create(
        restaurant=restaurant,
        name='Classic Burger',
        description='Beef, cheddar, pickles',
        price=Decimal('15.00'),
        image_url='https://example.com/burger.jpg',
    )


@pytest.fixture
def salad(restaurant):
    return MenuItem.objects.create(
        restaurant=restaurant,
        name='Garden Salad',
        price=Decimal('15.00'),
    )


@pytest.fixture
def fries(restaurant):
    return MenuItem.objects.create(
        restaurant=restaurant,
        name='Fries',
        price=Decimal('4.50'),
    )


@pytest.fixture
def taco(other_restaurant):
    return MenuItem.objects.create(
        restaurant=other_restaurant,
        name='Al Pastor Taco',
        price=Decimal('3.50'),
    )


@pytest.fixture
def lunch_group(alice, bob):
    """Group owned by alice with bob as member; shared cart is created."""
    group = create_group(name='Lunch Crew', owner=alice)
    add_member(group_id=group.id, user=bob)
    return group


@pytest.fixture
def shared_cart(lunch_group, alice, bob, burger, salad):
    """Group cart with $15 of items from alice and $15 from bob."""
    cart = lunch_group.cart
    add_item(cart=cart, menu_item=burger, user=alice)
    add_item(cart=cart, menu_item=salad, user=bob, special_request='No croutons')
    return cart


@pytest.fixture
def personal_cart(alice, burger, fries):
    cart = get_or_create_user_cart(user=alice)
    add_item(cart=cart, menu_item=burger, user=alice)
    add_item(cart=cart, menu_item=fries, user=alice, quantity=2)
    return cart
