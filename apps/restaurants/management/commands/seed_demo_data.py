"""
Management command to create demo data for trying out the API.

Usage:
    python manage.py seed_demo_data [--clear]

This creates:
- 4 users (admin, john, jane, owner) with a payment method each
- 5 restaurants owned by owner@example.com, each with a small menu
- 1 group (Lunch Crew: john + jane) with items from both in its cart
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from decimal import Decimal

from apps.accounts.models import User, PaymentMethod, PaymentMethodType
from apps.carts.models import Cart
from apps.carts.services import add_item
from apps.groups.models import Group
from apps.groups.services import create_group, add_member
from apps.orders.models import Order
from apps.reimbursements.models import Reimbursement
from apps.restaurants.models import Restaurant, MenuItem


RESTAURANTS = [
    ('Bistro Central', 'French cuisine at its finest', 'https://example.com/bistro.jpg', [
        ('Croque Monsieur', 'Ham and cheese, grilled', '9.50'),
        ('French Onion Soup', 'With gruyere crouton', '7.00'),
        ('Creme Brulee', '', '6.25'),
    ]),
    ('Pasta Palace', 'Authentic Italian pasta dishes', 'https://example.com/pasta.jpg', [
        ('Spaghetti Carbonara', 'Guanciale, pecorino, egg', '13.00'),
        ('Penne Arrabbiata', 'Spicy tomato sauce', '11.50'),
        ('Tiramisu', '', '6.00'),
    ]),
    ('Sushi World', 'Fresh Japanese sushi', 'https://example.com/sushi.jpg', [
        ('Salmon Nigiri', '2 pieces', '5.00'),
        ('California Roll', '8 pieces', '8.50'),
        ('Miso Soup', '', '3.00'),
    ]),
    ('Burger Barn', 'Classic American burgers', 'https://example.com/burger.jpg', [
        ('Classic Burger', 'Beef, cheddar, pickles', '12.00'),
        ('Veggie Burger', 'Black bean patty', '11.00'),
        ('Fries', '', '4.00'),
    ]),
    ('Taco Fiesta', 'Mexican street food', 'https://example.com/taco.jpg', [
        ('Al Pastor Taco', 'Pork, pineapple', '3.50'),
        ('Carnitas Burrito', '', '10.00'),
        ('Guacamole & Chips', '', '6.50'),
    ]),
]


class Command(BaseCommand):
    help = 'Create demo users, restaurants, menus and a group cart'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating demo data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating demo data...')

        users = self.create_users()
        restaurants = self.create_restaurants(users['owner'])
        self.create_group_cart(users, restaurants)

        self.stdout.write(self.style.SUCCESS('Demo data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  john@example.com / password123')
        self.stdout.write('  jane@example.com / password123')
        self.stdout.write('  owner@example.com / password123 (restaurant owner)')

    def clear_data(self):
        """Clear all domain data from the database."""
        Reimbursement.objects.all().delete()
        Order.objects.all().delete()
        Cart.objects.all().delete()
        Group.objects.all().delete()
        MenuItem.objects.all().delete()
        Restaurant.objects.all().delete()
        PaymentMethod.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()

    def _user(self, email, display_name, password, **extra):
        user, _ = User.objects.get_or_create(
            email=email,
            defaults={'display_name': display_name, **extra}
        )
        user.set_password(password)
        user.save()
        return user

    def create_users(self):
        """Create test users with one payment method each."""
        self.stdout.write('  Creating users...')

        users = {
            'admin': self._user(
                'admin@example.com', 'Admin User', 'admin123',
                is_staff=True, is_superuser=True,
            ),
            'john': self._user('john@example.com', 'John Doe', 'password123'),
            'jane': self._user('jane@example.com', 'Jane Smith', 'password123'),
            'owner': self._user('owner@example.com', 'Restaurant Owner', 'password123'),
        }

        for index, key in enumerate(['john', 'jane']):
            PaymentMethod.objects.get_or_create(
                user=users[key],
                type=PaymentMethodType.CARD,
                defaults={
                    'account_number': f'**** 42{index}2',
                    'is_default': True,
                }
            )

        return users

    def create_restaurants(self, owner):
        self.stdout.write('  Creating restaurants and menus...')

        restaurants = []
        for name, description, logo_url, menu in RESTAURANTS:
            restaurant, _ = Restaurant.objects.get_or_create(
                name=name,
                defaults={
                    'owner': owner,
                    'description': description,
                    'logo_url': logo_url,
                }
            )
            for item_name, item_description, price in menu:
                MenuItem.objects.get_or_create(
                    restaurant=restaurant,
                    name=item_name,
                    defaults={
                        'description': item_description,
                        'price': Decimal(price),
                    }
                )
            restaurants.append(restaurant)

        return restaurants

    def create_group_cart(self, users, restaurants):
        """Create a group whose shared cart holds items from two members."""
        self.stdout.write('  Creating group with shared cart...')

        if Group.objects.filter(name='Lunch Crew', owner=users['john']).exists():
            self.stdout.write('    Lunch Crew already exists, skipping')
            return

        group = create_group(
            name='Lunch Crew',
            owner=users['john'],
            description='Friday lunch orders',
        )
        add_member(group_id=group.id, user=users['jane'])

        burger_barn = next(r for r in restaurants if r.name == 'Burger Barn')
        menu = {item.name: item for item in burger_barn.menu_items.all()}

        add_item(cart=group.cart, menu_item=menu['Classic Burger'], user=users['john'])
        add_item(cart=group.cart, menu_item=menu['Fries'], user=users['john'])
        add_item(
            cart=group.cart,
            menu_item=menu['Veggie Burger'],
            user=users['jane'],
            special_request='No onions',
        )
