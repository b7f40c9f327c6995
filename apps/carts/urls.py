from django.urls import path
from . import views

app_name = 'carts'

urlpatterns = [
    # POST /api/cart/         - Add item (personal or group cart)
    # GET  /api/cart/items/   - Cart contents
    path('', views.add_cart_item, name='add-item'),
    path('items/', views.cart_items, name='items'),
]
