from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'orders'

router = SimpleRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET    /api/orders/                          - List my orders
    # POST   /api/orders/                          - Place order from cart
    # GET    /api/orders/{id}/                     - Order detail
    # PATCH  /api/orders/{id}/status/              - Update status (restaurant owner)
    # GET    /api/orders/merchant/?restaurant_id=  - Restaurant orders (owner)
    path('', include(router.urls)),
]
