from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'restaurants'

router = SimpleRouter()
router.register(r'', views.RestaurantViewSet, basename='restaurant')

urlpatterns = [
    # GET /api/restaurants/                   - Restaurant list
    # GET /api/restaurants/{id}/              - Restaurant with menu
    # GET /api/restaurants/{id}/menu-items/   - Menu items
    path('', include(router.urls)),
]
