from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'groups'

router = SimpleRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # GET  /api/groups/               - My groups
    # POST /api/groups/               - Create group
    # GET  /api/groups/{id}/          - Group detail (members only)
    # POST /api/groups/{id}/members/  - Add member by email (owner)
    path('', include(router.urls)),
]
