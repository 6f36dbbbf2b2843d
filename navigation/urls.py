# backend/navigation/urls.py
from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import MenuListView, MenuViewSet

app_name = "navigation"

router = DefaultRouter()
router.register(r"admin/menus", MenuViewSet, basename="admin-menu")

urlpatterns = [
    path("menus/", MenuListView.as_view(), name="menu_list"),
] + router.urls
