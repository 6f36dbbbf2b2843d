# backend/config/urls.py
from django.contrib import admin
from django.http import HttpResponse
from django.urls import include, path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

urlpatterns = [
    path("", lambda r: HttpResponse("API is running")),
    path("admin/", admin.site.urls),

    # JWT for the admin dashboard
    path("api/auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    path("api/navigation/", include("navigation.urls", namespace="navigation")),
]
