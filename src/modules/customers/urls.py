"""Customer URL configuration."""

from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from modules.customers.views import CustomerViewSet, LoginView, MeView

router = DefaultRouter(trailing_slash=True)
router.register("customers", CustomerViewSet, basename="customer")

urlpatterns = [
    path("auth/login/", LoginView.as_view(), name="auth_login"),
    path("auth/me/", MeView.as_view(), name="auth_me"),
    *router.urls,
]
