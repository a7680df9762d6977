"""
URL configuration for client API endpoints.
"""

from django.urls import path

from api.client import views

urlpatterns = [
    path(
        "validate-license",
        views.ValidateLicenseView.as_view(),
        name="validate-license",
    ),
    path(
        "admin-login",
        views.AdminLoginView.as_view(),
        name="admin-login",
    ),
]
