"""
URL configuration for admin license endpoints.
"""

from django.urls import path

from api.users import views

urlpatterns = [
    path(
        "users",
        views.LicenseCollectionView.as_view(),
        name="licenses",
    ),
    path(
        "users/stats",
        views.LicenseStatsView.as_view(),
        name="license-stats",
    ),
    path(
        "users/<str:license_id>",
        views.LicenseDetailView.as_view(),
        name="license-detail",
    ),
    path(
        "users/<str:license_id>/reset-device",
        views.ResetDeviceView.as_view(),
        name="reset-device",
    ),
]
