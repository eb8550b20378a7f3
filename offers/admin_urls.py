"""
offers/admin_urls.py

Authenticated admin API. Include this under the global /admin/ prefix.
"""
from django.urls import path

from .views import AdminOfferDetailView, AdminOfferListView, AssetUploadView, LoginView


urlpatterns = [
    path("login", LoginView.as_view(), name="admin-login"),
    path("offers", AdminOfferListView.as_view(), name="admin-offer-list"),
    path("offers/<int:pk>", AdminOfferDetailView.as_view(), name="admin-offer-detail"),
    path("upload", AssetUploadView.as_view(), name="admin-upload"),
]
