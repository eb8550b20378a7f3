"""
offers/urls.py

Public read API. Include this under the global /api/ prefix.
"""
from django.urls import path

from .views import PublicOfferListView


app_name = "offers"

urlpatterns = [
    path("offers", PublicOfferListView.as_view(), name="public-offer-list"),
]
