"""
Stock — URL Configuration

@file stock/urls.py
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import StockMovementViewSet

app_name = 'stock'

# Mounted under its own prefix; no router root view.
router = SimpleRouter()
router.register('', StockMovementViewSet, basename='movement')

urlpatterns = [
    path('', include(router.urls)),
]
