"""
Dashboard — URL Configuration

@file dashboard/urls.py
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import DashboardViewSet

app_name = 'dashboard'

# Mounted under its own prefix; no router root view.
router = SimpleRouter()
router.register('', DashboardViewSet, basename='dashboard')

urlpatterns = [
    path('', include(router.urls)),
]
