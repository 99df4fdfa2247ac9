"""
Catalog — URL Configuration

@file catalog/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import ProductTypeViewSet, ProductViewSet

app_name = 'catalog'

router = DefaultRouter()
router.register('products', ProductViewSet, basename='product')
router.register('product-types', ProductTypeViewSet, basename='product-type')

urlpatterns = [
    path('', include(router.urls)),
]
