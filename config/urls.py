"""
Estoque Gestor — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse

admin.site.site_header = 'Estoque Gestor Administration'
admin.site.site_title = 'Estoque Gestor'
admin.site.index_title = 'Inventory management'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """Endpoint directory for API v1."""
    return Response({
        'products': reverse('api-v1:catalog:product-list', request=request, format=format),
        'product_types': reverse('api-v1:catalog:product-type-list', request=request, format=format),
        'stock_movements': reverse('api-v1:stock:movement-list', request=request, format=format),
        'dashboard': {
            'stats': reverse('api-v1:dashboard:dashboard-stats', request=request, format=format),
            'recent_movements': reverse(
                'api-v1:dashboard:dashboard-recent-movements', request=request, format=format,
            ),
            'stock_trend': reverse('api-v1:dashboard:dashboard-stock-trend', request=request, format=format),
            'product_type_distribution': reverse(
                'api-v1:dashboard:dashboard-product-type-distribution', request=request, format=format,
            ),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('', include('catalog.urls', namespace='catalog')),
    path('stock-movements/', include('stock.urls', namespace='stock')),
    path('dashboard/', include('dashboard.urls', namespace='dashboard')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
