"""
Catalog — Views

DRF ViewSets for product types and products. Lists are ordered by name,
searchable by name, and paginated only when both page and limit are sent.

@file catalog/views.py
"""

from rest_framework import status, viewsets
from rest_framework.response import Response

from .models import Product, ProductType
from .serializers import (
    ProductReadSerializer,
    ProductTypeReadSerializer,
    ProductTypeWriteSerializer,
    ProductWriteSerializer,
)
from .services import ProductService, ProductTypeService


class ProductTypeViewSet(viewsets.ModelViewSet):
    """CRUD for product categories."""

    search_fields = ['name']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return ProductType.objects.all()

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return ProductTypeReadSerializer
        return ProductTypeWriteSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product_type = ProductTypeService.create_product_type(
            actor=request.user, **serializer.validated_data,
        )
        return Response(
            ProductTypeReadSerializer(product_type).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        product_type = ProductTypeService.update_product_type(
            product_type_id=instance.pk,
            actor=request.user,
            **serializer.validated_data,
        )
        return Response(ProductTypeReadSerializer(product_type).data)

    def perform_destroy(self, instance):
        ProductTypeService.delete_product_type(
            product_type_id=instance.pk, actor=self.request.user,
        )


class ProductViewSet(viewsets.ModelViewSet):
    """
    CRUD for products.

    quantity is accepted on create as the opening stock; afterwards it only
    moves through the stock-movement endpoints.
    """

    filterset_fields = ['product_type']
    search_fields = ['name']
    ordering_fields = ['name', 'quantity', 'sale_price', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return Product.objects.select_related('product_type')

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return ProductReadSerializer
        return ProductWriteSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = ProductService.create_product(
            actor=request.user, **serializer.validated_data,
        )
        return Response(
            ProductReadSerializer(product).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        product = ProductService.update_product(
            product_id=instance.pk,
            actor=request.user,
            **serializer.validated_data,
        )
        return Response(ProductReadSerializer(product).data)

    def perform_destroy(self, instance):
        ProductService.delete_product(product_id=instance.pk, actor=self.request.user)
