"""
Catalog — Service Layer

Create, update and delete for product types and products. Uniqueness and
reference violations are translated into typed exceptions here so views
stay free of database error handling.

@file catalog/services.py
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from core.exceptions import (
    DependencyViolation,
    DuplicateResourceError,
    InvalidOperation,
    ResourceNotFoundError,
)

from .models import Product, ProductType

logger = logging.getLogger('estoque')


def _save_unique(instance, *, duplicate_detail: str):
    """Save inside a savepoint so a unique-constraint race maps to 409."""
    try:
        with transaction.atomic():
            instance.save()
    except IntegrityError:
        raise DuplicateResourceError(detail=duplicate_detail)


class ProductTypeService:
    """Management of product categories."""

    @staticmethod
    @transaction.atomic
    def create_product_type(*, actor=None, **fields) -> ProductType:
        name = fields.get('name')
        if name and ProductType.objects.filter(name=name).exists():
            raise DuplicateResourceError(detail=f'A product type named "{name}" already exists.')

        product_type = ProductType(**fields)
        product_type.full_clean(validate_unique=False)
        product_type._current_user = actor
        _save_unique(product_type, duplicate_detail=f'A product type named "{name}" already exists.')
        return product_type

    @staticmethod
    @transaction.atomic
    def update_product_type(*, product_type_id, actor=None, **fields) -> ProductType:
        try:
            product_type = ProductType.objects.select_for_update().get(pk=product_type_id)
        except ProductType.DoesNotExist:
            raise ResourceNotFoundError(detail='Product type not found.')

        name = fields.get('name')
        if name and ProductType.objects.filter(name=name).exclude(pk=product_type.pk).exists():
            raise DuplicateResourceError(detail=f'A product type named "{name}" already exists.')

        for field, value in fields.items():
            if hasattr(product_type, field) and field not in ('id', 'pk'):
                setattr(product_type, field, value)

        product_type.full_clean(validate_unique=False)
        product_type._current_user = actor
        _save_unique(product_type, duplicate_detail=f'A product type named "{name}" already exists.')
        return product_type

    @staticmethod
    @transaction.atomic
    def delete_product_type(*, product_type_id, actor=None) -> None:
        try:
            product_type = ProductType.objects.get(pk=product_type_id)
        except ProductType.DoesNotExist:
            raise ResourceNotFoundError(detail='Product type not found.')

        product_type._current_user = actor
        try:
            with transaction.atomic():
                product_type.delete()
        except ProtectedError:
            raise DependencyViolation(
                detail='This product type cannot be deleted because products are associated with it.',
            )
        logger.info('ProductType %s deleted by %s.', product_type_id, actor)


class ProductService:
    """Management of products. Stock quantity changes belong to StockService."""

    @staticmethod
    @transaction.atomic
    def create_product(*, actor=None, **fields) -> Product:
        name = fields.get('name')
        if name and Product.objects.filter(name=name).exists():
            raise DuplicateResourceError(detail=f'A product named "{name}" already exists.')

        product = Product(**fields)
        product.initial_quantity = product.quantity
        product.full_clean(validate_unique=False)
        product._current_user = actor
        _save_unique(product, duplicate_detail=f'A product named "{name}" already exists.')
        return product

    @staticmethod
    @transaction.atomic
    def update_product(*, product_id, actor=None, **fields) -> Product:
        try:
            product = Product.objects.select_for_update().get(pk=product_id)
        except Product.DoesNotExist:
            raise ResourceNotFoundError(detail='Product not found.')

        if 'quantity' in fields and fields['quantity'] != product.quantity:
            raise InvalidOperation(
                detail='Product quantity can only be changed through stock movements.',
            )

        name = fields.get('name')
        if name and Product.objects.filter(name=name).exclude(pk=product.pk).exists():
            raise DuplicateResourceError(detail=f'A product named "{name}" already exists.')

        for field, value in fields.items():
            if hasattr(product, field) and field not in ('id', 'pk', 'quantity', 'initial_quantity'):
                setattr(product, field, value)

        product.full_clean(validate_unique=False)
        product._current_user = actor
        _save_unique(product, duplicate_detail=f'A product named "{name}" already exists.')
        return product

    @staticmethod
    @transaction.atomic
    def delete_product(*, product_id, actor=None) -> None:
        try:
            product = Product.objects.get(pk=product_id)
        except Product.DoesNotExist:
            raise ResourceNotFoundError(detail='Product not found.')

        product._current_user = actor
        try:
            with transaction.atomic():
                product.delete()
        except ProtectedError:
            raise DependencyViolation(
                detail='This product cannot be deleted because stock movements are associated with it.',
            )
        logger.info('Product %s deleted by %s.', product_id, actor)
