"""
Stock — Service Layer

The movement ledger: record_movement, amend_movement, remove_movement.
Each operation runs in one transaction and holds a row lock on the
product for its whole read-check-write sequence, so concurrent
operations on the same product are serialized and Product.quantity
stays equal to initial_quantity + SUM(entries) - SUM(exits).

Lock order is always movement -> product.

@file stock/services.py
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Case, DecimalField, ExpressionWrapper, F, IntegerField, Q, Sum, Value, When

from catalog.models import Product
from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_DELETE, AUDIT_ACTION_UPDATE
from core.exceptions import (
    BusinessRuleViolation,
    InsufficientStockError,
    InvalidOperation,
    ResourceNotFoundError,
)
from core.services import AuditService

from .models import StockMovement, signed_effect

logger = logging.getLogger('estoque')

MOVEMENT_TYPES = set(StockMovement.MovementType.values)

_MONEY = DecimalField(max_digits=20, decimal_places=2)


def _lock_product(product_id) -> Product:
    try:
        return Product.objects.select_for_update().get(pk=product_id)
    except Product.DoesNotExist:
        raise ResourceNotFoundError(detail='Product not found.')


def _lock_movement(movement_id) -> StockMovement:
    try:
        return StockMovement.objects.select_for_update().get(pk=movement_id)
    except StockMovement.DoesNotExist:
        raise ResourceNotFoundError(detail='Stock movement not found.')


def _validate_quantity(quantity) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise BusinessRuleViolation(detail='Quantity must be a positive integer.')


def _validate_type(movement_type) -> None:
    if movement_type not in MOVEMENT_TYPES:
        raise BusinessRuleViolation(detail=f'Invalid movement type: {movement_type}')


def _set_product_quantity(product: Product, new_quantity: int, actor=None) -> None:
    product.quantity = new_quantity
    product._current_user = actor
    product.save(update_fields=['quantity', 'updated_at'])


def _movement_values(movement: StockMovement) -> dict:
    return {
        'type': movement.type,
        'quantity': movement.quantity,
        'product_id': movement.product_id,
        'notes': movement.notes,
    }


def _with_display_fields(movement_id) -> StockMovement:
    return StockMovement.objects.select_related('product__product_type').get(pk=movement_id)


class StockService:
    """Movement ledger and read-side aggregates over movements."""

    @staticmethod
    def get_balance(product_id) -> int:
        """
        Re-derive a product's stock from history:
        initial_quantity + SUM(entries) - SUM(exits).
        """
        try:
            product = Product.objects.get(pk=product_id)
        except Product.DoesNotExist:
            raise ResourceNotFoundError(detail='Product not found.')

        signed = Sum(
            Case(
                When(type=StockMovement.MovementType.ENTRY, then=F('quantity')),
                When(type=StockMovement.MovementType.EXIT, then=-F('quantity')),
                default=Value(0),
                output_field=IntegerField(),
            ),
        )
        result = StockMovement.objects.filter(product_id=product.pk).aggregate(net=signed)
        return product.initial_quantity + (result['net'] or 0)

    @staticmethod
    @transaction.atomic
    def record_movement(
        *,
        product_id,
        movement_type: str,
        quantity: int,
        notes: str = '',
        actor=None,
    ) -> StockMovement:
        """
        Insert a movement and apply its effect to the product. Exits are
        rejected when they exceed the available quantity. Not idempotent:
        every call is a new historical event.
        """
        _validate_type(movement_type)
        _validate_quantity(quantity)

        product = _lock_product(product_id)

        if movement_type == StockMovement.MovementType.EXIT and product.quantity < quantity:
            raise InsufficientStockError(
                detail=f'Insufficient stock: available={product.quantity}, requested={quantity}.',
            )

        movement = StockMovement(
            type=movement_type,
            quantity=quantity,
            product=product,
            notes=notes or '',
        )
        movement.save()

        old_quantity = product.quantity
        _set_product_quantity(product, old_quantity + signed_effect(movement_type, quantity), actor)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='StockMovement',
            object_id=movement.pk,
            new_values=_movement_values(movement),
        )
        logger.info(
            'StockMovement %s recorded: %s qty=%s product=%s stock %s -> %s',
            movement.pk, movement_type, quantity, product.pk, old_quantity, product.quantity,
        )
        return _with_display_fields(movement.pk)

    @staticmethod
    @transaction.atomic
    def amend_movement(
        *,
        movement_id,
        quantity: int | None = None,
        movement_type: str | None = None,
        notes: str | None = None,
        actor=None,
    ) -> StockMovement:
        """
        Change a movement's quantity, type or notes. The product is moved
        by the difference between the new and the old signed effect; the
        whole amendment is rejected if that would make stock negative.
        """
        if quantity is not None:
            _validate_quantity(quantity)
        if movement_type is not None:
            _validate_type(movement_type)

        movement = _lock_movement(movement_id)
        product = _lock_product(movement.product_id)
        old_values = _movement_values(movement)

        new_quantity = movement.quantity if quantity is None else quantity
        new_type = movement.type if movement_type is None else movement_type
        delta = signed_effect(new_type, new_quantity) - movement.signed_quantity

        old_stock = product.quantity
        if delta:
            resulting = old_stock + delta
            if resulting < 0:
                raise InvalidOperation(
                    detail=f'Operation would result in negative stock: available={old_stock}, change={delta}.',
                )
            _set_product_quantity(product, resulting, actor)

        movement.quantity = new_quantity
        movement.type = new_type
        if notes is not None:
            movement.notes = notes
        movement.save()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='StockMovement',
            object_id=movement.pk,
            old_values=old_values,
            new_values=_movement_values(movement),
        )
        logger.info(
            'StockMovement %s amended: delta=%s product=%s stock %s -> %s',
            movement.pk, delta, product.pk, old_stock, product.quantity,
        )
        return _with_display_fields(movement.pk)

    @staticmethod
    @transaction.atomic
    def remove_movement(*, movement_id, actor=None) -> StockMovement:
        """
        Reverse a movement's effect on its product and delete it. Rejected
        if the reversal would make stock negative. Returns the removed
        movement.
        """
        movement = _lock_movement(movement_id)
        product = _lock_product(movement.product_id)

        old_stock = product.quantity
        resulting = old_stock - movement.signed_quantity
        if resulting < 0:
            raise InvalidOperation(
                detail='Cannot delete this movement because it would result in negative stock.',
            )

        old_values = _movement_values(movement)
        _set_product_quantity(product, resulting, actor)
        movement.delete()
        movement.pk = movement_id

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='StockMovement',
            object_id=movement_id,
            old_values=old_values,
        )
        logger.info(
            'StockMovement %s removed: product=%s stock %s -> %s',
            movement_id, product.pk, old_stock, resulting,
        )
        return movement

    @staticmethod
    def summarize(queryset) -> dict:
        """
        Totals over a movement queryset. Entries are valued at cost price,
        exits at sale price.
        """
        entry = Q(type=StockMovement.MovementType.ENTRY)
        exit_ = Q(type=StockMovement.MovementType.EXIT)
        result = queryset.order_by().aggregate(
            entries=Sum('quantity', filter=entry),
            exits=Sum('quantity', filter=exit_),
            entries_value=Sum(
                ExpressionWrapper(F('quantity') * F('product__cost_price'), output_field=_MONEY),
                filter=entry,
            ),
            exits_value=Sum(
                ExpressionWrapper(F('quantity') * F('product__sale_price'), output_field=_MONEY),
                filter=exit_,
            ),
        )
        entries = result['entries'] or 0
        exits = result['exits'] or 0
        return {
            'entries': entries,
            'exits': exits,
            'balance': entries - exits,
            'entries_value': Decimal(result['entries_value'] or 0),
            'exits_value': Decimal(result['exits_value'] or 0),
        }
