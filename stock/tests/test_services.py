"""
Tests — StockService: record_movement, amend_movement, remove_movement,
get_balance and summarize.

The ledger invariant checked throughout:
  product.quantity == initial_quantity + SUM(entries) - SUM(exits)

@file stock/tests/test_services.py
"""

import threading
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import close_old_connections, connection

from catalog.models import Product
from core.exceptions import (
    BusinessRuleViolation,
    InsufficientStockError,
    InvalidOperation,
    ResourceNotFoundError,
)
from core.models import AuditLog
from stock.models import StockMovement
from stock.services import StockService
from tests.factories import ProductFactory, UserFactory


ENTRY = StockMovement.MovementType.ENTRY
EXIT = StockMovement.MovementType.EXIT


def _quantity(product) -> int:
    return Product.objects.get(pk=product.pk).quantity


def _assert_ledger(product):
    assert _quantity(product) == StockService.get_balance(product.pk)


@pytest.mark.django_db
class TestRecordMovement:

    def test_entry_increases_quantity(self):
        product = ProductFactory(quantity=10)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=5)
        assert movement.pk is not None
        assert movement.product.name == product.name
        assert _quantity(product) == 15
        _assert_ledger(product)

    def test_exit_decreases_quantity(self):
        product = ProductFactory(quantity=10)
        StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=3)
        assert _quantity(product) == 7
        _assert_ledger(product)

    def test_exit_of_entire_stock(self):
        product = ProductFactory(quantity=4)
        StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=4)
        assert _quantity(product) == 0

    def test_exit_exceeding_stock_is_rejected(self):
        product = ProductFactory(quantity=2)
        with pytest.raises(InsufficientStockError):
            StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=5)
        assert _quantity(product) == 2
        assert not StockMovement.objects.filter(product=product).exists()

    def test_unknown_product(self):
        with pytest.raises(ResourceNotFoundError):
            StockService.record_movement(product_id=999999, movement_type=ENTRY, quantity=1)
        assert StockMovement.objects.count() == 0

    @pytest.mark.parametrize('quantity', [0, -1, 1.5, True, '3'])
    def test_invalid_quantity(self, quantity):
        product = ProductFactory(quantity=10)
        with pytest.raises(BusinessRuleViolation):
            StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=quantity)
        assert _quantity(product) == 10

    def test_invalid_type(self):
        product = ProductFactory(quantity=10)
        with pytest.raises(BusinessRuleViolation):
            StockService.record_movement(product_id=product.pk, movement_type='transfer', quantity=1)

    def test_not_idempotent(self):
        product = ProductFactory(quantity=0)
        for _ in range(2):
            StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=3)
        assert StockMovement.objects.filter(product=product).count() == 2
        assert _quantity(product) == 6

    def test_audit_entry_with_actor(self):
        user = UserFactory()
        product = ProductFactory(quantity=1)
        movement = StockService.record_movement(
            product_id=product.pk, movement_type=ENTRY, quantity=2, actor=user,
        )
        log = AuditLog.objects.get(model_name='StockMovement', object_id=str(movement.pk))
        assert log.action == 'CREATE'
        assert log.actor == user
        assert log.new_values['quantity'] == 2

    def test_product_quantity_audit_carries_actor(self):
        user = UserFactory()
        product = ProductFactory(quantity=1)
        StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=2, actor=user)
        log = AuditLog.objects.get(model_name='Product', object_id=str(product.pk), action='UPDATE')
        assert log.actor == user
        assert log.old_values['quantity'] == 1
        assert log.new_values['quantity'] == 3

    def test_rollback_when_product_update_fails(self):
        product = ProductFactory(quantity=10)
        with patch('stock.services._set_product_quantity', side_effect=RuntimeError('simulated failure')):
            with pytest.raises(RuntimeError, match='simulated failure'):
                StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=5)
        assert not StockMovement.objects.filter(product=product).exists()
        assert _quantity(product) == 10


@pytest.mark.django_db
class TestAmendMovement:

    def test_increase_entry_quantity(self):
        product = ProductFactory(quantity=10)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=5)
        amended = StockService.amend_movement(movement_id=movement.pk, quantity=8)
        assert amended.quantity == 8
        assert _quantity(product) == 18
        _assert_ledger(product)

    def test_reduce_entry_quantity(self):
        product = ProductFactory(quantity=6)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=4)
        assert _quantity(product) == 10
        amended = StockService.amend_movement(movement_id=movement.pk, quantity=2)
        assert amended.quantity == 2
        assert _quantity(product) == 8
        _assert_ledger(product)

    def test_reduce_exit_quantity_returns_stock(self):
        product = ProductFactory(quantity=10)
        movement = StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=6)
        assert _quantity(product) == 4
        StockService.amend_movement(movement_id=movement.pk, quantity=1)
        assert _quantity(product) == 9
        _assert_ledger(product)

    def test_reduce_entry_below_consumed_stock_is_rejected(self):
        product = ProductFactory(quantity=0)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=5)
        StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=4)
        with pytest.raises(InvalidOperation):
            StockService.amend_movement(movement_id=movement.pk, quantity=2)
        assert _quantity(product) == 1
        assert StockMovement.objects.get(pk=movement.pk).quantity == 5

    def test_increase_exit_quantity(self):
        product = ProductFactory(quantity=10)
        movement = StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=2)
        StockService.amend_movement(movement_id=movement.pk, quantity=6)
        assert _quantity(product) == 4
        _assert_ledger(product)

    def test_change_type_resigns_effect(self):
        product = ProductFactory(quantity=10)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=3)
        assert _quantity(product) == 13
        StockService.amend_movement(movement_id=movement.pk, movement_type=EXIT)
        assert _quantity(product) == 7
        _assert_ledger(product)

    def test_change_type_rejected_when_stock_would_go_negative(self):
        product = ProductFactory(quantity=0)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=3)
        with pytest.raises(InvalidOperation):
            StockService.amend_movement(movement_id=movement.pk, movement_type=EXIT)
        assert _quantity(product) == 3
        assert StockMovement.objects.get(pk=movement.pk).type == ENTRY

    def test_notes_only(self):
        product = ProductFactory(quantity=10)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=1)
        amended = StockService.amend_movement(movement_id=movement.pk, notes='Supplier invoice 42')
        assert amended.notes == 'Supplier invoice 42'
        assert _quantity(product) == 11

    def test_unknown_movement(self):
        with pytest.raises(ResourceNotFoundError):
            StockService.amend_movement(movement_id=999999, quantity=1)

    def test_invalid_quantity(self):
        product = ProductFactory(quantity=10)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=1)
        with pytest.raises(BusinessRuleViolation):
            StockService.amend_movement(movement_id=movement.pk, quantity=0)


@pytest.mark.django_db
class TestRemoveMovement:

    def test_remove_entry(self):
        product = ProductFactory(quantity=10)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=4)
        removed = StockService.remove_movement(movement_id=movement.pk)
        assert removed.pk == movement.pk
        assert not StockMovement.objects.filter(pk=movement.pk).exists()
        assert _quantity(product) == 10
        _assert_ledger(product)

    def test_remove_exit_restores_stock(self):
        product = ProductFactory(quantity=10)
        movement = StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=4)
        StockService.remove_movement(movement_id=movement.pk)
        assert _quantity(product) == 10

    def test_remove_consumed_entry_is_rejected(self):
        product = ProductFactory(quantity=0)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=3)
        StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=3)
        with pytest.raises(InvalidOperation):
            StockService.remove_movement(movement_id=movement.pk)
        assert StockMovement.objects.filter(pk=movement.pk).exists()
        assert _quantity(product) == 0

    def test_unknown_movement(self):
        with pytest.raises(ResourceNotFoundError):
            StockService.remove_movement(movement_id=999999)

    def test_audit_entry(self):
        product = ProductFactory(quantity=10)
        movement = StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=4)
        StockService.remove_movement(movement_id=movement.pk)
        log = AuditLog.objects.get(model_name='StockMovement', object_id=str(movement.pk), action='DELETE')
        assert log.old_values['quantity'] == 4


@pytest.mark.django_db
class TestLedger:

    def test_balance_without_movements_is_initial_quantity(self):
        product = ProductFactory(quantity=7)
        assert StockService.get_balance(product.pk) == 7

    def test_balance_unknown_product(self):
        with pytest.raises(ResourceNotFoundError):
            StockService.get_balance(999999)

    def test_ledger_after_mixed_operations(self):
        product = ProductFactory(quantity=5)
        movements = [
            StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=10),
            StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=3),
            StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=2),
            StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=6),
        ]
        StockService.amend_movement(movement_id=movements[1].pk, quantity=1)
        StockService.remove_movement(movement_id=movements[2].pk)
        StockService.amend_movement(movement_id=movements[3].pk, movement_type=ENTRY)
        # 5 + 10 - 1 + 6
        assert _quantity(product) == 20
        _assert_ledger(product)

    def test_order_of_accepted_movements_does_not_change_result(self):
        first = ProductFactory(quantity=5)
        second = ProductFactory(quantity=5)
        operations = [(ENTRY, 4), (EXIT, 2), (ENTRY, 1), (EXIT, 3)]
        for movement_type, quantity in operations:
            StockService.record_movement(product_id=first.pk, movement_type=movement_type, quantity=quantity)
        for movement_type, quantity in reversed(operations):
            StockService.record_movement(product_id=second.pk, movement_type=movement_type, quantity=quantity)
        assert _quantity(first) == _quantity(second) == 5


@pytest.mark.django_db
class TestSummarize:

    def test_totals_and_values(self):
        product = ProductFactory(quantity=10, cost_price=Decimal('2.00'), sale_price=Decimal('3.50'))
        StockService.record_movement(product_id=product.pk, movement_type=ENTRY, quantity=4)
        StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=2)
        summary = StockService.summarize(StockMovement.objects.all())
        assert summary['entries'] == 4
        assert summary['exits'] == 2
        assert summary['balance'] == 2
        assert summary['entries_value'] == Decimal('8.00')
        assert summary['exits_value'] == Decimal('7.00')

    def test_empty(self):
        summary = StockService.summarize(StockMovement.objects.none())
        assert summary == {
            'entries': 0,
            'exits': 0,
            'balance': 0,
            'entries_value': Decimal('0'),
            'exits_value': Decimal('0'),
        }


@pytest.mark.skipif(
    connection.vendor != 'postgresql',
    reason='row locks need PostgreSQL; run with DATABASE_URL=postgres://...',
)
@pytest.mark.django_db(transaction=True)
class TestConcurrentExits:

    def test_only_one_of_two_competing_exits_succeeds(self):
        product = ProductFactory(quantity=5)
        barrier = threading.Barrier(2)
        results = []

        def sell():
            try:
                barrier.wait()
                StockService.record_movement(product_id=product.pk, movement_type=EXIT, quantity=4)
                results.append('ok')
            except InsufficientStockError:
                results.append('rejected')
            finally:
                close_old_connections()
                connection.close()

        threads = [threading.Thread(target=sell) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(results) == ['ok', 'rejected']
        assert _quantity(product) == 1
        _assert_ledger(product)
