"""
Core — Model Tests

Tests for AuditLog, AuditService and the timestamp mixin.

@file core/tests/test_models.py
"""

from decimal import Decimal

import pytest
from django.contrib.auth.models import AnonymousUser

from core.models import AuditLog
from core.services import AuditService
from tests.factories import AuditLogFactory, ProductFactory, UserFactory


@pytest.mark.django_db
class TestAuditLog:
    def test_create_audit_log(self):
        user = UserFactory()
        log = AuditService.log(
            actor=user,
            action=AuditLog.ActionChoices.CREATE,
            model_name='Product',
            object_id=42,
            new_values={'name': 'Cola'},
        )
        assert log.pk is not None
        assert log.action == 'CREATE'
        assert log.object_id == '42'
        assert log.actor == user

    def test_anonymous_actor_is_stored_as_null(self):
        log = AuditService.log(
            actor=AnonymousUser(),
            action=AuditLog.ActionChoices.DELETE,
            model_name='Product',
            object_id=1,
        )
        assert log.actor is None

    def test_factory(self):
        log = AuditLogFactory()
        assert log.pk is not None
        assert 'CREATE' in str(log)

    def test_snapshot_stringifies_decimals(self):
        product = ProductFactory(cost_price=Decimal('4.50'))
        snapshot = AuditService.snapshot(product)
        assert snapshot['cost_price'] == '4.50'
        assert snapshot['name'] == product.name

    def test_product_create_triggers_audit(self):
        before = AuditLog.objects.filter(model_name='Product').count()
        ProductFactory()
        assert AuditLog.objects.filter(model_name='Product').count() == before + 1


@pytest.mark.django_db
class TestTimestampMixin:
    def test_timestamps_are_set(self):
        product = ProductFactory()
        assert product.created_at is not None
        assert product.updated_at >= product.created_at
