"""
Core — Audit Service

Writes AuditLog rows for catalog and ledger changes. Anonymous callers
are recorded with a null actor.

@file core/services.py
"""

from decimal import Decimal
from typing import Any

from django.forms.models import model_to_dict

from core.models import AuditLog


def _json_value(value):
    if isinstance(value, Decimal):
        return str(value)
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    if hasattr(value, 'pk'):
        return value.pk
    return value


class AuditService:
    """Centralised audit logging for every write operation."""

    @staticmethod
    def log(
        *,
        actor,
        action: str,
        model_name: str,
        object_id,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> AuditLog:
        if actor is not None and not actor.is_authenticated:
            actor = None
        return AuditLog.objects.create(
            actor=actor,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            old_values=old_values,
            new_values=new_values,
        )

    @staticmethod
    def snapshot(instance, fields=None) -> dict[str, Any]:
        """Editable fields of `instance` as JSON-safe values (Decimals as strings)."""
        return {
            key: _json_value(value)
            for key, value in model_to_dict(instance, fields=fields).items()
        }
