"""
Catalog — Signals

Audit logging for ProductType and Product lifecycle events.

@file catalog/signals.py
"""

import logging

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_DELETE, AUDIT_ACTION_UPDATE
from core.services import AuditService

from .models import Product, ProductType

logger = logging.getLogger('estoque')


def _capture_previous(sender, instance):
    if instance.pk:
        try:
            old = sender.objects.get(pk=instance.pk)
        except sender.DoesNotExist:
            return
        instance._audit_previous = AuditService.snapshot(old)


def _log_save(sender, instance, created):
    action = AUDIT_ACTION_CREATE if created else AUDIT_ACTION_UPDATE
    old = instance.__dict__.pop('_audit_previous', None)
    new = AuditService.snapshot(instance)
    if not created and old == new:
        return
    AuditService.log(
        actor=getattr(instance, '_current_user', None),
        action=action,
        model_name=sender.__name__,
        object_id=str(instance.pk),
        old_values=old,
        new_values=new,
    )


def _log_delete(sender, instance):
    AuditService.log(
        actor=getattr(instance, '_current_user', None),
        action=AUDIT_ACTION_DELETE,
        model_name=sender.__name__,
        object_id=str(instance.pk),
        old_values=AuditService.snapshot(instance),
    )


@receiver(pre_save, sender=ProductType)
def product_type_pre_save(sender, instance, **kwargs):
    _capture_previous(sender, instance)


@receiver(post_save, sender=ProductType)
def product_type_post_save(sender, instance, created, **kwargs):
    _log_save(sender, instance, created)


@receiver(post_delete, sender=ProductType)
def product_type_post_delete(sender, instance, **kwargs):
    _log_delete(sender, instance)


@receiver(pre_save, sender=Product)
def product_pre_save(sender, instance, **kwargs):
    _capture_previous(sender, instance)


@receiver(post_save, sender=Product)
def product_post_save(sender, instance, created, **kwargs):
    _log_save(sender, instance, created)


@receiver(post_delete, sender=Product)
def product_post_delete(sender, instance, **kwargs):
    _log_delete(sender, instance)
