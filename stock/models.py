"""
Stock — Models

Entry/exit movements against a product. Each movement's signed quantity is
applied to Product.quantity by StockService at the moment it is recorded,
amended or removed, so that for every product:

    quantity == initial_quantity + SUM(entries) - SUM(exits)

Rows must only be written through StockService; a direct save() would
change history without touching the product's cached quantity.

@file stock/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TimestampMixin


class StockMovement(TimestampMixin):
    """A single entry or exit of stock for one product."""

    class MovementType(models.TextChoices):
        ENTRY = 'entry', _('Entry')
        EXIT = 'exit', _('Exit')

    type = models.CharField(
        _('type'), max_length=5,
        choices=MovementType.choices, db_index=True,
    )
    quantity = models.PositiveIntegerField(_('quantity'))
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('product'),
    )
    notes = models.TextField(_('notes'), blank=True, default='')

    class Meta:
        verbose_name = _('stock movement')
        verbose_name_plural = _('stock movements')
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['product', 'created_at'], name='stock_product_created_idx'),
            models.Index(fields=['type', 'created_at'], name='stock_type_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='stock_movement_positive_quantity',
            ),
        ]

    def __str__(self):
        return f'{self.type} {self.quantity} product={self.product_id}'

    @property
    def signed_quantity(self) -> int:
        """Effect of this movement on the product's quantity."""
        return signed_effect(self.type, self.quantity)


def signed_effect(movement_type: str, quantity: int) -> int:
    if movement_type == StockMovement.MovementType.ENTRY:
        return quantity
    return -quantity
