"""
Catalog — Models

Product types (categories) and products. Product.quantity is the cached
current stock, maintained by the stock ledger; initial_quantity records
the stock the product was created with so the ledger can be re-derived.

@file catalog/models.py
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TimestampMixin


class ProductType(TimestampMixin):
    """A product category. Cannot be deleted while products reference it."""

    name = models.CharField(_('name'), max_length=255, unique=True)
    description = models.TextField(_('description'), blank=True, default='')

    class Meta:
        verbose_name = _('product type')
        verbose_name_plural = _('product types')
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(TimestampMixin):
    """
    A stocked product.

    quantity must never go below zero; a database check constraint backs
    the ledger's own validation.
    """

    name = models.CharField(_('name'), max_length=255, unique=True)
    description = models.TextField(_('description'), blank=True, default='')
    cost_price = models.DecimalField(
        _('cost price'), max_digits=12, decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
    )
    sale_price = models.DecimalField(
        _('sale price'), max_digits=12, decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
    )
    quantity = models.PositiveIntegerField(_('quantity'), default=0)
    initial_quantity = models.PositiveIntegerField(
        _('initial quantity'), default=0, editable=False,
        help_text=_('Stock at creation time; base of the movement ledger'),
    )
    expiration_date = models.DateField(_('expiration date'), null=True, blank=True)
    supplier = models.CharField(_('supplier'), max_length=255, blank=True, default='')
    product_type = models.ForeignKey(
        ProductType,
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='products',
        verbose_name=_('product type'),
    )

    class Meta:
        verbose_name = _('product')
        verbose_name_plural = _('products')
        ordering = ['name']
        indexes = [
            models.Index(fields=['product_type', 'name'], name='product_type_name_idx'),
            models.Index(fields=['quantity'], name='product_quantity_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name='product_quantity_non_negative',
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def profit_value(self) -> Decimal:
        return (self.sale_price or Decimal('0')) - (self.cost_price or Decimal('0'))

    @property
    def profit_margin(self) -> Decimal:
        """Profit as a percentage of cost price; 0 when cost price is 0."""
        if not self.cost_price:
            return Decimal('0')
        return (self.profit_value / self.cost_price * 100).quantize(Decimal('0.01'))

    def clean(self):
        super().clean()
        if self.quantity is not None and self.quantity < 0:
            raise ValidationError({'quantity': _('Quantity cannot be negative.')})
