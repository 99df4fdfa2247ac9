"""
Stock — Management Command: check_stock_ledger

Compares every product's cached quantity with the balance re-derived
from its movement history (initial_quantity + entries - exits).

Usage::

    python manage.py check_stock_ledger
    python manage.py check_stock_ledger --product 42 --strict

Read-only: reports drift, never rewrites quantities.

@file stock/management/commands/check_stock_ledger.py
"""

import logging

from django.core.management.base import BaseCommand, CommandError

from catalog.models import Product
from stock.services import StockService

logger = logging.getLogger('estoque')


class Command(BaseCommand):
    help = 'Report products whose quantity differs from their movement ledger.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--product',
            type=int,
            help='Only check the product with this ID.',
        )
        parser.add_argument(
            '--strict',
            action='store_true',
            help='Exit with an error when any drift is found.',
        )

    def handle(self, *args, **options):
        products = Product.objects.order_by('pk')
        if options.get('product') is not None:
            products = products.filter(pk=options['product'])
            if not products.exists():
                raise CommandError(f'Product {options["product"]} not found.')

        checked = 0
        drifted = 0
        for product in products.iterator():
            checked += 1
            balance = StockService.get_balance(product.pk)
            if balance != product.quantity:
                drifted += 1
                logger.warning(
                    'Stock drift on product %s: quantity=%s ledger=%s',
                    product.pk, product.quantity, balance,
                )
                self.stdout.write(self.style.WARNING(
                    f'  {product.name} (#{product.pk}): quantity={product.quantity} ledger={balance}'
                ))

        if drifted and options.get('strict'):
            raise CommandError(f'{drifted} of {checked} products drifted from their ledger.')

        self.stdout.write(self.style.SUCCESS(
            f'Done. {checked} products checked, {drifted} with drift.'
        ))
