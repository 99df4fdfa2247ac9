"""
Catalog — Management Command: seed_catalog

Loads product types and products from a JSON file.

Usage::

    python manage.py seed_catalog --file catalog.json

Expected JSON shape::

    {
      "product_types": [{"name": "Beverages", "description": "..."}],
      "products": [
        {"name": "Cola 2L", "cost_price": "4.50", "sale_price": "7.99",
         "quantity": 24, "product_type": "Beverages", "supplier": "ACME"}
      ]
    }

Idempotent: safe to re-run (existing names are left untouched).

@file catalog/management/commands/seed_catalog.py
"""

import json
from collections import Counter
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from catalog.models import Product, ProductType
from catalog.services import ProductService


PRODUCT_FIELDS = ('description', 'supplier', 'expiration_date')


class Command(BaseCommand):
    help = 'Seed product types and products from a JSON file.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--file',
            type=str,
            required=True,
            help='Path to the JSON catalog file.',
        )

    def handle(self, *args, **options):
        try:
            with open(options['file'], 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise CommandError(f'Cannot read {options["file"]}: {exc}')

        if not isinstance(data, dict):
            raise CommandError('Unexpected JSON structure: expected an object.')

        counter = Counter()
        with transaction.atomic():
            types_by_name = self._seed_types(data.get('product_types', []), counter)
            self._seed_products(data.get('products', []), types_by_name, counter)

        self.stdout.write(self.style.SUCCESS(
            f'Done. Product types: {counter["TYPE_NEW"]} new, {counter["TYPE_EXISTING"]} existing. '
            f'Products: {counter["PRODUCT_NEW"]} new, {counter["PRODUCT_EXISTING"]} existing.'
        ))

    def _seed_types(self, rows, counter) -> dict:
        types_by_name = {pt.name: pt for pt in ProductType.objects.all()}
        for row in rows:
            name = (row.get('name') or '').strip()
            if not name:
                continue
            product_type, created = ProductType.objects.get_or_create(
                name=name,
                defaults={'description': row.get('description') or ''},
            )
            types_by_name[name] = product_type
            counter['TYPE_NEW' if created else 'TYPE_EXISTING'] += 1
            if created:
                self.stdout.write(f'  Product type: {name}')
        return types_by_name

    def _seed_products(self, rows, types_by_name, counter) -> None:
        for row in rows:
            name = (row.get('name') or '').strip()
            if not name:
                continue
            if Product.objects.filter(name=name).exists():
                counter['PRODUCT_EXISTING'] += 1
                continue

            type_name = row.get('product_type')
            if type_name and type_name not in types_by_name:
                types_by_name[type_name], _ = ProductType.objects.get_or_create(name=type_name)

            fields = {key: row[key] for key in PRODUCT_FIELDS if row.get(key)}
            try:
                ProductService.create_product(
                    name=name,
                    cost_price=Decimal(str(row.get('cost_price', '0'))),
                    sale_price=Decimal(str(row.get('sale_price', '0'))),
                    quantity=int(row.get('quantity', 0)),
                    product_type=types_by_name.get(type_name) if type_name else None,
                    **fields,
                )
            except (TypeError, ValueError, ArithmeticError, ValidationError) as exc:
                raise CommandError(f'Invalid product row {name}: {exc}')
            counter['PRODUCT_NEW'] += 1
            self.stdout.write(f'  Product: {name}')
