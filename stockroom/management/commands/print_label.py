"""
Management command to emit a TSPL label program for a product.

Usage:
    python manage.py print_label 500123
    python manage.py print_label 500123 --copies 3 > /dev/usb/lp0
"""

from django.core.management.base import BaseCommand, CommandError

from stockroom.labels import build_tspl_50x40
from stockroom.service import StockLedger


class Command(BaseCommand):
    """Write a 50x40 mm TSPL label to stdout."""

    help = 'Writes the TSPL program for a product or unit label to stdout'

    def add_arguments(self, parser):
        parser.add_argument('code', help='Barcode or unit serial')
        parser.add_argument('--copies', type=int, default=1)

    def handle(self, *args, **options):
        target = StockLedger().resolve_target(options['code'])
        if not target.found:
            raise CommandError(f"No product or unit with code {options['code']!r}")

        product = target.product
        if target.is_unit:
            fields = {
                'name': product.name,
                'sizes': product.sizes,
                'brand': product.brand,
                'barcode': target.serial,
            }
            program = build_tspl_50x40(fields, copies=options['copies'])
        else:
            program = build_tspl_50x40(product, copies=options['copies'])

        self.stdout.write(program, ending='')
