"""
Management command to compare stored quantities with ledger replay.

Usage:
    python manage.py audit_stock
    python manage.py audit_stock --fix
"""

from django.core.management.base import BaseCommand

from stockroom.services.history import StockHistory


class Command(BaseCommand):
    """Audit product quantities against the movement ledger."""

    help = 'Compares every product quantity with incoming minus outgoing movements'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Overwrite stored quantities with the replayed ones'
        )

    def handle(self, *args, **options):
        mismatches = StockHistory.audit(fix=options['fix'])

        for product, stored, replayed in mismatches:
            self.stdout.write(
                f'{product.pk}: stored {stored}, ledger {replayed} '
                f'(diff {replayed - stored:+d})'
            )

        if not mismatches:
            self.stdout.write(self.style.SUCCESS('All quantities match the ledger'))
        elif options['fix']:
            self.stdout.write(self.style.SUCCESS(f'{len(mismatches)} product(s) corrected'))
        else:
            self.stdout.write(self.style.WARNING(f'{len(mismatches)} mismatch(es) found'))
