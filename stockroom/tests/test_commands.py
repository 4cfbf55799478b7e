"""
Tests for management commands.
"""

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from stockroom.models import Product


pytestmark = pytest.mark.django_db


def _run(*args):
    out = StringIO()
    call_command(*args, stdout=out)
    return out.getvalue()


class TestAuditStock:

    def test_clean(self, mattress):
        assert 'All quantities match the ledger' in _run('audit_stock')

    def test_mismatch_reported(self, mattress):
        Product.objects.filter(pk=mattress.pk).update(quantity=12)

        output = _run('audit_stock')

        assert 'Mattress-90x200: stored 12, ledger 10 (diff -2)' in output
        assert '1 mismatch(es) found' in output
        assert Product.objects.get(pk=mattress.pk).quantity == 12

    def test_fix(self, mattress):
        Product.objects.filter(pk=mattress.pk).update(quantity=12)

        output = _run('audit_stock', '--fix')

        assert '1 product(s) corrected' in output
        assert Product.objects.get(pk=mattress.pk).quantity == 10


class TestPrintLabel:

    def test_product_label(self, legacy_product):
        output = _run('print_label', '8991002003004', '--copies', '2')

        assert output.startswith('SIZE 50 mm,40 mm\r\n')
        assert 'TEXT 224,24,"0",0,1,1,"Divan Royal"' in output
        assert output.endswith('PRINT 1,2\r\n')

    def test_unit_label_prints_serial(self, unit):
        output = _run('print_label', 'SN-42')

        assert 'QRCODE 24,24,L,6,A,0,"SN-42"' in output
        assert '"Spring Bed Deluxe"' in output

    def test_unknown_code(self, db):
        with pytest.raises(CommandError):
            _run('print_label', 'nope')
