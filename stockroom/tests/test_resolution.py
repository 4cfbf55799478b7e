"""
Tests for target resolution.
"""

import pytest

from stockroom.models import Product, Unit, UnitStatus
from stockroom.services.resolution import NotFound, ResolvedTarget, TargetKind


pytestmark = pytest.mark.django_db


class TestResolveTarget:
    """Tests for ledger.resolve_target()."""

    def test_product_by_key(self, ledger, mattress):
        """Barcode stored as the key."""
        target = ledger.resolve_target('Mattress-90x200')

        assert isinstance(target, ResolvedTarget)
        assert target.kind is TargetKind.PRODUCT
        assert target.product.pk == mattress.pk
        assert target.unit is None
        assert target.serial is None

    def test_product_by_barcode_field(self, ledger, legacy_product):
        """Barcode stored in the field of an opaque-key product."""
        target = ledger.resolve_target('8991002003004')

        assert target.kind is TargetKind.PRODUCT
        assert target.product.pk == 'a8F3kQ2'

    def test_key_wins_over_barcode_field(self, ledger, legacy_product):
        """A product whose key equals the code beats one carrying it as barcode."""
        Product.objects.create(key='8991002003004', name='Newer record')

        target = ledger.resolve_target('8991002003004')

        assert target.product.name == 'Newer record'

    def test_unit_in_stock(self, ledger, unit, serialized_product):
        """A serial in stock resolves to the unit and its product."""
        target = ledger.resolve_target('SN-42')

        assert target.kind is TargetKind.UNIT
        assert target.is_unit
        assert target.serial == 'SN-42'
        assert target.product.pk == serialized_product.pk

    def test_unit_checked_out(self, ledger, unit):
        """A serial that already left is not a target."""
        Unit.objects.filter(pk='SN-42').update(status=UnitStatus.OUT)

        assert isinstance(ledger.resolve_target('SN-42'), NotFound)

    def test_product_code_wins_over_serial(self, ledger, unit, mattress):
        """Products are checked before units."""
        Unit.objects.create(serial='Mattress-90x200', product=unit.product)

        assert ledger.resolve_target('Mattress-90x200').kind is TargetKind.PRODUCT

    def test_whitespace_trimmed(self, ledger, mattress):
        """Scanners may append whitespace."""
        assert ledger.resolve_target('  Mattress-90x200\n').found

    @pytest.mark.parametrize('code', ['', '   ', None])
    def test_empty_code(self, ledger, code):
        """Nothing scanned resolves to NotFound."""
        target = ledger.resolve_target(code)

        assert not target.found
        assert target.code == ''

    def test_repeatable(self, ledger, unit):
        """Resolving twice without writes gives equal results."""
        assert ledger.resolve_target('SN-42') == ledger.resolve_target('SN-42')
        assert ledger.resolve_target('nope') == ledger.resolve_target('nope')

    def test_read_only(self, ledger, mattress):
        """Resolution writes nothing."""
        before = Product.objects.get(pk=mattress.pk).updated_at

        ledger.resolve_target('Mattress-90x200')
        ledger.resolve_target('missing')

        assert Product.objects.get(pk=mattress.pk).updated_at == before
        assert Product.objects.count() == 1
