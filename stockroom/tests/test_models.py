"""
Tests for model-level rules.
"""

import pytest
from django.db import IntegrityError, transaction

from stockroom.models import MasterProduct, Movement, MovementType, Product, Unit, UnitStatus


pytestmark = pytest.mark.django_db


class TestMovementImmutability:
    """Movements are insert-only."""

    def test_cannot_update(self, mattress):
        movement = mattress.movements.get()
        movement.quantity = 99

        with pytest.raises(ValueError, match='immutable'):
            movement.save()

    def test_cannot_delete(self, mattress):
        with pytest.raises(ValueError, match='immutable'):
            mattress.movements.get().delete()

        assert mattress.movements.count() == 1

    def test_quantity_positive(self, mattress):
        with pytest.raises(ValueError):
            Movement.objects.create(type=MovementType.INCOMING, product=mattress, quantity=0)

    def test_delta_sign(self, mattress):
        incoming = Movement(type=MovementType.INCOMING, product=mattress, quantity=3)
        outgoing = Movement(type=MovementType.OUTGOING, product=mattress, quantity=3)

        assert incoming.delta == 3
        assert outgoing.delta == -3
        assert str(outgoing).startswith('-3 |')


class TestProduct:

    def test_quantity_never_negative(self, mattress):
        """The database refuses a negative quantity."""
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Product.objects.filter(pk=mattress.pk).update(quantity=-1)

    def test_match_key_kept_current(self, mattress):
        mattress.name = 'Mattress Lux'
        mattress.save(update_fields=['name'])

        mattress.refresh_from_db()
        assert mattress.match_key == 'MATTRESS LUX|MATRAS|COMFORTA|90X200'

    def test_code(self, mattress, legacy_product):
        assert mattress.code == 'Mattress-90x200'
        assert legacy_product.code == '8991002003004'
        assert Product(key='k1', name='x').code == 'k1'

    def test_str(self, mattress):
        assert str(mattress) == 'Mattress 90x200 [Mattress-90x200]: 10'

    def test_in_stock(self, mattress):
        Product.objects.create(key='empty', name='Empty')

        assert list(Product.objects.in_stock()) == [mattress]


class TestUnit:

    def test_defaults_in(self, unit):
        assert unit.status == UnitStatus.IN
        assert unit.is_in

    def test_product_protected(self, unit, serialized_product):
        """Products with units or movements cannot be deleted."""
        from django.db.models import ProtectedError

        with pytest.raises(ProtectedError):
            serialized_product.delete()

        assert Unit.objects.filter(pk='SN-42').exists()


class TestMasterProduct:

    def test_name_lower(self):
        master = MasterProduct.objects.create(name='  Spring Bed Royal ')

        assert master.name_lower == 'spring bed royal'
        assert str(master) == '  Spring Bed Royal '
