"""
Tests for history queries and the ledger audit.
"""

from datetime import date, datetime, timezone as dt_timezone

import pytest

from stockroom import StockError
from stockroom.models import Movement, MovementType, Product


pytestmark = pytest.mark.django_db


def _backdate(movement_id, day):
    Movement.objects.filter(pk=movement_id).update(
        timestamp=datetime(day.year, day.month, day.day, 10, 0, tzinfo=dt_timezone.utc)
    )


@pytest.fixture
def traffic(ledger, mattress, ani, jane):
    """Three movements on three days, plus the fixture's receipt."""
    target = ledger.resolve_target('Mattress-90x200')
    first = ledger.apply_incoming(target, 2, ani).movement_id
    second = ledger.apply_outgoing(target, 1, ani, jane).movement_id
    third = ledger.apply_outgoing(target, 4, ani, jane).movement_id
    _backdate(first, date(2024, 3, 1))
    _backdate(second, date(2024, 3, 2))
    _backdate(third, date(2024, 3, 5))
    return first, second, third


class TestMovements:
    """Tests for ledger.movements()."""

    def test_newest_first(self, ledger, traffic):
        """The log lists the latest movement first."""
        first, second, third = traffic
        ids = list(ledger.movements().values_list('pk', flat=True))

        assert ids[-3:] == [third, second, first]

    def test_by_type(self, ledger, traffic):
        """Type filter, with 'all' meaning no filter."""
        assert ledger.movements(type=MovementType.OUTGOING).count() == 2
        assert ledger.movements(type='incoming').count() == 2
        assert ledger.movements(type='all').count() == 4

    def test_date_range_inclusive(self, ledger, traffic):
        """Both range ends are whole days."""
        first, second, third = traffic
        qs = ledger.movements(date_from='2024-03-01', date_to=date(2024, 3, 2))

        assert set(qs.values_list('pk', flat=True)) == {first, second}

    def test_single_day_wins(self, ledger, traffic):
        """on_date overrides the range."""
        _, _, third = traffic
        qs = ledger.movements(on_date='2024-03-05', date_from='2024-03-01')

        assert list(qs.values_list('pk', flat=True)) == [third]

    def test_by_product(self, ledger, traffic, legacy_product):
        """Product filter."""
        assert ledger.movements(product=legacy_product).count() == 1

    def test_by_category_and_brand(self, ledger, traffic, legacy_product):
        assert ledger.movements(category='Matras').count() == 4
        assert ledger.movements(brand='Elite').count() == 1
        assert ledger.movements(category='Divan', brand='Comforta').count() == 0

    def test_category_as_recorded(self, ledger, traffic, mattress, ani):
        """Later catalog edits do not rewrite past movements."""
        ledger.update_product('Mattress-90x200', ani, category='Kasur')

        assert ledger.movements(category='Matras').count() == 4
        assert ledger.movements(category='Kasur').count() == 0

    def test_bad_date(self, ledger):
        """Dates must be YYYY-MM-DD."""
        with pytest.raises(StockError) as exc:
            ledger.movements(date_from='03/01/2024')

        assert exc.value.code == 'VALIDATION_ERROR'
        assert exc.value.data['field'] == 'date_from'

    def test_blank_dates_ignored(self, ledger, traffic):
        """Empty form fields mean no filter."""
        assert ledger.movements(date_from='', date_to=None).count() == 4


class TestAudit:
    """Tests for replay and audit."""

    def test_replay(self, ledger, traffic, mattress):
        """10 + 2 - 1 - 4."""
        assert ledger.replay_quantity(mattress) == 7

    def test_clean_ledger(self, ledger, traffic, legacy_product):
        """No mismatches when every change went through the ledger."""
        assert ledger.audit() == []

    def test_reports_drift(self, ledger, mattress):
        """A quantity edited behind the ledger's back is reported."""
        Product.objects.filter(pk=mattress.pk).update(quantity=25)

        [(product, stored, replayed)] = ledger.audit()

        assert product.pk == mattress.pk
        assert (stored, replayed) == (25, 10)
        assert Product.objects.get(pk=mattress.pk).quantity == 25

    def test_fix(self, ledger, mattress):
        """fix=True writes the replayed quantity back."""
        Product.objects.filter(pk=mattress.pk).update(quantity=25)

        ledger.audit(fix=True)

        assert Product.objects.get(pk=mattress.pk).quantity == 10
        assert ledger.audit() == []
