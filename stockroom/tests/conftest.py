"""
Pytest fixtures for Stockroom tests.
"""

import pytest
from django.contrib.auth import get_user_model

from stockroom.adapters import reset_stores
from stockroom.models import Product, Role, Unit
from stockroom.protocols import Actor, Counterparty
from stockroom.service import StockLedger
from stockroom.services.resolution import ResolvedTarget, TargetKind


User = get_user_model()


@pytest.fixture(autouse=True)
def _fresh_stores():
    """Store instances are cached per process; start every test clean."""
    reset_stores()
    yield
    reset_stores()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='ani',
        password='testpass123'
    )


@pytest.fixture
def ani():
    """Staff actor."""
    return Actor(id='u1', label='Ani')


@pytest.fixture
def owner():
    """Owner actor (sees and edits prices)."""
    return Actor(id='u0', label='Budi', role=Role.OWNER)


@pytest.fixture
def jane():
    """Client for outgoing movements."""
    return Counterparty(name='Jane', address='Jl. Melati 4')


@pytest.fixture
def ledger(db):
    """Ledger over the default ORM stores."""
    return StockLedger()


def _stock(ledger, product, quantity, actor):
    target = ResolvedTarget(kind=TargetKind.PRODUCT, product=product)
    result = ledger.apply_incoming(target, quantity, actor)
    assert result.ok, result.message
    product.refresh_from_db()
    return product


@pytest.fixture
def mattress(ledger, ani):
    """'Mattress-90x200' with 10 on hand, booked through the ledger."""
    product = Product.objects.create(
        key='Mattress-90x200',
        barcode='Mattress-90x200',
        name='Mattress',
        category='Matras',
        brand='Comforta',
        sizes='90x200',
    )
    return _stock(ledger, product, 10, ani)


@pytest.fixture
def legacy_product(ledger, ani):
    """Product stored under an opaque key, barcode in the field."""
    product = Product.objects.create(
        key='a8F3kQ2',
        barcode='8991002003004',
        name='Divan Royal',
        category='Divan',
        brand='Elite',
        sizes='160x200',
    )
    return _stock(ledger, product, 4, ani)


@pytest.fixture
def serialized_product(ledger, ani):
    """Product holding exactly one serialized unit."""
    product = Product.objects.create(
        key='7001',
        barcode='7001',
        name='Spring Bed Deluxe',
        category='Divan',
        brand='Comforta',
        sizes='180x200',
    )
    return _stock(ledger, product, 1, ani)


@pytest.fixture
def unit(serialized_product):
    """Unit 'SN-42', in stock."""
    return Unit.objects.create(serial='SN-42', product=serialized_product)
