"""
Tests for the Unfold admin (installed with the 'unfold' extra).
"""

import importlib
import sys
from unittest import mock

import pytest

pytest.importorskip('unfold')

from django.contrib.admin import AdminSite  # noqa: E402

from stockroom.models import MasterProduct, Movement, MovementType, Product, Unit  # noqa: E402


pytestmark = pytest.mark.django_db

MODULE = 'stockroom.contrib.admin_unfold.admin'


@pytest.fixture
def unfold_site():
    """Import the Unfold admin against a fresh site, leaving admin.site alone."""
    site = AdminSite(name='unfold_test')
    with mock.patch('django.contrib.admin.sites.site', site), \
            mock.patch.dict(sys.modules):
        sys.modules.pop(MODULE, None)
        module = importlib.import_module(MODULE)
        yield site, module


def test_format_quantity():
    from stockroom.contrib.admin_unfold.base import format_quantity

    assert format_quantity(None) == '-'
    assert format_quantity(12) == '12'
    assert format_quantity(-3) == '-3'


def test_models_registered(unfold_site):
    site, module = unfold_site

    for model in (Product, Unit, Movement, MasterProduct):
        assert model in site._registry
    assert isinstance(site._registry[Movement], module.MovementAdmin)


def test_movements_read_only(rf, unfold_site, mattress):
    """The audit trail cannot be edited from the Unfold admin either."""
    site, _ = unfold_site
    model_admin = site._registry[Movement]
    request = rf.get('/')
    movement = mattress.movements.get()

    assert not model_admin.has_add_permission(request)
    assert not model_admin.has_change_permission(request, movement)
    assert not model_admin.has_delete_permission(request, movement)
    assert 'category' in model_admin.readonly_fields


def test_delta_display(unfold_site, mattress):
    site, _ = unfold_site
    model_admin = site._registry[Movement]

    incoming = Movement(type=MovementType.INCOMING, product=mattress, quantity=3)
    outgoing = Movement(type=MovementType.OUTGOING, product=mattress, quantity=2)

    assert model_admin.delta_display(incoming) == '+3'
    assert model_admin.delta_display(outgoing) == '-2'


def test_products_not_deletable(rf, unfold_site, mattress):
    site, _ = unfold_site

    assert not site._registry[Product].has_delete_permission(rf.get('/'), mattress)
