"""
Tests for the plain admin registration.
"""

from unittest import mock

import pytest
from django.contrib import admin

from stockroom.models import MasterProduct, Movement, Product, Unit


pytestmark = pytest.mark.django_db


def test_models_registered():
    for model in (Product, Unit, Movement, MasterProduct):
        assert model in admin.site._registry


def test_movements_read_only(rf, mattress):
    """The audit trail cannot be edited from the admin."""
    model_admin = admin.site._registry[Movement]
    request = rf.get('/')
    movement = mattress.movements.get()

    assert not model_admin.has_add_permission(request)
    assert not model_admin.has_change_permission(request, movement)
    assert not model_admin.has_delete_permission(request, movement)


def test_products_not_deletable(rf, mattress):
    assert not admin.site._registry[Product].has_delete_permission(rf.get('/'), mattress)


def test_recalculate_action(rf, mattress):
    """The action writes the ledger replay back."""
    Product.objects.filter(pk=mattress.pk).update(quantity=3)
    model_admin = admin.site._registry[Product]

    with mock.patch.object(model_admin, 'message_user') as message_user:
        model_admin.recalculate(rf.get('/'), Product.objects.all())

    assert Product.objects.get(pk=mattress.pk).quantity == 10
    message_user.assert_called_once()
    assert '1 product(s) corrected.' in str(message_user.call_args.args[1])
