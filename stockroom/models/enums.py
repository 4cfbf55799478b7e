"""
Enums for Stockroom models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MovementType(models.TextChoices):
    """Direction of a ledger entry. The quantity is always positive."""
    INCOMING = 'incoming', _('Incoming')
    OUTGOING = 'outgoing', _('Outgoing')


class UnitStatus(models.TextChoices):
    """
    Serialized unit status.

    IN:  on the shop floor or in the warehouse, can be sold
    OUT: delivered to a client, final in this app
    """
    IN = 'in', _('In stock')
    OUT = 'out', _('Checked out')


class Role(models.TextChoices):
    """Actor role. Owners see and edit prices and the master catalog."""
    OWNER = 'owner', _('Owner')
    STAFF = 'staff', _('Staff')
