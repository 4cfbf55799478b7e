"""
Stockroom store loader — resolves the configured store backends.

Usage:
    from stockroom.adapters import get_product_store

    store = get_product_store()
    product = store.get("500123")

Settings:
    STOCKROOM = {
        "PRODUCT_STORE": "stockroom.adapters.orm.OrmProductStore",
        "UNIT_STORE": "stockroom.adapters.orm.OrmUnitStore",
        "LEDGER_LOG": "stockroom.adapters.orm.OrmLedgerLog",
    }

A dotted path that cannot be imported raises ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from stockroom.conf import stockroom_settings
from stockroom.protocols.stores import LedgerLog, ProductStore, UnitStore

logger = logging.getLogger(__name__)


# Cached store instances, keyed by setting name
_lock = threading.Lock()
_stores: dict[str, object] = {}


def _load(setting: str):
    store = _stores.get(setting)
    if store is None:
        with _lock:
            store = _stores.get(setting)
            if store is None:  # double-checked
                path = getattr(stockroom_settings, setting)
                if not path:
                    raise ImproperlyConfigured(
                        f"STOCKROOM['{setting}'] must be configured."
                    )
                try:
                    store = import_string(path)()
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import {setting} '{path}': {e}"
                    ) from e
                _stores[setting] = store
                logger.debug("Loaded %s: %s", setting, path)
    return store


def get_product_store() -> ProductStore:
    """Return the configured ProductStore."""
    return _load("PRODUCT_STORE")


def get_unit_store() -> UnitStore:
    """Return the configured UnitStore."""
    return _load("UNIT_STORE")


def get_ledger_log() -> LedgerLog:
    """Return the configured LedgerLog."""
    return _load("LEDGER_LOG")


def reset_stores() -> None:
    """Reset the cached stores. Useful for testing."""
    with _lock:
        _stores.clear()
