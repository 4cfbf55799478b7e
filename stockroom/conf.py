"""
Stockroom configuration.

Usage in settings.py:
    STOCKROOM = {
        "PRODUCT_STORE": "stockroom.adapters.orm.OrmProductStore",
        "UNIT_STORE": "stockroom.adapters.orm.OrmUnitStore",
        "LEDGER_LOG": "stockroom.adapters.orm.OrmLedgerLog",
        "SIZE_REQUIRED_CATEGORIES": ["Matras", "Divan"],
        "OWNER_GROUP": "owner",
    }
"""

from dataclasses import dataclass, field
from typing import Any

from django.conf import settings


@dataclass
class StockroomSettings:
    """Stockroom configuration settings."""

    # Store backends (dotted paths)
    PRODUCT_STORE: str = "stockroom.adapters.orm.OrmProductStore"
    UNIT_STORE: str = "stockroom.adapters.orm.OrmUnitStore"
    LEDGER_LOG: str = "stockroom.adapters.orm.OrmLedgerLog"

    # Categories whose products must pick a size from SIZE_OPTIONS
    SIZE_REQUIRED_CATEGORIES: list[str] = field(
        default_factory=lambda: ["Matras", "Divan"]
    )
    SIZE_OPTIONS: list[str] = field(
        default_factory=lambda: [
            "90x200", "100x200", "120x200", "160x200", "180x200", "200x200",
        ]
    )

    # Django auth group whose members act as owners
    OWNER_GROUP: str = "owner"

    # Max master-product suggestions returned while typing a name
    SUGGESTION_LIMIT: int = 6


def get_stockroom_settings() -> StockroomSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOCKROOM", {})
    return StockroomSettings(**{
        k: v for k, v in user_settings.items()
        if k in StockroomSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_stockroom_settings(), name)


stockroom_settings = _LazySettings()
