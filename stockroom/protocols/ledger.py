"""
Ledger Protocol — request, result and record shapes.

These are the values that cross the boundary between the screens that
scan codes and the StockLedger that books them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from stockroom.exceptions import StockError
from stockroom.models.enums import MovementType, Role


@dataclass(frozen=True)
class Actor:
    """Who performed a movement. Passed explicitly into every call."""

    id: str
    label: str = ""
    role: str = Role.STAFF

    @property
    def is_owner(self) -> bool:
        return self.role == Role.OWNER

    @classmethod
    def from_user(cls, user) -> Actor:
        """
        Build an actor from a Django user.

        Superusers and members of the ``OWNER_GROUP`` group are owners.
        """
        from stockroom.conf import stockroom_settings

        is_owner = user.is_superuser or user.groups.filter(
            name=stockroom_settings.OWNER_GROUP
        ).exists()
        return cls(
            id=str(user.pk),
            label=user.get_username() or getattr(user, "email", ""),
            role=Role.OWNER if is_owner else Role.STAFF,
        )


@dataclass(frozen=True)
class Counterparty:
    """Recipient of an outgoing movement."""

    name: str
    address: str | None = None


@dataclass(frozen=True)
class MovementMeta:
    """Optional free text attached to a movement."""

    note: str | None = None
    supplier_name: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


def _nested(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise StockError('VALIDATION_ERROR', 'Malformed request.', field=key)
    return value


@dataclass(frozen=True)
class MovementRequest:
    """
    Inbound request from a scanning screen.

    ``quantity`` is kept as received (int, numeric string, float) and
    validated by the ledger.
    """

    code: str
    quantity: Any
    type: str
    actor: Actor
    counterparty: Counterparty | None = None
    note: str | None = None
    supplier_name: str | None = None
    catalog: dict[str, Any] | None = None

    @property
    def meta(self) -> MovementMeta:
        return MovementMeta(note=self.note, supplier_name=self.supplier_name)

    @classmethod
    def from_dict(cls, data: dict[str, Any], actor: Actor | None = None) -> MovementRequest:
        """
        Parse the wire shape::

            {"code": "500123", "quantity": 2, "type": "outgoing",
             "actor": {"id": "u1", "label": "Ani"},
             "counterparty": {"name": "Jane", "address": "..."},
             "note": "...", "supplierName": "..."}

        The wire actor is always staff. Pass ``actor`` (e.g. from
        ``Actor.from_user(request.user)``) to use the authenticated actor
        instead; it replaces the wire one.

        Raises:
            StockError('VALIDATION_ERROR'): If the request or a nested value
                has the wrong shape
        """
        if not isinstance(data, dict):
            raise StockError('VALIDATION_ERROR', 'Malformed request.', field='request')
        actor_data = _nested(data, "actor")
        cp = _nested(data, "counterparty")
        catalog = data.get("catalog")
        if catalog is not None and not isinstance(catalog, dict):
            raise StockError('VALIDATION_ERROR', 'Malformed request.', field='catalog')

        if actor is None:
            actor = Actor(
                id=str(actor_data.get("id", "")),
                label=str(actor_data.get("label") or ""),
            )
        counterparty = None
        if cp:
            counterparty = Counterparty(
                name=str(cp.get("name") or ""),
                address=str(cp["address"]) if cp.get("address") is not None else None,
            )
        return cls(
            code=str(data.get("code") or ""),
            quantity=data.get("quantity"),
            type=data.get("type", ""),
            actor=actor,
            counterparty=counterparty,
            note=data.get("note"),
            supplier_name=data.get("supplierName", data.get("supplier_name")),
            catalog=catalog,
        )


@dataclass(frozen=True)
class MovementRecord:
    """One ledger entry, as handed to LedgerLog.append()."""

    type: MovementType
    product_key: str
    quantity: int
    actor: Actor
    product_name: str = ""
    barcode: str = ""
    category: str | None = None
    brand: str | None = None
    sizes: str | None = None
    unit_serial: str | None = None
    counterparty: Counterparty | None = None
    note: str | None = None
    supplier_name: str | None = None
    timestamp: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MovementResult:
    """Outcome of a ledger operation. Rejections are values, not exceptions."""

    ok: bool
    new_quantity: int | None = None
    movement_id: Any = None
    error_kind: str | None = None
    detail: dict[str, Any] = field(default_factory=dict)
    message: str = ""

    @classmethod
    def success(cls, new_quantity: int, movement_id) -> MovementResult:
        return cls(ok=True, new_quantity=new_quantity, movement_id=movement_id)

    @classmethod
    def failure(cls, error: StockError) -> MovementResult:
        payload = error.as_dict()
        return cls(
            ok=False,
            error_kind=error.code,
            detail=payload["data"],
            message=error.message,
        )

    @property
    def retryable(self) -> bool:
        return self.error_kind == "STORE_UNAVAILABLE"

    def as_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape."""
        if self.ok:
            return {
                "ok": True,
                "newQuantity": self.new_quantity,
                "movementId": self.movement_id,
            }
        return {
            "ok": False,
            "errorKind": self.error_kind,
            "detail": self.detail,
            "message": self.message,
        }
