"""
Stock Ledger — The single public interface for all stock operations.

Usage:
    from stockroom import ledger, Actor, Counterparty

    ani = Actor(id="u1", label="Ani")
    target = ledger.resolve_target("500123")
    result = ledger.apply_outgoing(target, 3, ani, Counterparty("Jane"))
    if not result.ok:
        print(result.message)

    # Or straight from a scanning screen's request
    result = ledger.process({"code": "500123", "quantity": 3, "type": "outgoing",
                             "actor": {"id": "u1", "label": "Ani"},
                             "counterparty": {"name": "Jane"}})
"""

import dataclasses
import logging

from stockroom.adapters.loader import get_ledger_log, get_product_store, get_unit_store
from stockroom.exceptions import StockError
from stockroom.models.enums import MovementType, UnitStatus
from stockroom.protocols.ledger import (
    Actor,
    Counterparty,
    MovementMeta,
    MovementRequest,
    MovementResult,
)
from stockroom.services.catalog import StockCatalog
from stockroom.services.history import StockHistory
from stockroom.services.movements import StockMovements, coerce_quantity
from stockroom.services.resolution import NotFound, ResolvedTarget, resolve_target

logger = logging.getLogger('stockroom')


class StockLedger(StockMovements, StockCatalog, StockHistory):
    """
    Single interface for all stock operations.

    Holds no state besides its stores; create one per request if needed.
    Stores default to the ones configured in settings.STOCKROOM.

    The apply_* methods and process() never raise StockError: every
    rejection comes back as a failed MovementResult. The catalog methods
    inherited from StockCatalog raise StockError like the services do.
    """

    def __init__(self, product_store=None, unit_store=None, ledger_log=None):
        super().__init__(
            product_store or get_product_store(),
            unit_store or get_unit_store(),
            ledger_log or get_ledger_log(),
        )

    # ══════════════════════════════════════════════════════════════
    # RESOLUTION
    # ══════════════════════════════════════════════════════════════

    def resolve_target(self, code) -> ResolvedTarget | NotFound:
        """Product target, unit target or NotFound. See services.resolution."""
        return resolve_target(code, self.products, self.units)

    # ══════════════════════════════════════════════════════════════
    # MOVEMENTS
    # ══════════════════════════════════════════════════════════════

    def apply_incoming(self, target, quantity, actor: Actor,
                       meta: MovementMeta | None = None,
                       catalog: dict | None = None) -> MovementResult:
        """Book received stock. See StockMovements.receive()."""
        try:
            return self.receive(target, quantity, actor, meta=meta, catalog=catalog)
        except StockError as e:
            return self._rejected(e, MovementType.INCOMING, target, actor)

    def apply_outgoing(self, target, quantity, actor: Actor,
                       counterparty: Counterparty | None,
                       meta: MovementMeta | None = None) -> MovementResult:
        """Book stock leaving for a client. See StockMovements.issue()."""
        try:
            return self.issue(target, quantity, actor, counterparty, meta=meta)
        except StockError as e:
            return self._rejected(e, MovementType.OUTGOING, target, actor)

    def process(self, request: MovementRequest | dict,
                actor: Actor | None = None) -> MovementResult:
        """
        Validate, resolve and book one scanning-screen request.

        Order:
            1. the request shape, type, quantity and client name are
               checked (no I/O)
            2. the code is resolved
            3. the movement is booked

        ``actor`` is the authenticated actor and replaces the one in the
        request. Roles are never taken from the wire.

        An outgoing scan of a serial that exists but is already out is
        reported as UNIT_ALREADY_OUT rather than NOT_FOUND.
        """
        if isinstance(request, MovementRequest):
            type = request.type
        else:
            type = request.get('type') if isinstance(request, dict) else None
        target = None
        try:
            if isinstance(request, MovementRequest):
                if actor is not None:
                    request = dataclasses.replace(request, actor=actor)
            else:
                request = MovementRequest.from_dict(request, actor=actor)

            if request.type not in MovementType.values:
                raise StockError('INVALID_TYPE', type=request.type)
            coerce_quantity(request.quantity)
            if request.type == MovementType.OUTGOING:
                if not request.counterparty or not (request.counterparty.name or '').strip():
                    raise StockError('MISSING_COUNTERPARTY')

            code = str(request.code or '').strip()
            if not code:
                raise StockError('VALIDATION_ERROR', 'Scan or type a barcode/serial.', field='code')

            target = self.resolve_target(code)

            if request.type == MovementType.INCOMING:
                return self.receive(
                    target, request.quantity, request.actor,
                    meta=request.meta, catalog=request.catalog,
                )

            if not target.found:
                unit = self.units.get(code)
                if unit is not None and unit.status == UnitStatus.OUT:
                    raise StockError('UNIT_ALREADY_OUT', serial=code)

            return self.issue(
                target, request.quantity, request.actor,
                request.counterparty, meta=request.meta,
            )
        except StockError as e:
            if isinstance(request, MovementRequest):
                actor = request.actor
            return self._rejected(e, type, target, actor)

    # ══════════════════════════════════════════════════════════════
    # INTERNAL
    # ══════════════════════════════════════════════════════════════

    @staticmethod
    def _rejected(error: StockError, type, target, actor: Actor | None) -> MovementResult:
        if target is None:
            code = None
        elif target.found:
            code = target.serial or target.product.pk
        else:
            code = target.code
        log = logger.error if error.retryable else logger.warning
        log(
            "stock.rejected",
            extra={
                "code": error.code,
                "type": str(type),
                "target": code,
                "actor": actor.id if actor else None,
                "data": error.as_dict()["data"],
            },
        )
        return MovementResult.failure(error)
