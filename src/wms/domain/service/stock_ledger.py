"""Domain service: Stock Ledger.

Every change to a product's stock counters goes through this service.  It
serializes mutations per product, applies multi-line changes all-or-nothing
and appends exactly one Transaction Log entry per mutation.

The two-phase approach (apply to working copies, then persist) ensures we
never leave stock partially mutated if one line fails.  If persisting
fails midway the original records are written back.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from wms.domain.exceptions import EntityNotFoundError, ValidationError
from wms.domain.model.product import Product
from wms.domain.model.transaction import Transaction, TransactionType
from wms.domain.model.value_objects import Quantity
from wms.domain.model.warehouse import Warehouse
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.repository.warehouse_repository import WarehouseRepository
from wms.domain.service.locks import KeyedLocks
from wms.domain.service.transaction_log import TransactionLog

logger = logging.getLogger(__name__)

SYSTEM_USER = "system"


@dataclass(frozen=True)
class StockLine:
    """A quantity of one product record to move."""

    product_id: str
    quantity: int


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StockLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        warehouse_repo: WarehouseRepository,
        log: TransactionLog,
        clock: Callable[[], datetime] = _utcnow,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._warehouse_repo = warehouse_repo
        self._log = log
        self._clock = clock
        self._locks = locks or KeyedLocks()

    # --- Reservations ---------------------------------------------------------

    def reserve(self, product_id: str, quantity: int, **meta: str) -> Product:
        return self.reserve_all([StockLine(product_id, quantity)], **meta)[0]

    def reserve_all(
        self,
        lines: list[StockLine],
        reference: str = "",
        created_by: str = SYSTEM_USER,
        notes: str = "",
        commit: Callable[[], None] | None = None,
    ) -> list[Product]:
        """Reserve every line or none of them."""
        return self._apply(
            lines, Product.reserve, TransactionType.CHECKOUT,
            reference, created_by, notes, require_active=True, commit=commit,
        )

    def release(self, product_id: str, quantity: int, **meta: str) -> Product:
        return self.release_all([StockLine(product_id, quantity)], **meta)[0]

    def release_all(
        self,
        lines: list[StockLine],
        reference: str = "",
        created_by: str = SYSTEM_USER,
        notes: str = "",
        commit: Callable[[], None] | None = None,
    ) -> list[Product]:
        return self._apply(
            lines, Product.release, TransactionType.RELEASE,
            reference, created_by, notes, require_active=False, commit=commit,
        )

    def ship_out(self, product_id: str, quantity: int, **meta: str) -> Product:
        return self.ship_out_all([StockLine(product_id, quantity)], **meta)[0]

    def ship_out_all(
        self,
        lines: list[StockLine],
        reference: str = "",
        created_by: str = SYSTEM_USER,
        notes: str = "",
        commit: Callable[[], None] | None = None,
    ) -> list[Product]:
        """Convert reservations into physical decrements."""
        return self._apply(
            lines, Product.ship_out, TransactionType.OUTBOUND,
            reference, created_by, notes, require_active=False, commit=commit,
        )

    # --- Direct stock movements -----------------------------------------------

    def dispatch(
        self,
        product_id: str,
        quantity: int,
        reference: str = "",
        created_by: str = SYSTEM_USER,
        notes: str = "",
    ) -> Product:
        """Outbound shipment of unreserved stock."""
        return self._apply(
            [StockLine(product_id, quantity)], Product.dispatch,
            TransactionType.OUTBOUND, reference, created_by, notes,
            require_active=True,
        )[0]

    def receive_in(
        self,
        product_id: str,
        quantity: int,
        reference: str = "",
        created_by: str = SYSTEM_USER,
        notes: str = "",
    ) -> Product:
        return self._apply(
            [StockLine(product_id, quantity)], Product.receive_in,
            TransactionType.INBOUND, reference, created_by, notes,
            require_active=True,
        )[0]

    def transfer(
        self,
        product_id: str,
        to_warehouse_id: str,
        quantity: int,
        reference: str = "",
        created_by: str = SYSTEM_USER,
        notes: str = "",
    ) -> tuple[Product, Product]:
        """Move available stock to the same SKU in another warehouse.

        The destination record is created empty if the warehouse does not
        stock the SKU yet.  One ``transfer`` entry covers both sides.
        """
        Quantity(quantity)
        source = self._load(product_id)
        if source.warehouse_id == to_warehouse_id:
            raise ValidationError(
                "Source and destination warehouses cannot be the same"
            )
        self._active_warehouse(source.warehouse_id)
        self._active_warehouse(to_warehouse_id)
        destination_id = self._destination_for(source, to_warehouse_id)

        with self._locks.hold_all([source.id, destination_id]):
            src = copy.deepcopy(self._load(source.id))
            dst = copy.deepcopy(self._load(destination_id))
            src.transfer_out(quantity)
            dst.transfer_in(quantity)

            entry = Transaction(
                id=None,
                type=TransactionType.TRANSFER,
                product_id=src.id,
                quantity=quantity,
                warehouse_id=src.warehouse_id,
                to_warehouse_id=dst.warehouse_id,
                reference_number=reference,
                notes=notes,
                created_by=created_by,
                created_at=self._clock(),
            )
            self._persist([src, dst], [entry])

        logger.info(
            "transferred %s x %s from warehouse %s to %s",
            quantity, src.sku, src.warehouse_id, dst.warehouse_id,
        )
        return src, dst

    # --- Internal helpers -----------------------------------------------------

    def _apply(
        self,
        lines: list[StockLine],
        operation: Callable[[Product, int], None],
        tx_type: TransactionType,
        reference: str,
        created_by: str,
        notes: str,
        require_active: bool,
        commit: Callable[[], None] | None = None,
    ) -> list[Product]:
        if not lines:
            return []

        with self._locks.hold_all(line.product_id for line in lines):
            # Phase 1: apply to working copies; any failure aborts untouched.
            working: dict[str, Product] = {}
            for line in lines:
                if line.product_id not in working:
                    working[line.product_id] = copy.deepcopy(self._load(line.product_id))
                product = working[line.product_id]
                if require_active:
                    self._active_warehouse(product.warehouse_id)
                operation(product, line.quantity)

            # Phase 2: persist and log.
            now = self._clock()
            entries = [
                Transaction(
                    id=None,
                    type=tx_type,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    warehouse_id=working[line.product_id].warehouse_id,
                    reference_number=reference,
                    notes=notes,
                    created_by=created_by,
                    created_at=now,
                )
                for line in lines
            ]
            self._persist(list(working.values()), entries, commit)

        logger.info(
            "%s applied to %d line(s) ref=%s", tx_type.value, len(lines), reference or "-"
        )
        return [working[line.product_id] for line in lines]

    def _persist(
        self,
        products: list[Product],
        entries: list[Transaction],
        commit: Callable[[], None] | None = None,
    ) -> None:
        """Save products, run ``commit``, then write the log in one append.

        The log write comes last so a failure at any step leaves no entry
        behind; the product records are restored.
        """
        originals = [self._load(p.id) for p in products]
        try:
            for product in products:
                self._product_repo.save(product)
            if commit is not None:
                commit()
            self._log.append_all(entries)
        except Exception:
            logger.exception("ledger write failed, restoring %d product(s)", len(originals))
            for original in originals:
                self._product_repo.save(original)
            raise

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def _active_warehouse(self, warehouse_id: str) -> Warehouse:
        warehouse = self._warehouse_repo.get_by_id(warehouse_id)
        if warehouse is None:
            raise EntityNotFoundError(f"Warehouse with ID '{warehouse_id}' not found")
        warehouse.ensure_active()
        return warehouse

    def _destination_for(self, source: Product, to_warehouse_id: str) -> str:
        with self._locks.hold(f"sku:{source.sku}@{to_warehouse_id}"):
            existing = self._product_repo.get_by_sku(source.sku, to_warehouse_id)
            if existing is not None:
                return existing.id
            created = Product(
                id=self._product_repo.next_id(),
                name=source.name,
                sku=source.sku,
                price=source.price,
                warehouse_id=to_warehouse_id,
                min_stock=source.min_stock,
                description=source.description,
                category=source.category,
            )
            self._product_repo.save(created)
            logger.info(
                "created product record %s for %s in warehouse %s",
                created.id, created.sku, to_warehouse_id,
            )
            return created.id
