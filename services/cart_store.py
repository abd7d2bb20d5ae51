"""
Cart and order store.

Single source of truth for the active cart and the order history. One
instance is built by the application factory and shared with the routes
through ``app.config["CART_STORE"]``.

Persistence:
    Every mutating operation ends with an explicit save of the snapshot
    ``{"state": {"items": [...], "orders": [...]}, "version": 0}`` under the
    configured storage name. The cart-panel visibility flag is not saved.
    Saving is best-effort: a storage failure is logged and the in-memory
    state stays authoritative.

Thread Safety:
    Flask may serve requests on several threads. All operations take one
    re-entrant lock, so they are observed one after another.

Usage:
    store = CartStore(MemoryStorage())
    store.add_item(NewItem(ItemType.PRINT, "Print A4", "Matte", 350.0))
    order_id = store.create_order(CustomerInfo("Ann", "a@b.c", "123"))
    order = store.get_order(order_id)
"""

from __future__ import annotations

import copy
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Union

from core.exceptions import InvalidStatusTransitionError, StorageError
from core.storage import KeyValueStorage
from models.cart_item import LineItem, NewItem
from models.order import CustomerInfo, Order, OrderStatus
from logging_config import get_logger, get_order_logger


# Module logger
logger = get_logger(__name__)

SNAPSHOT_VERSION = 0
ORDER_ID_PREFIX = "ORD-"
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """Lowercase base-36 representation of a non-negative integer."""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CartStore:
    """
    Holds cart rows and placed orders.

    Unknown ids are never an error: remove/update/status calls on a missing
    id simply do nothing.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_name: str = "cart-storage",
        completion_days: int = 3,
        enforce_transitions: bool = False,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Create the store and load the saved snapshot, if any.

        Args:
            storage: Key-value storage holding the snapshot
            storage_name: Key of the snapshot inside the storage
            completion_days: Days added to creation time for the estimate
            enforce_transitions: Reject status changes outside the lifecycle
            clock: Returns the current time (timezone-aware)
        """
        self._storage = storage
        self._storage_name = storage_name
        self._completion_offset = timedelta(days=completion_days)
        self._enforce_transitions = enforce_transitions
        self._clock = clock
        self._lock = threading.RLock()

        self._items: List[LineItem] = []
        self._orders: List[Order] = []
        self._is_open = False
        self._last_order_millis = -1

        self._load()

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def _load(self) -> None:
        """Replace in-memory state with the snapshot; keep empty state if absent."""
        try:
            snapshot = self._storage.get_item(self._storage_name)
        except StorageError as e:
            logger.warning(f"Ignoring unreadable cart snapshot: {e}")
            return

        if not snapshot:
            logger.debug("No cart snapshot found, starting empty")
            return

        try:
            state = snapshot.get("state", {})
            items = [LineItem.from_dict(item) for item in state.get("items", [])]
            orders = [Order.from_dict(order) for order in state.get("orders", [])]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed cart snapshot: {e}")
            return

        self._items = items
        self._orders = orders
        for order in orders:
            if order.id.startswith(ORDER_ID_PREFIX):
                try:
                    token = int(order.id[len(ORDER_ID_PREFIX):], 36)
                except ValueError:
                    continue
                self._last_order_millis = max(self._last_order_millis, token)
        logger.info(
            f"Loaded cart snapshot: {len(items)} items, {len(orders)} orders"
        )

    def snapshot(self) -> dict:
        """Persisted form of the store (items and orders only)."""
        with self._lock:
            return {
                "state": {
                    "items": [item.to_dict() for item in self._items],
                    "orders": [order.to_dict() for order in self._orders],
                },
                "version": SNAPSHOT_VERSION,
            }

    def _persist(self) -> None:
        """Save-after-mutate. Failures are logged, never raised."""
        try:
            self._storage.set_item(self._storage_name, self.snapshot())
        except StorageError as e:
            logger.error(f"Failed to persist cart snapshot: {e}")

    # =========================================================================
    # CART OPERATIONS
    # =========================================================================

    def _new_item_id(self) -> str:
        existing = {item.id for item in self._items}
        while True:
            item_id = uuid.uuid4().hex[:9]
            if item_id not in existing:
                return item_id

    def _find_item(self, item_id: str) -> Optional[LineItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def add_item(self, new_item: NewItem) -> Optional[str]:
        """
        Add a row, or add to the quantity of a matching row.

        A row matches when its name and options equal the new item's. A merge
        that brings the quantity to zero or below removes the row, and a new
        row is only created for a quantity of at least one.

        Returns:
            Id of the row that was created or updated, or None when no row
            is left for the item
        """
        with self._lock:
            for item in self._items:
                if item.matches(new_item.name, new_item.options):
                    quantity = item.quantity + new_item.quantity
                    if quantity <= 0:
                        self.update_quantity(item.id, quantity)
                        return None
                    item.quantity = quantity
                    logger.debug(
                        f"Merged '{item.name}' into {item.id}, quantity now {item.quantity}"
                    )
                    self._persist()
                    return item.id

            if new_item.quantity < 1:
                logger.debug(f"Ignored '{new_item.name}' with quantity {new_item.quantity}")
                self._persist()
                return None

            item = LineItem.from_new(self._new_item_id(), copy.deepcopy(new_item))
            self._items.append(item)
            logger.debug(f"Added '{item.name}' as {item.id} (x{item.quantity})")
            self._persist()
            return item.id

    def remove_item(self, item_id: str) -> None:
        """Delete the row with ``item_id``; no-op when absent."""
        with self._lock:
            before = len(self._items)
            self._items = [item for item in self._items if item.id != item_id]
            if len(self._items) != before:
                logger.debug(f"Removed item {item_id}")
            self._persist()

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """
        Set a row's quantity exactly.

        A quantity of zero or less removes the row.
        """
        with self._lock:
            if quantity <= 0:
                self.remove_item(item_id)
                return

            item = self._find_item(item_id)
            if item is not None:
                item.quantity = quantity
                logger.debug(f"Item {item_id} quantity set to {quantity}")
            self._persist()

    def clear_cart(self) -> None:
        """Empty the cart. Order history is untouched."""
        with self._lock:
            self._items = []
            logger.debug("Cart cleared")
            self._persist()

    def toggle_cart(self) -> bool:
        """Flip the cart-panel visibility flag (not persisted)."""
        with self._lock:
            self._is_open = not self._is_open
            return self._is_open

    # =========================================================================
    # ORDER OPERATIONS
    # =========================================================================

    def _next_order_id(self, now: datetime) -> str:
        """
        "ORD-" + uppercase base-36 epoch milliseconds.

        The millisecond token is bumped past the previous one so two orders
        placed in the same millisecond still get distinct ids.
        """
        millis = int(now.timestamp() * 1000)
        millis = max(millis, self._last_order_millis + 1)
        self._last_order_millis = millis
        return ORDER_ID_PREFIX + to_base36(millis).upper()

    def create_order(self, customer_info: CustomerInfo) -> str:
        """
        Turn the current cart into an order.

        The cart is used as-is (an empty cart is allowed). The order keeps a
        deep copy of the rows, the cart is emptied afterwards.

        Returns:
            New order id
        """
        with self._lock:
            now = self._clock()
            order = Order(
                id=self._next_order_id(now),
                items=tuple(copy.deepcopy(self._items)),
                total=self._total_price(),
                status=OrderStatus.PENDING,
                customer_info=customer_info,
                created_at=now,
                estimated_completion=now + self._completion_offset,
            )
            self._orders.append(order)
            self._items = []

            get_order_logger(order.id).info(
                f"Order created: {order.item_count} items, total {order.total}"
            )
            self._persist()
            return order.id

    def update_order_status(
        self, order_id: str, status: Union[OrderStatus, str]
    ) -> None:
        """
        Overwrite an order's status; no-op when the order is unknown.

        Raises:
            ValueError: ``status`` is not a known status value
            InvalidStatusTransitionError: transition enforcement is on and
                the change is outside the lifecycle
        """
        status = OrderStatus(status)

        with self._lock:
            for index, order in enumerate(self._orders):
                if order.id != order_id:
                    continue

                if (
                    self._enforce_transitions
                    and status != order.status
                    and not order.status.can_transition_to(status)
                ):
                    raise InvalidStatusTransitionError(
                        order_id, order.status.value, status.value
                    )

                self._orders[index] = order.with_status(status)
                get_order_logger(order_id).info(
                    f"Status {order.status.value} -> {status.value}"
                )
                break

            self._persist()

    def get_order(self, order_id: str) -> Optional[Order]:
        """Copy of the order with ``order_id``, or None when not found."""
        with self._lock:
            for order in self._orders:
                if order.id == order_id:
                    return copy.deepcopy(order)
            return None

    def list_orders(self) -> List[Order]:
        """Copies of all orders, oldest first."""
        with self._lock:
            return copy.deepcopy(self._orders)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def _total_price(self) -> float:
        return sum(item.price * item.quantity for item in self._items)

    def get_total_items(self) -> int:
        """Sum of quantities in the cart."""
        with self._lock:
            return sum(item.quantity for item in self._items)

    def get_total_price(self) -> float:
        """Sum of price x quantity in the cart."""
        with self._lock:
            return self._total_price()

    @property
    def items(self) -> List[LineItem]:
        """Copy of the cart rows in display order."""
        with self._lock:
            return copy.deepcopy(self._items)

    @property
    def orders(self) -> List[Order]:
        return self.list_orders()

    @property
    def is_open(self) -> bool:
        return self._is_open
