"""
Order data models.

An Order is created from the cart at checkout. Its items are a deep copy of
the cart rows at that moment and are never touched again; only the status
changes afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Dict, Any, FrozenSet, Optional, Tuple

from .cart_item import LineItem


class OrderStatus(Enum):
    """
    Status of an order.

    Lifecycle:
        PENDING -> PROCESSING -> READY -> COMPLETED
        any non-terminal state -> CANCELLED
    """

    PENDING = "pending"
    """Order placed, waiting for the shop to confirm."""

    PROCESSING = "processing"
    """Shop is printing / preparing the order."""

    READY = "ready"
    """Order can be picked up."""

    COMPLETED = "completed"
    """Order handed over (terminal)."""

    CANCELLED = "cancelled"
    """Order cancelled (terminal)."""

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Whether ``target`` may follow this status in the lifecycle."""
        return target in _TRANSITIONS[self]


_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class CustomerInfo:
    """
    Contact record given at checkout.

    Name, email and phone are required; the caller validates them before
    creating an order.
    """

    name: str
    email: str
    phone: str
    address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"name": self.name, "email": self.email, "phone": self.phone}
        if self.address:
            data["address"] = self.address
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomerInfo":
        return cls(
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            address=data.get("address") or None,
        )


@dataclass(frozen=True)
class Order:
    """
    A placed order.

    This is a FROZEN dataclass. Status changes produce a new Order through
    with_status(); the item snapshot is shared unchanged between versions.
    """

    id: str
    """"ORD-" followed by an uppercase base-36 time token."""

    items: Tuple[LineItem, ...]
    """Copy of the cart rows at checkout time."""

    total: float
    """Sum of price x quantity over items."""

    status: OrderStatus
    """Current lifecycle status."""

    customer_info: CustomerInfo
    """Contact record."""

    created_at: datetime
    """Creation time (timezone-aware)."""

    estimated_completion: Optional[datetime] = None
    """Creation time plus the configured completion offset."""

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def with_status(self, status: OrderStatus) -> "Order":
        """Copy of this order with another status."""
        return replace(self, status=status)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the snapshot and JSON responses."""
        return {
            "id": self.id,
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
            "status": self.status.value,
            "customerInfo": self.customer_info.to_dict(),
            "createdAt": self.created_at.isoformat(),
            "estimatedCompletion": (
                self.estimated_completion.isoformat()
                if self.estimated_completion else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        """Create Order from dictionary (e.g., from the snapshot)."""
        estimated = data.get("estimatedCompletion")
        return cls(
            id=data["id"],
            items=tuple(LineItem.from_dict(item) for item in data.get("items", [])),
            total=data.get("total", 0),
            status=OrderStatus(data.get("status", OrderStatus.PENDING.value)),
            customer_info=CustomerInfo.from_dict(data.get("customerInfo", {})),
            created_at=datetime.fromisoformat(data["createdAt"]),
            estimated_completion=datetime.fromisoformat(estimated) if estimated else None,
        )
