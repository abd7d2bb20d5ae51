"""
Cart line item models.

A LineItem is one row of the cart. Rows are merged when the same product
(same name, same options) is added twice, so each row is unique by
(name, options) as well as by its id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional


class ItemType(Enum):
    """Category of a cart line."""

    PRINT = "print"
    """Large-format print job (material + size)."""

    CARTRIDGE = "cartridge"
    """Cartridge sale or refill."""

    SERVICE = "service"
    """Image service (AI generation, enhancement, background removal)."""


@dataclass
class NewItem:
    """
    Line item as supplied by a caller, before the cart assigns an id.

    Captured from the calculator, the catalog or the AI editor.
    """

    type: ItemType
    name: str
    description: str
    price: float
    quantity: int = 1
    options: Dict[str, str] = field(default_factory=dict)
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, ItemType):
            self.type = ItemType(self.type)
        self.options = dict(self.options or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NewItem":
        """Create from a request body (camelCase keys)."""
        return cls(
            type=ItemType(data.get("type", ItemType.PRINT.value)),
            name=data.get("name", ""),
            description=data.get("description", ""),
            price=float(data.get("price", 0)),
            quantity=int(data.get("quantity", 1)),
            options={str(k): str(v) for k, v in (data.get("options") or {}).items()},
            image_url=data.get("imageUrl", data.get("image_url")),
        )


@dataclass
class LineItem:
    """
    One row of the cart.

    Invariant: quantity >= 1 while the row is in the cart. The store removes
    the row instead of letting the quantity reach zero.
    """

    id: str
    """Opaque token, unique within the cart."""

    type: ItemType
    """Line category."""

    name: str
    """Display name (part of the merge identity)."""

    description: str
    """Short description shown under the name."""

    price: float
    """Unit price, non-negative."""

    quantity: int
    """Number of units, >= 1."""

    options: Dict[str, str] = field(default_factory=dict)
    """Attribute mapping such as material/size (part of the merge identity)."""

    image_url: Optional[str] = None
    """Optional image reference (data URL or path)."""

    @classmethod
    def from_new(cls, item_id: str, item: NewItem) -> "LineItem":
        """Attach an id to a caller-supplied item."""
        return cls(
            id=item_id,
            type=item.type,
            name=item.name,
            description=item.description,
            price=item.price,
            quantity=item.quantity,
            options=dict(item.options),
            image_url=item.image_url,
        )

    @property
    def line_total(self) -> float:
        """Unit price times quantity."""
        return self.price * self.quantity

    def matches(self, name: str, options: Optional[Dict[str, str]]) -> bool:
        """
        Check whether an addition refers to this same line.

        Dict equality ignores key order; a missing mapping equals an empty one.
        """
        return self.name == name and self.options == dict(options or {})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the snapshot and JSON responses."""
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "quantity": self.quantity,
        }
        if self.options:
            data["options"] = dict(self.options)
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineItem":
        """Create from dictionary (e.g., from the snapshot)."""
        return cls(
            id=data.get("id", ""),
            type=ItemType(data.get("type", ItemType.PRINT.value)),
            name=data.get("name", ""),
            description=data.get("description", ""),
            price=data.get("price", 0),
            quantity=data.get("quantity", 1),
            options=dict(data.get("options") or {}),
            image_url=data.get("imageUrl"),
        )
