"""Price calculator for large-format prints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from core.exceptions import CalculatorError
from models.cart_item import ItemType, NewItem
from modules.image_defaults import get_default_image


@dataclass(frozen=True)
class Material:
    key: str
    display_name: str
    multiplier: float


@dataclass(frozen=True)
class PaperSize:
    key: str
    width_cm: float
    height_cm: float
    step: int
    """Number of times the A4 area doubles to reach this size."""

    @property
    def display_name(self) -> str:
        return f"{self.key} ({self.width_cm:g}x{self.height_cm:g} cm)"


@dataclass(frozen=True)
class PriceQuote:
    """Cost breakdown for one calculator request."""

    material: Material
    size: PaperSize
    quantity: int
    material_cost: float
    print_cost: float

    @property
    def unit_price(self) -> float:
        return self.material_cost + self.print_cost

    @property
    def total(self) -> float:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "material": self.material.key,
            "materialName": self.material.display_name,
            "size": self.size.key,
            "sizeName": self.size.display_name,
            "quantity": self.quantity,
            "materialCost": self.material_cost,
            "printCost": self.print_cost,
            "unitPrice": self.unit_price,
            "total": self.total,
        }


class PriceCalculator:
    """Looks up material and print costs by paper size."""

    # Costs at A4 in roubles; each size step doubles the area and the cost
    BASE_MATERIAL_COST = 150.0
    BASE_PRINT_COST = 200.0

    MATERIALS = {
        "matte": Material("matte", "Matte photo paper", 1.0),
        "glossy": Material("glossy", "Glossy photo paper", 1.2),
        "canvas": Material("canvas", "Canvas", 2.5),
        "film": Material("film", "Film", 1.5),
    }

    SIZES = {
        "A4": PaperSize("A4", 21, 29.7, 0),
        "A3": PaperSize("A3", 29.7, 42, 1),
        "A2": PaperSize("A2", 42, 59.4, 2),
        "A1": PaperSize("A1", 59.4, 84.1, 3),
        "A0": PaperSize("A0", 84.1, 118.9, 4),
    }

    MAX_QUANTITY = 1000

    def options(self) -> Dict[str, List[Dict[str, str]]]:
        """Selectable materials and sizes, in display order."""
        return {
            "materials": [
                {"key": m.key, "name": m.display_name} for m in self.MATERIALS.values()
            ],
            "sizes": [
                {"key": s.key, "name": s.display_name} for s in self.SIZES.values()
            ],
        }

    def quote(self, material: str, size: str, quantity: int = 1) -> PriceQuote:
        """
        Price ``quantity`` prints of ``size`` on ``material``.

        Raises:
            CalculatorError: Unknown material or size, or quantity out of range
        """
        if material not in self.MATERIALS:
            raise CalculatorError(f"Unknown material: {material}", "material", material)
        if size not in self.SIZES:
            raise CalculatorError(f"Unknown size: {size}", "size", size)
        if not isinstance(quantity, int) or not 1 <= quantity <= self.MAX_QUANTITY:
            raise CalculatorError(
                f"Quantity must be between 1 and {self.MAX_QUANTITY}",
                "quantity",
                quantity,
            )

        chosen_material = self.MATERIALS[material]
        chosen_size = self.SIZES[size]
        scale = 2 ** chosen_size.step

        return PriceQuote(
            material=chosen_material,
            size=chosen_size,
            quantity=quantity,
            material_cost=round(self.BASE_MATERIAL_COST * scale * chosen_material.multiplier, 2),
            print_cost=round(self.BASE_PRINT_COST * scale, 2),
        )

    @staticmethod
    def to_line_item(quote: PriceQuote) -> NewItem:
        """Cart row for a quote: one ``print`` line per material/size pair."""
        return NewItem(
            type=ItemType.PRINT,
            name=f"Print {quote.size.key}",
            description=f"{quote.material.display_name}, {quote.size.display_name}",
            price=quote.unit_price,
            quantity=quote.quantity,
            options={"material": quote.material.key, "size": quote.size.key},
            image_url=get_default_image(ItemType.PRINT),
        )
