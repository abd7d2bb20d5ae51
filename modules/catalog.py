"""
Static storefront data.

Services shown on the landing page, cartridge offers that can be put in the
cart directly, and the shop's contact details.
"""

from typing import Any, Dict, List, Optional

from models.cart_item import ItemType, NewItem
from modules.image_defaults import get_default_image


SHOP_NAME = "PrintStudio"

CONTACTS = {
    "phone": "+7 (495) 123-45-67",
    "email": "info@printstudio.ru",
    "address": "Moscow, Pechatnaya st. 1",
    "hours": "Mon-Fri 9:00-18:00, Sat 10:00-16:00",
}

SERVICES: List[Dict[str, Any]] = [
    {
        "key": "large_format",
        "title": "Large-format printing",
        "description": "Printing on paper, canvas and film. High quality, short lead times.",
        "tags": ["Canvas", "Photo paper", "Film"],
    },
    {
        "key": "cartridges",
        "title": "Cartridges",
        "description": "Sale and refill of cartridges for popular printer models.",
        "tags": ["Canon", "HP", "Epson"],
    },
    {
        "key": "ai_editor",
        "title": "AI editor",
        "description": "Generate and enhance images before printing.",
        "tags": ["Text-to-Image", "Enhancement", "Filters"],
    },
]

# Cartridge offers by sku
CARTRIDGES: Dict[str, Dict[str, Any]] = {
    "hp-123-black": {
        "name": "HP 123 Black",
        "description": "Original black cartridge",
        "price": 1890.0,
        "options": {"brand": "HP", "model": "123", "kind": "new"},
    },
    "hp-123-refill": {
        "name": "HP 123 Black refill",
        "description": "Refill of your own cartridge",
        "price": 450.0,
        "options": {"brand": "HP", "model": "123", "kind": "refill"},
    },
    "canon-pg-445": {
        "name": "Canon PG-445",
        "description": "Original black cartridge",
        "price": 1650.0,
        "options": {"brand": "Canon", "model": "PG-445", "kind": "new"},
    },
    "epson-t664-set": {
        "name": "Epson T664 CMYK set",
        "description": "Four ink bottles for EcoTank printers",
        "price": 2400.0,
        "options": {"brand": "Epson", "model": "T664", "kind": "new"},
    },
}


def get_cartridge(sku: str) -> Optional[Dict[str, Any]]:
    return CARTRIDGES.get(sku)


def cartridge_line_item(sku: str, quantity: int = 1) -> Optional[NewItem]:
    """Cart row for a cartridge offer, or None for an unknown sku."""
    offer = CARTRIDGES.get(sku)
    if offer is None:
        return None
    return NewItem(
        type=ItemType.CARTRIDGE,
        name=offer["name"],
        description=offer["description"],
        price=offer["price"],
        quantity=quantity,
        options=dict(offer["options"]),
        image_url=get_default_image(ItemType.CARTRIDGE),
    )


def storefront() -> Dict[str, Any]:
    """Everything the landing page shows."""
    return {
        "name": SHOP_NAME,
        "services": SERVICES,
        "cartridges": [
            {"sku": sku, "name": offer["name"], "price": offer["price"]}
            for sku, offer in CARTRIDGES.items()
        ],
        "contacts": CONTACTS,
    }
