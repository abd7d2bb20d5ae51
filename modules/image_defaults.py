"""
SVG Default Images for Cart Lines

Fallback images shown for cart lines that carry no image of their own.
Organized by line category (print, cartridge, service).
"""

from typing import Union

from models.cart_item import ItemType


# SVG for print lines (sheet of paper with an image frame)
PRINT_DEFAULT_SVG = (
    "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' "
    "width='200' height='80' viewBox='0 0 200 80'%3E"
    "%3Crect fill='%23f5f5f5' width='200' height='80'/%3E"
    "%3Crect x='70' y='10' width='60' height='50' fill='white' stroke='%23999' stroke-width='1.5'/%3E"
    "%3Cpolyline points='76,52 92,34 104,46 112,38 124,52' fill='none' stroke='%233B82F6' stroke-width='2'/%3E"
    "%3Ctext x='100' y='72' font-family='Arial,sans-serif' font-size='11' "
    "fill='%23666' text-anchor='middle'%3EPRINT%3C/text%3E"
    "%3C/svg%3E"
)

# SVG for cartridge lines
CARTRIDGE_DEFAULT_SVG = (
    "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' "
    "width='200' height='80' viewBox='0 0 200 80'%3E"
    "%3Crect fill='%23e8e8e8' width='200' height='80'/%3E"
    "%3Crect x='60' y='15' width='80' height='50' rx='5' fill='%23666' stroke='%23333' stroke-width='2'/%3E"
    "%3Ctext x='100' y='72' font-family='Arial,sans-serif' font-size='11' "
    "fill='%23333' text-anchor='middle'%3ECARTRIDGE%3C/text%3E"
    "%3C/svg%3E"
)

# SVG for image service lines
SERVICE_DEFAULT_SVG = (
    "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' "
    "width='200' height='80' viewBox='0 0 200 80'%3E"
    "%3Crect fill='%23eef2ff' width='200' height='80'/%3E"
    "%3Cpath d='M100 14 L106 30 L122 36 L106 42 L100 58 L94 42 L78 36 L94 30 Z' fill='%233B82F6'/%3E"
    "%3Ctext x='100' y='72' font-family='Arial,sans-serif' font-size='11' "
    "fill='%231E40AF' text-anchor='middle'%3EAI SERVICE%3C/text%3E"
    "%3C/svg%3E"
)

# Generic fallback if the category is unknown
GENERIC_DEFAULT_SVG = (
    "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' "
    "width='200' height='80' viewBox='0 0 200 80'%3E"
    "%3Crect fill='%23f0f0f0' width='200' height='80'/%3E"
    "%3Ccircle cx='100' cy='35' r='15' fill='none' stroke='%23999' stroke-width='2'/%3E"
    "%3Ctext x='100' y='72' font-family='Arial,sans-serif' font-size='11' "
    "fill='%23999' text-anchor='middle'%3EITEM%3C/text%3E"
    "%3C/svg%3E"
)


def get_default_image(item_type: Union[ItemType, str]) -> str:
    """
    Get the default SVG image for a cart line category.

    Args:
        item_type: ItemType or its value ("print", "cartridge", "service")

    Returns:
        Data URI string for SVG image

    Example:
        >>> get_default_image('cartridge')
        'data:image/svg+xml,...'
    """
    if isinstance(item_type, ItemType):
        item_type = item_type.value

    type_map = {
        ItemType.PRINT.value: PRINT_DEFAULT_SVG,
        ItemType.CARTRIDGE.value: CARTRIDGE_DEFAULT_SVG,
        ItemType.SERVICE.value: SERVICE_DEFAULT_SVG,
    }

    return type_map.get(item_type, GENERIC_DEFAULT_SVG)
