"""Helper modules for the PrintStudio storefront."""

__all__ = [
    "calculator",
    "catalog",
    "checkout",
    "i18n",
    "image_defaults",
]
