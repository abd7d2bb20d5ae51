"""
Services layer for PrintStudio.

This module contains the stateful services:
- CartStore: cart rows and order history, saved after every change
- AIImageService: simulated image generation and editing

The application factory creates one instance of each and shares it with the
routes through app.config.
"""

from .cart_store import CartStore
from .image_service import AIImageService, AIImageRequest, ImageResult

__all__ = [
    "CartStore",
    "AIImageService",
    "AIImageRequest",
    "ImageResult",
]
