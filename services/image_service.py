"""
Simulated AI image service.

The storefront's "AI editor" is a demo: nothing is sent to a model. Each
operation waits for a cosmetic delay and returns an SVG data URL.

    generate_image     - gradient card with the prompt text and a watermark
    enhance_image      - the uploaded image under a contrast/saturation filter
    remove_background  - the uploaded image faded out towards the edges

Results use the shape the UI expects: {success, imageUrl?, error?}. Errors
never propagate to the caller; they are logged and returned as a failed
result.

Usage:
    service = AIImageService(delay_seconds=0.0)
    result = service.generate_image(AIImageRequest(prompt="Sunset over the ocean"))
    if result.success:
        store.add_item(service_line_item("generate", result.image_url))
"""

from __future__ import annotations

import base64
import hashlib
import random
import struct
import time
from dataclasses import dataclass
from html import escape
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.exceptions import ImageServiceError
from models.cart_item import ItemType, NewItem
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

# Gradient colors of the generated placeholder
GRADIENT_START = "#3B82F6"
GRADIENT_END = "#1E40AF"
WATERMARK = "AI Generated Demo"

PROMPT_FONT_SIZE = 24
LINE_HEIGHT = 30
TEXT_MARGIN = 40
# Average glyph width of a bold sans-serif font, relative to its size
GLYPH_WIDTH_RATIO = 0.58

ENHANCE_FILTER = "contrast(1.2) saturate(1.3) brightness(1.1)"
# Fraction of the radius that stays fully visible when removing the background
BACKGROUND_KEEP_RATIO = 0.7

FALLBACK_SIZE = (512, 512)

# Prices of image services added to the cart
SERVICE_PRICES = {
    "generate": 300.0,
    "enhance": 200.0,
    "remove-background": 250.0,
}

SERVICE_NAMES = {
    "generate": "AI image generation",
    "enhance": "AI image enhancement",
    "remove-background": "AI background removal",
}


@dataclass
class AIImageRequest:
    """Text-to-image request."""

    prompt: str
    negative_prompt: Optional[str] = None
    width: int = 512
    height: int = 512


@dataclass
class ImageResult:
    """Outcome of an image operation."""

    success: bool
    image_url: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, image_url: str) -> "ImageResult":
        return cls(success=True, image_url=image_url)

    @classmethod
    def failed(cls, error: str) -> "ImageResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"success": self.success}
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        if self.error is not None:
            data["error"] = self.error
        return data


def svg_data_url(svg: str) -> str:
    """Encode SVG markup as a base64 data URL."""
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def wrap_prompt(prompt: str, max_width: float, font_size: int = PROMPT_FONT_SIZE) -> List[str]:
    """
    Split ``prompt`` into lines no wider than ``max_width`` pixels.

    Widths are estimated from the character count. A single word wider than
    the limit gets a line of its own.
    """
    char_width = font_size * GLYPH_WIDTH_RATIO
    lines: List[str] = []
    current = ""

    for word in prompt.split():
        candidate = f"{current} {word}" if current else word
        if len(candidate) * char_width > max_width and current:
            lines.append(current)
            current = word
        else:
            current = candidate

    lines.append(current)
    return lines


def sniff_image(data: bytes) -> Tuple[str, Tuple[int, int]]:
    """
    Detect mime type and pixel size of PNG, GIF or JPEG data.

    Returns:
        (mime_type, (width, height)); size falls back to 512x512 when the
        header does not carry it

    Raises:
        ImageServiceError: Data is empty or not a supported image
    """
    if not data:
        raise ImageServiceError("Empty image", "sniff")

    if data.startswith(b"\x89PNG\r\n\x1a\n") and len(data) >= 24:
        width, height = struct.unpack(">II", data[16:24])
        return "image/png", (width, height)

    if data[:6] in (b"GIF87a", b"GIF89a") and len(data) >= 10:
        width, height = struct.unpack("<HH", data[6:10])
        return "image/gif", (width, height)

    if data.startswith(b"\xff\xd8"):
        return "image/jpeg", _jpeg_size(data) or FALLBACK_SIZE

    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp", FALLBACK_SIZE

    raise ImageServiceError("Unsupported image format", "sniff")


def _jpeg_size(data: bytes) -> Optional[Tuple[int, int]]:
    """Read the frame size from the first SOF marker."""
    index = 2
    while index + 9 < len(data):
        if data[index] != 0xFF:
            index += 1
            continue
        marker = data[index + 1]
        if marker in (0xD8, 0x01) or 0xD0 <= marker <= 0xD7:
            index += 2
            continue
        (segment_length,) = struct.unpack(">H", data[index + 2:index + 4])
        if 0xC0 <= marker <= 0xCF and marker not in (0xC4, 0xC8, 0xCC):
            height, width = struct.unpack(">HH", data[index + 5:index + 9])
            return width, height
        index += 2 + segment_length
    return None


def image_digest(image_url: str) -> str:
    """Short content hash, so different images never merge into one cart row."""
    return hashlib.sha1(image_url.encode("utf-8")).hexdigest()[:12]


def service_line_item(operation: str, image_url: str, prompt: str = "") -> NewItem:
    """Cart row for an image produced by the editor."""
    if operation not in SERVICE_PRICES:
        raise ImageServiceError(f"Unknown image operation: {operation}", operation)

    description = prompt[:120] if prompt else SERVICE_NAMES[operation]
    return NewItem(
        type=ItemType.SERVICE,
        name=SERVICE_NAMES[operation],
        description=description,
        price=SERVICE_PRICES[operation],
        quantity=1,
        options={"operation": operation, "image": image_digest(image_url)},
        image_url=image_url,
    )


class AIImageService:
    """
    Produces placeholder images with a simulated delay and failure rate.

    Args:
        delay_seconds: Cosmetic wait before each operation
        success_rate: Probability that generate_image succeeds
        rng: Random source (seed it in tests)
        sleep: Sleep function (replace in tests)
    """

    def __init__(
        self,
        delay_seconds: float = 2.0,
        success_rate: float = 0.7,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.delay_seconds = delay_seconds
        self.success_rate = success_rate
        self._rng = rng or random.Random()
        self._sleep = sleep

    def _wait(self, factor: float = 1.0) -> None:
        if self.delay_seconds > 0:
            self._sleep(self.delay_seconds * factor)

    # =========================================================================
    # GENERATION
    # =========================================================================

    def generate_image(self, request: AIImageRequest) -> ImageResult:
        """Generate a placeholder image for ``request.prompt``."""
        try:
            if not request.prompt or not request.prompt.strip():
                return ImageResult.failed("Prompt is empty")

            self._wait()

            if self._rng.random() >= self.success_rate:
                logger.info("Simulated generation failure")
                return ImageResult.failed("Service temporarily unavailable")

            image_url = self._render_placeholder(
                request.prompt.strip(), request.width, request.height
            )
            logger.info(f"Generated placeholder for prompt ({len(request.prompt)} chars)")
            return ImageResult.ok(image_url)

        except Exception as e:
            logger.error(f"AI generation error: {e}", exc_info=True)
            return ImageResult.failed("Image generation service error")

    def _render_placeholder(self, prompt: str, width: int, height: int) -> str:
        lines = wrap_prompt(prompt, width - TEXT_MARGIN)
        start_y = height / 2 - (len(lines) - 1) * (LINE_HEIGHT / 2)

        text_rows = "".join(
            f'<text x="{width / 2:g}" y="{start_y + index * LINE_HEIGHT:g}">{escape(line)}</text>'
            for index, line in enumerate(lines)
        )

        svg = (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
            f'viewBox="0 0 {width} {height}">'
            '<defs><linearGradient id="bg" x1="0" y1="0" x2="1" y2="1">'
            f'<stop offset="0" stop-color="{GRADIENT_START}"/>'
            f'<stop offset="1" stop-color="{GRADIENT_END}"/>'
            '</linearGradient></defs>'
            f'<rect width="{width}" height="{height}" fill="url(#bg)"/>'
            f'<g fill="white" font-family="Inter, sans-serif" font-weight="bold" '
            f'font-size="{PROMPT_FONT_SIZE}" text-anchor="middle" dominant-baseline="middle">'
            f'{text_rows}</g>'
            f'<text x="{width / 2:g}" y="{height - 30}" fill="rgba(255,255,255,0.7)" '
            f'font-family="Inter, sans-serif" font-size="16" text-anchor="middle" '
            f'dominant-baseline="middle">{WATERMARK}</text>'
            '</svg>'
        )
        return svg_data_url(svg)

    # =========================================================================
    # EDITING
    # =========================================================================

    def enhance_image(self, data: bytes) -> ImageResult:
        """Return ``data`` with a contrast/saturation/brightness boost."""
        try:
            self._wait(0.75)
            mime_type, (width, height) = sniff_image(data)
            svg = (
                f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
                f'viewBox="0 0 {width} {height}">'
                f'<image href="{_data_url(mime_type, data)}" width="{width}" height="{height}" '
                f'style="filter: {ENHANCE_FILTER}"/>'
                '</svg>'
            )
            return ImageResult.ok(svg_data_url(svg))

        except ImageServiceError as e:
            logger.warning(f"Enhance rejected input: {e}")
            return ImageResult.failed("Could not enhance the image")
        except Exception as e:
            logger.error(f"Enhance error: {e}", exc_info=True)
            return ImageResult.failed("Could not enhance the image")

    def remove_background(self, data: bytes) -> ImageResult:
        """Return ``data`` faded to transparent outside a centered circle."""
        try:
            self._wait()
            mime_type, (width, height) = sniff_image(data)
            radius = min(width, height) / 2
            svg = (
                f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
                f'viewBox="0 0 {width} {height}">'
                '<defs>'
                f'<radialGradient id="fade" gradientUnits="userSpaceOnUse" '
                f'cx="{width / 2:g}" cy="{height / 2:g}" r="{radius:g}">'
                '<stop offset="0" stop-color="white"/>'
                f'<stop offset="{BACKGROUND_KEEP_RATIO}" stop-color="white"/>'
                '<stop offset="1" stop-color="black"/>'
                '</radialGradient>'
                f'<mask id="cutout"><rect width="{width}" height="{height}" fill="url(#fade)"/></mask>'
                '</defs>'
                f'<image href="{_data_url(mime_type, data)}" width="{width}" height="{height}" '
                'mask="url(#cutout)"/>'
                '</svg>'
            )
            return ImageResult.ok(svg_data_url(svg))

        except ImageServiceError as e:
            logger.warning(f"Background removal rejected input: {e}")
            return ImageResult.failed("Could not remove the background")
        except Exception as e:
            logger.error(f"Background removal error: {e}", exc_info=True)
            return ImageResult.failed("Could not remove the background")


def _data_url(mime_type: str, data: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
