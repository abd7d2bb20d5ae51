"""
AI editor routes.

Thin wrappers over AIImageService. Uploaded images arrive as multipart
``image`` files; results come back as {success, imageUrl?, error?}.
"""

from flask import Blueprint, current_app, request

from core.exceptions import ImageServiceError
from services.image_service import AIImageRequest, AIImageService, service_line_item
from logging_config import get_logger
from routes.common import _, cart_payload, error_response, get_store, json_body


# Module logger
logger = get_logger(__name__)

ai_bp = Blueprint("ai", __name__)


def _get_image_service() -> AIImageService:
    return current_app.config["IMAGE_SERVICE"]


def _uploaded_image():
    upload = request.files.get("image")
    if upload is None:
        return None
    return upload.read()


def _result_response(result):
    body = result.to_dict()
    if not result.success:
        body["message"] = _("ai.failed", error=result.error)
        return body, 502
    return body


@ai_bp.route("/api/ai/generate", methods=["POST"])
def generate():
    """Generate a placeholder image. Body: {prompt, negativePrompt?}"""
    data = json_body()
    prompt = str(data.get("prompt", "")).strip()
    if not prompt:
        return {"success": False, "error": "empty_prompt", "message": _("ai.empty_prompt")}, 400

    result = _get_image_service().generate_image(
        AIImageRequest(prompt=prompt, negative_prompt=data.get("negativePrompt"))
    )
    return _result_response(result)


@ai_bp.route("/api/ai/enhance", methods=["POST"])
def enhance():
    """Enhance an uploaded image."""
    data = _uploaded_image()
    if not data:
        return {"success": False, "error": "no_image", "message": _("ai.no_image")}, 400
    return _result_response(_get_image_service().enhance_image(data))


@ai_bp.route("/api/ai/remove-background", methods=["POST"])
def remove_background():
    """Fade out the background of an uploaded image."""
    data = _uploaded_image()
    if not data:
        return {"success": False, "error": "no_image", "message": _("ai.no_image")}, 400
    return _result_response(_get_image_service().remove_background(data))


@ai_bp.route("/api/ai/add-to-cart", methods=["POST"])
def add_to_cart():
    """
    Put a produced image in the cart as a ``service`` line.

    Body: {operation, imageUrl, prompt?}
    """
    data = json_body()
    image_url = data.get("imageUrl")
    if not image_url:
        return {"error": "no_image", "message": _("ai.no_image")}, 400

    try:
        new_item = service_line_item(
            str(data.get("operation", "generate")), str(image_url), str(data.get("prompt", ""))
        )
    except ImageServiceError as e:
        return error_response(e, _("errors.invalid_request"))

    store = get_store()
    item_id = store.add_item(new_item)
    payload = cart_payload(store)
    payload["itemId"] = item_id
    payload["message"] = _("ai.added")
    return payload, 201
