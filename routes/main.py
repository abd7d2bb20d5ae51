"""
Main routes (storefront, language).
"""

from flask import Blueprint, session

from modules.catalog import storefront
from modules.i18n import get_supported_languages
from routes.common import _, current_language

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index():
    """Landing page data: services, cartridge offers, contacts."""
    data = storefront()
    data["language"] = current_language()
    return data


@main_bp.route("/set_language/<lang>", methods=["GET"])
def set_language(lang: str):
    """Switch the language of user-facing messages."""
    if lang not in get_supported_languages():
        return {"error": "unsupported_language",
                "message": _("errors.unsupported_language", lang=lang)}, 400

    session["language"] = lang
    session.modified = True
    return {"language": lang, "message": _("language.changed")}
