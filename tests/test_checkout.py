"""
Tests for checkout validation, the storefront catalog and translations.
"""

import pytest

from core.exceptions import CheckoutValidationError
from models.cart_item import ItemType
from modules.catalog import CARTRIDGES, cartridge_line_item, storefront
from modules.checkout import _sanitize_text, validate_customer_info
from modules.image_defaults import GENERIC_DEFAULT_SVG, get_default_image
from modules.i18n import I18nManager, translate


class TestSanitizeText:

    def test_strips_html_and_whitespace(self):
        assert _sanitize_text("  <b>Ann</b>  ") == "Ann"

    def test_script_tags_removed(self):
        assert "<script>" not in _sanitize_text("<script>alert(1)</script>Ann")

    def test_empty_values(self):
        assert _sanitize_text(None) == ""
        assert _sanitize_text("") == ""

    def test_truncates(self):
        assert _sanitize_text("x" * 300, max_length=200) == "x" * 200


class TestValidateCustomerInfo:

    def test_valid_form(self):
        info = validate_customer_info({
            "name": " Ann ",
            "email": "a@b.c",
            "phone": "+7 900 000-00-00",
            "address": "Moscow",
        })

        assert info.name == "Ann"
        assert info.phone == "+7 900 000-00-00"
        assert info.address == "Moscow"

    def test_address_optional(self):
        info = validate_customer_info({"name": "Ann", "email": "a@b.c", "phone": "1", "address": "  "})

        assert info.address is None

    def test_missing_fields_listed(self):
        with pytest.raises(CheckoutValidationError) as exc_info:
            validate_customer_info({"name": "Ann", "email": "", "phone": "   "})

        assert exc_info.value.missing_fields == ["email", "phone"]
        assert exc_info.value.status_code == 400

    def test_markup_only_counts_as_missing(self):
        with pytest.raises(CheckoutValidationError) as exc_info:
            validate_customer_info({"name": "<i></i>", "email": "a@b.c", "phone": "1"})

        assert exc_info.value.missing_fields == ["name"]


class TestCatalog:

    def test_cartridge_line_item(self):
        item = cartridge_line_item("canon-pg-445", 2)

        assert item.type == ItemType.CARTRIDGE
        assert item.name == "Canon PG-445"
        assert item.price == 1650.0
        assert item.quantity == 2
        assert item.image_url.startswith("data:image/svg+xml")

    def test_default_images_per_type(self):
        images = {get_default_image(item_type) for item_type in ItemType}

        assert len(images) == 3
        assert all(image.startswith("data:image/svg+xml") for image in images)
        assert get_default_image("service") == get_default_image(ItemType.SERVICE)
        assert get_default_image("poster") == GENERIC_DEFAULT_SVG
        assert GENERIC_DEFAULT_SVG not in images

    def test_unknown_sku(self):
        assert cartridge_line_item("nope") is None

    def test_refill_and_new_are_separate_lines(self, store):
        store.add_item(cartridge_line_item("hp-123-black"))
        store.add_item(cartridge_line_item("hp-123-refill"))
        store.add_item(cartridge_line_item("hp-123-black"))

        assert len(store.items) == 2
        assert store.get_total_items() == 3

    def test_storefront(self):
        data = storefront()

        assert data["name"] == "PrintStudio"
        assert len(data["services"]) == 3
        assert {c["sku"] for c in data["cartridges"]} == set(CARTRIDGES)
        assert "phone" in data["contacts"]


class TestTranslations:

    def test_default_language_is_russian(self):
        assert translate("cart.cleared") == "Корзина очищена"

    def test_english(self):
        assert translate("cart.cleared", lang="en") == "Cart cleared"

    def test_substitution(self):
        message = translate("checkout.order_placed", lang="en", order_id="ORD-ABC")

        assert message == "Order placed! Order number: ORD-ABC"

    def test_unknown_key_returns_key(self):
        assert translate("nope.missing", lang="en") == "nope.missing"

    def test_missing_language_falls_back_to_default(self, tmp_path):
        (tmp_path / "ru.json").write_text('{"a": {"b": "русский"}}', encoding="utf-8")
        manager = I18nManager(tmp_path)

        assert manager.get_translation("a.b", "en") == "русский"

    def test_both_files_have_same_keys(self):
        manager = I18nManager()

        def keys(tree, prefix=""):
            result = set()
            for key, value in tree.items():
                if isinstance(value, dict):
                    result |= keys(value, f"{prefix}{key}.")
                else:
                    result.add(prefix + key)
            return result

        assert keys(manager._translations["ru"]) == keys(manager._translations["en"])
