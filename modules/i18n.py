"""
Internationalization (i18n) Module

Translates user-facing messages returned by the JSON routes.

Supported languages:
- Russian (ru), the shop's default
- English (en)

Usage in Python:
    from modules.i18n import translate
    message = translate('checkout.order_placed', lang='en', order_id='ORD-1')
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = {
    'ru': {'name': 'Русский'},
    'en': {'name': 'English'},
}

DEFAULT_LANGUAGE = 'ru'


class I18nManager:
    """Loads translation files and resolves dotted keys."""

    def __init__(self, translations_dir: Optional[Path] = None):
        """
        Initialize i18n manager.

        Args:
            translations_dir: Path to translations directory.
                              Defaults to ./translations in the project root.
        """
        if translations_dir is None:
            translations_dir = Path(__file__).parent.parent / 'translations'

        self.translations_dir = translations_dir
        self._translations: Dict[str, Dict[str, Any]] = {}
        for lang_code in SUPPORTED_LANGUAGES:
            self._translations[lang_code] = self._load_translation(lang_code)

    def _load_translation(self, lang_code: str) -> Dict[str, Any]:
        translation_file = self.translations_dir / f'{lang_code}.json'

        if not translation_file.exists():
            logger.warning(f"Translation file not found: {translation_file}")
            return {}

        try:
            with open(translation_file, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load translation file {translation_file}: {e}")
            return {}

    def get_translation(self, key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
        """
        Get translated string for a dotted key.

        Falls back to the default language, then to the key itself.
        Supports variable substitution: "Order {order_id}" with order_id=...
        """
        value = self._lookup(key, lang)
        if value is None and lang != DEFAULT_LANGUAGE:
            value = self._lookup(key, DEFAULT_LANGUAGE)
        if value is None:
            logger.debug(f"Translation key not found: {key} (lang: {lang})")
            return key

        if kwargs:
            try:
                return value.format(**kwargs)
            except KeyError as e:
                logger.warning(f"Missing variable in translation: {e} (key: {key})")
        return value

    def _lookup(self, key: str, lang: str) -> Optional[str]:
        value: Any = self._translations.get(lang, {})
        for part in key.split('.'):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value if isinstance(value, str) else None

    def is_language_supported(self, lang_code: str) -> bool:
        return lang_code in SUPPORTED_LANGUAGES


# Global i18n manager instance
i18n_manager = I18nManager()


def translate(key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """
    Translate a key to the specified language.

    Example:
        >>> translate('cart.cleared', lang='en')
        'Cart cleared'
    """
    return i18n_manager.get_translation(key, lang, **kwargs)


def get_supported_languages() -> Dict[str, Dict[str, str]]:
    return SUPPORTED_LANGUAGES
