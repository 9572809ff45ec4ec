import json
import logging
import os
from typing import Dict, Any, Optional
from app.config.settings import config

logger = logging.getLogger(__name__)

class I18n:
    """Simple internationalization helper"""

    def __init__(self):
        self.locales: Dict[str, Dict[str, Any]] = {}
        self.default_locale = config.i18n.default_locale
        self.load_locales()

    def load_locales(self):
        """Load locale files from app/locales directory"""
        locales_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "locales")

        if not os.path.exists(locales_dir):
            logger.warning(f"Locales directory not found at {locales_dir}")
            return

        for filename in os.listdir(locales_dir):
            if filename.endswith(".json"):
                locale_code = filename[:-5]
                try:
                    with open(os.path.join(locales_dir, filename), "r", encoding="utf-8") as f:
                        self.locales[locale_code] = json.load(f)
                except (OSError, ValueError) as e:
                    logger.error(f"Error loading locale {locale_code}: {e}")

    def lookup(self, key: str, locale: str) -> Optional[str]:
        """Resolve a dotted key (e.g. "error.invalid_id") in one locale"""
        value: Any = self.locales.get(locale, {})
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        return value if isinstance(value, str) else None

    def get(self, key: str, locale: Optional[str] = None, **kwargs) -> str:
        """Get translated string by key, falling back to the default locale, then the key"""
        value = None
        if locale:
            value = self.lookup(key, locale)
        if value is None:
            value = self.lookup(key, self.default_locale)
        if value is None:
            return key

        try:
            return value.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return value


i18n = I18n()
