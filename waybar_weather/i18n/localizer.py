"""Localized message lookup backed by gettext `.po` catalogs."""

import logging
from pathlib import Path
from typing import Protocol

from babel import Locale, UnknownLocaleError, default_locale
from babel.messages.pofile import read_po

logger = logging.getLogger(__name__)

LOCALE_DIR = Path(__file__).parent / "locale"
DOMAIN = "waybar-weather"
FALLBACK_LANGUAGE = "en"


class Localizer(Protocol):
    language: str

    def get(self, message_id: str) -> str: ...


def detect_language(configured: str | None = None) -> str:
    """Configured language, else the environment's, else English."""
    return configured or default_locale("LC_MESSAGES") or FALLBACK_LANGUAGE


def parse_locale(tag: str | None) -> Locale:
    """Parse POSIX or BCP 47 style tags, falling back to English."""
    if not tag:
        return Locale.parse(FALLBACK_LANGUAGE)
    tag = tag.split(".")[0].split("@")[0].replace("-", "_")
    try:
        return Locale.parse(tag)
    except (ValueError, UnknownLocaleError):
        logger.warning("Unknown locale %r, falling back to %s", tag, FALLBACK_LANGUAGE)
        return Locale.parse(FALLBACK_LANGUAGE)


class CatalogLocalizer:
    """Looks message ids up in the catalog for one language.

    Ids without a translation are returned unchanged.
    """

    def __init__(
        self,
        language: str = FALLBACK_LANGUAGE,
        locale_dir: Path = LOCALE_DIR,
        domain: str = DOMAIN,
    ):
        self.language = language
        self.locale = parse_locale(language)
        self._messages = _load_catalog(Path(locale_dir), self.locale, domain)

    def get(self, message_id: str) -> str:
        return self._messages.get(message_id) or message_id


def _load_catalog(locale_dir: Path, locale: Locale, domain: str) -> dict[str, str]:
    for name in (str(locale), locale.language):
        path = locale_dir / name / "LC_MESSAGES" / f"{domain}.po"
        if not path.exists():
            continue
        with open(path, "rb") as f:
            catalog = read_po(f, locale=locale, domain=domain)
        return {
            message.id: message.string
            for message in catalog
            if isinstance(message.id, str) and message.id and message.string
            and not message.fuzzy
        }
    logger.debug("No %s catalog for %s in %s", domain, locale, locale_dir)
    return {}
