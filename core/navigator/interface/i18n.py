"""Interface strings: LANG_PACK lookup with English fallback."""

import os
from typing import Callable, List, Optional

from config import get_user_lang
from core.navigator.interface.constants import LANG_PACK

BASE_LANG = "en"
LANG_ENV = "MILLER_LANG"


def _backfill(base_lang: str = BASE_LANG) -> None:
    base = LANG_PACK[base_lang]
    for lang, strings in LANG_PACK.items():
        if lang != base_lang:
            for key, text in base.items():
                strings.setdefault(key, text)


_backfill()


def available_languages() -> List[str]:
    return sorted(LANG_PACK)


def effective_lang(preferred: Optional[str] = None) -> str:
    """MILLER_LANG wins, tests always run in English, then the argument, then config."""
    forced = os.getenv(LANG_ENV)
    if forced in LANG_PACK:
        return forced
    if os.getenv("PYTEST_CURRENT_TEST"):
        return BASE_LANG
    for candidate in (preferred, get_user_lang()):
        if candidate in LANG_PACK:
            return candidate
    return BASE_LANG


def translate(key: str, lang: Optional[str] = None, **kwargs) -> str:
    """Look `key` up in `lang` (default: the effective language); unknown keys come back as is."""
    strings = LANG_PACK.get(lang or effective_lang(), LANG_PACK[BASE_LANG])
    template = strings.get(key, key)
    if not kwargs:
        return template
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return template


def translator(lang: Optional[str] = None) -> Callable[..., str]:
    """`translate` pinned to one language, as handed to renderers."""
    active = effective_lang(lang)

    def t(key: str, **kwargs) -> str:
        return translate(key, active, **kwargs)

    return t


__all__ = ["available_languages", "effective_lang", "translate", "translator"]
