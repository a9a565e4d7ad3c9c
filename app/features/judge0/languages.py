from __future__ import annotations

from typing import Dict, List

from .errors import UnsupportedLanguage
from .schemas import LanguageInfo

# Judge0 CE language ids
LANGUAGE_IDS: Dict[str, int] = {
    "C": 50,
    "C++": 54,
    "Java": 62,
    "Python": 71,
    "JavaScript": 63,
    "TypeScript": 74,
    "Ruby": 72,
    "Go": 60,
    "Rust": 73,
}


def resolve(name: str) -> int:
    """Return the Judge0 language id for ``name`` (exact, case-sensitive)."""
    try:
        return LANGUAGE_IDS[name]
    except (KeyError, TypeError):
        raise UnsupportedLanguage(str(name)) from None


def supported_languages() -> List[LanguageInfo]:
    return [LanguageInfo(id=lang_id, name=name) for name, lang_id in LANGUAGE_IDS.items()]
