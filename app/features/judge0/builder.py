"""Turn raw code and stdin from the frontend into a Judge0 create request."""

from __future__ import annotations

import re
from typing import Optional

from . import languages
from .schemas import JobRequest

_WHITESPACE = re.compile(r"\s+")


def clean_code(code: str) -> str:
    # editors prefix some submissions with a caret marker
    return code[1:] if code.startswith("^") else code


def normalize_input(raw: Optional[str]) -> Optional[str]:
    """Normalise stdin the way problem authors write it.

    A value wrapped in double quotes is a literal string: the outer quotes go,
    every ``\\"`` sequence is deleted and interior whitespace is preserved.
    Anything else is treated as numeric/token input and loses all whitespace.
    """
    if not raw:
        return None
    trimmed = raw.strip()
    if trimmed.startswith('"') and trimmed.endswith('"'):
        return trimmed[1:-1].replace('\\"', "")
    return _WHITESPACE.sub("", raw)


def build(
    code: str,
    language_name: str,
    input: Optional[str] = None,
    expected_output: Optional[str] = None,
) -> JobRequest:
    language_id = languages.resolve(language_name)
    return JobRequest(
        source_code=clean_code(code),
        language_id=str(language_id),
        stdin=normalize_input(input),
        expected_output=expected_output or None,
    )
