"""Ingredient text -> canonical tokens used for knowledge-base matching."""
import re
from typing import List, Optional

_WHITESPACE_RE = re.compile(r"\s+")
_INS_PREFIX_RE = re.compile(r"^ins\s*", re.IGNORECASE)
_E_CODE_RE = re.compile(r"^e\s*(\d+)", re.IGNORECASE)
_BRACKETS_RE = re.compile(r"[()\[\]]")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")
_SEPARATORS_RE = re.compile(r"[,;./]")


def normalize_token(raw: str) -> str:
    """Canonical form of one ingredient fragment.

    Lower-cased, periods removed, whitespace collapsed, and additive codes
    folded so that "INS 211", "E 211" and "e211" all become "e211".
    """
    t = raw.strip().lower()
    t = t.replace(".", "")
    t = _WHITESPACE_RE.sub(" ", t)
    t = _INS_PREFIX_RE.sub("e", t, count=1)
    return _E_CODE_RE.sub(r"e\1", t, count=1)


def extract_tokens(ingredients_raw: Optional[str] = "") -> List[str]:
    """Split an ingredient list into unique tokens, keeping first-seen order.

    Parenthesised sub-ingredients become separate tokens.
    """
    cleaned = _BRACKETS_RE.sub(",", ingredients_raw or "")
    cleaned = _MULTI_SPACE_RE.sub(" ", cleaned)

    seen = set()
    tokens: List[str] = []
    for part in _SEPARATORS_RE.split(cleaned):
        token = normalize_token(part)
        if token and token not in seen:
            seen.add(token)
            tokens.append(token)
    return tokens
