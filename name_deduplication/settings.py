"""
Pydantic v2 settings for the duplicate finder.

Key concepts:
  - frozen model: settings are built once and never mutated afterwards
  - field_validator: legal-form tokens are cleaned before the model is built
  - defaults live in module-level constants so callers can reuse them
"""

import unicodedata
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_THRESHOLD = 1         # max Levenshtein distance inside a group
DEFAULT_MAX_LENGTH_GAP = 10   # normalized-length difference that stops a scan

# Company legal-form tokens removed during normalisation, in lookup order.
DEFAULT_LEGAL_FORMS: tuple[str, ...] = (
    "inc", "ltd", "corp", "corporation", "company", "co", "llc", "srl", "srls",
    "gmbh", "sa", "sas", "oy", "ab", "bv", "ag", "kg", "kft", "pte", "plc",
    "ltda", "spa", "nv", "as", "aps", "sro", "zrt", "ooo", "sde", "kda", "kk",
    "kabushiki", "kaisha", "pty", "limited", "unlimited", "partnership", "llp",
    "lllp", "lp", "ulc", "incorporated", "sociedad", "anonima", "gesellschaft",
    "mit", "beschrankter", "haftung", "aktiengesellschaft", "societa",
    "responsabilita", "limitat", "societe", "anonyme", "naamloze",
    "vennootschap", "aktieselskab", "aktiebolag", "societate", "cu",
    "raspundere", "limitata", "osakeyhtio", "yhtiot", "korlátolt",
    "felelősségű", "társaság", "ansvar",
)


def _is_mark(ch: str) -> bool:
    # Some marks (e.g. U+034F) have combining class 0 but are still category Mn
    return bool(unicodedata.combining(ch)) or unicodedata.category(ch) == "Mn"


def fold_text(value: str) -> str:
    """Lowercase, NFD-decompose and drop combining marks: 'Café' -> 'cafe'."""
    decomposed = unicodedata.normalize("NFD", value.lower())
    return "".join(ch for ch in decomposed if not _is_mark(ch))


def fold_legal_forms(tokens: Iterable[str]) -> tuple[str, ...]:
    """
    Fold each token the same way names are folded and drop duplicates.

    'Korlátolt' becomes 'korlatolt' so it still matches once the name's
    diacritics are gone.

    Raises:
        ValueError: not a sequence of strings, or a token is blank or
                    contains whitespace.
    """
    if isinstance(tokens, str) or not hasattr(tokens, "__iter__"):
        raise ValueError("legal_forms must be a sequence of strings")

    folded: list[str] = []
    for token in tokens:
        if not isinstance(token, str):
            raise ValueError(f"legal form token must be a string: {token!r}")
        cleaned = fold_text(token.strip())
        if not cleaned or any(ch.isspace() for ch in cleaned):
            raise ValueError(f"legal form token must be a single word: {token!r}")
        if cleaned not in folded:
            folded.append(cleaned)
    return tuple(folded)


class DedupSettings(BaseModel):
    """
    Tuning knobs for normalisation and clustering.

    Invalid values raise pydantic.ValidationError at construction time, so
    a bad command line never reaches the clustering loop.
    """

    model_config = ConfigDict(frozen=True)

    threshold: int = Field(default=DEFAULT_THRESHOLD, ge=0)
    max_length_gap: int = Field(default=DEFAULT_MAX_LENGTH_GAP, ge=0)
    legal_forms: tuple[str, ...] = DEFAULT_LEGAL_FORMS
    complete: bool = False

    @field_validator("legal_forms", mode="before")
    @classmethod
    def clean_legal_forms(cls, v: object) -> tuple[str, ...]:
        return fold_legal_forms(v)
