"""
Company name normalisation for edit-distance comparison.

Why normalise before comparing?
  "Café Lumière SARL" vs "cafe lumiere" → several edits apart as raw text,
  identical once case, diacritics and legal-form words are gone.

  "Acme Inc" vs "ACME   Ltd" → both become "acme", distance 0.

Concept: a fixed sequence of string transformations, applied in order.
The order matters: tokens are matched against lowercase, mark-free text,
so the legal-form pass must run after case folding and mark stripping.
"""

import re
from typing import Iterable, Optional

from .settings import DEFAULT_LEGAL_FORMS, DedupSettings, fold_legal_forms, fold_text

_WHITESPACE = re.compile(r"\s+")


class NameNormalizer:
    """
    Maps a raw company name to its canonical comparable form.

    The legal-form token set is injected at construction and compiled into
    a single whole-word pattern; instances are immutable after that.

    Usage:
        normalizer = NameNormalizer(["inc", "ltd"])
        normalizer("Acme  Inc")   # → "acme"
    """

    def __init__(self, legal_forms: Optional[Iterable[str]] = None) -> None:
        # Tokens are folded exactly like the names they will be matched against.
        self._legal_forms = fold_legal_forms(
            DEFAULT_LEGAL_FORMS if legal_forms is None else legal_forms
        )
        self._pattern = self._compile(self._legal_forms)

    @classmethod
    def from_settings(cls, settings: DedupSettings) -> "NameNormalizer":
        return cls(settings.legal_forms)

    @property
    def legal_forms(self) -> tuple[str, ...]:
        return self._legal_forms

    @staticmethod
    def _compile(tokens: tuple[str, ...]) -> Optional[re.Pattern]:
        if not tokens:
            return None
        # Longest first so "lllp" is tried before "llp" and "lp".
        ordered = sorted(tokens, key=len, reverse=True)
        return re.compile(r"\b(?:" + "|".join(map(re.escape, ordered)) + r")\b")

    def __call__(self, name: str) -> str:
        return self.normalize(name)

    def normalize(self, name: str) -> str:
        """
        Produce the canonical form of a company name.

        Pipeline:
          1. Lowercase
          2. NFD decomposition
          3. Strip combining marks
          4. Remove whole-word legal-form tokens, anywhere in the name
          5. Collapse whitespace runs
          6. Trim

        Punctuation is left alone.

        Examples:
          "Acme Inc"                → "acme"
          "Café Corp"               → "cafe"
          "Incorporated Technologies" → "technologies"
          "Coinc"                   → "coinc"
          "Acme   Inc.   "          → "acme ."
        """
        name = fold_text(name)

        if self._pattern is not None:
            name = self._pattern.sub("", name)

        return _WHITESPACE.sub(" ", name).strip()


_DEFAULT_NORMALIZER = NameNormalizer()


def normalize(name: str) -> str:
    """Normalise with the default legal-form token list."""
    return _DEFAULT_NORMALIZER.normalize(name)
