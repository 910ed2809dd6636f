"""Character comparison policy shared by layout building and correctness checks."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

# Katakana block letters map onto hiragana at a fixed offset.
KATAKANA_START = 0x30A1
KATAKANA_END = 0x30F6
KANA_OFFSET = 0x60


def to_hiragana(text: str) -> str:
    """Return ``text`` with katakana letters replaced by their hiragana forms."""

    return "".join(
        chr(ord(char) - KANA_OFFSET) if KATAKANA_START <= ord(char) <= KATAKANA_END else char
        for char in text
    )


def strip_marks(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return unicodedata.normalize("NFC", stripped)


@dataclass(frozen=True)
class AlphabetPolicy:
    """How authored answers and guesses are compared.

    The policy only folds equivalent spellings of a character onto one form;
    it never drops or filters characters. Validating input against an
    alphabet is left to the host.
    """

    fold_case: bool = True
    fold_width: bool = True
    fold_kana: bool = True
    strip_diacritics: bool = False

    def compose(self, text: str) -> str:
        """Unicode composition only: NFKC when folding width, NFC otherwise."""
        return unicodedata.normalize("NFKC" if self.fold_width else "NFC", text)

    def normalize(self, text: str) -> str:
        if not text:
            return ""
        text = self.compose(text)
        if self.strip_diacritics:
            text = strip_marks(text)
        if self.fold_kana:
            text = to_hiragana(text)
        if self.fold_case:
            text = text.upper()
        return text

    def matches(self, expected: str, guess: str) -> bool:
        if not guess:
            return False
        return self.normalize(expected) == self.normalize(guess)


DEFAULT_ALPHABET = AlphabetPolicy()


__all__ = ["AlphabetPolicy", "DEFAULT_ALPHABET", "strip_marks", "to_hiragana"]
