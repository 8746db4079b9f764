"""
Token-syntax convention and token classifier.

The engine never hard-codes dashes: a Syntax instance supplies the short and
long markers and answers the three-way classification every raw word goes
through before name resolution.

    >>> syntax = Syntax()
    >>> syntax.classify("--out")
    <TokenKind.LONG: 'long'>
    >>> syntax.classify("-abc")
    <TokenKind.COMBO: 'combo'>
    >>> syntax.classify("build")
    <TokenKind.WORD: 'word'>
"""
from enum import Enum
from typing import final


class TokenKind(Enum):
    LONG = "long"  # --name: looked up by full name
    COMBO = "combo"  # -abc: one single-character flag per character
    WORD = "word"  # build: command or marker-less argument


@final
class Syntax:
    """
    Marker convention for named arguments.

    Parameters
    - short: marker of single-character flags and flag combos (default "-").
    - long: marker of long-form arguments (default "--"); it must start with
      the short marker so "--x" is never mistaken for a combo.
    """
    __slots__ = ("_short", "_long")

    def __init__(self, short="-", long="--"):
        if not isinstance(short, str) or not isinstance(long, str):
            raise TypeError("syntax markers must be strings")
        if not short or len(long) <= len(short) or not long.startswith(short):
            raise ValueError("long marker must extend the short marker (e.g., '-' and '--')")
        self._short = short
        self._long = long

    @property
    def short(self):
        return self._short

    @property
    def long(self):
        return self._long

    def classify(self, word, /):
        if word.startswith(self._long) and len(word) > len(self._long):
            return TokenKind.LONG
        if word.startswith(self._short) and len(word) > len(self._short):
            if not any(marker in word[len(self._short):] for marker in self._short):
                return TokenKind.COMBO
        return TokenKind.WORD

    def flags(self, combo, /):
        """
        Expand a combo word into the single-character flag names it bundles.
        """
        return [self._short + char for char in combo[len(self._short):]]

    def flag(self, char, /):
        return self._short + char

    @staticmethod
    def split(word, /):
        """
        Split a word at its first '='.

        Returns (name, value) where value is None when the word has no '='
        and "" when the '=' has nothing after it.
        """
        name, separator, value = word.partition("=")
        return name, (value if separator else None)

    def __eq__(self, other):
        if not isinstance(other, Syntax):
            return NotImplemented
        return (self._short, self._long) == (other._short, other._long)

    def __hash__(self):
        return hash((self._short, self._long))

    def __repr__(self):
        return f"syntax(short={self._short!r}, long={self._long!r})"


__all__ = (
    "TokenKind",
    "Syntax",
)
