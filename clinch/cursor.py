"""
Forward-only token cursor.

A Cursor walks the raw token list once. Tokens pushed back with prepend()
(values split off an inline "name=value" word) are returned by the very next
next() call and are flagged as pushed, so value-bearing arguments accept them
verbatim even when they look like flags ("--level=-1").
"""
from collections import deque

from .faults import ExhaustedInputError
from .syntax import Syntax
from .utils import Unset, coalesce


class Cursor:
    """
    Peekable, prependable sequence over the invocation tokens.

    Properties
    - atend: True when no tokens remain.
    - pushed: True when the next token was injected with prepend().
    - index: 1-based ordinal of the last token returned by next() in the
      original input (pushed tokens share the ordinal of the word they came from).
    - syntax: the marker convention used by the parse that owns this cursor.
    """
    __slots__ = ("_tokens", "_pushed", "_index", "_syntax")

    def __init__(self, tokens=(), /, syntax=Unset):
        self._tokens = deque(tokens)
        for token in self._tokens:
            if not isinstance(token, str):
                raise TypeError("cursor tokens must be strings")
        self._pushed = 0
        self._index = 0
        self._syntax = coalesce(syntax, Syntax())

    @property
    def atend(self):
        return not self._tokens

    @property
    def pushed(self):
        return self._pushed > 0

    @property
    def index(self):
        return self._index

    @property
    def syntax(self):
        return self._syntax

    def next(self):
        if not self._tokens:
            raise ExhaustedInputError(
                "no more tokens after %s" % ("the start" if not self._index else "position %d" % self._index),
                index=self._index,
            )
        if self._pushed:
            self._pushed -= 1
        else:
            self._index += 1
        return self._tokens.popleft()

    def peek(self):
        return self._tokens[0] if self._tokens else Unset

    def prepend(self, token, /):
        if not isinstance(token, str):
            raise TypeError("prepend() argument must be a string")
        self._tokens.appendleft(token)
        self._pushed += 1

    def remaining(self):
        return tuple(self._tokens)

    def __len__(self):
        return len(self._tokens)

    def __repr__(self):
        return f"cursor(index={self._index}, remaining={list(self._tokens)!r})"


__all__ = ("Cursor",)
