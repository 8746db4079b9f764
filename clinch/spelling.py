"""
Misspelling detector.

Given a word nothing answered to, collect the declared names it is a near miss
of, in declaration order and without duplicates. Commands contribute their own
names; a command on the selected route also contributes its children (and so
on down the route), since those are the names the user could have meant at
this point of the command line.

Diagnostics only: it never changes what a word resolves to.
"""
from .registry import ArgumentKind
from .utils import CUTOFF


def _collect(candidate, registry, route, suggestions, cutoff):
    matched = False
    for argument in registry:
        if argument.misspelled(candidate, suggestions, cutoff):
            matched = True
        if argument.kind is ArgumentKind.COMMAND and any(argument is step for step in route):
            if _collect(candidate, argument.registry, route, suggestions, cutoff):
                matched = True
    return matched


def misspelled(candidate, registry, route=(), /, cutoff=CUTOFF):
    """
    Return (matched, suggestions) for an unrecognized word.

    Parameters
    - candidate: the word as typed (after '=' splitting).
    - registry: the top-level registry.
    - route: the selected commands, outermost first.
    - cutoff: similarity threshold in [0, 1].

    matched is True iff suggestions is non-empty.
    """
    if not 0.0 <= cutoff <= 1.0:
        raise ValueError("misspelled() cutoff must be in [0.0, 1.0]")
    suggestions = []
    matched = _collect(candidate, registry, tuple(route), suggestions, cutoff)
    return matched, tuple(suggestions)


__all__ = (
    "CUTOFF",
    "misspelled",
)
