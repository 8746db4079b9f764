r"""
Clinch argument declarations.

Overview
- Declarations
  • Flag: named, presence-only switch (no payload), e.g. -v/--verbose.
  • Option: named switch consuming exactly one following value, e.g. -o/--out.
  • Positional: marker-less named argument matched as a bare word, optionally
    carrying one value ("file data.txt" or "file=data.txt").
  • Command: named sub-argument owning its own nested registry; selected at
    most once per parse.

- Shared interface (what the parse engine relies on)
  • name / aliases / names, kind, withvalue, required, owner
  • process(cursor): consume what the argument needs from the cursor.
  • checkbefore(flags, names): register names, fail on duplicates.
  • checkafter(): fail when required but never matched.
  • misspelled(candidate, suggestions): near-miss test on every name.
  • find(name): self when one of the names matches, else None.
  • child(name): Command only, one level down.
  • reset(): clear the value slot before a new parse.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
    selected fields via read-only properties declared in __introspectable__.

Validation highlights
- Names are non-empty strings without whitespace or '=', unique within a
  declaration. Their shape against the marker convention (e.g. "-x"/"--name"
  for flags and options, bare words for positionals and commands) is checked
  by the pre-parse pass, since the markers belong to the parser.

Quick example:
    >>> from clinch.arguments import Flag, Option, Command
    >>> build = Command("build", "b")
    >>> verbose = build.add(Flag("-v", "--verbose"))
    >>> out = build.add(Option("--out", default="build"))
"""
import functools
import operator
import re
from abc import ABCMeta, abstractmethod

from .faults import (
    DuplicateArgumentError,
    InvalidValueError,
    MissingValueError,
    RepeatedArgumentError,
    RequiredArgumentMissingError,
)
from .registry import ArgumentKind, Registry
from .syntax import TokenKind
from .utils import *


class ArgumentType(ABCMeta):
    """
    Metaclass that turns declarations into introspectable descriptors.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics (e.g., rich.pretty output of a parser).
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                # explicit properties in the class body take precedence
                name: mirror(name) for name in namespace.get("__introspectable__", ()) if name not in namespace
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - flag(name='-v', aliases=('--verbose',), required=False, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, names, /):
    """
    Internal: validate and normalize the names of a declaration.

    Rules
    - at least one name; the first one is the primary name, the rest aliases.
    - every name is a string, non-empty after trimming, without whitespace or '='.
    - no duplicates within the same declaration.

    Raises
    - TypeError: when names are missing or contain non-string entries.
    - ValueError: when a name is empty, malformed, or repeated.
    """
    if not names:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    sanitized = []
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif re.search(r"[\s=]", name):
            raise ValueError(f"{cls.__typename__} names cannot contain whitespaces or '='")
        elif name in sanitized:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        sanitized.append(name)
    return tuple(sanitized)


def _consume(argument, cursor, /):
    """
    Internal: read and convert the single value of a value-bearing argument.

    A token pushed back from an inline "name=value" word is always accepted;
    otherwise the next token must be a plain word, so "--out --verbose" reports
    the missing value instead of swallowing the flag.
    """
    if cursor.atend or (not cursor.pushed and cursor.syntax.classify(cursor.peek()) is not TokenKind.WORD):
        raise MissingValueError(
            "argument %r requires a value that wasn't presented" % argument.name,
            input=argument.name,
            index=cursor.index,
            argument=argument,
            hint="pass it after a space or inline (for example: %s=<value>)" % argument.name,
        )
    token = cursor.next()
    try:
        return argument.type(token)
    except (TypeError, ValueError) as exception:
        raise InvalidValueError(
            "invalid value %r for argument %r" % (token, argument.name),
            input=argument.name,
            index=cursor.index,
            argument=argument,
            value=token,
            hint="check the expected format of %r" % argument.name,
            exception=exception,
        ) from exception


class Argument(metaclass=ArgumentType):
    """
    Abstract declaration shared by every argument kind.

    Properties
    - name: primary name; aliases: the remaining names; names: both, in order.
    - required: must be matched by the end of the parse.
    - owner: route of the owning command (tuple of names, () for the top level).
    - defined: whether the last parse matched this declaration.
    """
    __kind__ = Unset

    __introspectable__ = (
        "name",
        "aliases",
        "required",
        "owner",
        "defined",
    )

    def __init__(self, *names, required=False):
        names = _sanitize_names(type(self), names)
        self._name = names[0]
        self._aliases = names[1:]
        self._required = bool(required)
        self._owner = ()
        self._defined = False

    @property
    def kind(self):
        return type(self).__kind__

    @property
    def names(self):
        return (self._name,) + self._aliases

    @property
    def withvalue(self):
        return False

    @property
    def value(self):
        return self._defined

    def attach(self, owner, /):
        self._owner = tuple(owner)

    def find(self, name, /):
        return self if name in self.names else None

    @abstractmethod
    def process(self, cursor, /):
        raise NotImplementedError

    def reset(self):
        self._defined = False

    def _mark(self, cursor, /):
        if self._defined:
            raise RepeatedArgumentError(
                "argument %r was already provided" % self._name,
                input=self._name,
                index=cursor.index,
                argument=self,
                hint="keep a single %r; each argument can be specified only once" % self._name,
            )
        self._defined = True

    def checkbefore(self, flags, names, /):
        """
        Register this declaration's names into the shared sets.

        Marker-bearing kinds (flags and options) go into 'flags', bare-word
        kinds (positionals and commands) into 'names'.
        """
        seen = flags if self.kind in (ArgumentKind.FLAG, ArgumentKind.OPTION) else names
        for name in self.names:
            if name in flags or name in names:
                raise DuplicateArgumentError(
                    "%s %r redefines the name %r already used by another argument" % (
                        type(self).__typename__, self._name, name
                    ),
                    input=name,
                    argument=self,
                    hint="rename one of them; names and aliases must be unique on each level",
                )
            seen.add(name)

    def checkafter(self):
        if self._required and not self._defined:
            raise RequiredArgumentMissingError(
                "required argument %r is not defined" % self._name,
                input=self._name,
                argument=self,
                hint="add %r to the command line" % self._name,
            )

    def misspelled(self, candidate, suggestions, /, cutoff=CUTOFF):
        """
        Append every name of this declaration similar to candidate.

        Names already present in suggestions are not repeated. Returns True
        when at least one name was similar.
        """
        matched = False
        for name in self.names:
            if similar(candidate, name, cutoff):
                matched = True
                if name not in suggestions:
                    suggestions.append(name)
        return matched


class Flag(Argument):
    """
    Named, presence-only switch.

    Its presence is the signal: value is True once matched.
    """
    __kind__ = ArgumentKind.FLAG

    def process(self, cursor, /):
        self._mark(cursor)


class Option(Argument):
    """
    Named switch consuming exactly one value.

    Parameters
    - names: one or more names ("-o", "--out"); the first is primary.
    - type: converter applied to the raw token (ValueError/TypeError become
      InvalidValueError).
    - default: value reported when the option was not given.
    - required: must be given.
    """
    __kind__ = ArgumentKind.OPTION

    __introspectable__ = Argument.__introspectable__ + (
        "type",
        "default",
    )

    def __init__(self, *names, type=str, default=None, required=False):
        super().__init__(*names, required=required)
        if not callable(type):
            raise TypeError(f"{Option.__typename__} 'type' must be callable")
        self._type = type
        self._default = default
        self._value = Unset

    @property
    def withvalue(self):
        return True

    @property
    def value(self):
        return coalesce(self._value, self._default)

    def process(self, cursor, /):
        self._mark(cursor)
        self._value = _consume(self, cursor)

    def reset(self):
        super().reset()
        self._value = Unset


class Positional(Argument):
    """
    Marker-less named argument matched as a bare word.

    With value=True it consumes one value, either the next token
    ("file data.txt") or an inline one ("file=data.txt"); otherwise it behaves
    like a flag spelled without markers.
    """
    __kind__ = ArgumentKind.POSITIONAL

    __introspectable__ = Argument.__introspectable__ + (
        "type",
        "default",
    )

    def __init__(self, name, /, *aliases, value=False, type=str, default=None, required=False):
        super().__init__(name, *aliases, required=required)
        if not callable(type):
            raise TypeError(f"{Positional.__typename__} 'type' must be callable")
        self._withvalue = bool(value)
        self._type = type
        self._default = default
        self._value = Unset

    @property
    def withvalue(self):
        return self._withvalue

    @property
    def value(self):
        if not self._withvalue:
            return self._defined
        return coalesce(self._value, self._default)

    def process(self, cursor, /):
        self._mark(cursor)
        if self._withvalue:
            self._value = _consume(self, cursor)

    def reset(self):
        super().reset()
        self._value = Unset


class Command(Argument):
    """
    Named sub-argument owning a nested registry.

    Once selected, the names of its children become resolvable (after the
    top-level ones). A child command is a sub-command: selecting it refines the
    selection instead of adding a second command.
    """
    __kind__ = ArgumentKind.COMMAND

    __introspectable__ = (
        "name",
        "aliases",
        "owner",
        "defined",
        "arguments",
    )

    def __init__(self, name, /, *aliases):
        super().__init__(name, *aliases)
        self._registry = Registry((self._name,))

    @property
    def registry(self):
        return self._registry

    @property
    def arguments(self):
        return self._registry.arguments

    @property
    def route(self):
        return self._owner + (self._name,)

    def attach(self, owner, /):
        super().attach(owner)
        self._registry.reroute(self.route)

    def add(self, argument, /):
        return self._registry.add(argument)

    def command(self, name, /, *aliases):
        return self.add(Command(name, *aliases))

    def child(self, name, /):
        return self._registry.find(name)

    def process(self, cursor, /):
        self._mark(cursor)

    def reset(self):
        super().reset()
        self._registry.reset()

    def checkbefore(self, flags, names, /):
        super().checkbefore(flags, names)
        # children live in their own scope: they may shadow outer names
        self._registry.checkbefore(set(), set())

    def checkafter(self):
        if self._defined:
            self._registry.checkafter()


__all__ = (
    "ArgumentKind",
    "Argument",
    "Flag",
    "Option",
    "Positional",
    "Command",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
