"""
Correctness checker: the two halves around the token loop.

before()
- names must fit the marker convention: flags and options look like "-x" or
  "--name", positionals and commands are bare words.
- no two declarations on the same level share a name or alias (non-commands
  are walked first, then commands, through shared sets; every command then
  checks its children in a fresh scope of its own).

after()
- every required declaration was matched (children of a command only when
  that command was selected).
- a command was selected when the parser requires one.
"""
from .faults import MalformedNameError, MissingCommandError
from .registry import ArgumentKind
from .syntax import Syntax, TokenKind
from .utils import Unset, coalesce


def _wellformed(argument, name, syntax, /):
    kind = syntax.classify(name)
    if argument.kind in (ArgumentKind.FLAG, ArgumentKind.OPTION):
        if kind is TokenKind.LONG:
            return True
        return kind is TokenKind.COMBO and len(name) == len(syntax.short) + 1
    return kind is TokenKind.WORD and not name.startswith(syntax.short)


def validate(registry, syntax=Unset, /):
    syntax = coalesce(syntax, Syntax())
    for argument in registry:
        for name in argument.names:
            if _wellformed(argument, name, syntax):
                continue
            if argument.kind in (ArgumentKind.FLAG, ArgumentKind.OPTION):
                expected = "'%sx' or '%sname'" % (syntax.short, syntax.long)
            else:
                expected = "a bare word without %r" % syntax.short
            raise MalformedNameError(
                "%s name %r must look like %s" % (argument.kind.value, name, expected),
                input=name,
                argument=argument,
                hint="rename the %s" % argument.kind.value,
            )
        if argument.kind is ArgumentKind.COMMAND:
            validate(argument.registry, syntax)


def before(registry, syntax=Unset, /):
    validate(registry, syntax)
    registry.checkbefore(set(), set())


def after(registry, route=(), /, required=False):
    registry.checkafter()
    if required and not route:
        names = [command.name for command in registry.commands()]
        raise MissingCommandError(
            "not specified command",
            hint=("specify one of: %s" % ", ".join(names)) if names else "declare a command first",
        )


__all__ = (
    "validate",
    "before",
    "after",
)
