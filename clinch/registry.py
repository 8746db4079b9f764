"""
Argument registry: the declarations valid at one nesting level.

A Registry keeps declarations in insertion order (duplicate and required checks
walk it in that order, so error messages are deterministic) and answers
name-based lookups. The top-level registry belongs to CmdLine; every Command
owns a nested one.

Back-references are plain identifiers: a registry carries the route of the
command that owns it (a tuple of command names, () for the top level), and
every declaration added to it records that route as its owner.
"""
from enum import Enum
from types import MappingProxyType

from .faults import AlreadyRegisteredError, NullArgumentError


class ArgumentKind(Enum):
    FLAG = "flag"
    OPTION = "option"
    COMMAND = "command"
    POSITIONAL = "positional"


class Registry:
    __slots__ = ("_arguments", "_route")

    def __init__(self, route=(), /):
        self._arguments = []
        self._route = tuple(route)

    @property
    def route(self):
        return self._route

    @property
    def arguments(self):
        return tuple(self._arguments)

    @property
    def names(self):
        """
        Read-only name → declaration mapping (primary names and aliases).

        When two declarations share a name the first one wins, matching find();
        the pre-parse check reports such collisions.
        """
        names = {}
        for argument in self._arguments:
            for name in argument.names:
                names.setdefault(name, argument)
        return MappingProxyType(names)

    def add(self, argument, /):
        if argument is None:
            raise NullArgumentError("attempt to add None to the command line as argument")
        if argument in self:
            raise AlreadyRegisteredError(
                "argument %r is already in the command line parser" % argument.name,
                input=argument.name,
                argument=argument,
            )
        argument.attach(self._route)
        self._arguments.append(argument)
        return argument

    def reroute(self, route, /):
        self._route = tuple(route)
        for argument in self._arguments:
            argument.attach(self._route)

    def find(self, name, /):
        """
        Return the first declaration answering to name, or None.

        Commands only answer to their own names; their children are reached
        through Command.child().
        """
        for argument in self._arguments:
            if (found := argument.find(name)) is not None:
                return found
        return None

    def commands(self):
        return tuple(argument for argument in self._arguments if argument.kind is ArgumentKind.COMMAND)

    def checkbefore(self, flags, names, /):
        """
        Walk non-command declarations, then commands, through the shared sets.
        """
        commands = []
        for argument in self._arguments:
            if argument.kind is ArgumentKind.COMMAND:
                commands.append(argument)
            else:
                argument.checkbefore(flags, names)
        for command in commands:
            command.checkbefore(flags, names)

    def checkafter(self):
        for argument in self._arguments:
            argument.checkafter()

    def reset(self):
        for argument in self._arguments:
            argument.reset()

    def __iter__(self):
        return iter(tuple(self._arguments))

    def __len__(self):
        return len(self._arguments)

    def __contains__(self, argument):
        # identity, not equality: two equal-looking declarations are still two
        return any(argument is registered for registered in self._arguments)

    def __getitem__(self, name):
        if (argument := self.find(name)) is None:
            raise KeyError(name)
        return argument

    def __repr__(self):
        return f"registry(route={self._route!r}, arguments={self._arguments!r})"


__all__ = (
    "ArgumentKind",
    "Registry",
)
