"""
Clinch parse engine: CmdLine and the per-parse state.

What this module provides
- CmdLine: holds the top-level registry and parses a token list against it.
  • add()/command(): register declarations (configuration time).
  • parse(): pre-parse checks, token loop, post-parse checks.
  • invoke(): convenience runner accepting a shell-like string or an iterable.
- ParseState: the single mutable object of one parse (cursor, selected
  command route, status).
- Mode: EMPTY or COMMAND_IS_REQUIRED.

Token loop (one word per iteration)
1. take the next word; split it at its first '=' and push a non-empty value
   back so it is consumed next as a standalone token: by the argument when it
   takes a value, otherwise by the following step ("--verbose=build" is
   "--verbose build").
2. classify the name (long / combo / word) with the parser's Syntax.
3. long: resolve and let the argument process the cursor.
4. combo: resolve each single-character flag in turn; only the last one may
   take a value. Fail-fast: flags processed before a failure keep their effect.
5. word: a command is selected (at most one per level of the route), anything
   else processes the cursor.
Names resolve against the top-level registry first, then against the selected
commands from the outermost to the innermost. Unresolved long names and words
are reported with near-miss suggestions.

Faults
- components raise; parse() routes every ParseException through trigger(),
  which raises it again (library use) or renders it with rich and exits
  (shell=True, for process entry points).

Quick start
    from clinch import CmdLine, Flag, Option

    cmdline = CmdLine(["tool", "build", "-v", "--out=dist"])
    build = cmdline.command("build")
    verbose = build.add(Flag("-v", "--verbose"))
    out = build.add(Option("--out"))
    state = cmdline.parse()
    assert state.command is build and verbose.value and out.value == "dist"
"""
import os.path
import shlex
import sys
from collections.abc import Iterable
from enum import Enum, IntFlag

from . import checker
from . import spelling
from .arguments import Command
from .cursor import Cursor
from .faults import *
from .registry import ArgumentKind, Registry
from .syntax import Syntax, TokenKind
from .utils import *


class Mode(IntFlag):
    EMPTY = 0
    COMMAND_IS_REQUIRED = 1


class ParseStatus(Enum):
    SCANNING = "scanning"
    DONE = "done"


class ParseState:
    """
    State of one parse() call, discarded afterwards.

    Properties
    - cursor: the token cursor of this parse.
    - route: selected commands, outermost first (empty when none).
    - command: the selected top-level command, or None.
    - status: ParseStatus.SCANNING until the cursor is exhausted.
    """
    __slots__ = ("_cursor", "_route", "_status")

    def __init__(self, cursor, /):
        self._cursor = cursor
        self._route = []
        self._status = ParseStatus.SCANNING

    @property
    def cursor(self):
        return self._cursor

    @property
    def route(self):
        return tuple(self._route)

    @property
    def command(self):
        return self._route[0] if self._route else None

    @property
    def status(self):
        return self._status

    def select(self, command, /):
        self._route.append(command)

    def finish(self):
        self._status = ParseStatus.DONE

    def __rich_repr__(self):
        yield "command", getattr(self.command, "name", None)
        yield "route", tuple(command.name for command in self._route)
        yield "status", self._status.value

    def __repr__(self):
        return "parse-state(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


class CmdLine:
    """
    Command line parser over a flat registry of declarations and commands.

    Parameters
    - argv: Unset | Iterable[str]
      the full invocation vector, program name first (skipped before parsing).
      Unset reads sys.argv.
    - mode: Mode.EMPTY or Mode.COMMAND_IS_REQUIRED.
    - syntax: marker convention (defaults to "-" and "--").
    - shell: render faults with rich and exit instead of raising.
    - fancy: wrap rendered faults in a panel.
    - colorful: style rendered faults.
    """

    def __init__(self, argv=Unset, mode=Mode.EMPTY, /, *, syntax=Unset, shell=False, fancy=False, colorful=True):
        argv = list(sys.argv if argv is Unset else argv)
        for token in argv:
            if not isinstance(token, str):
                raise TypeError("CmdLine() argv must be an iterable of strings")
        if not isinstance(syntax, Syntax | UnsetType):
            raise TypeError("CmdLine() 'syntax' must be a syntax instance")

        # the program name never reaches the cursor
        self._prog = os.path.basename(argv[0]) if argv else "clinch"
        self._tokens = tuple(argv[1:])
        self._mode = Mode(mode)
        self._syntax = coalesce(syntax, Syntax())
        self._registry = Registry()
        self._state = None

        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)

    @property
    def prog(self):
        return self._prog

    @property
    def tokens(self):
        return self._tokens

    @property
    def mode(self):
        return self._mode

    @property
    def syntax(self):
        return self._syntax

    @property
    def registry(self):
        return self._registry

    @property
    def arguments(self):
        return self._registry.arguments

    @property
    def selected(self):
        """
        Top-level command selected by the last parse, or None.
        """
        return self._state.command if self._state else None

    @property
    def route(self):
        return self._state.route if self._state else ()

    def add(self, argument, /):
        """
        Register a declaration at the top level and return it.

        Raises NullArgumentError for None and AlreadyRegisteredError when the
        very same declaration was added before.
        """
        return self._registry.add(argument)

    def command(self, name, /, *aliases):
        return self.add(Command(name, *aliases))

    def find(self, name, /, route=Unset):
        """
        Resolve a name: top-level first, then each selected command in turn.

        route defaults to the selection of the last parse.
        """
        argument, _ = self._lookup(name, coalesce(route, self.route))
        return argument

    def misspelled(self, candidate, /, cutoff=CUTOFF):
        return spelling.misspelled(candidate, self._registry, self.route, cutoff=cutoff)

    def trigger(self, fault, /, **options):
        trigger(fault, **options, tool=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def parse(self, tokens=Unset, /):
        """
        Parse tokens (default: argv without the program name) and return the state.

        Every declaration's value slot is reset first, so parsing the same
        tokens twice yields the same result.
        """
        if tokens is Unset:
            tokens = self._tokens
        elif isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        try:
            return self._parse(tokens)
        except ParseException as fault:
            return self.trigger(fault)

    def invoke(self, prompt=Unset, /):
        """
        Parse a prompt.

        - Unset: the argv given at construction (without the program name).
        - str: shell-like string, split via shlex.split.
        - Iterable[str]: pre-tokenized sequence.
        """
        if prompt is Unset:
            return self.parse()
        if isinstance(prompt, str):
            return self.parse(shlex.split(prompt))
        if isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("invoke() argument must be a string or an iterable of strings")
            return self.parse(tokens)
        raise TypeError("invoke() argument must be a string or an iterable of strings")

    def _parse(self, tokens):
        cursor = Cursor(tokens, self._syntax)
        state = self._state = ParseState(cursor)

        self._registry.reset()
        checker.before(self._registry, self._syntax)

        while not cursor.atend:
            self._step(state)
        state.finish()

        checker.after(self._registry, state.route, required=bool(self._mode & Mode.COMMAND_IS_REQUIRED))
        return state

    def _step(self, state):
        cursor = state.cursor
        word = cursor.next()
        index = cursor.index

        name, value = self._syntax.split(word)
        if value:
            cursor.prepend(value)

        match self._syntax.classify(name):
            case TokenKind.LONG:
                argument, _ = self._lookup(name, state.route)
                if argument is None:
                    self._unknown(name, state, index)
                self._process(argument, name, value, state, index)
            case TokenKind.COMBO:
                self._combo(name, value, state, index)
            case TokenKind.WORD:
                argument, depth = self._lookup(name, state.route)
                if argument is None:
                    self._unknown(name, state, index)
                if argument.kind is ArgumentKind.COMMAND:
                    self._select(argument, depth, state, index)
                self._process(argument, name, value, state, index)

    def _lookup(self, name, route):
        if (argument := self._registry.find(name)) is not None:
            return argument, 0
        for depth, command in enumerate(route, 1):
            if (argument := command.child(name)) is not None:
                return argument, depth
        return None, None

    def _combo(self, word, value, state, index):
        flags = self._syntax.flags(word)
        for position, flag in enumerate(flags, 1):
            argument, _ = self._lookup(flag, state.route)
            if argument is None:
                raise UnknownArgumentError(
                    "unknown argument %r in flags combo %r at %s position" % (flag, word, ordinal(index)),
                    input=flag,
                    index=index,
                    suggestions=(),
                    hint="check every letter of %r" % word,
                )
            last = position == len(flags)
            if argument.withvalue and not last:
                raise OnlyLastFlagCanHaveValueError(
                    "only last argument in flags combo can be with value, flags combo is %r" % word,
                    input=flag,
                    index=index,
                    argument=argument,
                    hint="move %r to the end of the combo or pass it separately" % flag,
                )
            self._process(argument, flag, value if last else None, state, index)

    def _select(self, command, depth, state, index):
        route = state.route
        # a second command on an already selected level; the same command
        # again is left to process() as a repetition
        if depth < len(route) and route[depth] is not command:
            selected = route[depth]
            raise MultipleCommandsError(
                "only one command can be specified, but you entered %r and %r" % (selected.name, command.name),
                input=command.name,
                index=index,
                commands=(selected.name, command.name),
                hint="run the commands one at a time",
            )
        # one level below the selection: a sub-command of the innermost one
        if depth == len(route):
            state.select(command)

    def _process(self, argument, name, value, state, index):
        # a pushed value the argument does not take is read by the next step
        if value == "" and argument.withvalue:
            self.trigger(EmptyInlineValueWarning(
                "empty inline value for %s %r at %s position" % (argument.kind.value, name, ordinal(index)),
                input=name,
                index=index,
                argument=argument,
                hint="add a value after '=' (for example: %s=<value>)"
                     " or remove '=' and pass it after a space (for example: %s <value>)" % (name, name),
            ))
        argument.process(state.cursor)

    def _unknown(self, name, state, index):
        matched, suggestions = spelling.misspelled(name, self._registry, state.route)
        if matched:
            raise UnknownArgumentError(
                "unknown argument %r at %s position; probably you mean %s" % (
                    name, ordinal(index), disjoin(suggestions)
                ),
                input=name,
                index=index,
                suggestions=suggestions,
                hint="did you mean %r?" % suggestions[0],
            )
        raise UnknownArgumentError(
            "unknown argument %r at %s position" % (name, ordinal(index)),
            input=name,
            index=index,
            suggestions=(),
            hint="check the spelling or remove it",
        )

    def __rich_repr__(self):
        yield "prog", self._prog
        yield "mode", self._mode
        yield "syntax", self._syntax
        yield "arguments", self.arguments
        yield "shell", self.shell

    def __repr__(self):
        return "cmd-line(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "Mode",
    "ParseStatus",
    "ParseState",
    "CmdLine",
)
