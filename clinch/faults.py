"""
Clinch faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- ParseException / ParseWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

Taxonomy
- configuration: NullArgumentError, AlreadyRegisteredError,
  DuplicateArgumentError, MalformedNameError
- routing: UnknownArgumentError, MultipleCommandsError, MissingCommandError
- arguments: OnlyLastFlagCanHaveValueError, MissingValueError,
  InvalidValueError, RepeatedArgumentError, RequiredArgumentMissingError
- input: ExhaustedInputError
- warnings: EmptyInlineValueWarning

Integration
- Library code raises faults directly; CmdLine.parse() routes every fault
  through trigger() with its runtime options.
- In non-shell mode, exceptions are raised; in shell mode, they are rendered via
  rich and the process exits with status 1.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - configuration (110xx)
      • NULL_ARGUMENT, ALREADY_REGISTERED, DUPLICATE_ARGUMENT, MALFORMED_NAME
    - routing (111xx)
      • UNKNOWN_ARGUMENT, MULTIPLE_COMMANDS, MISSING_COMMAND
    - arguments (112xx)
      • ONLY_LAST_FLAG_CAN_HAVE_VALUE, MISSING_VALUE, INVALID_VALUE,
        REPEATED_ARGUMENT, REQUIRED_ARGUMENT_MISSING
    - input (113xx)
      • EXHAUSTED_INPUT
    - warnings (12xxx)
      • EMPTY_INLINE_VALUE
    """
    # --- configuration errors (110xx) ---
    NULL_ARGUMENT                 = 11001
    ALREADY_REGISTERED            = 11002
    DUPLICATE_ARGUMENT            = 11003
    MALFORMED_NAME                = 11004

    # --- routing errors (111xx) ---
    UNKNOWN_ARGUMENT              = 11101
    MULTIPLE_COMMANDS             = 11102
    MISSING_COMMAND               = 11103

    # --- argument errors (112xx) ---
    ONLY_LAST_FLAG_CAN_HAVE_VALUE = 11201
    MISSING_VALUE                 = 11203
    INVALID_VALUE                 = 11204
    REPEATED_ARGUMENT             = 11205
    REQUIRED_ARGUMENT_MISSING     = 11206

    # --- input errors (113xx) ---
    EXHAUSTED_INPUT               = 11301

    # --- warnings (12xxx) ---
    EMPTY_INLINE_VALUE            = 12101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, defaults, *, kind):
    """
    build the rich renderable shared by exceptions and warnings.

    layout
    - header: "[ prog — code | Title ]"
    - body: the message, then an arrowed hint when one exists.
    - fancy mode wraps everything in a Panel titled with the header.
    """
    main = __import__("__main__")
    options = fault.options

    styles = defaultdict(str, defaults | getattr(main, "__styles__", {}))
    colorful = options.get("colorful", True)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    tool = options.get("tool")
    prog = text(getattr(main, "__prog__", getattr(tool, "prog", "clinch")), styler("prog-name"))
    code = options.get("code", type(fault).__faultcode__)

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize(), styler("code")),
        " | ",
        text(options.get("title", type(fault).__title__).title(), styler(kind + "-title")),
        " ]"
    )
    message = text(fault.message, styler(kind + "-message"))
    renders = [message]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class ParseException(Exception):
    """
    base class of every parser error.

    contract
    - message: the human-readable, lowercased diagnostic (also str(fault)).
    - options: read-only mapping with rendering/runtime context
      (code, title, hint, input, index, suggestions, tool, shell, fancy, colorful).
    - subclasses declare __faultcode__ and __title__ as defaults for the options.
    """
    __faultcode__ = Unset
    __title__ = "parse error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", type(self).__faultcode__)

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, kind="error")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class NullArgumentError(ParseException):
    __faultcode__ = FaultCode.NULL_ARGUMENT
    __title__ = "null argument"


class AlreadyRegisteredError(ParseException):
    __faultcode__ = FaultCode.ALREADY_REGISTERED
    __title__ = "argument already registered"


class DuplicateArgumentError(ParseException):
    __faultcode__ = FaultCode.DUPLICATE_ARGUMENT
    __title__ = "duplicate argument"


class MalformedNameError(ParseException):
    __faultcode__ = FaultCode.MALFORMED_NAME
    __title__ = "malformed argument name"


class UnknownArgumentError(ParseException):
    __faultcode__ = FaultCode.UNKNOWN_ARGUMENT
    __title__ = "unknown argument"

    @property
    def suggestions(self):
        return tuple(self.options.get("suggestions", ()))


class MultipleCommandsError(ParseException):
    __faultcode__ = FaultCode.MULTIPLE_COMMANDS
    __title__ = "multiple commands"

    @property
    def commands(self):
        return tuple(self.options.get("commands", ()))


class MissingCommandError(ParseException):
    __faultcode__ = FaultCode.MISSING_COMMAND
    __title__ = "missing command"


class OnlyLastFlagCanHaveValueError(ParseException):
    __faultcode__ = FaultCode.ONLY_LAST_FLAG_CAN_HAVE_VALUE
    __title__ = "value-bearing flag inside combo"


class MissingValueError(ParseException):
    __faultcode__ = FaultCode.MISSING_VALUE
    __title__ = "missing value"


class InvalidValueError(ParseException):
    __faultcode__ = FaultCode.INVALID_VALUE
    __title__ = "invalid value"


class RepeatedArgumentError(ParseException):
    __faultcode__ = FaultCode.REPEATED_ARGUMENT
    __title__ = "repeated argument"


class RequiredArgumentMissingError(ParseException):
    __faultcode__ = FaultCode.REQUIRED_ARGUMENT_MISSING
    __title__ = "required argument missing"


class ExhaustedInputError(ParseException):
    __faultcode__ = FaultCode.EXHAUSTED_INPUT
    __title__ = "exhausted input"


class ParseWarning(ABC, Warning):
    __faultcode__ = Unset
    __title__ = "parse warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", type(self).__faultcode__)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, kind="warning")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyInlineValueWarning(ParseWarning):
    __faultcode__ = FaultCode.EMPTY_INLINE_VALUE
    __title__ = "empty inline value"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are
      raised and warnings are emitted through the warnings module.

    typical options
    - tool, shell, fancy, colorful, title, code, hint, and any other context the
      reporter may want to show (e.g., input/index/suggestions/argument).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseException",
    "NullArgumentError",
    "AlreadyRegisteredError",
    "DuplicateArgumentError",
    "MalformedNameError",
    "UnknownArgumentError",
    "MultipleCommandsError",
    "MissingCommandError",
    "OnlyLastFlagCanHaveValueError",
    "MissingValueError",
    "InvalidValueError",
    "RepeatedArgumentError",
    "RequiredArgumentMissingError",
    "ExhaustedInputError",
    "ParseWarning",
    "EmptyInlineValueWarning",
    "trigger",
)
