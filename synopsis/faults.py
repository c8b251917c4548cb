"""
Synopsis faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  raised while dispatching a command line to a command.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves through rich.
- trigger(): central entry point to surface any fault (respecting shell/deferred/colorful).

Rendering
- Header "[ prog — code | title ]", the message, then a "→ hint" line.
- Styles come from a default palette, overridable by __styles__ in __main__.
- colorful=False drops every style (the rendering stays readable in logs and tests).

Integration
- The printer core never reports faults; the command layer (synopsis.commands)
  builds them and calls trigger(fault, **ctx).
- In non-shell mode, errors are raised and warnings go through warnings.warn;
  in shell mode, they are printed to the error stream via rich.
"""
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

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used by the command layer (stable identifiers).

    grouping
    - routing errors (1110x): UNKNOWN_COMMAND
    - parameter errors (1111x): INVALID_PARAMETER
    - warnings (1210x): DEPRECATED_COMMAND

    normalize() lets the host remap codes to its own labels.
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND     = 11101

    # --- parameter errors (11xxx) ---
    INVALID_PARAMETER   = 11111

    # --- warnings (12xxx) ---
    DEPRECATED_COMMAND  = 12101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, styles, *, title, message, hint):
    """
    build the rich renderable shared by errors and warnings.
    """
    options = fault.options

    def styler(style):
        return styles[style] if options["colorful"] else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not options["colorful"]:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    header = Text.assemble(
        "[ ",
        text(options["prog"], styler("prog-name")),
        " — ",
        text(options["code"].normalize() if options["code"] else "", styler("code")),
        " | ",
        text(options["title"].title(), styler(title)),
        " ]"
    )
    body = text(fault.message, styler(message))
    renders = [body]
    if options["hint"]:
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(options["hint"], styler(hint))))

    if options["fancy"]:
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class _Fault:
    """
    shared option handling for errors and warnings.

    every fault class declares its default code and title; the remaining
    options default to a plain, non-shell rendering.
    """
    __code__ = Unset
    __title__ = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType({
            "prog": getattr(__import__("__main__"), "__prog__", "synopsis"),
            "code": type(self).__code__,
            "title": type(self).__title__,
            "hint": "",
            "shell": False,
            "fancy": False,
            "colorful": False,
            "deferred": False,
            "stream": None,
        } | options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandException(_Fault, Exception):
    __title__ = "command error"

    def __init__(self, message=Unset, /, **options):
        _Fault.__init__(self, message, **options)
        Exception.__init__(self, str(self))

    def __rich__(self):
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(__import__("__main__"), "__styles__", {}))
        return _render(self, styles, title="error-title", message="error-message", hint="hint")

    def __trigger__(self):
        if not self.options["shell"]:
            raise self from None
        Console(file=self.options["stream"], stderr=True).print(self)
        if self.options["deferred"]:
            return
        sys.exit(1)


class UnknownCommandError(CommandException):
    __code__ = FaultCode.UNKNOWN_COMMAND
    __title__ = "unknown command"


class InvalidParameterError(CommandException):
    __code__ = FaultCode.INVALID_PARAMETER
    __title__ = "invalid parameter"


class CommandWarning(_Fault, ABC, Warning):
    __title__ = "command warning"

    def __init__(self, message=Unset, /, **options):
        _Fault.__init__(self, message, **options)
        Warning.__init__(self, str(self))

    def __rich__(self):
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        } | getattr(__import__("__main__"), "__styles__", {}))
        return _render(self, styles, title="warning-title", message="warning-message", hint="hint")

    def __trigger__(self):
        if not self.options["shell"]:
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        Console(file=self.options["stream"], stderr=True).print(self)


class DeprecatedCommandWarning(CommandWarning):
    __code__ = FaultCode.DEPRECATED_COMMAND
    __title__ = "deprecated command"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via a rich console; otherwise errors are
      raised and warnings are emitted through the warnings module.

    typical options
    - prog, code, title, hint, shell, fancy, colorful, deferred, stream.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "CommandException",
    "UnknownCommandError",
    "InvalidParameterError",
    "CommandWarning",
    "DeprecatedCommandWarning",
    "trigger",
)
