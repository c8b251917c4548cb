"""
Synopsis logging.

The package logs under the "synopsis" logger, silent by default (NullHandler).
A host application opts in with configure(), which installs a single Rich
handler writing to the error stream:

    from synopsis.logs import configure
    configure("DEBUG")

The default level can be provided by the host as __verbosity__ in __main__
(e.g. __verbosity__ = "INFO"); otherwise WARNING is used.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

from .utils import *

logger = logging.getLogger("synopsis")
logger.addHandler(logging.NullHandler())


def configure(level=Unset, /, *, colorful=True, stream=Unset):
    """
    install (or replace) the rich handler on the package logger.

    parameters
    - level: Unset | int | str. Unset reads __verbosity__ from __main__, then WARNING.
    - colorful: bool, keyword-only. False strips colors from log records.
    - stream: Unset | file-like, keyword-only. Defaults to sys.stderr.

    returns
    - the package logger.
    """
    level = coalesce(level, getattr(__import__("__main__"), "__verbosity__", logging.WARNING))

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    console = Console(file=coalesce(stream), stderr=True, no_color=not colorful)
    logger.addHandler(RichHandler(console=console, show_time=False, show_path=False, markup=False))
    logger.setLevel(level)
    return logger


__all__ = (
    "logger",
    "configure",
)
