"""
Output seams: the render sink, the single-slot error message, the
address bar fragment, and triggering controls.
"""

import os
import sys
from typing import Any, Optional, TextIO

from .render import Renderer, render


class Display:
    """Renders views and holds at most one error message.

    A new error replaces the previous one. Subclasses decide where the
    rendered text goes by overriding write/write_error.
    """

    def __init__(self, renderer: Renderer = render):
        self.renderer = renderer
        self.message: Optional[str] = None
        self.last_view: Optional[tuple[str, Any]] = None

    def show(self, view: str, model: Any) -> None:
        self.last_view = (view, model)
        self.write(self.renderer(view, model))

    def show_error(self, message: str) -> None:
        self.message = message
        self.write_error(message)

    def clear_error(self) -> None:
        self.message = None

    def write(self, markup: str) -> None:
        pass

    def write_error(self, message: str) -> None:
        pass


def supports_color(stream: TextIO) -> bool:
    """Check if a stream is a terminal that should get ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


class TerminalDisplay(Display):
    """Prints views to stdout and errors to stderr."""

    def write(self, markup: str) -> None:
        print(markup)

    def write_error(self, message: str) -> None:
        if supports_color(sys.stderr):
            message = f"\033[31m{message}\033[0m"
        print(message, file=sys.stderr)


class AddressBar:
    """Mirror of the URL fragment holding the current directory."""

    def __init__(self, fragment: str = ""):
        self.fragment = fragment

    def set_fragment(self, fragment: str) -> None:
        self.fragment = fragment


class Control:
    """A UI control that is disabled while its action is in flight."""

    def __init__(self, name: str = ""):
        self.name = name
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def enable(self) -> None:
        self.enabled = True
