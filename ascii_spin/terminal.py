"""
Terminal output for the spinning frame.

Frames are painted in place with ANSI escape codes, using the configured
background/foreground colours as 24-bit colour.
"""

import sys
import types

from PIL import ImageColor

from ascii_spin.config import DEFAULT_CONFIG, Config

# ANSI escape sequences for terminal control and styling.
CLEAR_SCREEN = "\033[2J"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
CURSOR_HOME = "\033[H"
RESET_STYLE = "\033[0m"


def color_codes(config: Config = DEFAULT_CONFIG) -> str:
    """ANSI prefix selecting the configured foreground on background."""
    fr, fg, fb = ImageColor.getrgb(config.color)[:3]
    br, bg, bb = ImageColor.getrgb(config.bg)[:3]
    return f"\033[1;38;2;{fr};{fg};{fb}m\033[48;2;{br};{bg};{bb}m"


def write_frame(frame: str, config: Config = DEFAULT_CONFIG, stream=None) -> None:
    stream = stream or sys.stdout
    style = color_codes(config)
    stream.write(CURSOR_HOME)
    for line in frame.splitlines():
        stream.write(f"{style}{line}{RESET_STYLE}\n")
    stream.flush()


class TerminalController:
    """
    Context manager preparing the terminal for animation.

    On enter, clears the screen and hides the cursor. On exit, shows the
    cursor and clears the screen again.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def __enter__(self) -> "TerminalController":
        self.stream.write(CLEAR_SCREEN)
        self.stream.write(HIDE_CURSOR)
        self.stream.flush()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        self.stream.write(RESET_STYLE)
        self.stream.write(SHOW_CURSOR)
        self.stream.write(CLEAR_SCREEN)
        self.stream.flush()
