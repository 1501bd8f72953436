"""Logger implementing the command line interface.

A replacement for the standard Python `logging` API
designed for implementing a better CLI UX for the cloudsweep project.

Supports:
- Indentation of grouped output (`group`, `indented`)
- Verbosity levels (`verbose` output only shows up with `-v`)
- Colored output through `colorful` (can be disabled with `--log-color`)
- Confirmation prompts honoring `--yes`
"""
import sys
from functools import wraps
from typing import Any, Callable, List, Optional

import click
import colorama
import colorful as cf

colorama.init(strip=False)


def _format_msg(msg: str, *args: Any, **kwargs: Any) -> str:
    """Formats a message for printing.

    Positional and keyword arguments are passed to `str.format`
    unless the message carries no arguments at all.
    """
    msg = str(msg)
    if args or kwargs:
        return msg.format(*args, **kwargs)
    return msg


class SilentClickException(click.ClickException):
    """`ClickException` that does not print a message.

    Some of our tooling relies on catching ClickException in particular.

    However the default prints a message, which is undesirable since we expect
    our code to log errors manually using `cli_logger.error()` to allow for
    colors and other formatting.
    """

    def __init__(self, message: str):
        super(SilentClickException, self).__init__(message)

    def show(self, file=None):
        pass


class _CliLogger:
    """Singleton class for CLI logging.

    Attributes:
        strip (bool):
            If `strip=True`, all ANSI color codes will be removed.
        indent_level (int):
            Current indentation level.
        verbosity (int):
            Output verbosity. Low verbosity will disable `verbose` messages.
        color_mode (str):
            Can be "true", "false", or "auto".
        pretty (bool):
            If `pretty=False`, output is record style: one unindented,
            uncolored line per message prefixed with its level.
    """
    strip: bool
    pretty: bool
    indent_level: int
    verbosity: int
    color_mode: str

    def __init__(self):
        self.indent_level = 0
        self.verbosity = 0
        self.color_mode = "auto"
        self.format_tmpl = None
        self.strip = False
        self.pretty = True

    def set_format(self, format_tmpl=None):
        self.format_tmpl = format_tmpl

    def set_verbosity(self, x: int):
        self.verbosity = x

    def detect_colors(self):
        """Update color output settings.

        Parse the `color_mode` string and optionally disable or force-enable
        color output.
        """

        def _set_auto():
            if sys.stdout.isatty():
                self.strip = False
            else:
                self.strip = True
                cf.disable()

        if self.color_mode == "true":
            self.strip = False
        elif self.color_mode == "false":
            self.strip = True
            cf.disable()
        elif self.color_mode == "auto":
            _set_auto()
        else:
            raise ValueError("Invalid log color setting: " + self.color_mode)

    def set_log_style(self, log_style: str):
        if log_style == "pretty":
            self.pretty = True
        elif log_style == "record":
            self.pretty = False
        elif log_style == "auto":
            self.pretty = sys.stdin.isatty()
        else:
            raise ValueError("Invalid log style setting: " + log_style)

    def configure(self, log_style=None, color_mode=None, verbosity=None):
        if log_style is not None:
            self.set_log_style(log_style)
        if color_mode is not None:
            self.color_mode = color_mode
            self.detect_colors()
        if not self.pretty:
            self.strip = True
        if verbosity is not None:
            self.set_verbosity(verbosity)

    def newline(self):
        """Print a line feed. Record style has no empty lines."""
        if self.pretty:
            self.print("")

    def _print(self, msg: str, _level_str: str = "INFO"):
        if self.strip:
            msg = click.unstyle(msg)
        if self.pretty:
            msg = "  " * self.indent_level + msg
        else:
            msg = "{}\t{}".format(_level_str, msg)
        click.echo(msg, err=_level_str in ("ERR", "WARN", "PANIC"))

    def indented(self):
        """Context manager that starts an indented block of output."""
        cli_logger = self

        class IndentedContextManager():
            def __enter__(self):
                cli_logger.indent_level += 1

            def __exit__(self, type, value, tb):
                cli_logger.indent_level -= 1

        return IndentedContextManager()

    def group(self, msg: str, *args: Any, **kwargs: Any):
        """Print a group title in a special color and start an indented block."""
        self.print(cf.dodgerBlue(msg), *args, **kwargs)

        return self.indented()

    def labeled_value(self, key: str, msg: str, *args: Any, **kwargs: Any):
        """Displays a key-value pair with special formatting."""
        self._print(str(cf.skyBlue(key)) + ": " +
                    _format_msg(cf.bold(msg), *args, **kwargs))

    def verbose(self, msg: str, *args: Any, **kwargs: Any):
        """Prints a message if verbosity is not 0."""
        if self.verbosity > 0:
            self.print(msg, *args, _level_str="VINFO", **kwargs)

    def success(self, msg: str, *args: Any, **kwargs: Any):
        """Prints a formatted success message."""
        self.print(cf.limeGreen(msg), *args, _level_str="SUCC", **kwargs)

    def _warning(self, msg: str, *args: Any, _level_str: str = None,
                 **kwargs: Any):
        if _level_str is None:
            raise ValueError("Log level not set.")
        self.print(cf.orange(msg), *args, _level_str=_level_str, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any):
        self._warning(msg, *args, _level_str="WARN", **kwargs)

    def _error(self, msg: str, *args: Any, _level_str: str = None,
               **kwargs: Any):
        if _level_str is None:
            raise ValueError("Log level not set.")
        self.print(cf.red(msg), *args, _level_str=_level_str, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any):
        self._error(msg, *args, _level_str="ERR", **kwargs)

    def print(self,
              msg: str,
              *args: Any,
              _level_str: str = "INFO",
              **kwargs: Any):
        """Prints a message.

        For arguments, see `_format_msg`.
        """
        self._print(_format_msg(msg, *args, **kwargs), _level_str=_level_str)

    def render_list(self, items: List[str], separator: str = ", "):
        return separator.join(str(item) for item in items)

    def abort(self,
              msg: Optional[str] = None,
              *args: Any,
              exc: Any = None,
              **kwargs: Any):
        """Prints an error and aborts execution.

        Print an error and throw an exception to terminate the program
        (the exception will not print a message).
        """
        if msg is not None:
            self._error(msg, *args, _level_str="PANIC", **kwargs)

        if exc is not None:
            raise exc

        exc_cls = click.ClickException
        if self.strip:
            exc_cls = SilentClickException

        if msg is None:
            msg = "Exiting due to cli_logger.abort()"
        raise exc_cls(_format_msg(msg, *args, **kwargs))

    def confirm(self,
                yes: bool,
                msg: str,
                *args: Any,
                _abort: bool = False,
                _default: bool = False,
                **kwargs: Any):
        """Display a confirmation dialog.

        Valid answers are "y/yes/true/1" and "n/no/false/0".

        Args:
            yes (bool): If `yes` is `True` the dialog will default to "yes"
                        and continue without waiting for user input.
            _abort (bool):
                If `_abort` is `True`,
                "no" means aborting the program.
            _default (bool):
                The default action to take if the user just presses enter
                with no input.
        """
        should_abort = _abort
        default = _default

        msg = _format_msg(msg, *args, **kwargs)
        if yes:
            self.print(msg + " " + cf.dimmed("[automatic, due to --yes]"))
            return True

        res = click.confirm(
            ("  " * self.indent_level) + msg, default=default)
        if not res and should_abort:
            self._print("Exiting...")
            raise SilentClickException(
                "Exiting due to the response to confirm(should_abort=True).")

        return res


CLICK_LOGGING_OPTIONS = [
    click.option(
        "--log-style",
        required=False,
        type=click.Choice(["auto", "record", "pretty"], case_sensitive=False),
        default="auto",
        help=("If 'pretty', outputs with formatting and color. If 'record', "
              "outputs record-style without formatting. "
              "'auto' defaults to 'pretty', and disables pretty logging "
              "if stdin is *not* a TTY.")),
    click.option(
        "--log-color",
        required=False,
        type=click.Choice(["auto", "false", "true"], case_sensitive=False),
        default="auto",
        help=("Use color logging. "
              "Auto enables color logging if stdout is a TTY.")),
    click.option("-v", "--verbose", default=None, count=True)
]


def add_click_logging_options(f: Callable) -> Callable:
    for option in reversed(CLICK_LOGGING_OPTIONS):
        f = option(f)

    @wraps(f)
    def wrapper(*args, log_style=None, log_color=None, verbose=None, **kwargs):
        cli_logger.configure(log_style, log_color, verbose)
        return f(*args, **kwargs)

    return wrapper


cli_logger = _CliLogger()
