import functools
import logging
import sys

from rich.console import Console
from rich.markup import escape

logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

console = Console(stderr=True)


class PkgfzfError(Exception):
    """Base class for errors reported to the user."""


class StartupError(PkgfzfError):
    """A helper process or staged resource could not be set up."""


class UnparseableLineError(PkgfzfError):
    def __init__(self, line: str):
        super().__init__(f"Could not parse package from: {line}")
        self.line = line


def set_verbose(verbose: bool):
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except KeyboardInterrupt:
            sys.exit(130)
        except PkgfzfError as e:
            logging.debug(f"{func.__name__} ▶ {e}")
            console.print(f"[bold red]Error:[/] {escape(str(e))}", highlight=False)
            sys.exit(1)
        except Exception as e:
            logging.error(f"{func.__name__} ▶ {e}")
            console.print(f"[bold red]{func.__name__} failed:[/] {escape(str(e))}", highlight=False)
            sys.exit(1)

    return wrapper
