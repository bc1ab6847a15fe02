# pkgfzf/installer.py
import argparse
import logging
import shlex
import subprocess
import sys

from rich.console import Console
from rich.markup import escape

from pkgfzf.record import Manager, parse_line
from pkgfzf.utils.errors import UnparseableLineError, handle_errors, set_verbose

logger = logging.getLogger(__name__)
console = Console()

VIA = {
    Manager.APT: "apt",
    Manager.FLATPAK: "flatpak",
    Manager.SNAP: "snap",
    Manager.CARGO: "cargo",
    Manager.NPM: "npm (globally)",
}


def dispatch(line: str, dry_run: bool = False) -> int:
    """
    Install the package named by one picker line.
    Returns the process exit status for the installer.
    """
    try:
        record = parse_line(line)
    except UnparseableLineError as e:
        console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        return 1

    cmd = record.install_command()
    if cmd is None:
        console.print(f"[yellow]{escape(record.name)} is already installed[/yellow]")
        return 0

    if dry_run:
        console.print(shlex.join(cmd), markup=False, highlight=False)
        return 0

    console.print(f"[cyan]Installing {escape(record.name)} via {VIA[record.manager]}...[/cyan]")
    logger.debug("running %s", cmd)
    try:
        status = subprocess.call(cmd)
    except OSError as e:
        console.print(f"[red]❌ could not run {cmd[0]}: {escape(str(e))}[/red]")
        return 1
    # negative means killed by a signal
    return status if status >= 0 else 1


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="pkgfzf-install",
        description="Install the package described by one pkgfzf line",
    )
    parser.add_argument("line", help="Selected line, e.g. '[apt] ripgrep'")
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the install command instead of running it"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


@handle_errors
def main(argv=None):
    args = parse_args(argv)
    set_verbose(args.verbose)
    sys.exit(dispatch(args.line, dry_run=args.dry_run))


if __name__ == "__main__":
    main()
