# pkgfzf/cli.py
#!/usr/bin/env python3
import argparse
import contextlib
import logging
import os
import subprocess
import sys

import psutil
from rich.console import Console

from pkgfzf import picker
from pkgfzf.utils.errors import StartupError, handle_errors, set_verbose
from pkgfzf.utils.staging import staged
from pkgfzf.utils.term import get_columns, preview_window

logger = logging.getLogger(__name__)
console = Console(stderr=True)

# how long the lister may keep running once the picker is gone
LISTER_GRACE = 1.0


class RichParser(argparse.ArgumentParser):
    def error(self, message):
        console.print(f"[bold red]Error:[/] {message}\n")
        self.print_help()
        sys.exit(2)


def parse_args(argv=None):
    parser = RichParser(
        prog="pkgfzf",
        description="Fuzzy-search apt, flatpak, snap, cargo and npm packages and install one",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--key",
        default=os.environ.get("PKGFZF_INSTALL_KEY", picker.DEFAULT_KEY),
        help="fzf key that installs the highlighted package (default: %(default)s)",
    )
    parser.add_argument(
        "--no-install-key", action="store_true", help="Search only, no install binding"
    )
    parser.add_argument(
        "--fzf", default=os.environ.get("PKGFZF_FZF", "fzf"), help="fzf binary to run"
    )
    parser.add_argument(
        "--lister", default=None, help="Use this executable as the package lister"
    )
    parser.add_argument(
        "--installer", default=None, help="Use this executable as the install dispatcher"
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        default=os.environ.get("PKGFZF_OFFLINE") == "1",
        help="Skip online catalogs (crates.io, npm registry)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def spawn_lister(cmd: list[str], env=None) -> subprocess.Popen:
    logger.debug("starting lister %s", cmd)
    try:
        return subprocess.Popen(
            cmd, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL, env=env
        )
    except OSError as e:
        raise StartupError(f"Failed to run package lister {cmd[0]}: {e}") from e


def terminate_tree(pid: int, timeout: float = 3):
    """
    SIGTERM a process and its descendants, SIGKILL whatever survives.
    """
    try:
        parent = psutil.Process(pid)
        procs = parent.children(recursive=True) + [parent]
    except psutil.NoSuchProcess:
        return
    for p in procs:
        with contextlib.suppress(psutil.NoSuchProcess):
            p.terminate()
    _, alive = psutil.wait_procs(procs, timeout=timeout)
    for p in alive:
        logger.debug("killing %s", p.pid)
        with contextlib.suppress(psutil.NoSuchProcess):
            p.kill()


def reap(proc: subprocess.Popen, grace: float = LISTER_GRACE):
    # the lister's exit status is never reported
    try:
        proc.wait(timeout=grace)
        return
    except subprocess.TimeoutExpired:
        logger.debug("lister %s still running, terminating", proc.pid)
    terminate_tree(proc.pid)
    proc.wait()


def run(
    key: str = picker.DEFAULT_KEY,
    fzf: str = "fzf",
    lister=None,
    installer=None,
    install_key: bool = True,
    offline: bool = False,
) -> int:
    """
    Pipe the lister into fzf and return the exit status to use.
    """
    preview = preview_window(get_columns())

    with contextlib.ExitStack() as stack:
        if lister is None:
            lister = stack.enter_context(staged("list_all_packages", "pkgfzf.lister"))
        if install_key and installer is None:
            installer = stack.enter_context(staged("install_package", "pkgfzf.installer"))
        if not install_key:
            installer = None

        env = None
        if offline:
            env = {**os.environ, "PKGFZF_OFFLINE": "1"}

        lister_proc = spawn_lister([str(lister)], env=env)
        try:
            fzf_proc = picker.spawn(
                fzf, picker.fzf_args(preview, installer, key), lister_proc.stdout
            )
        except StartupError:
            terminate_tree(lister_proc.pid)
            lister_proc.wait()
            raise
        finally:
            # fzf holds the read end now
            lister_proc.stdout.close()

        try:
            status = fzf_proc.wait()
        finally:
            reap(lister_proc)

    logger.debug("fzf exited with %s", status)
    # negative means killed by a signal: no exit code to mirror
    return status if status >= 0 else 1


@handle_errors
def main(argv=None):
    args = parse_args(argv)
    set_verbose(args.verbose)
    sys.exit(
        run(
            key=args.key,
            fzf=args.fzf,
            lister=args.lister,
            installer=args.installer,
            install_key=not args.no_install_key,
            offline=args.offline,
        )
    )


if __name__ == "__main__":
    main()
