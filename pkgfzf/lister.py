# pkgfzf/lister.py

import argparse
import logging
import os
import sys

from pkgfzf.backends import BACKENDS, get_available_backends
from pkgfzf.utils.errors import handle_errors, set_verbose

logger = logging.getLogger(__name__)


def iter_lines(only=None, offline: bool = False):
    """
    Yield (source, line) for every package the available backends know,
    backend by backend in picker order.
    """
    for name, backend in get_available_backends(only):
        records = backend.list_packages(offline=offline)
        logger.debug("%s: %d packages", name, len(records))
        for record in records:
            yield name, str(record)


def write_lines(stream, only=None, offline: bool = False) -> int:
    count = 0
    current = None
    for source, line in iter_lines(only, offline):
        if source != current and current is not None:
            stream.flush()
        current = source
        stream.write(line + "\n")
        count += 1
    stream.flush()
    return count


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="pkgfzf-list",
        description="List packages from apt, flatpak, snap, cargo and npm as tagged lines",
    )
    parser.add_argument(
        "--only",
        action="append",
        choices=list(BACKENDS),
        help="Only list this source (repeatable)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        default=os.environ.get("PKGFZF_OFFLINE") == "1",
        help="Skip the crates.io and npm registry catalogs",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


@handle_errors
def main(argv=None):
    args = parse_args(argv)
    set_verbose(args.verbose)
    try:
        write_lines(sys.stdout, only=args.only, offline=args.offline)
    except BrokenPipeError:
        # the picker went away; silence the flush at interpreter exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(1)


if __name__ == "__main__":
    main()
