# pkgfzf/backends/flatpak.py

import logging
import re
import shutil
import subprocess

from pkgfzf.record import INSTALLED, Manager, PackageRecord

logger = logging.getLogger(__name__)

name = "flatpak"
binary = "flatpak"

# remote names end up inside a `[flatpak-<remote>]` tag
RE_REMOTE = re.compile(r"^[^\]\s]+$")


def available() -> bool:
    return shutil.which(binary) is not None


def _column(args: list[str]) -> list[str]:
    try:
        out = subprocess.check_output(
            [binary, *args],
            stderr=subprocess.DEVNULL,
            timeout=60
        ).decode().splitlines()
    except Exception as e:
        logger.debug("flatpak %s failed: %s", " ".join(args), e)
        return []
    # --columns output has no header when piped, but be safe
    return [l.strip() for l in out if l.strip() and not l.startswith(("Application", "Name"))]


def installed() -> list[str]:
    """
    flatpak list --app --columns=application
    """
    return _column(["list", "--app", "--columns=application"])


def remotes() -> list[str]:
    out = []
    for remote in _column(["remotes", "--columns=name"]):
        if remote == INSTALLED or not RE_REMOTE.match(remote):
            logger.debug("skipping flatpak remote %r", remote)
            continue
        out.append(remote)
    return out


def list_packages(offline: bool = False) -> list[PackageRecord]:
    have = installed()
    results = [PackageRecord(Manager.FLATPAK, app, installed=True) for app in have]
    seen = set(have)
    for remote in remotes():
        for app in _column(["remote-ls", remote, "--app", "--columns=application"]):
            if app in seen:
                continue
            seen.add(app)
            results.append(PackageRecord(Manager.FLATPAK, app, remote=remote))
    return results
