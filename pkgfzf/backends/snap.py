# pkgfzf/backends/snap.py

import logging
import shutil
import subprocess

from pkgfzf.record import Manager, PackageRecord

logger = logging.getLogger(__name__)

name = "snap"
binary = "snap"


def available() -> bool:
    return shutil.which(binary) is not None


def _names(args: list[str]) -> list[str]:
    """
    First column of a `snap` table, header skipped.
    """
    try:
        out = subprocess.check_output(
            [binary, *args],
            stderr=subprocess.DEVNULL,
            timeout=30
        ).decode().splitlines()
    except Exception as e:
        logger.debug("snap %s failed: %s", " ".join(args), e)
        return []

    names = []
    for line in out:
        # Format: Name  Version  Rev/Publisher ...
        if not line.strip() or line.startswith("Name"):
            continue
        names.append(line.split()[0])
    return names


def list_packages(offline: bool = False) -> list[PackageRecord]:
    have = _names(["list"])
    results = [PackageRecord(Manager.SNAP, n, installed=True) for n in have]
    # `snap find` without a query lists the featured snaps
    for n in _names(["find"]):
        if n not in have:
            results.append(PackageRecord(Manager.SNAP, n))
    return results
