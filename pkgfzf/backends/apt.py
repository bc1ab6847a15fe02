# pkgfzf/backends/apt.py

import logging
import shutil
import subprocess

from pkgfzf.record import Manager, PackageRecord

logger = logging.getLogger(__name__)

name = "apt"
binary = "apt-cache"


def available() -> bool:
    return shutil.which(binary) is not None


def list_packages(offline: bool = False) -> list[PackageRecord]:
    """
    Every package name apt knows about, sorted.
    apt lines carry no installed marker; installing twice is harmless.
    """
    try:
        out = subprocess.check_output(
            [binary, "pkgnames"],
            stderr=subprocess.DEVNULL,
            timeout=60
        ).decode().splitlines()
    except Exception as e:
        logger.debug("apt-cache pkgnames failed: %s", e)
        return []

    names = sorted({l.strip() for l in out if l.strip()})
    return [PackageRecord(Manager.APT, n) for n in names]
