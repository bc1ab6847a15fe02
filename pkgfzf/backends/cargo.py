# pkgfzf/backends/cargo.py

import logging
import shutil
import subprocess

import requests

from pkgfzf import __version__
from pkgfzf.record import Manager, PackageRecord

logger = logging.getLogger(__name__)

name = "cargo"
binary = "cargo"

CRATES_API = "https://crates.io/api/v1/crates"
# crates.io rejects requests without a User-Agent
HEADERS = {"User-Agent": f"pkgfzf/{__version__}"}


def available() -> bool:
    return shutil.which(binary) is not None


def installed() -> list[str]:
    """
    Parse `cargo install --list`:

        ripgrep v14.1.0:
            rg
    """
    try:
        out = subprocess.check_output(
            [binary, "install", "--list"],
            stderr=subprocess.DEVNULL,
            timeout=30
        ).decode().splitlines()
    except Exception as e:
        logger.debug("cargo install --list failed: %s", e)
        return []
    return [l.split()[0] for l in out if l.strip() and not l[0].isspace()]


def popular(limit: int = 100) -> list[str]:
    """
    Most downloaded crates on crates.io.
    """
    try:
        r = requests.get(
            CRATES_API,
            params={"sort": "downloads", "per_page": limit},
            headers=HEADERS,
            timeout=10,
        )
        r.raise_for_status()
        return [c["name"] for c in r.json().get("crates", [])]
    except (requests.RequestException, ValueError, KeyError, AttributeError, TypeError) as e:
        logger.debug("crates.io listing failed: %s", e)
        return []


def list_packages(offline: bool = False) -> list[PackageRecord]:
    have = installed()
    results = [PackageRecord(Manager.CARGO, n, installed=True) for n in have]
    if offline:
        return results
    for n in popular():
        if n not in have:
            results.append(PackageRecord(Manager.CARGO, n))
    return results
