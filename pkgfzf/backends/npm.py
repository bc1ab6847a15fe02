# pkgfzf/backends/npm.py

import json
import logging
import shutil
import subprocess

import requests

from pkgfzf.record import Manager, PackageRecord

logger = logging.getLogger(__name__)

name = "npm"
binary = "npm"

NPM_SEARCH = "https://registry.npmjs.org/-/v1/search"


def available() -> bool:
    return shutil.which(binary) is not None


def installed() -> list[str]:
    """
    Globally installed packages from `npm ls -g --depth=0 --json`.
    """
    try:
        # npm ls exits non-zero on peer-dep problems but still prints the tree
        proc = subprocess.run(
            [binary, "ls", "-g", "--depth=0", "--json"],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            timeout=60,
        )
        data = json.loads(proc.stdout or b"{}")
    except Exception as e:
        logger.debug("npm ls failed: %s", e)
        return []
    return sorted(data.get("dependencies", {}))


def search(text: str = "keywords:cli", size: int = 250) -> list[str]:
    """
    Registry search; the default query lists command-line tools,
    which is what `npm install -g` is for.
    """
    try:
        r = requests.get(NPM_SEARCH, params={"text": text, "size": size}, timeout=10)
        r.raise_for_status()
        return [o["package"]["name"] for o in r.json().get("objects", [])]
    except (requests.RequestException, ValueError, KeyError, AttributeError, TypeError) as e:
        logger.debug("npm registry search failed: %s", e)
        return []


def list_packages(offline: bool = False) -> list[PackageRecord]:
    have = installed()
    results = [PackageRecord(Manager.NPM, n, installed=True) for n in have]
    if offline:
        return results
    for n in search():
        if n not in have:
            results.append(PackageRecord(Manager.NPM, n))
    return results
