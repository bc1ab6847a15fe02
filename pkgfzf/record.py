# pkgfzf/record.py

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pkgfzf.utils.errors import UnparseableLineError

INSTALLED = "installed"


class Manager(Enum):
    APT = "apt"
    FLATPAK = "flatpak"
    SNAP = "snap"
    CARGO = "cargo"
    NPM = "npm"


# Priority order matters: first match wins.
PATTERNS = [
    (Manager.APT, re.compile(r"^\[apt\]\s*(?P<name>\S+)")),
    (Manager.FLATPAK, re.compile(r"^\[flatpak-(?P<remote>[^\]]+)\]\s*(?P<name>\S+)")),
    (Manager.SNAP, re.compile(r"^\[snap(?P<installed>-installed)?\]\s*(?P<name>\S+)")),
    (Manager.CARGO, re.compile(r"^\[cargo(?P<installed>-installed)?\]\s*(?P<name>\S+)")),
    (Manager.NPM, re.compile(r"^\[npm(?P<installed>-installed)?\]\s*(?P<name>\S+)")),
]


@dataclass(frozen=True)
class PackageRecord:
    """
    One candidate line of the picker: a package name tagged with the
    manager it comes from and whether it is already installed.
    """

    manager: Manager
    name: str
    remote: Optional[str] = None
    installed: bool = False

    @property
    def tag(self) -> str:
        if self.manager is Manager.FLATPAK:
            return f"[flatpak-{INSTALLED if self.installed else self.remote}]"
        if self.installed and self.manager is not Manager.APT:
            return f"[{self.manager.value}-{INSTALLED}]"
        return f"[{self.manager.value}]"

    def __str__(self) -> str:
        return f"{self.tag} {self.name}"

    def install_command(self) -> Optional[list[str]]:
        """
        argv that installs this package, or None when it is already installed.
        """
        if self.manager is Manager.APT:
            return ["sudo", "apt", "install", "-y", self.name]
        if self.installed:
            return None
        if self.manager is Manager.FLATPAK:
            return ["flatpak", "install", "-y", self.remote, self.name]
        if self.manager is Manager.SNAP:
            return ["sudo", "snap", "install", self.name]
        if self.manager is Manager.CARGO:
            return ["cargo", "install", self.name]
        if self.manager is Manager.NPM:
            return ["npm", "install", "-g", self.name]
        raise ValueError(f"unknown manager {self.manager!r}")


def parse_line(line: str) -> PackageRecord:
    """
    Turn a picker line back into a PackageRecord.
    Raises UnparseableLineError when no tag grammar matches.
    """
    for manager, pattern in PATTERNS:
        m = pattern.match(line)
        if not m:
            continue
        groups = m.groupdict()
        if manager is Manager.APT:
            return PackageRecord(manager, groups["name"])
        if manager is Manager.FLATPAK:
            remote = groups["remote"]
            if remote == INSTALLED:
                return PackageRecord(manager, groups["name"], installed=True)
            return PackageRecord(manager, groups["name"], remote=remote)
        return PackageRecord(manager, groups["name"], installed=bool(groups["installed"]))
    raise UnparseableLineError(line)
