from pkgfzf.backends import apt, flatpak, snap, cargo, npm

# order of the picker's candidate list
BACKENDS = {
    "apt": apt,
    "flatpak": flatpak,
    "snap": snap,
    "cargo": cargo,
    "npm": npm,
}


def get_available_backends(only=None):
    for name, mod in BACKENDS.items():
        if only and name not in only:
            continue
        if mod.available():
            yield name, mod
