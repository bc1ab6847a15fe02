# pkgfzf/picker.py

import logging
import shlex
import subprocess

from pkgfzf.utils.errors import StartupError

logger = logging.getLogger(__name__)

DEFAULT_KEY = "ctrl-i"
PROMPT = "Search packages> "
SOURCES = "apt | flatpak | snap | cargo | npm"


def bind_action(installer, key: str = DEFAULT_KEY) -> str:
    """
    fzf binding that runs the installer on the highlighted line, then quits.
    fzf substitutes `{}` with the quoted line; `--` keeps a line
    starting with `-` from being read as an option.
    """
    return f"{key}:execute-silent({shlex.quote(str(installer))} -- {{}})+abort"


def header(key: str = None) -> str:
    if key is None:
        return SOURCES
    return f"{SOURCES} | {key.upper()} to install"


def fzf_args(preview: str, installer=None, key: str = DEFAULT_KEY) -> list[str]:
    args = [
        "--exit-0",
        "--multi",
        "--no-sort",
        "--ansi",
        "--layout=reverse",
        "--exact",
        "--cycle",
        "--prompt", PROMPT,
        "--header", header(key if installer else None),
        "--preview-window", preview,
    ]
    if installer:
        args += ["--bind", bind_action(installer, key)]
    return args


def spawn(fzf: str, args: list[str], stdin) -> subprocess.Popen:
    cmd = [fzf, *args]
    logger.debug("starting picker %s", cmd)
    try:
        return subprocess.Popen(cmd, stdin=stdin)
    except OSError as e:
        raise StartupError(f"Failed to run {fzf}. Make sure fzf is installed. ({e})") from e
