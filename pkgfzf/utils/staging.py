import contextlib
import logging
import os
import shlex
import sys
import tempfile
from pathlib import Path

from pkgfzf.utils.errors import StartupError

logger = logging.getLogger(__name__)

LAUNCHER = """#!/bin/sh
exec {python} -m {module} "$@"
"""


def launcher_body(module: str, python: str = None) -> str:
    return LAUNCHER.format(python=shlex.quote(python or sys.executable), module=module)


def stage_script(stem: str, body: str, directory=None) -> Path:
    """
    Write `body` to a fresh executable temp file whose name carries our pid.
    """
    try:
        fd, name = tempfile.mkstemp(
            prefix=f"{stem}_{os.getpid()}_",
            suffix=".sh",
            dir=None if directory is None else str(directory),
        )
    except OSError as e:
        raise StartupError(f"Failed to create temporary script file: {e}") from e

    path = Path(name)
    try:
        with os.fdopen(fd, "w") as f:
            f.write(body)
        path.chmod(0o755)
    except OSError as e:
        remove_quietly(path)
        raise StartupError(f"Failed to write script {path}: {e}") from e

    logger.debug("staged %s", path)
    return path


def remove_quietly(path: Path):
    try:
        path.unlink()
        logger.debug("removed %s", path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("could not remove %s: %s", path, e)


@contextlib.contextmanager
def staged(stem: str, module: str, directory=None):
    """
    Context manager yielding a launcher for `python -m module`,
    deleted on exit whatever happens inside the block.
    """
    path = stage_script(stem, launcher_body(module), directory)
    try:
        yield path
    finally:
        remove_quietly(path)
