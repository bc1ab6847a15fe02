import logging
import os
import subprocess

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = 80
NARROW_BELOW = 80


def get_columns(env=None) -> int:
    """
    Terminal width: $COLUMNS, then `tput cols`, then 80.
    """
    env = os.environ if env is None else env
    try:
        columns = int(env["COLUMNS"])
        if columns >= 0:
            return columns
    except (KeyError, ValueError):
        pass

    try:
        out = subprocess.run(
            ["tput", "cols"], capture_output=True, text=True, timeout=5
        ).stdout
        return int(out.strip())
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        logger.debug("tput cols failed: %s", e)
        return DEFAULT_COLUMNS


def preview_window(columns: int) -> str:
    # stack the preview under the list on narrow terminals
    if columns < NARROW_BELOW:
        return "down:50%"
    return "right:50%"
