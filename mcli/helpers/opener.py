"""Best-effort launch of the platform URL opener"""

import logging
import subprocess
import sys

logger = logging.getLogger(__name__)


def opener_command(url: str, platform: str = sys.platform) -> list[str]:
    """The command line that opens `url` on the given platform"""
    if platform == "darwin":
        return ["open", url]
    if platform.startswith("win"):
        return ["cmd", "/c", "start", "", url]
    return ["xdg-open", url]


def open_url(url: str) -> bool:
    """Launch the opener without waiting; failures are logged, never raised"""
    command = opener_command(url)
    try:
        subprocess.Popen(  # pylint: disable=consider-using-with
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.warning("Could not open %s with %s: %s", url, command[0], e)
        return False
    logger.info("Opened %s", url)
    return True
