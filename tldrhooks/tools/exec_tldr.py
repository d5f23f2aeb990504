"""Run the tldr CLI as a subprocess and turn the outcome into a Result."""

import logging
import subprocess
from typing import Optional, Sequence

from tldrhooks.core.query import ErrorKind, Result

logger = logging.getLogger(__name__)


def run_tldr(
    argv: Sequence[str],
    timeout: float,
    tldr_bin: str = "tldr",
    cwd: Optional[str] = None,
) -> Result:
    """
    Execute one tldr invocation with a hard time limit.

    The child is killed when the timeout fires. Nothing is raised: spawn
    errors, non-zero exits and timeouts all come back as a failed Result
    with the matching ErrorKind.

    Args:
        argv: Arguments after the executable (command, args, flags)
        timeout: Time budget in seconds
        tldr_bin: Executable name or path
        cwd: Working directory for the child (optional)

    Returns:
        Result.ok with verbatim stdout on exit code 0, Result.failure otherwise
    """
    cmd = [tldr_bin, *argv]
    logger.debug("Running %s (timeout %.1fs)", " ".join(cmd), timeout)

    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        label = argv[0] if argv else tldr_bin
        logger.warning("tldr %s timed out after %.1fs", label, timeout)
        return Result.failure(
            f"tldr {label} timed out after {timeout:g}s",
            ErrorKind.TIMEOUT,
        )
    except (OSError, ValueError) as e:
        # ValueError: argv rejected before exec, e.g. an embedded NUL
        logger.warning("Could not start %s: %s", tldr_bin, e)
        return Result.failure(str(e), ErrorKind.SPAWN_FAILURE)

    if completed.returncode != 0:
        stderr = (completed.stderr or "").strip()
        message = stderr or f"tldr exited with status {completed.returncode}"
        logger.debug("tldr failed (status %d): %s", completed.returncode, message)
        return Result.failure(message, ErrorKind.NON_ZERO_EXIT)

    return Result.ok(completed.stdout or "")
