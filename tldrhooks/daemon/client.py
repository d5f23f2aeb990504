"""Lightweight client for the per-project tldr daemon.

Hooks only need two things from the daemon: to know whether it is up,
and to get it started when it is not. The actual queries are run through
the tldr CLI, which reuses the daemon's warm indexes when one is live.

Usage:
    client = DaemonClient("/path/to/project")
    if client.is_daemon_running() or client.launch():
        ...  # fast path
    else:
        ...  # cold fallback
"""

import logging
import socket
import subprocess
import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

from tldrhooks.core.configs import AdapterSettings
from tldrhooks.daemon.paths import get_socket_path
from tldrhooks.daemon.protocol import (
    deserialize_response,
    is_ok,
    serialize_request,
)

logger = logging.getLogger(__name__)

# Subcommand that starts a daemon in the background
LAUNCH_SUBCOMMAND = ("daemon", "start")

# Poll schedule while waiting for a freshly spawned daemon
POLL_INITIAL_DELAY = 0.05
POLL_MAX_DELAY = 0.5


class DaemonClient:
    """
    Liveness checks and auto-start for one project's daemon.

    Holds no state between calls apart from its configuration, so a new
    instance per hook invocation is cheap.
    """

    def __init__(
        self,
        project_dir: Union[str, Path],
        socket_path: Optional[Path] = None,
        tldr_bin: str = "tldr",
        handshake_timeout: float = 0.5,
        launch_deadline: float = 3.0,
    ):
        """
        Initialize client.

        Args:
            project_dir: Project the daemon serves
            socket_path: Rendezvous socket (derived from project_dir if omitted)
            tldr_bin: Executable used to launch the daemon
            handshake_timeout: Budget for a single ping, in seconds
            launch_deadline: Total wait for a spawned daemon to answer, in seconds
        """
        self.project_dir = str(project_dir)
        self.socket_path = socket_path or get_socket_path(project_dir)
        self.tldr_bin = tldr_bin
        self.handshake_timeout = handshake_timeout
        self.launch_deadline = launch_deadline

    @classmethod
    def from_settings(
        cls, project_dir: Union[str, Path], settings: AdapterSettings
    ) -> "DaemonClient":
        return cls(
            project_dir,
            socket_path=get_socket_path(project_dir, settings.socket_dir),
            tldr_bin=settings.tldr_bin,
            handshake_timeout=settings.handshake_timeout,
            launch_deadline=settings.launch_deadline,
        )

    def is_daemon_running(self) -> bool:
        """
        Check if the daemon is running and answering.

        Returns True only if:
        1. Socket file exists
        2. Can connect to socket
        3. Ping returns status ok within the handshake timeout

        A leftover socket file from a dead daemon fails step 2 or 3.
        """
        if not self.socket_path.exists():
            return False

        try:
            response = self._send_request("ping", timeout=self.handshake_timeout)
        except (OSError, ValueError) as e:
            # socket.timeout is an OSError, JSONDecodeError a ValueError
            logger.debug("Daemon handshake failed on %s: %s", self.socket_path, e)
            return False
        return is_ok(response)

    def launch(self) -> bool:
        """
        Start the daemon once and wait for it to answer.

        Returns True if it answers before the launch deadline. Spawn
        errors are reported as False, never raised.
        """
        if not self._start_daemon():
            return False

        return self._wait_until_ready()

    def _start_daemon(self) -> bool:
        """
        Spawn the daemon detached from this process.

        The daemon must outlive the hook that launched it, so it gets its
        own session and no inherited stdio.

        Returns False if the executable could not be started.
        """
        cmd = [self.tldr_bin, *LAUNCH_SUBCOMMAND, "--project", self.project_dir]
        try:
            subprocess.Popen(
                cmd,
                cwd=self.project_dir,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger.info("Could not launch tldr daemon for %s: %s", self.project_dir, e)
            return False

        logger.debug("Launched tldr daemon for %s", self.project_dir)
        return True

    def _wait_until_ready(self) -> bool:
        """Poll the handshake with backoff until it succeeds or the deadline passes."""
        deadline = time.monotonic() + self.launch_deadline
        delay = POLL_INITIAL_DELAY

        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            time.sleep(min(delay, remaining))
            if self.is_daemon_running():
                return True
            delay = min(delay * 2, POLL_MAX_DELAY)

        logger.info(
            "tldr daemon for %s not ready within %.1fs", self.project_dir, self.launch_deadline
        )
        return False

    def _send_request(self, cmd: str, timeout: float) -> Dict[str, Any]:
        """
        Send one request to the daemon and return its response.

        Raises:
            OSError: If the daemon cannot be reached or times out
            ValueError: If the response is empty or not valid JSON
        """
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(timeout)

        try:
            sock.connect(str(self.socket_path))
            sock.sendall(serialize_request(cmd))

            data = b""
            while b"\n" not in data:
                chunk = sock.recv(4096)
                if not chunk:
                    break
                data += chunk
        finally:
            sock.close()

        if not data.strip():
            raise ValueError("Empty response from daemon")
        return deserialize_response(data)


def daemon_status(project_dir: Union[str, Path], settings: AdapterSettings) -> Dict[str, Any]:
    """Describe the daemon for a project without starting it."""
    client = DaemonClient.from_settings(project_dir, settings)
    return {
        "project": str(project_dir),
        "socket": str(client.socket_path),
        "socket_exists": client.socket_path.exists(),
        "running": client.is_daemon_running(),
    }
