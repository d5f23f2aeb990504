"""Rendezvous socket naming for per-project tldr daemons."""

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Optional, Union


def project_hash(project_dir: Union[str, Path]) -> str:
    """First 8 hex chars of the md5 of the absolute project directory."""
    absolute = os.path.abspath(str(project_dir))
    return hashlib.md5(absolute.encode("utf-8")).hexdigest()[:8]


def get_socket_dir(socket_dir: Optional[Path] = None) -> Path:
    """Base directory for daemon sockets (system temp dir unless overridden)."""
    return Path(socket_dir) if socket_dir else Path(tempfile.gettempdir())


def get_socket_path(
    project_dir: Union[str, Path], socket_dir: Optional[Path] = None
) -> Path:
    """
    Get the daemon socket path for a project.

    The name only depends on the project directory string, so every hook
    process computes the same path without coordination.
    """
    return get_socket_dir(socket_dir) / f"tldr-daemon-{project_hash(project_dir)}.sock"
