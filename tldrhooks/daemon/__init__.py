"""Client side of the per-project tldr daemon.

Architecture:
- paths: deterministic rendezvous socket per project directory
- protocol: newline-delimited JSON framing for the ping handshake
- DaemonClient: liveness handshake and detached auto-start

The daemon itself belongs to the tldr tool; it is only reached through
its socket and the `tldr daemon start` subcommand.
"""

from tldrhooks.daemon.client import DaemonClient
from tldrhooks.daemon.paths import get_socket_path, project_hash
from tldrhooks.daemon.protocol import deserialize_response, serialize_request

__all__ = [
    "DaemonClient",
    "get_socket_path",
    "project_hash",
    "serialize_request",
    "deserialize_response",
]
