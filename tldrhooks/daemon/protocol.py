"""Newline-delimited JSON framing used to talk to the tldr daemon.

Request format:
    {"cmd": "ping"}

Response format:
    {
        "status": "ok" | "error",
        ...                      # command-specific fields
    }

Only the ping handshake is sent from hooks; queries themselves go
through the tldr CLI.
"""

import json
from typing import Any, Dict


def serialize_request(cmd: str, **fields: Any) -> bytes:
    """
    Serialize a request to bytes for socket transmission.

    Args:
        cmd: Daemon command name
        **fields: Extra command fields

    Returns:
        UTF-8 encoded JSON line (newline-terminated)
    """
    request = {"cmd": cmd, **fields}
    return json.dumps(request).encode("utf-8") + b"\n"


def deserialize_response(data: bytes) -> Dict[str, Any]:
    """
    Deserialize the first line of a daemon response.

    Raises:
        json.JSONDecodeError: If the line is not valid JSON
        ValueError: If the payload is not a JSON object
    """
    line = data.split(b"\n", 1)[0]
    response = json.loads(line.decode("utf-8"))
    if not isinstance(response, dict):
        raise ValueError(f"Unexpected daemon response: {response!r}")
    return response


def is_ok(response: Dict[str, Any]) -> bool:
    return response.get("status") == "ok"
