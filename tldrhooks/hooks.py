"""Hook runners for the host runtime.

A hook reads one JSON object on stdin and writes at most one JSON object
on stdout. Only these fields are used:

    input:  cwd, prompt
    output: {"hookSpecificOutput": {"hookEventName": ..., "additionalContext": ...}}

Hooks must never block the host: a failed query means "no context",
and the runner always exits 0.
"""

import json
import keyword
import logging
import os
import re
from typing import Any, Callable, Dict, List, Optional, TextIO

from tldrhooks import api
from tldrhooks.core.configs import AdapterSettings

logger = logging.getLogger(__name__)

MAX_SYMBOLS = 3

_CALL_RE = re.compile(r"\b([A-Za-z_][A-Za-z0-9_]*)\s*\(")
_BACKTICK_RE = re.compile(r"`([A-Za-z_][A-Za-z0-9_.]*)`")
_CAMEL_RE = re.compile(r"\b([a-z]+[A-Z][A-Za-z0-9]*|[A-Z][a-z0-9]+[A-Z][A-Za-z0-9]*)\b")
_SNAKE_RE = re.compile(r"\b([A-Za-z][A-Za-z0-9]*_[A-Za-z0-9_]+)\b")

# Words that look like calls in prose or code but are never worth a lookup
_IGNORED = set(keyword.kwlist) | {
    "print", "len", "str", "int", "dict", "list", "set", "tuple", "range",
    "self", "cls", "this", "super", "function", "method", "call", "see",
}

HookHandler = Callable[[Dict[str, Any], Optional[AdapterSettings]], Optional[Dict[str, Any]]]


def extract_symbols(prompt: str, limit: int = MAX_SYMBOLS) -> List[str]:
    """
    Pick likely function or class names out of a free-text prompt.

    Candidates are names followed by "(", names in backticks, camelCase
    and snake_case words. They are returned in order of appearance,
    without duplicates, capped at `limit`.
    """
    found = []
    for pattern in (_CALL_RE, _BACKTICK_RE, _CAMEL_RE, _SNAKE_RE):
        for match in pattern.finditer(prompt or ""):
            name = match.group(1).rsplit(".", 1)[-1]
            found.append((match.start(1), name))

    symbols: List[str] = []
    for _, name in sorted(found):
        if len(name) < 3 or name.lower() in _IGNORED or name in symbols:
            continue
        symbols.append(name)
        if len(symbols) >= limit:
            break
    return symbols


def _project_dir(payload: Dict[str, Any]) -> str:
    cwd = payload.get("cwd")
    return cwd if isinstance(cwd, str) and cwd else os.getcwd()


def _hook_output(event: str, context: str) -> Dict[str, Any]:
    return {
        "hookSpecificOutput": {
            "hookEventName": event,
            "additionalContext": context,
        }
    }


def session_start(
    payload: Dict[str, Any], settings: Optional[AdapterSettings] = None
) -> Optional[Dict[str, Any]]:
    """Warm the project's indexes so later queries hit a live daemon."""
    project = _project_dir(payload)
    result = api.warm(project, settings=settings)
    if not result.success:
        logger.info("Warm-up skipped for %s: %s", project, result.error)
        return None
    return _hook_output(
        "SessionStart",
        f"tldr: code indexes ready for {project} ({result.route.value} path).",
    )


def context_inject(
    payload: Dict[str, Any], settings: Optional[AdapterSettings] = None
) -> Optional[Dict[str, Any]]:
    """
    Attach code context for the first symbol mentioned in the user's prompt.

    One hook run makes a single context query, so the probe, the launch
    and the tool call each happen at most once within the hook timeout.
    Further symbols are listed without being queried.
    """
    prompt = payload.get("prompt")
    if not isinstance(prompt, str):
        return None

    symbols = extract_symbols(prompt)
    if not symbols:
        return None

    project = _project_dir(payload)
    symbol = symbols[0]
    result = api.get_context(project, symbol, settings=settings)
    if not result.success or not result.summary:
        logger.debug("No context for %s: %s", symbol, result.error)
        return None

    context = f"tldr context for {symbol}:\n{result.summary}"
    if len(symbols) > 1:
        others = ", ".join(symbols[1:])
        context += f"\n\nAlso mentioned: {others} (run `tldrhooks context <name>` for more)"
    return _hook_output("UserPromptSubmit", context)


HOOKS: Dict[str, HookHandler] = {
    "session-start": session_start,
    "context-inject": context_inject,
}


def read_payload(stream: TextIO) -> Dict[str, Any]:
    """Parse the hook payload; anything unreadable counts as empty."""
    raw = stream.read()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring malformed hook payload: %s", e)
        return {}
    if not isinstance(payload, dict):
        logger.warning("Ignoring hook payload of type %s", type(payload).__name__)
        return {}
    return payload


def run_hook(
    name: str,
    stdin: TextIO,
    stdout: TextIO,
    settings: Optional[AdapterSettings] = None,
) -> None:
    """
    Run one named hook against stdin/stdout.

    Raises:
        KeyError: If the hook name is unknown
    """
    handler = HOOKS[name]
    output = handler(read_payload(stdin), settings)
    if output is not None:
        stdout.write(json.dumps(output))
        stdout.write("\n")
        stdout.flush()
