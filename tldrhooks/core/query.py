"""Query and result types shared by the dispatcher and its callers."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from tldrhooks.tools.output_trimmer import summarize


class Command(str, Enum):
    """Analysis subcommands the tldr tool accepts from hooks."""
    WARM = "warm"
    CONTEXT = "context"
    SEMANTIC = "semantic"
    IMPACT = "impact"
    SLICE = "slice"
    CFG = "cfg"
    DEAD = "dead"


class Route(str, Enum):
    """Which invocation path produced a result."""
    DAEMON = "daemon"
    FALLBACK = "fallback"


class ErrorKind(str, Enum):
    SPAWN_FAILURE = "spawn_failure"
    NON_ZERO_EXIT = "non_zero_exit"
    TIMEOUT = "timeout"


def _require_text(value: str, what: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{what} must be a non-empty string.")
    return value


@dataclass(frozen=True)
class Query:
    """
    A single analysis request.

    Args are positional and passed to the tool in the given order.
    The project directory is not part of the query; the dispatcher
    appends it so the same query can be aimed at any project.
    """
    command: Command
    args: Tuple[str, ...] = ()
    language: Optional[str] = None

    def __post_init__(self):
        # Accept plain strings for the command and lists for args
        object.__setattr__(self, "command", Command(self.command))
        object.__setattr__(self, "args", tuple(self.args))

    def to_argv(self, project_dir: str) -> list[str]:
        """
        Build the tool argument vector.

        Layout: command, args..., [--language LANG], --project DIR
        """
        argv = [self.command.value, *self.args]
        if self.language:
            argv += ["--language", self.language]
        argv += ["--project", project_dir]
        return argv

    @classmethod
    def for_warm(cls, language: Optional[str] = None) -> "Query":
        return cls(Command.WARM, (), language)

    @classmethod
    def for_context(cls, symbol_name: str, language: Optional[str] = None) -> "Query":
        return cls(Command.CONTEXT, (_require_text(symbol_name, "Symbol name"),), language)

    @classmethod
    def for_semantic(cls, query_text: str, language: Optional[str] = None) -> "Query":
        return cls(Command.SEMANTIC, (_require_text(query_text, "Search text"),), language)

    @classmethod
    def for_impact(cls, symbol_name: str, language: Optional[str] = None) -> "Query":
        return cls(Command.IMPACT, (_require_text(symbol_name, "Symbol name"),), language)

    @classmethod
    def for_dead(cls, language: Optional[str] = None) -> "Query":
        return cls(Command.DEAD, (), language)

    @classmethod
    def for_cfg(
        cls, file_path: str, function_name: str, language: Optional[str] = None
    ) -> "Query":
        return cls(
            Command.CFG,
            (_require_text(file_path, "File path"), _require_text(function_name, "Function name")),
            language,
        )

    @classmethod
    def for_slice(
        cls,
        file_path: str,
        function_name: str,
        line: int,
        language: Optional[str] = None,
    ) -> "Query":
        if int(line) < 1:
            raise ValueError(f"Line must be a positive number, got {line}.")
        return cls(
            Command.SLICE,
            (
                _require_text(file_path, "File path"),
                _require_text(function_name, "Function name"),
                str(int(line)),
            ),
            language,
        )


@dataclass(frozen=True)
class Result:
    """
    Uniform outcome of a dispatched query.

    A successful result carries the verbatim tool output and its summary.
    A failed result carries an empty output, a non-empty error and the
    error kind. Use Result.ok() and Result.failure() to build one.
    """
    success: bool
    output: str = ""
    summary: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    route: Optional[Route] = None

    def __post_init__(self):
        if self.success:
            if self.error is not None or self.error_kind is not None:
                raise ValueError("A successful Result carries no error.")
            if self.summary is None:
                object.__setattr__(self, "summary", summarize(self.output))
        else:
            if not (self.error or "").strip() or self.error_kind is None:
                raise ValueError("A failed Result needs an error message and an error kind.")
            if self.output or self.summary is not None:
                raise ValueError("A failed Result carries no output.")

    @classmethod
    def ok(cls, output: str, route: Optional[Route] = None) -> "Result":
        return cls(success=True, output=output, route=route)

    @classmethod
    def failure(
        cls, error: str, kind: ErrorKind, route: Optional[Route] = None
    ) -> "Result":
        message = (error or "").strip() or f"tldr invocation failed ({kind.value})"
        return cls(success=False, error=message, error_kind=kind, route=route)

    def with_route(self, route: Route) -> "Result":
        """Return a copy tagged with the path that produced it."""
        return replace(self, route=route)
