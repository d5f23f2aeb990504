"""Query entry points used by the hooks and the CLI.

Each function maps to one tldr subcommand and returns a Result; none of
them raise for daemon or tool problems. Invalid arguments (empty symbol
names, non-positive line numbers) raise ValueError.
"""

from pathlib import Path
from typing import Optional, Union

from tldrhooks.core.configs import AdapterSettings
from tldrhooks.core.dispatcher import dispatch
from tldrhooks.core.query import Query, Result

PathLike = Union[str, Path]


def warm(
    project_dir: PathLike,
    language: Optional[str] = None,
    settings: Optional[AdapterSettings] = None,
) -> Result:
    """Build or refresh the project's indexes."""
    return dispatch(project_dir, Query.for_warm(language), settings)


def get_context(
    project_dir: PathLike,
    symbol_name: str,
    language: Optional[str] = None,
    settings: Optional[AdapterSettings] = None,
) -> Result:
    """Relevant code context around a function or class."""
    return dispatch(project_dir, Query.for_context(symbol_name, language), settings)


def semantic_search(
    project_dir: PathLike,
    query_text: str,
    language: Optional[str] = None,
    settings: Optional[AdapterSettings] = None,
) -> Result:
    return dispatch(project_dir, Query.for_semantic(query_text, language), settings)


def detect_dead_code(
    project_dir: PathLike,
    language: Optional[str] = None,
    settings: Optional[AdapterSettings] = None,
) -> Result:
    return dispatch(project_dir, Query.for_dead(language), settings)


def get_impact(
    project_dir: PathLike,
    symbol_name: str,
    language: Optional[str] = None,
    settings: Optional[AdapterSettings] = None,
) -> Result:
    """Callers of a function (reverse call graph)."""
    return dispatch(project_dir, Query.for_impact(symbol_name, language), settings)


def get_cfg(
    project_dir: PathLike,
    file_path: str,
    function_name: str,
    language: Optional[str] = None,
    settings: Optional[AdapterSettings] = None,
) -> Result:
    """Control flow graph of one function."""
    return dispatch(project_dir, Query.for_cfg(file_path, function_name, language), settings)


def get_slice(
    project_dir: PathLike,
    file_path: str,
    function_name: str,
    line: int,
    language: Optional[str] = None,
    settings: Optional[AdapterSettings] = None,
) -> Result:
    """Program slice: the lines that affect the given line."""
    return dispatch(
        project_dir, Query.for_slice(file_path, function_name, line, language), settings
    )
