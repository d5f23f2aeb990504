"""Dual-path query dispatch: warm daemon when available, cold CLI otherwise.

Every dispatch makes exactly one tldr invocation:

    probe ──live──────────────────────────▶ daemon path   (short timeout)
      │
      └─dead─▶ launch ──live──────────────▶ daemon path   (short timeout)
                  │
                  └─not live──────────────▶ fallback path (long timeout)

The daemon path and the fallback path are alternatives chosen by
liveness. A failure on the daemon path is returned as-is, not retried
on the fallback path.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from tldrhooks.core.configs import AdapterSettings, get_adapter_settings
from tldrhooks.core.query import Query, Result, Route
from tldrhooks.daemon.client import DaemonClient
from tldrhooks.tools.exec_tldr import run_tldr

logger = logging.getLogger(__name__)

Runner = Callable[..., Result]


class DispatchState(str, Enum):
    NOT_PROBED = "not_probed"
    PROBED_LIVE = "probed_live"
    PROBED_DEAD = "probed_dead"
    DAEMON_PATH_TRIED = "daemon_path_tried"
    FALLBACK_PATH_TRIED = "fallback_path_tried"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class QueryDispatcher:
    """
    Runs a Query against one project.

    The daemon client and the subprocess runner are injectable so the
    path selection can be exercised without a real tldr install.
    """

    def __init__(
        self,
        project_dir: Union[str, Path],
        settings: Optional[AdapterSettings] = None,
        client: Optional[DaemonClient] = None,
        runner: Optional[Runner] = None,
    ):
        self.project_dir = os.path.abspath(str(project_dir))
        self.settings = settings or get_adapter_settings()
        self.client = client or DaemonClient.from_settings(self.project_dir, self.settings)
        self.runner = runner or run_tldr
        self.state = DispatchState.NOT_PROBED

    def _transition(self, state: DispatchState) -> None:
        logger.debug("dispatch %s: %s -> %s", self.project_dir, self.state.value, state.value)
        self.state = state

    def select_route(self) -> Route:
        """Probe the daemon (launching it if needed) and pick a path."""
        if not self.settings.use_daemon:
            self._transition(DispatchState.PROBED_DEAD)
            return Route.FALLBACK

        if self.client.is_daemon_running():
            self._transition(DispatchState.PROBED_LIVE)
            return Route.DAEMON

        self._transition(DispatchState.PROBED_DEAD)
        if self.client.launch():
            return Route.DAEMON

        logger.info("tldr daemon unreachable for %s, using direct invocation", self.project_dir)
        return Route.FALLBACK

    def timeout_for(self, route: Route) -> float:
        if route is Route.DAEMON:
            return self.settings.daemon_timeout
        return self.settings.fallback_timeout

    def dispatch(self, query: Query) -> Result:
        """
        Run a query and return a uniform Result.

        Never raises for tool-side problems; those come back as a failed
        Result with an error kind.
        """
        self.state = DispatchState.NOT_PROBED
        route = self.select_route()
        self._transition(
            DispatchState.DAEMON_PATH_TRIED
            if route is Route.DAEMON
            else DispatchState.FALLBACK_PATH_TRIED
        )

        argv = query.to_argv(self.project_dir)
        result = self._invoke(argv, self.timeout_for(route)).with_route(route)

        self._transition(DispatchState.SUCCEEDED if result.success else DispatchState.FAILED)
        if not result.success:
            logger.info(
                "tldr %s failed via %s path (%s): %s",
                query.command.value,
                route.value,
                result.error_kind.value,
                result.error,
            )
        return result

    def _invoke(self, argv: Sequence[str], timeout: float) -> Result:
        return self.runner(
            argv,
            timeout,
            tldr_bin=self.settings.tldr_bin,
            cwd=self.project_dir,
        )


def dispatch(
    project_dir: Union[str, Path],
    query: Query,
    settings: Optional[AdapterSettings] = None,
) -> Result:
    """Convenience wrapper: one dispatcher, one query."""
    return QueryDispatcher(project_dir, settings=settings).dispatch(query)
