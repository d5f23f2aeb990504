"""
Tests for api.py - entry points map to the right tldr invocation.
"""

import sys
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from tldrhooks import api
from tldrhooks.core.configs import AdapterSettings
from tldrhooks.core.query import ErrorKind, Result, Route

PROJECT = "/fake/project"


class TestApi(unittest.TestCase):
    """Test cases for the public query surface."""

    def setUp(self):
        self.settings = AdapterSettings()
        client_patch = patch("tldrhooks.core.dispatcher.DaemonClient")
        runner_patch = patch(
            "tldrhooks.core.dispatcher.run_tldr", MagicMock(return_value=Result.ok("out"))
        )
        self.client_cls = client_patch.start()
        self.runner = runner_patch.start()
        self.addCleanup(client_patch.stop)
        self.addCleanup(runner_patch.stop)
        self.client = self.client_cls.from_settings.return_value
        self.client.is_daemon_running.return_value = True

    def _argv(self):
        self.runner.assert_called_once()
        return self.runner.call_args[0][0]

    def test_get_impact_argument_vector(self):
        api.get_impact(PROJECT, "parseConfig", settings=self.settings)
        self.assertEqual(self._argv(), ["impact", "parseConfig", "--project", PROJECT])

    def test_get_context_with_language(self):
        api.get_context(PROJECT, "main", language="go", settings=self.settings)
        self.assertEqual(
            self._argv(), ["context", "main", "--language", "go", "--project", PROJECT]
        )

    def test_warm(self):
        api.warm(PROJECT, settings=self.settings)
        self.assertEqual(self._argv(), ["warm", "--project", PROJECT])

    def test_semantic_search(self):
        api.semantic_search(PROJECT, "parse yaml files", settings=self.settings)
        self.assertEqual(self._argv(), ["semantic", "parse yaml files", "--project", PROJECT])

    def test_detect_dead_code(self):
        api.detect_dead_code(PROJECT, settings=self.settings)
        self.assertEqual(self._argv(), ["dead", "--project", PROJECT])

    def test_get_cfg(self):
        api.get_cfg(PROJECT, "src/a.py", "run", settings=self.settings)
        self.assertEqual(self._argv(), ["cfg", "src/a.py", "run", "--project", PROJECT])

    def test_get_slice(self):
        api.get_slice(PROJECT, "src/a.py", "run", 12, settings=self.settings)
        self.assertEqual(
            self._argv(), ["slice", "src/a.py", "run", "12", "--project", PROJECT]
        )

    def test_returns_dispatcher_result(self):
        result = api.get_impact(PROJECT, "parseConfig", settings=self.settings)
        self.assertTrue(result.success)
        self.assertEqual(result.output, "out")

    def test_invalid_symbol_raises_before_dispatch(self):
        with self.assertRaises(ValueError):
            api.get_impact(PROJECT, "", settings=self.settings)
        self.runner.assert_not_called()


class TestApiSubprocessBoundary(unittest.TestCase):
    """Malformed arguments come back as a failed Result from the real runner."""

    def test_null_byte_in_query_is_a_failed_result(self):
        settings = AdapterSettings(tldr_bin=sys.executable, use_daemon=False)
        result = api.semantic_search(tempfile.gettempdir(), "a\0b", settings=settings)

        self.assertFalse(result.success)
        self.assertIs(result.error_kind, ErrorKind.SPAWN_FAILURE)
        self.assertIs(result.route, Route.FALLBACK)


if __name__ == "__main__":
    unittest.main()
