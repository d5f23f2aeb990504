"""
Tests for config loading and validation.
"""

import os
import unittest
import tempfile
from pathlib import Path
from unittest.mock import patch

from tldrhooks.core.configs import AdapterSettings, get_adapter_settings, load_raw_config


def _clean_env() -> dict:
    return {k: v for k, v in os.environ.items() if not k.startswith("TLDRHOOKS_")}


class TestConfig(unittest.TestCase):
    """Test cases for configuration helpers."""

    def setUp(self):
        """Set up test environment with temporary directories."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = Path(self.temp_dir) / "config.cfg"
        self.env_file = Path(self.temp_dir) / ".env"

    def tearDown(self):
        """Clean up temporary files."""
        import shutil

        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_config(self, defaults: dict[str, str]) -> None:
        import configparser

        cfg = configparser.ConfigParser()
        cfg["DEFAULT"] = defaults
        with open(self.config_file, "w") as handle:
            cfg.write(handle)

    def test_load_raw_config_lowercases_keys(self):
        self._write_config({"TLDR_BIN": "/opt/tldr", "DAEMON_TIMEOUT": "5"})

        raw = load_raw_config(self.config_file, self.env_file)
        self.assertEqual(raw["tldr_bin"], "/opt/tldr")
        self.assertEqual(raw["daemon_timeout"], "5")

    def test_load_raw_config_missing_files_returns_empty_dict(self):
        raw = load_raw_config(self.config_file, self.env_file)
        self.assertEqual(raw, {}, "Should return empty dict when config does not exist")

    def test_config_without_section_header_raises_value_error(self):
        self.config_file.write_text("no section header\n")

        with self.assertRaises(ValueError) as ctx:
            load_raw_config(self.config_file, self.env_file)
        self.assertIn("config.cfg", str(ctx.exception))

    def test_env_file_is_read_and_config_file_wins(self):
        self.env_file.write_text("TLDR_BIN=/from/env\nLOG_LEVEL=debug\n")
        self._write_config({"TLDR_BIN": "/from/cfg"})

        raw = load_raw_config(self.config_file, self.env_file)
        self.assertEqual(raw["tldr_bin"], "/from/cfg")
        self.assertEqual(raw["log_level"], "debug")

    def test_defaults(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            settings = get_adapter_settings({})

        self.assertEqual(settings, AdapterSettings())
        self.assertEqual(settings.daemon_timeout, 10.0)
        self.assertEqual(settings.fallback_timeout, 60.0)
        self.assertTrue(settings.use_daemon)
        self.assertIsNone(settings.socket_dir)

    def test_values_from_raw_config(self):
        raw = {
            "tldr_bin": "/opt/tldr",
            "daemon_timeout": "2.5",
            "fallback_timeout": "120",
            "socket_dir": "/run/tldr",
            "use_daemon": "no",
            "log_level": "info",
        }
        with patch.dict(os.environ, _clean_env(), clear=True):
            settings = get_adapter_settings(raw)

        self.assertEqual(settings.tldr_bin, "/opt/tldr")
        self.assertEqual(settings.daemon_timeout, 2.5)
        self.assertEqual(settings.fallback_timeout, 120.0)
        self.assertEqual(settings.socket_dir, Path("/run/tldr"))
        self.assertFalse(settings.use_daemon)
        self.assertEqual(settings.log_level, "INFO")

    def test_env_overrides_config(self):
        env = _clean_env()
        env.update({"TLDRHOOKS_DAEMON_TIMEOUT_S": "3", "TLDRHOOKS_TLDR_BIN": "tldr-dev"})
        with patch.dict(os.environ, env, clear=True):
            settings = get_adapter_settings({"daemon_timeout": "7", "tldr_bin": "tldr"})

        self.assertEqual(settings.daemon_timeout, 3.0)
        self.assertEqual(settings.tldr_bin, "tldr-dev")

    def test_no_daemon_env_disables_daemon(self):
        env = _clean_env()
        env["TLDRHOOKS_NO_DAEMON"] = "1"
        with patch.dict(os.environ, env, clear=True):
            settings = get_adapter_settings({"use_daemon": "true"})

        self.assertFalse(settings.use_daemon)

    def test_invalid_timeout_raises(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            with self.assertRaises(ValueError):
                get_adapter_settings({"daemon_timeout": "soon"})
            with self.assertRaises(ValueError):
                get_adapter_settings({"fallback_timeout": "-1"})


if __name__ == "__main__":
    unittest.main()
