"""
Tests for daemon/paths.py - rendezvous socket naming.
"""

import os
import subprocess
import sys
import unittest
from pathlib import Path

from tldrhooks.daemon.paths import get_socket_path, project_hash


class TestSocketPaths(unittest.TestCase):
    """Test cases for socket path derivation."""

    def test_same_directory_gives_same_path(self):
        self.assertEqual(get_socket_path("/work/app"), get_socket_path("/work/app"))

    def test_different_directories_give_different_paths(self):
        self.assertNotEqual(get_socket_path("/work/app"), get_socket_path("/work/other"))

    def test_socket_name_format(self):
        path = get_socket_path("/work/app", socket_dir=Path("/tmp"))
        self.assertEqual(path.parent, Path("/tmp"))
        self.assertRegex(path.name, r"^tldr-daemon-[0-9a-f]{8}\.sock$")

    def test_hash_is_md5_prefix_of_absolute_path(self):
        import hashlib

        expected = hashlib.md5(b"/work/app").hexdigest()[:8]
        self.assertEqual(project_hash("/work/app"), expected)

    def test_relative_path_hashes_as_absolute(self):
        self.assertEqual(project_hash("."), project_hash(os.getcwd()))

    def test_path_objects_and_strings_agree(self):
        self.assertEqual(get_socket_path(Path("/work/app")), get_socket_path("/work/app"))

    def test_stable_across_processes(self):
        code = (
            "from tldrhooks.daemon.paths import get_socket_path;"
            "print(get_socket_path('/work/app'))"
        )
        output = subprocess.run(
            [sys.executable, "-c", code], capture_output=True, text=True, check=True
        ).stdout.strip()
        self.assertEqual(output, str(get_socket_path("/work/app")))


if __name__ == "__main__":
    unittest.main()
