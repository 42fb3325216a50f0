"""Tests for the ``python -m circuitmind`` command line."""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from circuitmind.__main__ import main
from tests.sensor_fixture import make_sensor_topology_json, make_solution_payload


class TestCli(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _run(self, *args: str) -> tuple[int, str]:
        """Run main() with argv, returning (exit code, stdout)."""
        out = io.StringIO()
        with mock.patch("sys.argv", ["circuitmind", *args]), redirect_stdout(out):
            with self.assertRaises(SystemExit) as ctx:
                main()
        return ctx.exception.code, out.getvalue()

    def _write(self, name: str, text: str) -> str:
        path = self.dir / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    def test_validate_topology_file(self):
        """A warning-only topology prints its issues and exits 0."""
        path = self._write("topo.json", json.dumps(make_sensor_topology_json()))
        code, out = self._run("validate", path)
        self.assertEqual(code, 0)
        self.assertEqual([i["rule"] for i in json.loads(out)], ["i2c-pullup-missing"])

    def test_validate_malformed_topology(self):
        """Malformed topology files are reported, not raised."""
        for text in ('{"nodes": [{"id": "a"}]}', "{not json", "[]"):
            code, out = self._run("validate", self._write("bad.json", text))
            self.assertEqual(code, 1, text)
            self.assertTrue(out.startswith("Invalid topology"), out)

    def test_validate_missing_file(self):
        """A path that does not exist is reported, not raised."""
        code, out = self._run("validate", str(self.dir / "missing.json"))
        self.assertEqual(code, 1)
        self.assertTrue(out.startswith("Invalid topology"))

    def test_interpret_response_file(self):
        """A saved answer prints normalized solutions and exits 0."""
        text = "```json\n" + json.dumps(make_solution_payload()) + "\n```"
        code, out = self._run("interpret", self._write("answer.txt", text))
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)[0]["id"], "sol_a")

    def test_interpret_unusable_response(self):
        """Answers without JSON exit 1 with a readable message."""
        code, out = self._run("interpret", self._write("answer.txt", "no json here"))
        self.assertEqual(code, 1)
        self.assertTrue(out.startswith("Could not interpret AI response"))

    def test_unknown_command(self):
        """Unknown commands print usage and exit 1."""
        code, out = self._run("frobnicate")
        self.assertEqual(code, 1)
        self.assertIn("Usage:", out)


if __name__ == "__main__":
    unittest.main()
