from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from distructions import __version__
from distructions.cli import app
from distructions.store import CATALOG_FILENAME


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self._tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self._tmpdir.name)
        self._cwd = os.getcwd()
        os.chdir(self.root)

        remote = patch("distructions.store.git_remote_url", return_value="git@github.com:acme/widgets.git")
        remote.start()
        self.addCleanup(remote.stop)

    def tearDown(self) -> None:
        os.chdir(self._cwd)
        self._tmpdir.cleanup()

    def _init_project(self) -> None:
        (self.root / ".git").mkdir()
        (self.root / "go.mod").write_text("module demo\n", encoding="utf-8")

    def test_version(self) -> None:
        result = self.runner.invoke(app, ["--version"])
        self.assertEqual(result.exit_code, 0, msg=result.output)
        self.assertIn(__version__, result.output)

    def test_detectors_lists_builtins(self) -> None:
        result = self.runner.invoke(app, ["detectors"])
        self.assertEqual(result.exit_code, 0, msg=result.output)
        self.assertIn("npm:", result.output)
        self.assertIn("docker-compose:", result.output)
        self.assertIn("go:", result.output)

    def test_list_as_json_generates_catalog(self) -> None:
        self._init_project()
        result = self.runner.invoke(app, ["list", "--as-json"])
        self.assertEqual(result.exit_code, 0, msg=result.output)

        payload = json.loads(result.output)
        self.assertEqual(payload["projectName"], "widgets")
        self.assertEqual([item["name"] for item in payload["commands"]], ["Go: Run", "Go: Test", "Go: Build"])
        self.assertTrue((self.root / CATALOG_FILENAME).exists())

    def test_menu_runs_selected_command_then_quits(self) -> None:
        self._init_project()
        with patch("distructions.cli.execute_command", return_value=1) as execute:
            result = self.runner.invoke(app, [], input="j\nq")
        self.assertEqual(result.exit_code, 0, msg=result.output)
        execute.assert_called_once_with("go test ./...", shell=None)
        self.assertIn("Bye!", result.output)

    def test_menu_with_corrupt_catalog_exits_non_zero(self) -> None:
        (self.root / CATALOG_FILENAME).write_text("{nope", encoding="utf-8")
        result = self.runner.invoke(app, ["menu"], input="q")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error:", result.output)

    def test_outside_repository_is_informational(self) -> None:
        (self.root / "go.mod").write_text("module demo\n", encoding="utf-8")
        with patch("distructions.store.find_vcs_root", return_value=None):
            result = self.runner.invoke(app, ["menu"])
        self.assertEqual(result.exit_code, 0, msg=result.output)
        self.assertIn("not inside a git repository", result.output)
        self.assertFalse((self.root / CATALOG_FILENAME).exists())

    def test_declined_generation_is_informational(self) -> None:
        self._init_project()
        (self.root / "distructions.yaml").write_text("catalog:\n  confirm_generation: true\n", encoding="utf-8")
        result = self.runner.invoke(app, ["menu"], input="n\n")
        self.assertEqual(result.exit_code, 0, msg=result.output)
        self.assertIn("Skipped creating", result.output)
        self.assertFalse((self.root / CATALOG_FILENAME).exists())

    def test_yes_flag_skips_confirmation(self) -> None:
        self._init_project()
        (self.root / "distructions.yaml").write_text("catalog:\n  confirm_generation: true\n", encoding="utf-8")
        result = self.runner.invoke(app, ["--yes", "generate"])
        self.assertEqual(result.exit_code, 0, msg=result.output)
        self.assertIn("Wrote 3 command(s)", result.output)

    def test_generate_respects_existing_catalog(self) -> None:
        self._init_project()
        self.assertEqual(self.runner.invoke(app, ["generate"]).exit_code, 0)
        result = self.runner.invoke(app, ["generate"])
        self.assertIn("--force", result.output)

    def test_run_by_name_propagates_exit_status(self) -> None:
        self._init_project()
        with patch("distructions.cli.execute_command", return_value=4) as execute:
            result = self.runner.invoke(app, ["run", "Go: Build"])
        self.assertEqual(result.exit_code, 4)
        execute.assert_called_once_with("go build", shell=None)

        unknown = self.runner.invoke(app, ["run", "nope"])
        self.assertEqual(unknown.exit_code, 2)

    def test_invalid_config_is_fatal(self) -> None:
        (self.root / "distructions.yaml").write_text("- just\n- a list\n", encoding="utf-8")
        result = self.runner.invoke(app, ["detectors"])
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
