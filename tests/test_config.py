from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from distructions.utils.config import DEFAULT_CONFIG, load_config
from distructions.utils.structured_data import dump_structured_data, load_structured_file


class ConfigTests(unittest.TestCase):
    def test_missing_file_returns_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_config(Path(tmpdir) / "distructions.yaml")
            self.assertEqual(config, DEFAULT_CONFIG)

    def test_yaml_overrides_are_deep_merged(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "distructions.yaml"
            path.write_text("catalog:\n  path: commands.json\nexec:\n  shell: /bin/zsh\n", encoding="utf-8")

            config = load_config(path)
            self.assertEqual(config["catalog"]["path"], "commands.json")
            self.assertTrue(config["catalog"]["require_vcs"])
            self.assertEqual(config["exec"]["shell"], "/bin/zsh")

    def test_environment_selects_config_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "custom.json"
            path.write_text(json.dumps({"ui": {"show_descriptions": False}}), encoding="utf-8")
            with patch.dict(os.environ, {"DISTRUCTIONS_CONFIG": str(path)}, clear=False):
                config = load_config()
            self.assertFalse(config["ui"]["show_descriptions"])

    def test_non_mapping_config_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "distructions.yaml"
            path.write_text("- a\n- b\n", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                load_config(path)

    def test_structured_data_reads_json_and_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "data.yaml"
            path.write_text(dump_structured_data({"services": {"web": None}}), encoding="utf-8")
            self.assertEqual(load_structured_file(path), {"services": {"web": None}})

            path.write_text(dump_structured_data({"a": [1, 2]}, as_yaml=False), encoding="utf-8")
            self.assertEqual(load_structured_file(path), {"a": [1, 2]})


if __name__ == "__main__":
    unittest.main()
