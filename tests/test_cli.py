"""Tests for the command-line interface."""

import json

import pandas as pd

from breathmarks.cli import build_config, main, parse_args


class TestParseArgs:
    """Tests for argument parsing."""

    def test_default_command(self):
        """Test that mark is the default command."""
        args = parse_args(["--text", "你好"])
        assert args.command == "mark"
        assert args.text == "你好"

    def test_overrides(self, tmp_path):
        """Test that command-line options override the config."""
        args = parse_args([
            "mark",
            "--input", str(tmp_path / "notes.jsonl"),
            "--output", str(tmp_path / "out"),
            "--format", "jsonl",
            "--max-length", "24",
            "--min-length", "4",
        ])
        config = build_config(args)

        assert config.input_file == tmp_path / "notes.jsonl"
        assert config.output.output_dir == tmp_path / "out"
        assert config.output.format == "jsonl"
        assert config.segmentation.max_length == 24
        assert config.segmentation.min_length == 4


class TestMain:
    """Tests for running commands."""

    def test_mark_text(self, capsys, dict_dir):
        """Test marking text given on the command line."""
        assert main(["mark", "--text", "今天天气很好。", "--dict-dir", str(dict_dir)]) == 0
        assert capsys.readouterr().out.strip() == "今天天气很好。▼"

    def test_mark_text_without_command(self, capsys):
        """Test the implicit mark command with the packaged dictionary."""
        assert main(["--text", "今天天气很好。"]) == 0
        assert capsys.readouterr().out.strip() == "今天天气很好。▼"

    def test_mark_file(self, tmp_path, dict_dir):
        """Test marking a notes file."""
        input_path = tmp_path / "notes.jsonl"
        input_path.write_text(
            json.dumps({"id": "a", "content": "今天天气很好。"}, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        exit_code = main([
            "mark",
            "--input", str(input_path),
            "--output", str(tmp_path / "out"),
            "--dict-dir", str(dict_dir),
        ])

        assert exit_code == 0
        results = pd.read_csv(tmp_path / "out" / "notes_marked.csv")
        assert list(results["Marked_Text"]) == ["今天天气很好。▼"]

    def test_mark_missing_input(self, tmp_path, capsys):
        """Test the error for a missing input file."""
        assert main(["mark", "--input", str(tmp_path / "missing.jsonl")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_mark_without_input(self, capsys):
        """Test the error when nothing is given to mark."""
        assert main(["mark"]) == 1
        assert "Input is required" in capsys.readouterr().err

    def test_invalid_lengths(self, capsys):
        """Test that inconsistent length limits are reported."""
        assert main(["mark", "--text", "你好", "--max-length", "3", "--min-length", "6"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_boundaries(self, capsys, dict_dir):
        """Test printing allowed boundaries."""
        assert main(["boundaries", "--text", "我在北京大学", "--dict-dir", str(dict_dir)]) == 0
        assert capsys.readouterr().out.strip() == "我|在北京大学"

    def test_dict_export_import_reset(self, tmp_path, capsys, dict_dir):
        """Test the dictionary management commands."""
        store = tmp_path / "overrides.json"
        export_path = tmp_path / "dict.json"
        common = ["--store", str(store), "--dict-dir", str(dict_dir)]

        assert main(["dict", "export", "--file", str(export_path)] + common) == 0
        data = json.loads(export_path.read_text(encoding="utf-8"))
        assert len(data["categories"]) == 7

        for category in data["categories"]:
            if category["id"] == "number":
                category["words"] = ["七"]
        export_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

        assert main(["dict", "import", "--file", str(export_path)] + common) == 0
        saved = json.loads(store.read_text(encoding="utf-8"))
        assert saved["dict_number"] == ["七"]

        assert main(["dict", "reset", "--category", "number"] + common) == 0
        assert "dict_number" not in json.loads(store.read_text(encoding="utf-8"))

    def test_dict_import_invalid(self, tmp_path, capsys):
        """Test that an invalid document is rejected."""
        bad = tmp_path / "bad.json"
        bad.write_text('{"version": "1.0", "categories": [{"id": "verbs", "words": []}]}', encoding="utf-8")
        store = tmp_path / "overrides.json"

        assert main(["dict", "import", "--file", str(bad), "--store", str(store)]) == 1
        assert "Error" in capsys.readouterr().err
        assert not store.exists()

    def test_dict_import_requires_store(self, tmp_path, capsys):
        """Test that imports need a persistent store."""
        assert main(["dict", "import", "--file", str(tmp_path / "dict.json")]) == 1
        assert "--store" in capsys.readouterr().err

    def test_dict_reset_requires_store(self, capsys):
        """Test that resetting needs a persistent store."""
        assert main(["dict", "reset"]) == 1
        assert "--store" in capsys.readouterr().err

    def test_mark_empty_text(self, capsys):
        """Test that an empty --text is still marked."""
        assert main(["mark", "--text", ""]) == 0
        assert capsys.readouterr().out.strip() == "▼"
