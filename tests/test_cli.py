"""Tests for the command-line interface."""

import json

import pytest

from code_outline import __version__
from code_outline.cli import create_parser, main


def _project(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "shapes.go").write_text(
        "package shapes\n\n// Area of a square.\nfunc Area(side int) int {\n\treturn side * side\n}\n",
        encoding="utf-8",
    )
    (src / "util.py").write_text("def helper():\n    pass\n", encoding="utf-8")
    return src


class TestArguments:
    def test_defaults(self):
        args = create_parser().parse_args([])
        assert args.input == "."
        assert args.output is None
        assert args.format == "text"
        assert args.workers is None

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestMain:
    def test_text_report_on_stdout(self, tmp_path, capsys):
        src = _project(tmp_path)
        main(["-i", str(src)])

        out = capsys.readouterr().out
        assert "[public] module shapes" not in out
        assert "[private] module shapes" in out
        assert "[public] function Area() – Area of a square." in out
        assert "[public] function helper()" in out
        sections = out.strip().split("\n\n")
        assert len(sections) == 2

    def test_json_report_to_file(self, tmp_path):
        src = _project(tmp_path)
        output = tmp_path / "outline.json"
        main(["-i", str(src), "--format", "json", "-o", str(output)])

        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["summary"]["processed"] == 2
        assert document["summary"]["failed"] == 0
        assert {f["language"] for f in document["files"]} == {"go", "python"}

    def test_language_filter(self, tmp_path, capsys):
        src = _project(tmp_path)
        main(["-i", str(src), "--lang", "Python"])
        out = capsys.readouterr().out
        assert "helper()" in out
        assert "Area()" not in out

    def test_exclude_pattern(self, tmp_path, capsys):
        src = _project(tmp_path)
        main(["-i", str(src), "--exclude", "*.py"])
        out = capsys.readouterr().out
        assert "helper()" not in out
        assert "Area()" in out

    def test_verbose_summary_on_stderr(self, tmp_path, capsys):
        src = _project(tmp_path)
        (src / "broken.py").write_bytes(b"def broken():\n    \xff\xfe\n")
        main(["-i", str(src), "-v"])
        err = capsys.readouterr().err
        assert "Processed: 3, succeeded: 2, failed: 1" in err
        assert "broken.py" in err

    def test_quiet_run_prints_only_report(self, tmp_path, capsys):
        src = _project(tmp_path)
        (src / "broken.py").write_bytes(b"\xff\xfe\n")
        main(["-i", str(src)])
        captured = capsys.readouterr()
        assert "Processed:" not in captured.err
        assert "Error:" not in captured.err
        assert "Area()" in captured.out

    def test_list_languages(self, capsys):
        main(["--list-languages"])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert len(lines) == 20
        assert any(line.startswith("rust") and ".rs" in line for line in lines)

    def test_init_config(self, capsys):
        main(["--init-config"])
        assert "languages:" in capsys.readouterr().out

    def test_config_defined_language(self, tmp_path, capsys):
        src = tmp_path / "src"
        src.mkdir()
        (src / "shapes.toy").write_text("-- A circle.\nclass Circle\n", encoding="utf-8")
        config = tmp_path / "outline.yaml"
        config.write_text(
            "languages:\n"
            "  - name: toy\n"
            "    extensions: ['.toy']\n"
            "    type: '^class\\s+(\\w+)'\n"
            "    doc_marker: '--'\n",
            encoding="utf-8",
        )
        main(["-i", str(src), "--config", str(config)])
        assert "type Circle – A circle." in capsys.readouterr().out


class TestErrors:
    def _assert_fails(self, argv, capsys, message):
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert "Error: " in err
        assert message in err

    def test_missing_root(self, tmp_path, capsys):
        self._assert_fails(["-i", str(tmp_path / "missing")], capsys, "does not exist")

    def test_unknown_language(self, tmp_path, capsys):
        self._assert_fails(["-i", str(tmp_path), "--lang", "cobol"], capsys, "cobol")

    def test_missing_config(self, tmp_path, capsys):
        self._assert_fails(["--config", str(tmp_path / "none.yaml")], capsys, "does not exist")

    def test_invalid_config_language(self, tmp_path, capsys):
        config = tmp_path / "outline.yaml"
        config.write_text("languages:\n  - name: toy\n", encoding="utf-8")
        self._assert_fails(["-i", str(tmp_path), "--config", str(config)], capsys, "toy")

    def test_invalid_worker_count(self, tmp_path, capsys):
        self._assert_fails(["-i", str(tmp_path), "--workers", "0"], capsys, "--workers")
