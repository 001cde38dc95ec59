"""
Tests for graphver.cli
======================
End-to-end runs against hand-encoded graph files.
"""

from __future__ import annotations

import json

import pytest

from graphver.cli import run
from graphver.config import MAVEN_VERSION_ANCHOR

from conftest import COMMIT, FILLER


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("GRAPHVER_MIN_STRING_LENGTH", raising=False)
    monkeypatch.delenv("GRAPHVER_ANCHOR", raising=False)


def _write(tmp_path, data: bytes):
    path = tmp_path / "Graph.obj"
    path.write_bytes(data)
    return str(path)


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------

class TestSuccess:
    def test_xml_block(self, graph_file, capsys):
        assert run([str(graph_file)]) == 0
        out, err = capsys.readouterr()
        assert out == (
            "<fileVersion>\n"
            f"<commit>{COMMIT}</commit>\n"
            "<version>1.2.3-SNAPSHOT</version>\n"
            "</fileVersion>\n"
        )
        assert err == ""

    def test_absent_commit_prints_null(self, tmp_path, prefixed, capsys):
        path = _write(tmp_path, FILLER + prefixed(MAVEN_VERSION_ANCHOR) + prefixed("1.4.0"))
        assert run([path]) == 0
        out = capsys.readouterr().out
        assert "<commit>null</commit>" in out
        assert "<version>1.4.0</version>" in out

    def test_json_format(self, graph_file, capsys):
        assert run([str(graph_file), "--format", "json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload == {"commit": COMMIT, "version": "1.2.3-SNAPSHOT"}

    def test_list_strings(self, graph_file, capsys):
        assert run([str(graph_file), "--list-strings"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert any(line.endswith(MAVEN_VERSION_ANCHOR) for line in lines)
        assert any(line.endswith(COMMIT) for line in lines)
        assert lines[0].startswith("@0x")


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestFailures:
    @pytest.mark.parametrize("argv", [[], ["a.obj", "b.obj"]])
    def test_wrong_argument_count(self, argv, capsys):
        assert run(argv) == 1
        out, err = capsys.readouterr()
        assert out == ""
        assert "Please use" in err

    def test_unknown_option(self, graph_file, capsys):
        assert run([str(graph_file), "--bogus"]) == 1

    def test_negative_min_length(self, graph_file, capsys):
        assert run([str(graph_file), "--min-length", "-1"]) == 1

    def test_missing_file(self, tmp_path, capsys):
        assert run([str(tmp_path / "missing.obj")]) == 2
        out, err = capsys.readouterr()
        assert out == ""
        assert "Could not read graph file" in err

    def test_empty_file(self, tmp_path, capsys):
        assert run([_write(tmp_path, b"")]) == 2

    def test_anchor_not_found(self, tmp_path, prefixed, capsys):
        path = _write(tmp_path, FILLER + prefixed(COMMIT) + prefixed("1.2.3"))
        assert run([path]) == 3
        out, err = capsys.readouterr()
        assert out == ""
        assert "not able to find" in err

    def test_anchor_without_fields(self, tmp_path, prefixed, capsys):
        path = _write(tmp_path, FILLER + prefixed(MAVEN_VERSION_ANCHOR) + b"\x00\x00")
        assert run([path]) == 4
        out, err = capsys.readouterr()
        assert out == ""
        assert "file format has changed" in err


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class TestConfiguration:
    def test_min_length_option(self, tmp_path, prefixed, capsys):
        path = _write(tmp_path, FILLER + prefixed(MAVEN_VERSION_ANCHOR) + prefixed("1.2.3"))
        assert run([path, "--min-length", "5"]) == 4

    def test_min_length_env(self, tmp_path, prefixed, monkeypatch, capsys):
        monkeypatch.setenv("GRAPHVER_MIN_STRING_LENGTH", "5")
        path = _write(tmp_path, FILLER + prefixed(MAVEN_VERSION_ANCHOR) + prefixed("1.2.3"))
        assert run([path]) == 4

    def test_option_overrides_env(self, tmp_path, prefixed, monkeypatch, capsys):
        monkeypatch.setenv("GRAPHVER_MIN_STRING_LENGTH", "5")
        path = _write(tmp_path, FILLER + prefixed(MAVEN_VERSION_ANCHOR) + prefixed("1.2.3"))
        assert run([path, "--min-length", "2"]) == 0

    def test_bad_env_value(self, graph_file, monkeypatch, capsys):
        monkeypatch.setenv("GRAPHVER_MIN_STRING_LENGTH", "two")
        assert run([str(graph_file)]) == 1


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------

class TestArguments:
    def test_dash_path_after_separator(self, tmp_path, graph_bytes, monkeypatch, capsys):
        (tmp_path / "-g.obj").write_bytes(graph_bytes)
        monkeypatch.chdir(tmp_path)
        assert run(["--", "-g.obj"]) == 0
        assert f"<commit>{COMMIT}</commit>" in capsys.readouterr().out

    def test_dash_path_without_separator_is_usage_error(self, tmp_path, graph_bytes, monkeypatch, capsys):
        (tmp_path / "-g.obj").write_bytes(graph_bytes)
        monkeypatch.chdir(tmp_path)
        assert run(["-g.obj"]) == 1

    def test_version_needs_no_file(self, capsys):
        with pytest.raises(SystemExit) as info:
            run(["--version"])
        assert info.value.code == 0
        assert "graphver" in capsys.readouterr().out


class TestMainModule:
    def test_import_does_not_run(self, monkeypatch):
        import importlib
        import sys

        monkeypatch.setattr(sys, "argv", ["graphver"])
        sys.modules.pop("graphver.__main__", None)
        importlib.import_module("graphver.__main__")
