"""Tests for the treedigest command line."""

from __future__ import annotations

import hashlib
import json
import os

import pytest

from treedigest.cli import (
    EXIT_CONFIG,
    EXIT_NOT_FOUND,
    EXIT_OK,
    EXIT_READ,
    EXIT_TOO_LONG,
    EXIT_USAGE,
    main,
)


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    for key in (
        "TREEDIGEST_ALGORITHM",
        "TREEDIGEST_INCLUDE_NAMES",
        "TREEDIGEST_EXCLUDE",
        "TREEDIGEST_CHUNK_SIZE",
        "TREEDIGEST_RESULT_FILE",
        "TREEDIGEST_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "tree"
    root.mkdir()
    (root / "a").write_bytes(b"")
    (root / "b").write_bytes(b"\x41")
    (root / "junk.tmp").write_bytes(b"junk")
    return root


class TestCli:

    def test_hash_directory(self, tree, capsys):
        code = main([str(tree), "sha256", "-exclude", "*.tmp"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert 'Using SHA256 to compute hash of "tree" ...' in out
        expected = hashlib.sha256(b"\x41").hexdigest().upper()
        assert f"SHA256 (32 bytes) = {expected}" in out

    def test_default_algorithm(self, tree, capsys):
        assert main([str(tree)]) == EXIT_OK
        expected = hashlib.sha1(b"\x41junk").hexdigest().upper()
        assert f"SHA1 (20 bytes) = {expected}" in capsys.readouterr().out

    def test_algorithm_after_switches(self, tree, capsys):
        assert main([str(tree), "-hashnames", "-nowait", "MD5"]) == EXIT_OK
        assert "MD5 (16 bytes) = " in capsys.readouterr().out

    def test_double_dash_switches(self, tree, capsys):
        code = main([str(tree), "--exclude", "*.tmp", "--exclude", "b", "--json"])
        assert code == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["algorithm"] == "SHA1"
        assert data["hexdigest"] == hashlib.sha1(b"").hexdigest().upper()

    def test_result_file_appended(self, tree, tmp_path, capsys):
        results = tmp_path / "results.txt"
        assert main([str(tree), "SHA256", "-t", str(results)]) == EXIT_OK
        assert main([str(tree), "MD5", "-t", str(results)]) == EXIT_OK
        lines = results.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert lines[0].startswith('SHA256 hash of "tree" (32 bytes) = ')
        assert lines[1].startswith('MD5 hash of "tree" (16 bytes) = ')

    def test_unknown_algorithm(self, tree, capsys):
        assert main([str(tree), "CRC32"]) == EXIT_CONFIG
        assert "UnknownAlgorithmError" in capsys.readouterr().err

    def test_bad_result_file(self, tree, tmp_path, capsys):
        target = tmp_path / "no-such-dir" / "out.txt"
        assert main([str(tree), "-t", str(target)]) == EXIT_CONFIG
        assert "ResultFileError" in capsys.readouterr().err

    def test_missing_path(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing")]) == EXIT_NOT_FOUND
        captured = capsys.readouterr()
        assert "PathNotFoundError" in captured.err
        assert "Using" not in captured.out

    def test_path_too_long(self, capsys):
        assert main(["x" * 300]) == EXIT_TOO_LONG
        assert "PathTooLongError" in capsys.readouterr().err

    def test_missing_option_argument(self, tree):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tree), "-t"])
        assert exc_info.value.code == EXIT_USAGE

    def test_unreadable_file(self, tree, monkeypatch, capsys):
        from treedigest.core import tree as tree_module

        def fake_open(path, *args, **kwargs):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr(tree_module, "open", fake_open, raising=False)
        assert main([str(tree)]) == EXIT_READ
        assert "FileReadError" in capsys.readouterr().err

    def test_settings_file_used(self, tree, tmp_path, capsys):
        d = tmp_path / ".treedigest"
        d.mkdir()
        (d / "config.json").write_text(json.dumps({"algorithm": "sha384"}))
        assert main([str(tree)]) == EXIT_OK
        assert "SHA384 (48 bytes) = " in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "treedigest" in capsys.readouterr().out

    def test_options_line_shows_names_and_exclusions(self, tree, capsys):
        assert main([str(tree), "-exclude", "*.tmp", "-exclude", "*.bak"]) == EXIT_OK
        assert "Options: names: off, exclude: *.tmp, *.bak" in capsys.readouterr().out

    def test_options_line_shows_settings_from_environment(self, tree, monkeypatch, capsys):
        monkeypatch.setenv("TREEDIGEST_INCLUDE_NAMES", "yes")
        assert main([str(tree)]) == EXIT_OK
        assert "Options: names: on, exclude: none" in capsys.readouterr().out

    def test_json_reports_options(self, tree, capsys):
        assert main([str(tree), "--hashnames", "--exclude", "*.tmp", "--json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["include_names"] is True
        assert data["exclude"] == ["*.tmp"]

    def test_no_hashnames_overrides_environment(self, tree, monkeypatch, capsys):
        assert main([str(tree), "--json"]) == EXIT_OK
        plain = json.loads(capsys.readouterr().out)

        monkeypatch.setenv("TREEDIGEST_INCLUDE_NAMES", "yes")
        assert main([str(tree), "--no-hashnames", "--json"]) == EXIT_OK
        forced_off = json.loads(capsys.readouterr().out)

        assert forced_off["include_names"] is False
        assert forced_off["hexdigest"] == plain["hexdigest"]

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs os.mkfifo")
    def test_special_file_root(self, tmp_path, capsys):
        pipe = tmp_path / "pipe"
        os.mkfifo(pipe)
        assert main([str(pipe)]) == EXIT_READ
        assert "PathError" in capsys.readouterr().err
