"""
CLI Unit Tests
Tests for mrkl_cli/main.py and mrkl_cli/commands/
"""
import io
import json

import pytest

from mrkl.merkle import MerkleTree
from mrkl_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    read_items,
)
from mrkl_cli.main import create_parser, main

from fixtures import NAMES, write_items_file


def run_json(capsys, argv):
    code = main(argv)
    return code, json.loads(capsys.readouterr().out)


class TestReadItems:
    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "items.txt"
        path.write_text("a\n\nb\n  c\n")

        assert read_items(str(path)) == ["a", "b", "  c"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_items(str(tmp_path / "missing.txt"))

    def test_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("x\ny\n"))

        assert read_items("-") == ["x", "y"]


class TestParser:
    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

    def test_keep_is_repeatable(self):
        args = create_parser().parse_args(["prune", "f.txt", "--keep", "a", "-k", "b"])

        assert args.keep == ["a", "b"]


class TestRoot:
    def test_json(self, items_file, capsys):
        code, data = run_json(capsys, ["root", str(items_file), "--json"])

        assert code == EXIT_SUCCESS
        assert data["root_digest"] == MerkleTree.construct(NAMES).root_digest
        assert data["height"] == 3
        assert data["item_count"] == 5
        assert data["status"] == "valid"
        assert "reason" not in data

    def test_text(self, items_file, capsys):
        assert main(["root", str(items_file)]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "height: 3" in out
        assert "validation: valid" in out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["root", str(tmp_path / "missing.txt")]) == EXIT_RUNTIME_ERROR
        assert "Items file not found" in capsys.readouterr().err

    def test_empty_file(self, tmp_path, capsys):
        path = write_items_file(tmp_path, [])

        assert main(["root", str(path)]) == EXIT_RUNTIME_ERROR
        assert "Not enough data" in capsys.readouterr().err


class TestShow:
    def test_draws_every_leaf(self, items_file, capsys):
        assert main(["show", str(items_file)]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        for name in NAMES:
            assert repr(name) in out


class TestContains:
    def test_present(self, items_file, capsys):
        code, data = run_json(capsys, ["contains", str(items_file), "mj", "--json"])

        assert code == EXIT_SUCCESS
        assert data == {"item": "mj", "contains": True}

    def test_absent(self, items_file, capsys):
        assert main(["contains", str(items_file), "mje"]) == EXIT_VERIFICATION_FAILED
        assert "absent" in capsys.readouterr().out


class TestProve:
    def test_json(self, items_file, capsys):
        code, data = run_json(capsys, ["prove", str(items_file), "sally", "--json"])

        assert code == EXIT_SUCCESS
        assert data["ok"] is True
        assert [s["side"] for s in data["proof"]["steps"]] == ["lone", "lone", "left"]

    def test_text(self, items_file, capsys):
        assert main(["prove", str(items_file), "alice"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "verified: true" in out
        assert "shape_ok: true" in out

    def test_absent(self, items_file, capsys):
        code, data = run_json(capsys, ["prove", str(items_file), "bob", "--json"])

        assert code == EXIT_VERIFICATION_FAILED
        assert data["ok"] is False
        assert data["error"]["code"] == "MERKLE_PROOF_INVALID"


class TestPrune:
    def test_keep_alice(self, items_file, capsys):
        code, data = run_json(capsys, ["prune", str(items_file), "--keep", "alice", "--json"])

        assert code == EXIT_SUCCESS
        assert data["pruned"] is True
        assert data["root_preserved"] is True
        assert data["validation"]["status"] == "valid"
        assert data["remaining"] == ["alice"]
        assert data["errors"] == []

    def test_keep_between_leaves(self, items_file, capsys):
        code, data = run_json(capsys, ["prune", str(items_file), "--keep", "mje", "--json"])

        assert code == EXIT_VERIFICATION_FAILED
        assert data["pruned"] is True
        assert data["root_preserved"] is True
        assert data["validation"]["status"] == "invalid_tree"

    def test_refused(self, items_file, capsys):
        assert main(["prune", str(items_file), "--keep", "zed"]) == EXIT_VERIFICATION_FAILED
        assert "prune refused" in capsys.readouterr().out

    def test_show(self, items_file, capsys):
        assert main(["prune", str(items_file), "-k", "alice", "--show"]) == EXIT_SUCCESS
        assert "pruned" in capsys.readouterr().out


class TestConfigOption:
    def test_yaml_config(self, items_file, tmp_path, capsys):
        config_path = tmp_path / "mrkl.yaml"
        config_path.write_text("tree:\n  check_ordering: false\nlog_level: WARNING\n")

        assert main(["--config", str(config_path), "root", str(items_file)]) == EXIT_SUCCESS

    def test_bad_config(self, items_file, tmp_path, capsys):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("- not\n- a mapping\n")

        assert main(["--config", str(config_path), "root", str(items_file)]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err

    def test_missing_config(self, items_file, tmp_path, capsys):
        missing = tmp_path / "missing.yaml"

        assert main(["-c", str(missing), "root", str(items_file)]) == EXIT_RUNTIME_ERROR
