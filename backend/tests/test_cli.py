from __future__ import annotations

import json

from moviedb import cli


def test_cli_create_with_file_seed(monkeypatch, tmp_path, capsys, sample_seed):
    seed_path = tmp_path / "moviedata.json"
    seed_path.write_text(json.dumps(sample_seed), encoding="utf-8")
    monkeypatch.setenv("STORE_BACKEND", "inmemory")
    monkeypatch.setenv("SEED_BACKEND", "file")
    monkeypatch.setenv("SEED_FILE", str(seed_path))

    assert cli.main(["create"]) == 0
    assert "Creation successful!" in capsys.readouterr().out


def test_cli_delete_missing_table_exits_non_zero(monkeypatch, tmp_path, capsys):
    """テーブルが無い状態での delete は終了コード1。"""

    monkeypatch.setenv("STORE_BACKEND", "inmemory")
    monkeypatch.setenv("SEED_BACKEND", "file")
    monkeypatch.setenv("SEED_FILE", str(tmp_path / "unused.json"))

    assert cli.main(["delete"]) == 1
    assert "Table does not exist." in capsys.readouterr().out
