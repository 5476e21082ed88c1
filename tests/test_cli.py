"""Tests for the album-data command."""

import json
from unittest.mock import patch

import pytest

from albumdata import cli
from albumdata.engine import AlbumDataEngine


@pytest.fixture
def patched_engine(engine):
    with patch.object(AlbumDataEngine, "from_config", return_value=engine) as from_config:
        yield from_config


def test_csv_to_stdout(patched_engine, capsys):
    assert cli.main(["Wild Child", "Pillow Talk", "--sequential"]) == 0
    out = capsys.readouterr().out
    lines = out.strip().splitlines()
    assert lines[0].startswith("album_name,track_title,track_uri,track_n")
    assert len(lines) == 4


def test_json_output(patched_engine, tmp_path):
    path = tmp_path / "out.json"
    assert cli.main(["Wild Child", "Expectations", "--strategy", "asyncio", "-o", str(path)]) == 0
    rows = json.loads(path.read_text())
    assert len(rows) == 10
    assert rows[0]["track_n"] == 1


def test_empty_album_name_exit_code(patched_engine):
    assert cli.main(["Wild Child", " "]) == 2
    patched_engine.assert_not_called()


def test_unknown_strategy_exit_code(patched_engine):
    assert cli.main(["Wild Child", "Expectations", "--strategy", "multicore"]) == 2


def test_missing_credentials(monkeypatch, tmp_path):
    for name in ("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET", "GENIUS_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    assert cli.main(["Wild Child", "Expectations", "--config", str(tmp_path / "none.yaml")]) == 2
