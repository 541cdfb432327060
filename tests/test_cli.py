import json
import logging

import pytest

from daily_vibe import cli, config
from daily_vibe.vibes import Vibe
from tests.conftest import HOPEFUL_TITLE


@pytest.fixture(autouse=True)
def _restore_logging_and_settings(monkeypatch):
    monkeypatch.setenv("FEATURE_SEMANTIC_SCORING", "0")
    monkeypatch.setattr(cli, "load_dotenv", None)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    settings = config.get_settings()
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    config.SETTINGS = settings


def _write(tmp_path, payload):
    path = tmp_path / "articles.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def _article(title, **extra):
    article = {
        "source": {"id": None, "name": "Wire"},
        "title": title,
        "description": None,
        "publishedAt": "2026-01-15T08:00:00Z",
        "url": "https://example.com/story",
    }
    article.update(extra)
    return article


def test_analyze_articles_object(tmp_path, capsys):
    path = _write(tmp_path, {"status": "ok", "articles": [_article(HOPEFUL_TITLE)] * 3})
    assert cli.main(["analyze", path, "--no-semantic"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["vibe"] == "hopeful"
    assert out["confidence"] == pytest.approx(1 / 3)
    assert out["source"] == "keyword"
    assert "hope" in out["keywords"]


def test_analyze_plain_list(tmp_path, capsys):
    path = _write(tmp_path, [_article("Market crash triggers widespread fear and uncertainty")])
    assert cli.main(["analyze", path, "--timeout", "30"]) == 0
    assert json.loads(capsys.readouterr().out)["vibe"] == "uncertain"


def test_analyze_empty_list_is_neutral(tmp_path, capsys):
    path = _write(tmp_path, [])
    assert cli.main(["analyze", path, "--no-semantic"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["vibe"] == "contemplative"
    assert out["confidence"] == 0.0
    assert out["intensity_info"]["intensity"] == 0.3


def test_unreadable_input(tmp_path, capsys):
    assert cli.main(["analyze", str(tmp_path / "missing.json")]) == 2
    assert "cannot read" in capsys.readouterr().err

    bad = tmp_path / "bad.json"
    bad.write_text("{broken", encoding="utf-8")
    assert cli.main(["analyze", str(bad)]) == 2

    assert cli.main(["analyze", _write(tmp_path, {"articles": "nope"})]) == 2


def test_vibes_lists_every_vibe(capsys):
    assert cli.main(["vibes"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == len(Vibe)
    assert any("hopeful" in line for line in lines)


def test_missing_command_exits():
    with pytest.raises(SystemExit):
        cli.main([])
