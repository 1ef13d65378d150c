"""CLI subcommands: score, questions, recommend, guide, report."""

import json
import sys
from pathlib import Path

import pytest

import main as cli

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["main.py", *argv])
    cli.main()


def test_score_json(monkeypatch, capsys):
    _run(monkeypatch, "score", str(FIXTURES / "ready_dog_owner.json"), "--json")
    result = json.loads(capsys.readouterr().out)
    assert result["score"] == 90
    assert result["tier"] == "Highly Ready"


def test_score_text_and_report(monkeypatch, capsys, tmp_path):
    report = tmp_path / "reports" / "assessment_report.json"
    _run(monkeypatch, "score", str(FIXTURES / "first_time_apartment.json"), "--report", str(report))
    out = capsys.readouterr().out
    assert "Score: 10/100 (Not Ready)" in out
    assert "Consult doctor about pet allergies" in out
    saved = json.loads(report.read_text(encoding="utf-8"))
    assert saved["score"] == 10
    assert len(saved["answers_hash"]) == 64


def test_score_missing_file_exits(monkeypatch, tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch, "score", str(tmp_path / "nope.json"))
    assert exc_info.value.code == 1


def test_questions(monkeypatch, capsys):
    _run(monkeypatch, "questions", "--pet-types", "fish")
    keys = [q["key"] for q in json.loads(capsys.readouterr().out)]
    assert "tankSizeReady" in keys


def test_recommend_without_key(monkeypatch, capsys, no_groq_key):
    _run(monkeypatch, "recommend", str(FIXTURES / "empty.json"))
    result = json.loads(capsys.readouterr().out)
    assert result["source"] == "rules"


def test_guide_direct(monkeypatch, capsys, tmp_path, no_groq_key):
    profile = tmp_path / "profile.json"
    profile.write_text(json.dumps({"breed": "Persian Cat", "ageInWeeks": 60}), encoding="utf-8")
    _run(monkeypatch, "guide", str(profile), "--source", "direct")
    guide = json.loads(capsys.readouterr().out)
    assert guide["sections"][3]["title"] == "Persian Cat Specific Tips"


def test_report_pdf(monkeypatch, tmp_path):
    out = tmp_path / "report.pdf"
    _run(monkeypatch, "report", str(FIXTURES / "ready_dog_owner.json"), "-o", str(out))
    assert out.read_bytes().startswith(b"%PDF")
