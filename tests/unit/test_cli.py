"""
Unit tests for the issue-similarity-rank command.
"""

import json

import pytest

from issue_similarity.cli.rank import default_corpus_key, load_input, main
from issue_similarity.models.document import Document


@pytest.fixture
def input_file(tmp_path):
    payload = {
        "query": {
            "id": "PROJ-1",
            "summary": "Login button not responding",
            "description": "Users report the login button does nothing when clicked",
            "reporter": "u1",
            "labels": ["frontend"],
            "issue_type": "Bug",
            "created": "2025-03-01T09:00:00Z",
        },
        "candidates": [
            {
                "id": "PROJ-2",
                "summary": "Sign in button unresponsive",
                "description": "Clicking sign in does nothing",
                "reporter": "u1",
                "labels": ["frontend"],
                "issue_type": "Bug",
                "created": "2025-03-03T09:00:00Z",
            },
            {
                "id": "PROJ-9",
                "summary": "Export CSV has wrong date format",
                "reporter": "u7",
                "created": "2024-08-13T09:00:00Z",
            },
        ],
    }
    path = tmp_path / "input.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.mark.unit
class TestLoadInput:
    """Tests for input parsing."""

    def test_loads_documents(self, input_file):
        query, candidates = load_input(input_file)
        assert query.id == "PROJ-1"
        assert query.labels == frozenset({"frontend"})
        assert [c.id for c in candidates] == ["PROJ-2", "PROJ-9"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_input(path)

    def test_missing_query(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"candidates": []}), encoding="utf-8")
        with pytest.raises(ValueError, match="Missing 'query'"):
            load_input(path)

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "noid.json"
        path.write_text(json.dumps({"query": {"summary": "no id"}}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid issue document"):
            load_input(path)

    def test_default_corpus_key(self):
        assert default_corpus_key(Document(id="PROJ-123")) == "PROJ"
        assert default_corpus_key(Document(id="MY-TEAM-7")) == "MY-TEAM"
        assert default_corpus_key(Document(id="standalone")) == "standalone"


@pytest.mark.unit
class TestMain:
    """Tests for the CLI entry point."""

    def test_jsonl_output(self, input_file, capsys):
        assert main([str(input_file)]) == 0

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        row = json.loads(lines[0])
        assert row["document_id"] == "PROJ-2"
        assert row["final_score"] == 89
        assert "breakdown" not in row

    def test_json_output_with_debug(self, input_file, capsys):
        assert main([str(input_file), "--format", "json", "--debug", "--min-score", "0"]) == 0

        rows = json.loads(capsys.readouterr().out)
        assert [r["document_id"] for r in rows] == ["PROJ-2", "PROJ-9"]
        assert "breakdown" in rows[0]

    def test_logs_kept_off_stdout(self, input_file, capsys):
        assert main([str(input_file), "--debug"]) == 0

        captured = capsys.readouterr()
        rows = [json.loads(line) for line in captured.out.strip().splitlines()]
        assert [r["document_id"] for r in rows] == ["PROJ-2"]
        assert "candidate_scored" in captured.err
        assert "ranking_completed" in captured.err

    def test_repeated_runs_succeed(self, input_file, capsys):
        assert main([str(input_file)]) == 0
        assert main([str(input_file), "-f", "json"]) == 0

    def test_text_output(self, input_file, capsys):
        assert main([str(input_file), "-f", "text", "-n", "1"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("PROJ-2 (89%): ")

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[", encoding="utf-8")
        assert main([str(path)]) == 1

    def test_negative_min_score(self, input_file):
        assert main([str(input_file), "--min-score", "-5"]) == 1
