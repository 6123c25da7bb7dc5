"""
Command-line interface tests.
"""
import json

import pytest

from newsdigest.cli import run


@pytest.fixture
def articles_file(tmp_path, sample_records):
    path = tmp_path / "articles.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path


def run_json(tmp_path, *args):
    output = tmp_path / "out.json"
    assert run([*args, "--output", str(output), "--now", "2024-05-15T12:00:00Z"]) == 0
    return json.loads(output.read_text(encoding="utf-8"))


def test_top_mode(tmp_path, articles_file):
    result = run_json(tmp_path, str(articles_file), "--top", "2")

    assert [a["guid"] for a in result["articles"]] == ["a1", "a2"]
    assert result["articles"][0]["relevanceLabel"] == "very relevant"
    assert result["articles"][0]["cluster"] == "Model Development"


def test_clusters_mode(tmp_path, articles_file):
    result = run_json(tmp_path, str(articles_file), "--mode", "clusters")

    clusters = {c["cluster"]: c for c in result["clusters"]}
    assert clusters["Other"]["count"] == 2
    assert clusters["Governance & Ethics"]["avgRelevance"] == 8
    assert "EU AI Act" in result["tags"]


def test_search_mode(tmp_path, articles_file):
    result = run_json(tmp_path, str(articles_file), "--mode", "search", "--tag", "RAG")
    assert [a["guid"] for a in result["articles"]] == ["a1"]


def test_markdown_output(tmp_path, articles_file):
    output = tmp_path / "digest.md"
    assert run([str(articles_file), "--format", "markdown", "--output", str(output)]) == 0
    assert output.read_text(encoding="utf-8").startswith("# Weekly AI Digest")


def test_missing_articles_file(tmp_path):
    assert run([str(tmp_path / "missing.json")]) == 1


def test_unknown_profile(articles_file):
    assert run([str(articles_file), "--profile", "nope"]) == 1


def test_invalid_now(articles_file):
    assert run([str(articles_file), "--now", "yesterday-ish"]) == 1


def test_search_mode_with_negative_top_returns_nothing(tmp_path, articles_file):
    result = run_json(tmp_path, str(articles_file), "--mode", "search", "--top", "-1")
    assert result["articles"] == []


def test_search_mode_without_top_returns_all_matches(tmp_path, articles_file):
    result = run_json(tmp_path, str(articles_file), "--mode", "search", "--search", "ai")
    assert {a["guid"] for a in result["articles"]} == {"a1", "a2"}


def test_student_mode_skips_older_weeks(tmp_path, articles_file):
    result = run_json(tmp_path, str(articles_file), "--mode", "student")
    assert [a["guid"] for a in result["articles"]] == ["a1", "a2"]
