"""
Article file loader tests.
"""
import json

import pytest
import yaml

from newsdigest.fetchers.file import ArticleFileLoader, load_articles


def test_load_json_list(tmp_path, sample_records):
    path = tmp_path / "articles.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")

    articles = load_articles(path)

    assert len(articles) == 4
    assert articles[0].source_name == "Eigener"
    assert articles[2].description == ""
    assert articles[2].pub_date is None


def test_load_yaml_with_items_key(tmp_path):
    path = tmp_path / "articles.yaml"
    path.write_text(yaml.safe_dump({"items": [
        {"title": "Claude update", "link": "https://example.com/c", "categories": "AI"},
    ]}))

    articles = load_articles(path)

    assert articles[0].title == "Claude update"
    assert articles[0].categories == ["AI"]
    assert articles[0].key == "https://example.com/c"


def test_records_without_title_are_skipped(tmp_path):
    path = tmp_path / "articles.json"
    path.write_text(json.dumps([{"title": ""}, "junk", {"title": "kept"}]))
    assert [a.title for a in load_articles(path)] == ["kept"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_articles(tmp_path / "nope.json")


def test_unsupported_format_raises(tmp_path):
    path = tmp_path / "articles.csv"
    path.write_text("title\nfoo\n")
    with pytest.raises(ValueError):
        ArticleFileLoader(path).read_records()


def test_malformed_json_raises_value_error(tmp_path):
    path = tmp_path / "articles.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        load_articles(path)


def test_non_string_fields_are_coerced(tmp_path):
    path = tmp_path / "articles.json"
    path.write_text(json.dumps([{"title": "AI news", "sourceName": 42, "guid": 7}]))

    article = load_articles(path)[0]

    assert article.source_name == "42"
    assert article.key == "7"
