"""Unit tests for the command-line entry point."""

from pathlib import Path

import orjson
import pytest

from content_discovery import cli


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    posts = {
        "intro.md": (
            "title: Introduction to Transformer Models\n"
            "slug: intro\n"
            "tags: [nlp, transformers]\n"
            "published_at: 2024-01-01\n"
        ),
        "garden.md": "title: Gardening Log\ntags: [garden]\npublished_at: 2024-01-02\n",
        "attention.md": (
            "title: Attention Is All You Need\n"
            "kind: paper\n"
            "tags: [nlp, attention]\n"
            "categories: [cs.CL]\n"
            "published_at: 2024-01-03\n"
        ),
    }
    for name, front in posts.items():
        (tmp_path / name).write_text(f"---\n{front}---\nBody\n", encoding="utf-8")
    return tmp_path


def _run(capsys, *argv: str) -> tuple[int, dict, str]:
    code = cli.main(list(argv))
    captured = capsys.readouterr()
    payload = orjson.loads(captured.out) if captured.out else {}
    return code, payload, captured.err


def test_search_prints_a_page(capsys, data_dir):
    code, payload, _ = _run(capsys, "--data-dir", str(data_dir), "search", "transformer", "--limit", "2")

    assert code == 0
    assert payload["total"] == 1
    assert payload["totalPages"] == 1
    assert payload["items"][0]["id"] == "intro"


def test_tag_listing(capsys, data_dir):
    code, payload, _ = _run(capsys, "--data-dir", str(data_dir), "tag", "nlp")

    assert code == 0
    assert [item["id"] for item in payload["items"]] == ["attention", "intro"]


def test_tags_and_categories(capsys, data_dir):
    _, tags, _ = _run(capsys, "--data-dir", str(data_dir), "tags")
    _, categories, _ = _run(capsys, "--data-dir", str(data_dir), "categories")

    assert tags == {"tags": ["attention", "garden", "nlp", "transformers"]}
    assert categories == {"categories": ["cs.CL"]}


def test_related(capsys, data_dir):
    code, payload, _ = _run(capsys, "--data-dir", str(data_dir), "related", "attention", "--limit", "1")

    assert code == 0
    assert [item["id"] for item in payload["related"]] == ["intro"]
    assert payload["related"][0]["slug"] == "intro"


def test_list_with_filters_and_sort(capsys, data_dir):
    code, payload, _ = _run(
        capsys, "--data-dir", str(data_dir), "list", "--tag", "nlp", "--sort", "title", "--direction", "desc"
    )

    assert code == 0
    assert [item["id"] for item in payload["items"]] == ["intro", "attention"]


def test_data_dir_from_environment(capsys, data_dir, monkeypatch):
    monkeypatch.setenv("CONTENT_DISCOVERY_DATA_DIR", str(data_dir))

    code, payload, _ = _run(capsys, "list", "--kind", "paper")

    assert code == 0
    assert payload["total"] == 1


def test_invalid_argument_exit_code(capsys, data_dir):
    code, payload, err = _run(capsys, "--data-dir", str(data_dir), "search", "transformer", "--page", "0")

    assert code == cli.EXIT_INVALID_ARGUMENT
    assert payload == {}
    assert "Page must be a positive integer" in err


def test_missing_document_exit_code(capsys, data_dir):
    code, _, err = _run(capsys, "--data-dir", str(data_dir), "related", "nope")

    assert code == cli.EXIT_FAILURE
    assert "nope" in err


def test_missing_directory_exit_code(capsys, tmp_path):
    code, _, err = _run(capsys, "--data-dir", str(tmp_path / "missing"), "tags")

    assert code == cli.EXIT_FAILURE
    assert "does not exist" in err
