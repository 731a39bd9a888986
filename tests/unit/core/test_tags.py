"""Unit tests for core/tags.py"""

import json
import logging

import pytest

from mdmeta.core.extract import extract_frontmatter
from mdmeta.core.tags import NO_FRONTMATTER_PROMPT, build_prompt, run_generate_tags, tag_file
from mdmeta.errors import EmptyGenerationError, NoFrontmatterError, NotFoundError


class FakeGenerator:
    """Records prompts and returns canned tags."""

    def __init__(self, tags):
        self.tags = tags
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        return list(self.tags)


# --- build_prompt ---

def test_build_prompt_uses_frontmatter_json():
    prompt = build_prompt({"title": "T", "slug": "t"})
    assert json.loads(prompt) == {"title": "T", "slug": "t"}


def test_build_prompt_placeholder_without_frontmatter():
    assert build_prompt(None) == NO_FRONTMATTER_PROMPT


def test_build_prompt_empty_mapping_is_not_placeholder():
    assert build_prompt({}) == "{}"


# --- tag_file ---

def test_tag_file_merges_into_existing(updatable):
    """Tags replace the tags key while other fields survive."""
    generate = FakeGenerator(["python", "yaml"])
    tags = tag_file(updatable, generate)
    assert tags == ["python", "yaml"]
    data = extract_frontmatter(updatable)
    assert data["tags"] == ["python", "yaml"]
    assert data["title"] == "Original Title"
    assert '"title": "Original Title"' in generate.prompts[0]


def test_tag_file_truncates_to_three(updatable):
    generate = FakeGenerator(["a", "b", "c", "d", "e"])
    assert tag_file(updatable, generate) == ["a", "b", "c"]
    assert extract_frontmatter(updatable)["tags"] == ["a", "b", "c"]


def test_tag_file_custom_max_tags(updatable):
    generate = FakeGenerator(["a", "b", "c"])
    assert tag_file(updatable, generate, max_tags=1) == ["a"]


def test_tag_file_empty_response_raises(updatable):
    before = updatable.read_bytes()
    with pytest.raises(EmptyGenerationError, match="No tags generated"):
        tag_file(updatable, FakeGenerator([]))
    assert updatable.read_bytes() == before


def test_tag_file_creates_frontmatter_when_allowed(no_frontmatter):
    original = no_frontmatter.read_text()
    generate = FakeGenerator(["seo"])
    tag_file(no_frontmatter, generate, create_if_missing=True)
    assert generate.prompts == [NO_FRONTMATTER_PROMPT]
    assert no_frontmatter.read_text() == "---\ntags:\n  - seo\n---\n" + original


def test_tag_file_without_frontmatter_raises(no_frontmatter):
    before = no_frontmatter.read_bytes()
    with pytest.raises(NoFrontmatterError, match="No frontmatter found"):
        tag_file(no_frontmatter, FakeGenerator(["seo"]))
    assert no_frontmatter.read_bytes() == before


# --- run_generate_tags ---

def test_run_single_file(updatable):
    tagged, failed = run_generate_tags(str(updatable), FakeGenerator(["x"]))
    assert tagged == [(updatable.resolve(), ["x"])]
    assert failed == []


def test_run_single_file_error_is_fatal(tmp_path):
    with pytest.raises(NotFoundError):
        run_generate_tags(str(tmp_path / "missing.md"), FakeGenerator(["x"]))


def test_run_glob_no_matches(tmp_path, caplog):
    """No matching files is reported, not an error."""
    with caplog.at_level(logging.INFO, logger="mdmeta.core.tags"):
        tagged, failed = run_generate_tags(str(tmp_path / "*.md"), FakeGenerator(["x"]))
    assert (tagged, failed) == ([], [])
    assert "No files found" in caplog.text


def test_run_glob_continues_after_failure(tmp_path, make_doc, caplog):
    """The second file fails; the third is still processed."""
    first = make_doc("---\ntitle: One\n---\nBody\n", "post-1.md")
    second = make_doc("# No frontmatter\n", "post-2.md")
    third = make_doc("---\ntitle: Three\n---\nBody\n", "post-3.md")
    generate = FakeGenerator(["tag"])

    with caplog.at_level(logging.ERROR, logger="mdmeta.core.tags"):
        tagged, failed = run_generate_tags(str(tmp_path / "post-?.md"), generate)

    assert [p.name for p, _ in tagged] == ["post-1.md", "post-3.md"]
    assert [p.name for p, _ in failed] == ["post-2.md"]
    assert len(generate.prompts) == 3
    assert extract_frontmatter(third)["tags"] == ["tag"]
    assert extract_frontmatter(first)["tags"] == ["tag"]
    assert extract_frontmatter(second) is None
    assert "Failed to process" in caplog.text


def test_run_glob_generator_exception_is_isolated(tmp_path, make_doc):
    """Any exception from the generator only affects its own file."""
    for i in range(3):
        make_doc("---\ntitle: T\n---\n", f"p{i}.md")
    calls = []

    def generate(prompt):
        calls.append(prompt)
        if len(calls) == 2:
            raise RuntimeError("api down")
        return ["ok"]

    tagged, failed = run_generate_tags(str(tmp_path / "p*.md"), generate)
    assert len(tagged) == 2
    assert failed == [(tmp_path.resolve() / "p1.md", "api down")]


def test_run_glob_uses_list_files_collaborator(tmp_path, make_doc):
    path = make_doc("---\ntitle: T\n---\n", "chosen.md")
    seen = []

    def list_files(pattern):
        seen.append(pattern)
        return [path]

    tagged, _ = run_generate_tags(str(tmp_path / "*.md"), FakeGenerator(["a"]), list_files=list_files)
    assert seen == [str((tmp_path / "*.md").resolve())]
    assert tagged == [(path, ["a"])]
