"""Root test configuration: sample markdown documents written to tmp files"""

from pathlib import Path

import pytest


BLOG_POST_MD = """\
---
title: "Getting Started with TypeScript"
author: "John Doe"
date: "2024-01-15"
tags:
  - typescript
  - programming
  - tutorial
draft: false
---

# Getting Started with TypeScript

TypeScript adds static types to JavaScript.

- install the compiler
- write some code
"""

UPDATABLE_MD = """\
---
title: "Original Title"
author: "Original Author"
date: "2024-01-15"
tags: [original, test]
draft: true
---

# Original Post

Body text that must survive every update.
"""

NO_FRONTMATTER_MD = "# No Frontmatter Post\n\nThis post has no frontmatter."


@pytest.fixture(autouse=True)
def isolate_env(tmp_path, monkeypatch):
    """Run each test from a clean directory with no config or API env leaking in."""
    monkeypatch.chdir(tmp_path)
    for name in ("OPENAI_API_KEY", "BASE_URL", "MODEL_NAME", "MAX_TOKENS", "TEMPERATURE"):
        monkeypatch.delenv(name, raising=False)
    for name in ("APP_NAME", "CREATE_IF_MISSING", "MAX_TAGS", "LOG_LEVEL", "API_KEY",
                 "BASE_URL", "MODEL", "MAX_TOKENS", "TEMPERATURE"):
        monkeypatch.delenv(f"MDMETA_{name}", raising=False)


@pytest.fixture(name="make_doc")
def make_doc_fixture(tmp_path):
    """Write text to a markdown file under tmp_path and return its path."""
    def _make(text: str, name: str = "doc.md") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8", newline="")
        return path
    return _make


@pytest.fixture(name="blog_post")
def blog_post_fixture(make_doc):
    return make_doc(BLOG_POST_MD, "sample-blog-post.md")


@pytest.fixture(name="updatable")
def updatable_fixture(make_doc):
    return make_doc(UPDATABLE_MD, "updatable-post.md")


@pytest.fixture(name="no_frontmatter")
def no_frontmatter_fixture(make_doc):
    return make_doc(NO_FRONTMATTER_MD, "no-frontmatter.md")
