"""Shared fixtures that lay out a small blog site under ``tmp_path``.

The configuration mirrors the real ``hugo.toml`` of the blog, and the content
tree contains the two posts about variable sized arrays: a draft dated
2025-02-07 and the published rewrite dated 2025-04-13, which share a title
but live at different paths.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest

SITE_CONFIG = dedent(
    """
    baseURL = 'https://martijnv.com/'
    languageCode = 'en-us'
    defaultContentLanguage = "en-gb" # so dates are formatted correctly
    title = "Martijn's blog"

    [module]
      [[module.imports]]
        path = "github.com/hugo-sid/hugo-blog-awesome"

    enableEmoji = true

    [markup]
      [markup.highlight]
        noClasses = false
      [markup.goldmark.renderer]
        unsafe = true
      [markup.tableOfContents]
        startLevel = 1
        endLevel = 6
        ordered = false

    [menu]
    [[menu.main]]
      pageRef="/"
      name = 'Home'
      url = '/'
      weight = 10
    [[menu.main]]
      pageRef="posts"
      name = 'Posts'
      url = '/posts/'
      weight = 20
    [[menu.main]]
      pageRef="projects"
      name = 'Projects'
      url = '/projects/'
      weight = 15

    [params]
      sitename = "Martijn's personal blog"
      defaultColor = "auto"
      description = "Hello there! This is my personal website."
      mainSections = ['posts', 'projects' ]
      toc = false
      tocOpen = false
      goToTop = false
      rssFeedDescription = "full"

    [params.author]
      avatar = ""
      intro = "Martijn's personal blog"
      name = "Martijn Voordouw"
      description = "Hello there! This is my personal website."

    [[params.socialIcons]]
    name = "github"
    url = "https://github.com/MartV0"

    [[params.socialIcons]]
    name = "Rss"
    url = "https://martijnv.com/index.xml"
    """
).lstrip()

VLA_TITLE = "How variable sized arrays work in C"

DRAFT_POST = dedent(
    f"""
    +++
    title = "{VLA_TITLE}"
    date = 2025-02-07T14:03:11+01:00
    draft = true
    +++

    First attempt at explaining the stack layout of VLAs.
    """
).lstrip()

PUBLISHED_POST = dedent(
    f"""
    +++
    title = "{VLA_TITLE}"
    date = 2025-04-13T10:00:00+02:00
    draft = false
    toc = true
    +++

    Variable length arrays live on the stack.
    <!--more-->

    # Variable sized arrays

    ## The stack frame

    ### Frame pointer

    ## Allocating with alloca
    """
).lstrip()

YAML_POST = dedent(
    """
    ---
    title: Hello world
    date: 2024-11-02
    tags: [meta]
    ---
    The first post on this blog.
    """
).lstrip()

SECTION_INDEX = dedent(
    """
    +++
    title = "Posts"
    +++
    """
).lstrip()


def write_site(root: Path, *, config: str = SITE_CONFIG) -> Path:
    """Write the configuration and content tree below ``root`` and return it."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "hugo.toml").write_text(config, encoding="utf-8")
    posts = root / "content" / "posts"
    posts.mkdir(parents=True)
    (posts / "_index.md").write_text(SECTION_INDEX, encoding="utf-8")
    (posts / "vla-draft.md").write_text(DRAFT_POST, encoding="utf-8")
    (posts / "variable-sized-arrays.md").write_text(PUBLISHED_POST, encoding="utf-8")
    (posts / "hello-world.md").write_text(YAML_POST, encoding="utf-8")
    (posts / "notes.txt").write_text("not a document\n", encoding="utf-8")
    return root


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Return a freshly written example site."""
    return write_site(tmp_path / "site")


@pytest.fixture
def config_text() -> str:
    """Return the example configuration document text."""
    return SITE_CONFIG


@pytest.fixture
def make_site(tmp_path: Path) -> typ.Callable[..., Path]:
    """Return a factory writing the example site with an optional custom config."""

    def _make(name: str = "custom", *, config: str = SITE_CONFIG) -> Path:
        return write_site(tmp_path / name, config=config)

    return _make


@pytest.fixture
def vla_title() -> str:
    """Title shared by the draft and the published variable sized arrays posts."""
    return VLA_TITLE
