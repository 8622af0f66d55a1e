"""Unit tests for menu resolution, ordering, and active-route highlighting."""

from __future__ import annotations

import warnings
from pathlib import Path

import pytest

from blog_pages.config import MenuEntry
from blog_pages.content import ContentStore
from blog_pages.errors import DanglingReferenceWarning
from blog_pages.menu import (
    ContentIndex,
    PageRefTarget,
    UrlTarget,
    build_menu,
    menu_target,
)


def _url_entries(weights: list[int]) -> list[MenuEntry]:
    return [
        MenuEntry(name=f"w{weight}", url=f"/{weight}/", weight=weight, position=idx)
        for idx, weight in enumerate(weights)
    ]


def test_entries_sorted_by_weight() -> None:
    items = build_menu(_url_entries([20, 10, 15]), [])
    assert [item.weight for item in items] == [10, 15, 20]


def test_equal_weights_keep_declaration_order() -> None:
    entries = [
        MenuEntry(name="first", url="/a/", weight=5, position=0),
        MenuEntry(name="second", url="/b/", weight=5, position=1),
        MenuEntry(name="early", url="/c/", weight=1, position=2),
    ]
    assert [item.name for item in build_menu(entries, [])] == ["early", "first", "second"]


def test_target_is_explicit_choice() -> None:
    assert menu_target(MenuEntry(name="Posts", page_ref="posts", url="/p/")) == (
        PageRefTarget(page_ref="posts", fallback_url="/p/")
    )
    assert menu_target(MenuEntry(name="Ext", url="https://x.test/")) == UrlTarget(
        url="https://x.test/"
    )


def test_section_page_ref_resolves_when_content_exists(site_root: Path) -> None:
    documents = list(ContentStore(site_root / "content"))
    entry = MenuEntry(name="Posts", page_ref="posts", url="/somewhere-else/", weight=1)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        (item,) = build_menu([entry], documents)
    assert item.href == "/posts/"
    assert item.resolved is True
    assert item.is_active("/posts/")
    assert item.is_active("/posts/variable-sized-arrays/")
    assert not item.is_active("/projects/")


def test_page_ref_to_single_document(site_root: Path) -> None:
    index = ContentIndex.from_documents(ContentStore(site_root / "content"))
    entry = MenuEntry(name="Hello", page_ref="/posts/hello-world", weight=1)
    (item,) = build_menu([entry], index)
    assert item.href == "/posts/hello-world/"
    assert item.is_active("posts/hello-world")
    assert not item.is_active("/posts/")


def test_dangling_page_ref_falls_back_to_url(site_root: Path) -> None:
    documents = list(ContentStore(site_root / "content"))
    entry = MenuEntry(name="Projects", page_ref="projects", url="/projects/", weight=15)
    with pytest.warns(DanglingReferenceWarning, match="projects"):
        (item,) = build_menu([entry], documents)
    assert item.href == "/projects/"
    assert item.resolved is False
    assert not item.is_active("/projects/")


def test_home_page_ref_always_resolves() -> None:
    (item,) = build_menu([MenuEntry(name="Home", page_ref="/", url="/", weight=10)], [])
    assert item.href == "/"
    assert item.is_active("/")
    assert not item.is_active("/posts/")


def test_url_only_entry_is_used_verbatim() -> None:
    entry = MenuEntry(name="GitHub", url="https://github.com/MartV0", weight=1)
    (item,) = build_menu([entry], [])
    assert item.href == "https://github.com/MartV0"
    assert item.resolved is False
