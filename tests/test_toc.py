"""Unit tests for table-of-contents extraction."""

from __future__ import annotations

from textwrap import dedent

from blog_pages.config import TableOfContentsConfig
from blog_pages.toc import extract_toc

BODY = dedent(
    """
    # Variable sized arrays

    ## The stack frame

    ### Frame pointer

    #### Saved registers

    ## Allocating with alloca & friends
    """
)


def _titles(toc) -> list[tuple[int, str]]:
    return [(depth, entry.title) for depth, entry in toc.walk()]


def test_full_range_nests_headings() -> None:
    toc = extract_toc(BODY, TableOfContentsConfig(1, 6))
    assert _titles(toc) == [
        (0, "Variable sized arrays"),
        (1, "The stack frame"),
        (2, "Frame pointer"),
        (3, "Saved registers"),
        (1, "Allocating with alloca & friends"),
    ]


def test_range_limits_levels() -> None:
    toc = extract_toc(BODY, TableOfContentsConfig(2, 3))
    assert _titles(toc) == [
        (0, "The stack frame"),
        (1, "Frame pointer"),
        (0, "Allocating with alloca & friends"),
    ]
    assert toc.entries[0].anchor == "the-stack-frame"


def test_ordered_flag_controls_markers() -> None:
    ordered = extract_toc(BODY, TableOfContentsConfig(2, 3, ordered=True))
    bullets = extract_toc(BODY, TableOfContentsConfig(2, 3, ordered=False))
    assert ordered.as_lines()[0] == "1. The stack frame (#the-stack-frame)"
    assert ordered.as_lines()[2].startswith("2. Allocating")
    assert bullets.as_lines()[1] == "  - Frame pointer (#frame-pointer)"


def test_empty_body_has_no_entries() -> None:
    toc = extract_toc("", TableOfContentsConfig())
    assert not toc
    assert toc.as_lines() == []
