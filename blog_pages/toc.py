r"""Extract a document's table of contents within the configured heading range.

Headings are collected by converting the Markdown body with Python-Markdown's
``toc`` extension, so anchors match the ids the renderer assigns. Entries are
then limited to ``startLevel..endLevel`` and re-nested so that a heading
becomes the child of the closest preceding shallower heading that survived
the filter.

Example
-------
>>> from blog_pages.config import TableOfContentsConfig
>>> from blog_pages.toc import extract_toc
>>> toc = extract_toc("# Top\n## Stack\n### Frames\n", TableOfContentsConfig(2, 3))
>>> [(entry.title, [child.title for child in entry.children]) for entry in toc.entries]
[('Stack', ['Frames'])]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import html
import typing as typ

from markdown import Markdown

if typ.TYPE_CHECKING:
    from .config.models import TableOfContentsConfig


@dc.dataclass(slots=True)
class TocEntry:
    """One heading in the table of contents."""

    level: int
    anchor: str
    title: str
    children: list[TocEntry] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class TableOfContents:
    """Nested headings plus the list style requested by the configuration."""

    entries: list[TocEntry]
    ordered: bool = False

    def __bool__(self) -> bool:
        return bool(self.entries)

    def walk(self) -> cabc.Iterator[tuple[int, TocEntry]]:
        """Yield ``(depth, entry)`` pairs in document order."""

        def _walk(entries: list[TocEntry], depth: int) -> cabc.Iterator[tuple[int, TocEntry]]:
            for entry in entries:
                yield depth, entry
                yield from _walk(entry.children, depth + 1)

        return _walk(self.entries, 0)

    def as_lines(self) -> list[str]:
        """Render the ToC as indented plain-text lines for terminal output."""
        lines: list[str] = []
        counters: list[int] = []
        for depth, entry in self.walk():
            del counters[depth + 1 :]
            while len(counters) <= depth:
                counters.append(0)
            counters[depth] += 1
            marker = f"{counters[depth]}." if self.ordered else "-"
            lines.append(f"{'  ' * depth}{marker} {entry.title} (#{entry.anchor})")
        return lines


def _flatten(tokens: list[dict[str, typ.Any]]) -> cabc.Iterator[TocEntry]:
    for token in tokens:
        yield TocEntry(
            level=int(token["level"]),
            anchor=str(token["id"]),
            title=html.unescape(str(token["name"])),
        )
        yield from _flatten(token.get("children", []))


def _nest(flat: cabc.Iterable[TocEntry]) -> list[TocEntry]:
    roots: list[TocEntry] = []
    stack: list[TocEntry] = []
    for entry in flat:
        while stack and stack[-1].level >= entry.level:
            stack.pop()
        (stack[-1].children if stack else roots).append(entry)
        stack.append(entry)
    return roots


def extract_toc(body: str, config: TableOfContentsConfig) -> TableOfContents:
    """Return the headings of ``body`` that fall inside ``config``'s level range.

    Parameters
    ----------
    body : str
        Raw Markdown document body.
    config : TableOfContentsConfig
        Level range and list style from ``markup.tableOfContents``.

    Returns
    -------
    TableOfContents
        Nested entries; empty when the body has no headings in range.
    """
    if not body.strip():
        return TableOfContents(entries=[], ordered=config.ordered)
    md = Markdown(extensions=["toc", "fenced_code", "tables"])
    md.convert(body)
    tokens = typ.cast("list[dict[str, typ.Any]]", getattr(md, "toc_tokens", []))
    kept = (entry for entry in _flatten(tokens) if config.includes(entry.level))
    return TableOfContents(entries=_nest(kept), ordered=config.ordered)


__all__ = ["TableOfContents", "TocEntry", "extract_toc"]
