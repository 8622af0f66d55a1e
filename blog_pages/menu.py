"""Resolve configured navigation entries against the scanned content.

A menu entry names its destination either through ``pageRef`` (a content
path such as ``"posts"`` or ``"posts/my-post"``) or a literal ``url``. The
choice is made explicit with :class:`PageRefTarget` and :class:`UrlTarget`
so resolution order is visible in the types: a page reference that matches a
known document wins and enables active-route highlighting; otherwise the
fallback URL is used verbatim and a :class:`DanglingReferenceWarning` is
emitted.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ
import warnings

from .errors import DanglingReferenceWarning

if typ.TYPE_CHECKING:
    from .config.models import MenuEntry
    from .content import ContentDocument

logger = logging.getLogger(__name__)

HOME_PATH = "/"


@dc.dataclass(frozen=True, slots=True)
class PageRefTarget:
    """Destination given as a content reference, with an optional fallback URL."""

    page_ref: str
    fallback_url: str | None = None


@dc.dataclass(frozen=True, slots=True)
class UrlTarget:
    """Destination given only as a literal URL."""

    url: str


MenuTarget = PageRefTarget | UrlTarget


@dc.dataclass(frozen=True, slots=True)
class ResolvedMenuItem:
    """A navigation link ready for rendering.

    Attributes
    ----------
    name : str
        Display label.
    href : str
        Link destination.
    weight : int
        Sort weight copied from the configuration.
    resolved : bool
        ``True`` when ``href`` came from a matching page reference; only such
        items take part in active-route highlighting.
    is_section : bool
        ``True`` when the reference matched a whole section, so every page
        below it counts as active.
    """

    name: str
    href: str
    weight: int
    resolved: bool
    is_section: bool = False

    def is_active(self, current_path: str) -> bool:
        """Return ``True`` when ``current_path`` is this item's page or inside its section."""
        if not self.resolved:
            return False
        current = _normalize_path(current_path)
        if current == self.href:
            return True
        return self.is_section and self.href != HOME_PATH and current.startswith(self.href)


@dc.dataclass(slots=True)
class ContentIndex:
    """Lookup tables from page references to published paths."""

    pages: dict[str, str] = dc.field(default_factory=dict)
    sections: dict[str, str] = dc.field(default_factory=dict)

    @classmethod
    def from_documents(cls, documents: cabc.Iterable[ContentDocument]) -> ContentIndex:
        """Index documents by page reference and record every non-empty section."""
        index = cls()
        for document in documents:
            if document.section:
                index.sections.setdefault(document.section.lower(), f"/{document.section}/")
            if document.kind == "page":
                index.pages[document.page_ref.lower()] = document.logical_path
        return index

    def lookup(self, page_ref: str) -> tuple[str, bool] | None:
        """Return ``(path, is_section)`` for ``page_ref`` or ``None`` when unknown."""
        key = normalize_page_ref(page_ref)
        if not key:
            return HOME_PATH, False
        if key in self.sections:
            return self.sections[key], True
        if key in self.pages:
            return self.pages[key], False
        return None


def normalize_page_ref(page_ref: str) -> str:
    """Strip surrounding slashes and lower-case a page reference (``""`` is home)."""
    return page_ref.strip().strip("/").lower()


def _normalize_path(path: str) -> str:
    stripped = path.strip().strip("/")
    return f"/{stripped}/" if stripped else HOME_PATH


def menu_target(entry: MenuEntry) -> MenuTarget:
    """Return the explicit destination choice for a configured entry."""
    if entry.page_ref is not None:
        return PageRefTarget(page_ref=entry.page_ref, fallback_url=entry.url)
    # MenuEntry guarantees a url whenever page_ref is absent.
    return UrlTarget(url=typ.cast("str", entry.url))


def _resolve(entry: MenuEntry, index: ContentIndex) -> ResolvedMenuItem:
    match menu_target(entry):
        case UrlTarget(url=url):
            return ResolvedMenuItem(entry.name, url, entry.weight, resolved=False)
        case PageRefTarget(page_ref=page_ref, fallback_url=fallback):
            found = index.lookup(page_ref)
            if found is not None:
                href, is_section = found
                logger.debug("Menu entry %r resolved to %s", entry.name, href)
                return ResolvedMenuItem(
                    entry.name, href, entry.weight, resolved=True, is_section=is_section
                )
            href = fallback if fallback is not None else _normalize_path(page_ref)
            message = (
                f"Menu entry '{entry.name}' references unknown page '{page_ref}'; "
                f"using '{href}'"
            )
            warnings.warn(message, DanglingReferenceWarning, stacklevel=3)
            return ResolvedMenuItem(entry.name, href, entry.weight, resolved=False)
    msg = f"Unsupported menu target for '{entry.name}'"  # pragma: no cover - exhaustive match
    raise TypeError(msg)


def build_menu(
    entries: cabc.Iterable[MenuEntry],
    documents: cabc.Iterable[ContentDocument] | ContentIndex,
) -> list[ResolvedMenuItem]:
    """Resolve menu entries and order them by ascending weight.

    Parameters
    ----------
    entries : Iterable[MenuEntry]
        Entries from ``SiteConfig.menu`` (or any other named menu).
    documents : Iterable[ContentDocument] or ContentIndex
        Documents exposed by the current build, or a prebuilt index of them.

    Returns
    -------
    list[ResolvedMenuItem]
        Items sorted by weight; equal weights keep declaration order.

    Warns
    -----
    DanglingReferenceWarning
        For each ``pageRef`` that matches no known document; the literal
        ``url`` is used instead.

    Examples
    --------
    >>> from blog_pages.config import MenuEntry
    >>> items = build_menu(
    ...     [MenuEntry("B", url="/b/", weight=20), MenuEntry("A", url="/a/", weight=10)],
    ...     [],
    ... )
    >>> [item.name for item in items]
    ['A', 'B']
    """
    if isinstance(documents, ContentIndex):
        index = documents
    else:
        index = ContentIndex.from_documents(documents)
    ordered = sorted(entries, key=lambda entry: (entry.weight, entry.position))
    return [_resolve(entry, index) for entry in ordered]


__all__ = [
    "ContentIndex",
    "MenuTarget",
    "PageRefTarget",
    "ResolvedMenuItem",
    "UrlTarget",
    "build_menu",
    "menu_target",
    "normalize_page_ref",
]
