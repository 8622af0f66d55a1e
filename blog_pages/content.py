r"""Scan the content tree and parse Markdown documents with front matter.

Every ``.md``/``.markdown`` file below the content root becomes one
:class:`ContentDocument`. The header may be TOML (``+++``), YAML (``---``) or a
leading JSON object; the remainder of the file is the raw Markdown body.
:class:`ContentStore` exposes the scan as a lazy, restartable iterable and can
also parse files concurrently when the whole tree is needed at once.

Example
-------
>>> from blog_pages.content import split_front_matter
>>> fmt, header, body = split_front_matter('+++\ntitle = "Hi"\n+++\nBody\n')
>>> (fmt, body)
('toml', 'Body\n')
"""

from __future__ import annotations

import collections.abc as cabc
import concurrent.futures as cf
import dataclasses as dc
import datetime as dt
import io
import json
import logging
import re
import tomllib
import types
import typing as typ
import warnings
from pathlib import Path, PurePosixPath

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import (
    DOCUMENT_EXTENSIONS,
    LEAF_BUNDLE_STEM,
    SECTION_INDEX_STEM,
    SUMMARY_DIVIDER,
    SUMMARY_WORDS,
    TOML_DELIMITER,
    WORDS_PER_MINUTE,
    YAML_DELIMITER,
)
from .config.helpers import _parse_timestamp
from .errors import FrontMatterError, FrontMatterWarning

if typ.TYPE_CHECKING:
    from .config.models import FeedDescription, ParamsConfig

FrontMatterFormat = typ.Literal["toml", "yaml", "json"]
DocumentKind = typ.Literal["page", "section"]

logger = logging.getLogger(__name__)

_EPOCH = dt.datetime.min.replace(tzinfo=dt.UTC)
_KNOWN_KEYS = frozenset({"title", "date", "draft", "slug", "tags", "summary", "description"})


class _HeaderError(ValueError):
    """Internal marker for header problems; re-raised with the document path."""


@dc.dataclass(frozen=True, slots=True)
class ContentDocument:
    """A parsed content file: front matter metadata plus its Markdown body.

    Attributes
    ----------
    source : Path
        File the document was read from.
    relative_path : PurePosixPath
        Location relative to the content root, used for page references.
    title : str
        Document title from the front matter.
    date : datetime or None
        Publish date, always timezone-aware; only section index pages may omit
        it.
    draft : bool
        Drafts are hidden from production builds.
    section : str
        Top-level content directory (``""`` for files at the root).
    slug : str
        Last URL segment of the document.
    body : str
        Raw Markdown following the front matter.
    kind : {"page", "section"}
        ``"section"`` for ``_index.md`` list pages.
    """

    source: Path
    relative_path: PurePosixPath
    title: str
    date: dt.datetime | None
    draft: bool
    section: str
    slug: str
    body: str
    kind: DocumentKind = "page"
    front_matter_format: FrontMatterFormat = "toml"
    tags: tuple[str, ...] = ()
    summary_override: str | None = None
    params: cabc.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: types.MappingProxyType({}), compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", types.MappingProxyType(dict(self.params)))

    @property
    def logical_path(self) -> str:
        """URL path the document is published under, e.g. ``/posts/my-post/``.

        Folders between the content root and the file are kept, so
        ``posts/2024/notes.md`` publishes at ``/posts/2024/notes/``. The slug
        replaces only the last segment.
        """
        if self.kind == "section":
            return f"/{self.section}/" if self.section else "/"
        folders = self.relative_path.parent.parts
        if self.relative_path.stem in {LEAF_BUNDLE_STEM, SECTION_INDEX_STEM}:
            # The bundle folder itself is the page; its name became the slug.
            folders = folders[:-1]
        return "/" + "/".join((*folders, self.slug)) + "/"

    @property
    def page_ref(self) -> str:
        """Path relative to the content root without extension (``posts/my-post``)."""
        if self.kind == "section":
            return self.section
        parent = self.relative_path.parent
        stem = self.relative_path.stem
        if stem in {LEAF_BUNDLE_STEM, SECTION_INDEX_STEM} and parent.parts:
            return str(parent)
        return str(parent / stem)

    @property
    def word_count(self) -> int:
        return len(self.body.split())

    @property
    def reading_time(self) -> int:
        """Estimated reading time in whole minutes (at least one)."""
        return max(1, round(self.word_count / WORDS_PER_MINUTE))

    @property
    def summary(self) -> str:
        """Text before ``<!--more-->``, the ``summary`` key, or the opening words."""
        if SUMMARY_DIVIDER in self.body:
            return self.body.split(SUMMARY_DIVIDER, 1)[0].strip()
        if self.summary_override:
            return self.summary_override
        words = self.body.split()
        text = " ".join(words[:SUMMARY_WORDS])
        return f"{text}…" if len(words) > SUMMARY_WORDS else text

    def feed_description(self, mode: FeedDescription) -> str:
        """Return the feed item description for ``rssFeedDescription`` ``mode``."""
        if mode == "full":
            return self.body.replace(SUMMARY_DIVIDER, "").strip()
        return self.summary

    def show_toc(self, params: ParamsConfig) -> bool:
        """Per-document ``toc`` front matter wins over the site-wide default."""
        value = self.params.get("toc")
        return value if isinstance(value, bool) else params.toc

    def toc_open(self, params: ParamsConfig) -> bool:
        value = self.params.get("tocOpen")
        return value if isinstance(value, bool) else params.toc_open


def split_front_matter(text: str) -> tuple[FrontMatterFormat, str, str]:
    """Split ``text`` into its front matter format, header text, and body.

    Raises
    ------
    ValueError
        If the document does not open with a recognized delimiter or the
        closing delimiter is missing.
    """
    text = text.removeprefix("\ufeff")
    if text.lstrip().startswith("{"):
        return _split_json(text.lstrip())

    first_line, _, rest = text.partition("\n")
    opener = first_line.strip()
    if opener == TOML_DELIMITER:
        fmt: FrontMatterFormat = "toml"
    elif opener == YAML_DELIMITER:
        fmt = "yaml"
    else:
        msg = "missing front matter delimiter ('+++', '---' or a JSON object)"
        raise _HeaderError(msg)

    closing = re.compile(rf"^{re.escape(opener)}[ \t]*\r?$", re.MULTILINE)
    match = closing.search(rest)
    if match is None:
        msg = f"front matter is not closed by '{opener}'"
        raise _HeaderError(msg)
    header = rest[: match.start()]
    body = rest[match.end() :].removeprefix("\n")
    return fmt, header, body


def _split_json(text: str) -> tuple[FrontMatterFormat, str, str]:
    try:
        _obj, end = json.JSONDecoder().raw_decode(text)
    except json.JSONDecodeError as exc:
        msg = f"invalid JSON front matter: {exc}"
        raise _HeaderError(msg) from exc
    return "json", text[:end], text[end:].lstrip("\r\n")


def _parse_header(fmt: FrontMatterFormat, header: str) -> dict[str, typ.Any]:
    try:
        match fmt:
            case "toml":
                data = tomllib.loads(header)
            case "yaml":
                loader = YAML(typ="safe")
                loader.version = (1, 2)
                data = loader.load(io.StringIO(header)) or {}
            case "json":
                data = json.loads(header)
    except (tomllib.TOMLDecodeError, YAMLError, json.JSONDecodeError) as exc:
        msg = f"invalid {fmt.upper()} front matter: {exc}"
        raise _HeaderError(msg) from exc
    if not isinstance(data, dict):
        msg = "front matter must be a mapping of keys to values"
        raise _HeaderError(msg)
    return data


def _slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "page"


def _classify(relative: PurePosixPath) -> tuple[DocumentKind, str, str]:
    """Return the kind, section, and default slug implied by a file location."""
    parts = relative.parts
    section = parts[0] if len(parts) > 1 else ""
    if relative.stem == SECTION_INDEX_STEM:
        # Only top-level ``_index`` files define sections; nested ones are pages.
        if len(parts) <= 2:
            return "section", section, _slugify(section or "home")
        return "page", section, _slugify(relative.parent.name)
    if relative.stem == LEAF_BUNDLE_STEM and len(parts) > 1:
        return "page", section if len(parts) > 2 else "", _slugify(relative.parent.name)
    return "page", section, _slugify(relative.stem)


def _build_document(
    source: Path, relative: PurePosixPath, text: str
) -> ContentDocument:
    fmt, header, body = split_front_matter(text)
    meta = _parse_header(fmt, header)
    kind, section, default_slug = _classify(relative)

    title = meta.get("title")
    if not isinstance(title, str) or not title.strip():
        msg = "front matter requires a non-empty string 'title'"
        raise _HeaderError(msg)

    raw_date = meta.get("date")
    date = _parse_timestamp(raw_date)
    if date is None and (raw_date is not None or kind == "page"):
        msg = f"front matter 'date' is missing or not ISO-8601: {raw_date!r}"
        raise _HeaderError(msg)

    draft = meta.get("draft", False)
    if not isinstance(draft, bool):
        msg = f"front matter 'draft' must be true or false, got {draft!r}"
        raise _HeaderError(msg)

    slug = meta.get("slug")
    tags = meta.get("tags") or []
    if not isinstance(tags, list):
        tags = [tags]
    summary = meta.get("summary") or meta.get("description")

    return ContentDocument(
        source=source,
        relative_path=relative,
        title=title.strip(),
        date=date,
        draft=draft,
        section=section,
        slug=_slugify(str(slug)) if slug else default_slug,
        body=body,
        kind=kind,
        front_matter_format=fmt,
        tags=tuple(str(tag) for tag in tags),
        summary_override=str(summary) if summary else None,
        params={key: value for key, value in meta.items() if key not in _KNOWN_KEYS},
    )


def parse_document(path: Path, content_root: Path) -> ContentDocument:
    """Read and parse one content file.

    Parameters
    ----------
    path : Path
        Markdown file to parse.
    content_root : Path
        Root of the content tree; determines section and page reference.

    Returns
    -------
    ContentDocument
        The parsed document.

    Raises
    ------
    FrontMatterError
        If the header is malformed, the delimiter is missing, or required
        fields (``title``, ``date``) are absent or invalid.
    """
    relative = PurePosixPath(path.relative_to(content_root).as_posix())
    try:
        text = path.read_text(encoding="utf-8")
        return _build_document(path, relative, text)
    except UnicodeDecodeError as exc:
        raise FrontMatterError(path, f"file is not valid UTF-8: {exc}") from exc
    except _HeaderError as exc:
        raise FrontMatterError(path, str(exc)) from exc


class ContentStore:
    """Lazy, finite, restartable view over the documents of a content tree.

    Each iteration walks the tree again and parses files on demand, so two
    passes over the same store observe the current state of the disk. The
    yielded order is not meaningful; use :func:`sort_chronologically` when
    order matters.

    Parameters
    ----------
    root : Path
        Content directory to scan.
    skip_invalid : bool, optional
        When ``True`` malformed documents are skipped with a
        :class:`~blog_pages.errors.FrontMatterWarning` instead of raising
        :class:`~blog_pages.errors.FrontMatterError`.
    """

    def __init__(self, root: Path, *, skip_invalid: bool = False) -> None:
        self.root = root
        self.skip_invalid = skip_invalid

    def paths(self) -> cabc.Iterator[Path]:
        """Yield every document file below the root, skipping hidden entries."""
        if not self.root.is_dir():
            logger.warning("Content directory %s does not exist", self.root)
            return
        for path in sorted(self.root.rglob("*")):
            relative = path.relative_to(self.root)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if path.is_file() and path.suffix.lower() in DOCUMENT_EXTENSIONS:
                yield path

    def __iter__(self) -> cabc.Iterator[ContentDocument]:
        for path in self.paths():
            document = self._parse(path)
            if document is not None:
                yield document

    def load(self, *, workers: int = 4) -> list[ContentDocument]:
        """Parse every document concurrently and return them in path order.

        A fatal error in any file propagates once all workers have settled, so
        no partially loaded set escapes.
        """
        paths = list(self.paths())
        if workers <= 1 or len(paths) <= 1:
            return list(self)
        with cf.ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(self._parse, paths))
        return [document for document in results if document is not None]

    def _parse(self, path: Path) -> ContentDocument | None:
        try:
            return parse_document(path, self.root)
        except FrontMatterError as exc:
            if not self.skip_invalid:
                raise
            warnings.warn(
                f"Skipping {exc.path}: {exc.reason}", FrontMatterWarning, stacklevel=2
            )
            return None


def sort_chronologically(
    documents: cabc.Iterable[ContentDocument],
) -> list[ContentDocument]:
    """Order documents newest first, breaking date ties by title."""
    by_title = sorted(documents, key=lambda doc: doc.title)
    return sorted(by_title, key=lambda doc: doc.date or _EPOCH, reverse=True)


__all__ = [
    "ContentDocument",
    "ContentStore",
    "DocumentKind",
    "FrontMatterFormat",
    "parse_document",
    "sort_chronologically",
    "split_front_matter",
]
