"""Typed dataclasses describing the blog's site configuration."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import types
import typing as typ

from blog_pages.errors import ConfigParseError

ColorMode = typ.Literal["dark", "light", "auto"]
FeedDescription = typ.Literal["summary", "full"]

COLOR_MODES: tuple[str, ...] = ("dark", "light", "auto")
FEED_DESCRIPTIONS: tuple[str, ...] = ("summary", "full")


@dc.dataclass(frozen=True, slots=True)
class ModuleImport:
    """Theme or component module pulled in by the generator."""

    path: str


@dc.dataclass(frozen=True, slots=True)
class HighlightConfig:
    """Syntax highlighting switches passed through to the renderer."""

    no_classes: bool = True


@dc.dataclass(frozen=True, slots=True)
class TableOfContentsConfig:
    """Heading depth range and list style for generated tables of contents.

    Attributes
    ----------
    start_level : int
        Shallowest heading level included (``1`` for ``<h1>``).
    end_level : int
        Deepest heading level included; never smaller than ``start_level``.
    ordered : bool
        ``True`` renders ``<ol>`` lists, ``False`` renders ``<ul>``.
    """

    start_level: int = 2
    end_level: int = 3
    ordered: bool = False

    def __post_init__(self) -> None:
        for name in ("start_level", "end_level"):
            level = getattr(self, name)
            if not 1 <= level <= 6:
                msg = f"markup.tableOfContents.{_camel(name)} must be between 1 and 6, got {level}"
                raise ConfigParseError(msg)
        if self.start_level > self.end_level:
            msg = (
                "markup.tableOfContents.startLevel "
                f"({self.start_level}) exceeds endLevel ({self.end_level})"
            )
            raise ConfigParseError(msg)

    def includes(self, level: int) -> bool:
        """Return ``True`` when a heading at ``level`` belongs in the ToC."""
        return self.start_level <= level <= self.end_level


@dc.dataclass(frozen=True, slots=True)
class MarkupConfig:
    """Markdown rendering options."""

    highlight: HighlightConfig = dc.field(default_factory=HighlightConfig)
    unsafe_html: bool = False
    table_of_contents: TableOfContentsConfig = dc.field(
        default_factory=TableOfContentsConfig
    )


@dc.dataclass(frozen=True, slots=True)
class MenuEntry:
    """Navigation entry as declared in the configuration document.

    ``position`` records declaration order so sorting by weight stays stable
    even after entries pass through unordered containers.
    """

    name: str
    page_ref: str | None = None
    url: str | None = None
    weight: int = 0
    position: int = 0

    def __post_init__(self) -> None:
        if self.page_ref is None and self.url is None:
            msg = f"Menu entry '{self.name}' needs a 'pageRef' or a 'url'."
            raise ConfigParseError(msg)


@dc.dataclass(frozen=True, slots=True)
class AuthorConfig:
    """Author identity shown in the theme's header and feeds."""

    name: str = ""
    avatar: str = ""
    intro: str = ""
    description: str = ""


@dc.dataclass(frozen=True, slots=True)
class SocialIcon:
    """Social profile link rendered as an icon."""

    name: str
    url: str


@dc.dataclass(frozen=True, slots=True)
class ParamsConfig:
    """Theme parameters declared under ``[params]``.

    ``extra`` keeps any parameter the loader does not model so themes can
    still read them.
    """

    sitename: str = ""
    description: str = ""
    default_color: ColorMode = "auto"
    main_sections: tuple[str, ...] = ()
    toc: bool = False
    toc_open: bool = False
    go_to_top: bool = False
    rss_feed_description: FeedDescription = "summary"
    author: AuthorConfig = dc.field(default_factory=AuthorConfig)
    social_icons: tuple[SocialIcon, ...] = ()
    extra: cabc.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: types.MappingProxyType({}), compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", types.MappingProxyType(dict(self.extra)))
        if self.default_color not in COLOR_MODES:
            allowed = ", ".join(COLOR_MODES)
            msg = f"params.defaultColor must be one of {allowed}, got {self.default_color!r}"
            raise ConfigParseError(msg)
        if self.rss_feed_description not in FEED_DESCRIPTIONS:
            allowed = ", ".join(FEED_DESCRIPTIONS)
            msg = (
                f"params.rssFeedDescription must be one of {allowed}, "
                f"got {self.rss_feed_description!r}"
            )
            raise ConfigParseError(msg)


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site-wide configuration, loaded once per build and never mutated."""

    base_url: str
    title: str
    language_code: str = "en-us"
    default_content_language: str = "en"
    modules: tuple[ModuleImport, ...] = ()
    enable_emoji: bool = False
    markup: MarkupConfig = dc.field(default_factory=MarkupConfig)
    # Read-only view, left out of the hash.
    menus: cabc.Mapping[str, tuple[MenuEntry, ...]] = dc.field(
        default_factory=lambda: types.MappingProxyType({}), hash=False
    )
    params: ParamsConfig = dc.field(default_factory=ParamsConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "menus", types.MappingProxyType(dict(self.menus)))

    @property
    def menu(self) -> tuple[MenuEntry, ...]:
        """Entries of the ``main`` menu in declaration order."""
        return self.menus.get("main", ())

    def absolute_url(self, path: str) -> str:
        """Join ``path`` onto ``base_url`` without doubling slashes."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


__all__ = [
    "COLOR_MODES",
    "FEED_DESCRIPTIONS",
    "AuthorConfig",
    "ColorMode",
    "FeedDescription",
    "HighlightConfig",
    "MarkupConfig",
    "MenuEntry",
    "ModuleImport",
    "ParamsConfig",
    "SiteConfig",
    "SocialIcon",
    "TableOfContentsConfig",
]
