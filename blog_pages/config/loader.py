"""Load the site configuration document (TOML or YAML) into typed dataclasses."""

from __future__ import annotations

import io
import logging
import tomllib
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from blog_pages._constants import CONFIG_CANDIDATES
from blog_pages.errors import ConfigParseError

from .helpers import (
    _as_bool,
    _as_int,
    _as_mapping,
    _as_table_list,
    _optional_str,
    _require_str,
    _string_tuple,
    _validate_base_url,
    _without_nulls,
)
from .models import (
    AuthorConfig,
    HighlightConfig,
    MarkupConfig,
    MenuEntry,
    ModuleImport,
    ParamsConfig,
    SiteConfig,
    SocialIcon,
    TableOfContentsConfig,
)

ConfigFormat = typ.Literal["toml", "yaml"]

logger = logging.getLogger(__name__)

# Keys of ``[params]`` modelled by ParamsConfig; everything else lands in ``extra``.
_KNOWN_PARAMS = frozenset(
    {
        "sitename",
        "description",
        "defaultColor",
        "mainSections",
        "toc",
        "tocOpen",
        "goToTop",
        "rssFeedDescription",
        "author",
        "socialIcons",
    }
)


def resolve_config_path(path: Path) -> Path:
    """Return the configuration file for ``path``, searching a site root if needed.

    Parameters
    ----------
    path : Path
        Either the configuration file itself or a site root directory holding
        one of ``hugo.toml``, ``hugo.yaml``, ``config.toml`` or ``config.yaml``.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist or the directory has no configuration file.
    """
    if path.is_dir():
        for candidate in CONFIG_CANDIDATES:
            target = path / candidate
            if target.is_file():
                return target
        names = ", ".join(CONFIG_CANDIDATES)
        msg = f"No configuration file ({names}) found in '{path}'."
        raise FileNotFoundError(msg)
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)
    return path


def load_site_config(path: Path) -> SiteConfig:
    """Load the configuration document describing the blog.

    Parameters
    ----------
    path : Path
        Configuration file or site root directory. ``.yaml``/``.yml`` files are
        read as YAML; anything else is read as TOML.

    Returns
    -------
    SiteConfig
        Immutable site configuration including menus, markup options, and
        theme parameters.

    Raises
    ------
    FileNotFoundError
        If no configuration file exists at ``path``.
    ConfigParseError
        If the document cannot be parsed, ``baseURL`` or ``title`` is missing,
        or ``markup.tableOfContents.startLevel`` exceeds ``endLevel``.

    Examples
    --------
    >>> from pathlib import Path
    >>> from blog_pages.config import load_site_config
    >>> config = load_site_config(Path("hugo.toml"))  # doctest: +SKIP
    >>> [entry.name for entry in config.menu]  # doctest: +SKIP
    ['Home', 'Posts', 'Projects']
    """
    config_path = resolve_config_path(path)
    fmt: ConfigFormat = "yaml" if config_path.suffix in {".yaml", ".yml"} else "toml"
    text = config_path.read_text(encoding="utf-8")
    try:
        config = load_site_config_text(text, fmt)
    except ConfigParseError as exc:
        msg = f"{config_path}: {exc}"
        raise ConfigParseError(msg) from exc
    logger.debug("Loaded configuration from %s", config_path)
    return config


def load_site_config_text(text: str, fmt: ConfigFormat = "toml") -> SiteConfig:
    """Parse configuration ``text`` in the given format into a ``SiteConfig``."""
    raw = _parse_document(text, fmt)
    return build_site_config(raw)


def _parse_document(text: str, fmt: ConfigFormat) -> typ.Mapping[str, typ.Any]:
    if fmt == "toml":
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML: {exc}"
            raise ConfigParseError(msg) from exc

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(io.StringIO(text)) or {}
    except YAMLError as exc:
        msg = f"Invalid YAML: {exc}"
        raise ConfigParseError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigParseError(msg)
    return loaded


def build_site_config(raw: typ.Mapping[str, typ.Any]) -> SiteConfig:
    """Build a ``SiteConfig`` from an already-parsed configuration mapping.

    Unknown keys are ignored so newer configuration files keep loading.
    """
    base_url = _validate_base_url(_require_str(raw, "baseURL"))
    title = _require_str(raw, "title")

    module_raw = _as_mapping(raw.get("module"), "module")
    modules = tuple(
        ModuleImport(path=_require_str(item, "path"))
        for item in _as_table_list(module_raw.get("imports"), "module.imports")
    )

    return SiteConfig(
        base_url=base_url,
        title=title,
        language_code=_optional_str(raw.get("languageCode")) or "en-us",
        default_content_language=_optional_str(raw.get("defaultContentLanguage"))
        or "en",
        modules=modules,
        enable_emoji=_as_bool(raw.get("enableEmoji"), "enableEmoji", default=False),
        markup=_build_markup_config(_as_mapping(raw.get("markup"), "markup")),
        menus=_build_menus(_as_mapping(raw.get("menu"), "menu")),
        params=_build_params_config(_as_mapping(raw.get("params"), "params")),
    )


def _build_markup_config(payload: typ.Mapping[str, typ.Any]) -> MarkupConfig:
    """Build markup options, falling back to the generator defaults."""
    highlight = _as_mapping(payload.get("highlight"), "markup.highlight")
    goldmark = _as_mapping(payload.get("goldmark"), "markup.goldmark")
    renderer = _as_mapping(goldmark.get("renderer"), "markup.goldmark.renderer")
    toc = _as_mapping(payload.get("tableOfContents"), "markup.tableOfContents")
    base = TableOfContentsConfig()
    return MarkupConfig(
        highlight=HighlightConfig(
            no_classes=_as_bool(
                highlight.get("noClasses"), "markup.highlight.noClasses", default=True
            )
        ),
        unsafe_html=_as_bool(
            renderer.get("unsafe"), "markup.goldmark.renderer.unsafe", default=False
        ),
        table_of_contents=TableOfContentsConfig(
            start_level=_as_int(
                toc.get("startLevel"),
                "markup.tableOfContents.startLevel",
                default=base.start_level,
            ),
            end_level=_as_int(
                toc.get("endLevel"),
                "markup.tableOfContents.endLevel",
                default=base.end_level,
            ),
            ordered=_as_bool(
                toc.get("ordered"), "markup.tableOfContents.ordered", default=False
            ),
        ),
    )


def _build_menus(payload: typ.Mapping[str, typ.Any]) -> dict[str, tuple[MenuEntry, ...]]:
    """Build every named menu (``[[menu.<name>]]``) in declaration order."""
    menus: dict[str, tuple[MenuEntry, ...]] = {}
    for menu_name, entries in payload.items():
        key = f"menu.{menu_name}"
        menus[menu_name] = tuple(
            _build_menu_entry(item, key=f"{key}[{idx}]", position=idx)
            for idx, item in enumerate(_as_table_list(entries, key))
        )
    return menus


def _build_menu_entry(
    payload: typ.Mapping[str, typ.Any], *, key: str, position: int
) -> MenuEntry:
    name = _optional_str(payload.get("name"))
    if name is None:
        msg = f"'{key}.name' is required."
        raise ConfigParseError(msg)
    # ``pageRef = "/"`` is meaningful, so only None counts as absent here.
    page_ref = payload.get("pageRef")
    return MenuEntry(
        name=name,
        page_ref=str(page_ref).strip() if page_ref is not None else None,
        url=_optional_str(payload.get("url")),
        weight=_as_int(payload.get("weight"), f"{key}.weight", default=0),
        position=position,
    )


def _build_params_config(payload: typ.Mapping[str, typ.Any]) -> ParamsConfig:
    """Build theme parameters, keeping unmodelled keys in ``extra``."""
    author_raw = _as_mapping(payload.get("author"), "params.author")
    author = AuthorConfig(
        name=_optional_str(author_raw.get("name")) or "",
        avatar=_optional_str(author_raw.get("avatar")) or "",
        intro=_optional_str(author_raw.get("intro")) or "",
        description=_optional_str(author_raw.get("description")) or "",
    )
    icons = tuple(
        SocialIcon(
            name=_require_str(item, "name"),
            url=_require_str(item, "url"),
        )
        for item in _as_table_list(payload.get("socialIcons"), "params.socialIcons")
    )
    extra = _without_nulls(
        {key: value for key, value in payload.items() if key not in _KNOWN_PARAMS}
    )
    return ParamsConfig(
        sitename=_optional_str(payload.get("sitename")) or "",
        description=_optional_str(payload.get("description")) or "",
        default_color=_optional_str(payload.get("defaultColor")) or "auto",  # type: ignore[arg-type]
        main_sections=_string_tuple(payload.get("mainSections"), "params.mainSections"),
        toc=_as_bool(payload.get("toc"), "params.toc", default=False),
        toc_open=_as_bool(payload.get("tocOpen"), "params.tocOpen", default=False),
        go_to_top=_as_bool(payload.get("goToTop"), "params.goToTop", default=False),
        rss_feed_description=_optional_str(payload.get("rssFeedDescription"))  # type: ignore[arg-type]
        or "summary",
        author=author,
        social_icons=icons,
        extra=extra,
    )


__all__ = [
    "ConfigFormat",
    "build_site_config",
    "load_site_config",
    "load_site_config_text",
    "resolve_config_path",
]
