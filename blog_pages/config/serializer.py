"""Render a loaded ``SiteConfig`` back into a TOML configuration document.

Only recognized fields are written (plus unmodelled ``params`` entries), in a
canonical order. Loading the output with :func:`load_site_config_text` yields
a configuration equal to the one that was dumped.
"""

from __future__ import annotations

import typing as typ

import tomlkit

if typ.TYPE_CHECKING:
    from .models import MenuEntry, SiteConfig


def dump_site_config(config: SiteConfig) -> str:
    """Return ``config`` serialized as a TOML document string."""
    doc = tomlkit.document()
    doc["baseURL"] = config.base_url
    doc["languageCode"] = config.language_code
    doc["defaultContentLanguage"] = config.default_content_language
    doc["title"] = config.title
    doc["enableEmoji"] = config.enable_emoji

    if config.modules:
        module = tomlkit.table()
        imports = tomlkit.aot()
        for item in config.modules:
            entry = tomlkit.table()
            entry["path"] = item.path
            imports.append(entry)
        module["imports"] = imports
        doc["module"] = module

    doc["markup"] = _markup_table(config)

    if config.menus:
        menu = tomlkit.table()
        for name, entries in config.menus.items():
            menu[name] = _menu_aot(entries)
        doc["menu"] = menu

    doc["params"] = _params_table(config)
    return tomlkit.dumps(doc)


def _markup_table(config: SiteConfig) -> typ.Any:
    markup = tomlkit.table()
    highlight = tomlkit.table()
    highlight["noClasses"] = config.markup.highlight.no_classes
    markup["highlight"] = highlight

    renderer = tomlkit.table()
    renderer["unsafe"] = config.markup.unsafe_html
    goldmark = tomlkit.table()
    goldmark["renderer"] = renderer
    markup["goldmark"] = goldmark

    toc_config = config.markup.table_of_contents
    toc = tomlkit.table()
    toc["startLevel"] = toc_config.start_level
    toc["endLevel"] = toc_config.end_level
    toc["ordered"] = toc_config.ordered
    markup["tableOfContents"] = toc
    return markup


def _menu_aot(entries: tuple[MenuEntry, ...]) -> typ.Any:
    aot = tomlkit.aot()
    for entry in sorted(entries, key=lambda item: item.position):
        table = tomlkit.table()
        if entry.page_ref is not None:
            table["pageRef"] = entry.page_ref
        table["name"] = entry.name
        if entry.url is not None:
            table["url"] = entry.url
        table["weight"] = entry.weight
        aot.append(table)
    return aot


def _params_table(config: SiteConfig) -> typ.Any:
    params = config.params
    table = tomlkit.table()
    table["sitename"] = params.sitename
    table["description"] = params.description
    table["defaultColor"] = params.default_color
    table["mainSections"] = list(params.main_sections)
    table["toc"] = params.toc
    table["tocOpen"] = params.toc_open
    table["goToTop"] = params.go_to_top
    table["rssFeedDescription"] = params.rss_feed_description
    for key, value in params.extra.items():
        table[key] = value

    author = tomlkit.table()
    author["avatar"] = params.author.avatar
    author["intro"] = params.author.intro
    author["name"] = params.author.name
    author["description"] = params.author.description
    table["author"] = author

    if params.social_icons:
        icons = tomlkit.aot()
        for icon in params.social_icons:
            entry = tomlkit.table()
            entry["name"] = icon.name
            entry["url"] = icon.url
            icons.append(entry)
        table["socialIcons"] = icons
    return table


__all__ = ["dump_site_config"]
