"""Load and validate the blog's configuration document.

This subpackage parses ``hugo.toml`` (or its YAML equivalent), applies the
generator's defaults, and produces immutable dataclasses (:class:`SiteConfig`,
:class:`MenuEntry`, etc.) that the content scanner, menu builder, and CLI
consume. The primary entry point is :func:`load_site_config`; the companion
:func:`dump_site_config` writes the recognized fields back out as TOML.

Examples
--------
>>> from pathlib import Path
>>> from blog_pages.config import load_site_config
>>> site = load_site_config(Path("hugo.toml"))  # doctest: +SKIP
>>> site.params.main_sections  # doctest: +SKIP
('posts', 'projects')
"""

from blog_pages.errors import ConfigParseError

from .loader import (
    ConfigFormat,
    build_site_config,
    load_site_config,
    load_site_config_text,
    resolve_config_path,
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
from .serializer import dump_site_config

__all__ = [
    "AuthorConfig",
    "ConfigFormat",
    "ConfigParseError",
    "HighlightConfig",
    "MarkupConfig",
    "MenuEntry",
    "ModuleImport",
    "ParamsConfig",
    "SiteConfig",
    "SocialIcon",
    "TableOfContentsConfig",
    "build_site_config",
    "dump_site_config",
    "load_site_config",
    "load_site_config_text",
    "resolve_config_path",
]
