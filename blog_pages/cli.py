"""Cyclopts CLI entrypoint for inspecting the blog's configuration and content.

The ``pages`` console script defined here runs one build pass over the site
root and reports on it: ``pages check`` validates the configuration and
every content document, ``pages list`` prints the exposed posts newest first,
``pages menu`` shows the resolved navigation, ``pages dump-config`` writes the
recognized configuration back out as TOML, and ``pages toc`` prints a
document's table of contents. Options may also be supplied as ``PAGES_*``
environment variables.

Examples
--------
Validate the site in the current directory, including drafts:

>>> from blog_pages.cli import main
>>> main(["check", "--mode", "preview"])  # doctest: +SKIP

List published posts from another checkout:

>>> from blog_pages.cli import app
>>> app(["list", "--root", "../blog"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import CONTENT_DIR
from .config import dump_site_config, load_site_config, resolve_config_path
from .content import parse_document
from .drafts import BuildMode
from .errors import SiteError
from .site import SiteBuilder, SiteModel
from .toc import extract_toc

app = App(name="pages", config=cyclopts.config.Env("PAGES_", command=False))  # type: ignore[unknown-argument]

RootOption = typ.Annotated[Path, Parameter(help="Site root directory")]
ConfigOption = typ.Annotated[
    Path | None, Parameter(help="Configuration file (defaults to hugo.toml in root)")
]
ContentOption = typ.Annotated[
    Path | None, Parameter(help="Content directory (defaults to <root>/content)")
]
ModeOption = typ.Annotated[
    BuildMode, Parameter(help="Build mode: production hides drafts, preview shows them")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _build(
    root: Path,
    config: Path | None,
    content: Path | None,
    mode: BuildMode,
    *,
    strict: bool = False,
) -> SiteModel:
    builder = SiteBuilder(
        root, config_path=config, content_dir=content, mode=mode, strict=strict
    )
    return builder.run()


@app.command(help="Validate the configuration and every content document.")
def check(
    *,
    root: RootOption = Path("."),
    config: ConfigOption = None,
    content: ContentOption = None,
    mode: ModeOption = BuildMode.PRODUCTION,
    strict: typ.Annotated[
        bool, Parameter(help="Fail on malformed documents in preview builds too")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Run a build pass and print a short summary.

    Parameters
    ----------
    root : Path, optional
        Site root containing the configuration file and ``content/``.
    config : Path or None, optional
        Explicit configuration file.
    content : Path or None, optional
        Explicit content directory.
    mode : BuildMode, optional
        ``production`` (default) or ``preview``.
    strict : bool, optional
        Treat malformed documents as fatal in preview builds.
    verbose : bool, optional
        Lower the log level to ``DEBUG``.

    Raises
    ------
    SiteError
        If the configuration or a document is invalid; :func:`main` turns this
        into exit status 1.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    model = _build(root, config, content, mode, strict=strict)
    drafts = sum(1 for doc in model.documents if doc.draft)
    print(f"site: {model.config.title} ({model.config.base_url})")
    print(f"mode: {model.mode}")
    print(f"documents: {model.scanned} scanned, {len(model.documents)} exposed")
    if drafts:
        print(f"drafts: {drafts} shown")
    print(f"main sections: {len(model.main_section_pages())} pages")
    print(f"menu: {len(model.menu)} entries")


@app.command(name="list", help="List exposed pages, newest first.")
def list_pages(
    *,
    root: RootOption = Path("."),
    config: ConfigOption = None,
    content: ContentOption = None,
    mode: ModeOption = BuildMode.PRODUCTION,
    section: typ.Annotated[
        str | None, Parameter(help="Only list pages from this section")
    ] = None,
) -> None:
    """Print ``date  path  title`` for every exposed page."""
    model = _build(root, config, content, mode)
    pages = model.section_pages(section) if section is not None else model.pages
    for doc in pages:
        stamp = doc.date.date().isoformat() if doc.date else "----------"
        marker = " [draft]" if doc.draft else ""
        print(f"{stamp}  {doc.logical_path}  {doc.title}{marker}")


@app.command(help="Show the resolved main menu.")
def menu(
    *,
    root: RootOption = Path("."),
    config: ConfigOption = None,
    content: ContentOption = None,
    mode: ModeOption = BuildMode.PRODUCTION,
    current: typ.Annotated[
        str | None, Parameter(help="Path of the page being viewed")
    ] = None,
) -> None:
    """Print menu entries in display order, marking the active route."""
    model = _build(root, config, content, mode)
    for item in model.menu:
        active = "*" if current is not None and item.is_active(current) else " "
        print(f"{active} {item.weight:>4}  {item.name}  {item.href}")


@app.command(name="dump-config", help="Print the recognized configuration as TOML.")
def dump_config(
    *,
    root: RootOption = Path("."),
    config: ConfigOption = None,
) -> None:
    """Write the loaded configuration to stdout in canonical TOML form."""
    site_config = load_site_config(config or resolve_config_path(root))
    sys.stdout.write(dump_site_config(site_config))


@app.command(help="Print a document's table of contents.")
def toc(
    document: typ.Annotated[Path, Parameter(help="Markdown document to inspect")],
    *,
    root: RootOption = Path("."),
    config: ConfigOption = None,
    content: ContentOption = None,
) -> None:
    """Print the headings within ``markup.tableOfContents``'s level range."""
    site_config = load_site_config(config or resolve_config_path(root))
    content_root = content or root / CONTENT_DIR
    try:
        document.resolve().relative_to(content_root.resolve())
    except ValueError:
        content_root = document.parent
    doc = parse_document(document.resolve(), content_root.resolve())
    contents = extract_toc(doc.body, site_config.markup.table_of_contents)
    state = "enabled" if doc.show_toc(site_config.params) else "disabled"
    print(f"{doc.title} ({_format_path(document)}, toc {state})")
    for line in contents.as_lines():
        print(line)


def main(tokens: list[str] | None = None) -> None:
    """Invoke the Cyclopts application that powers the ``pages`` console command.

    Logging goes to stderr at ``WARNING`` level and Python warnings (such as
    dangling menu references) are routed through it. Fatal site errors are
    reported as ``error: <message>`` and exit with status 1.

    Examples
    --------
    >>> main(["check"])  # doctest: +SKIP
    """
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    logging.captureWarnings(True)
    try:
        app(tokens)
    except (SiteError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
