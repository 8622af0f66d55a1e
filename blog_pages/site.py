"""Run one build pass over the configuration and content tree.

:class:`SiteBuilder` loads the configuration document, scans the content
directory, applies the draft filter for the requested :class:`BuildMode`,
checks that every published logical path is claimed by a single document,
and resolves the navigation menus. The resulting :class:`SiteModel` is the
input contract handed to the theme renderer.

Example
-------
>>> from pathlib import Path
>>> from blog_pages.site import SiteBuilder
>>> model = SiteBuilder(Path(".")).run()  # doctest: +SKIP
>>> [doc.title for doc in model.main_section_pages()][:1]  # doctest: +SKIP
['How variable sized arrays work']
"""

from __future__ import annotations

import collections
import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from ._constants import CONTENT_DIR
from .config import load_site_config, resolve_config_path
from .content import ContentDocument, ContentStore, sort_chronologically
from .drafts import BuildMode, filter_drafts
from .errors import DuplicatePathError
from .menu import ContentIndex, ResolvedMenuItem, build_menu

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteConfig

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class SiteModel:
    """Everything the renderer needs from a single build.

    Attributes
    ----------
    config : SiteConfig
        Loaded configuration.
    mode : BuildMode
        Mode the build ran in.
    documents : list[ContentDocument]
        Exposed documents, newest first.
    scanned : int
        Number of documents parsed before draft filtering.
    menus : dict[str, list[ResolvedMenuItem]]
        Resolved menus keyed by name (``"main"`` for the primary navigation).
    """

    config: SiteConfig
    mode: BuildMode
    documents: list[ContentDocument]
    scanned: int
    menus: dict[str, list[ResolvedMenuItem]]

    @property
    def menu(self) -> list[ResolvedMenuItem]:
        return self.menus.get("main", [])

    @property
    def pages(self) -> list[ContentDocument]:
        """Regular pages (no section list pages), newest first."""
        return [doc for doc in self.documents if doc.kind == "page"]

    def section_pages(self, section: str) -> list[ContentDocument]:
        """Pages stored under ``section``; empty when the section does not exist."""
        return [doc for doc in self.pages if doc.section == section]

    def main_section_pages(self) -> list[ContentDocument]:
        """Pages from every ``params.mainSections`` section, newest first."""
        sections = set(self.config.params.main_sections)
        return [doc for doc in self.pages if doc.section in sections]

    def get(self, logical_path: str) -> ContentDocument | None:
        """Return the published document at ``logical_path``, if any."""
        for document in self.documents:
            if document.logical_path == logical_path and not document.draft:
                return document
        for document in self.documents:
            if document.logical_path == logical_path:
                return document
        return None


class SiteBuilder:
    """Load configuration and content for one build.

    Parameters
    ----------
    root : Path
        Site root holding the configuration file and ``content/`` directory.
    config_path : Path, optional
        Explicit configuration file; defaults to the first candidate in
        ``root``.
    content_dir : Path, optional
        Explicit content directory; defaults to ``root / "content"``.
    mode : BuildMode or str, optional
        ``production`` (default) hides drafts; ``preview`` shows them.
    strict : bool, optional
        In preview builds malformed documents are skipped with a warning
        unless ``strict`` is set. Production builds are always strict.
    workers : int, optional
        Number of threads used to parse documents.
    """

    def __init__(
        self,
        root: Path,
        *,
        config_path: Path | None = None,
        content_dir: Path | None = None,
        mode: BuildMode | str = BuildMode.PRODUCTION,
        strict: bool = False,
        workers: int = 4,
    ) -> None:
        self.root = root
        self.config_path = config_path or resolve_config_path(root)
        self.content_dir = content_dir or root / CONTENT_DIR
        self.mode = BuildMode(mode)
        self.strict = strict or self.mode is BuildMode.PRODUCTION
        self.workers = workers

    def run(self) -> SiteModel:
        """Execute the build pass and return the assembled model.

        Raises
        ------
        ConfigParseError
            If the configuration document is invalid.
        FrontMatterError
            If a document is malformed (production or strict builds).
        DuplicatePathError
            If two published documents share a logical path.
        """
        config = load_site_config(self.config_path)
        store = ContentStore(self.content_dir, skip_invalid=not self.strict)
        loaded = store.load(workers=self.workers)
        exposed = sort_chronologically(filter_drafts(loaded, self.mode))
        _check_unique_paths(exposed)
        self._report_missing_sections(config, exposed)

        index = ContentIndex.from_documents(exposed)
        menus = {name: build_menu(entries, index) for name, entries in config.menus.items()}
        logger.info(
            "Built %s site: %d of %d documents exposed",
            self.mode,
            len(exposed),
            len(loaded),
        )
        return SiteModel(
            config=config,
            mode=self.mode,
            documents=exposed,
            scanned=len(loaded),
            menus=menus,
        )

    @staticmethod
    def _report_missing_sections(
        config: SiteConfig, documents: cabc.Sequence[ContentDocument]
    ) -> None:
        present = {doc.section for doc in documents}
        for section in config.params.main_sections:
            if section not in present:
                logger.debug("Main section '%s' has no documents", section)


def _check_unique_paths(documents: cabc.Iterable[ContentDocument]) -> None:
    """Reject published path collisions; draft collisions in previews are only logged."""
    claims: dict[str, list[ContentDocument]] = collections.defaultdict(list)
    for document in documents:
        claims[document.logical_path].append(document)
    for logical_path, owners in claims.items():
        if len(owners) < 2:
            continue
        published = [doc.source for doc in owners if not doc.draft]
        if len(published) > 1:
            raise DuplicatePathError(logical_path, published)
        logger.warning(
            "Draft documents shadow '%s': %s",
            logical_path,
            ", ".join(str(doc.source) for doc in owners),
        )


__all__ = ["SiteBuilder", "SiteModel"]
