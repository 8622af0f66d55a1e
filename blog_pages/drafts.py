"""Select which documents a build exposes based on their draft flag."""

from __future__ import annotations

import collections.abc as cabc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    from .content import ContentDocument


class BuildMode(enum.StrEnum):
    """Kind of build being produced.

    ``production`` publishes only finished documents; ``preview`` also shows
    drafts so work in progress can be reviewed locally.
    """

    PRODUCTION = "production"
    PREVIEW = "preview"


def filter_drafts(
    documents: cabc.Iterable[ContentDocument], mode: BuildMode | str
) -> cabc.Iterator[ContentDocument]:
    """Yield the documents visible in ``mode``.

    Parameters
    ----------
    documents : Iterable[ContentDocument]
        Documents produced by the content scanner.
    mode : BuildMode or str
        ``"production"`` drops drafts; ``"preview"`` yields everything.

    Returns
    -------
    Iterator[ContentDocument]
        Visible documents in their input order. Filtering an already filtered
        sequence again yields the same documents.

    Raises
    ------
    ValueError
        If ``mode`` is not a known build mode.
    """
    build_mode = BuildMode(mode)
    return (
        document
        for document in documents
        if build_mode is BuildMode.PREVIEW or not document.draft
    )


__all__ = ["BuildMode", "filter_drafts"]
