"""Errors and warnings raised while loading the blog's configuration and content.

Fatal problems derive from :class:`SiteError` and abort the build; the CLI
turns them into a non-zero exit status. Recoverable problems are reported as
:mod:`warnings` categories so callers can filter, escalate, or log them.
"""

from __future__ import annotations

from pathlib import Path


class SiteError(ValueError):
    """Base class for fatal build errors."""


class ConfigParseError(SiteError):
    """Raised when the configuration document is missing required data or is invalid."""


class FrontMatterError(SiteError):
    """Raised when a content document's front matter cannot be parsed.

    Attributes
    ----------
    path : Path
        Document whose header is malformed.
    reason : str
        Human-readable description of the problem.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class DuplicatePathError(SiteError):
    """Raised when two exposed documents claim the same logical path."""

    def __init__(self, logical_path: str, sources: list[Path]) -> None:
        self.logical_path = logical_path
        self.sources = sources
        listed = ", ".join(str(source) for source in sources)
        super().__init__(f"Multiple documents publish '{logical_path}': {listed}")


class DanglingReferenceWarning(UserWarning):
    """Emitted when a menu ``pageRef`` does not match any known content path."""


class FrontMatterWarning(UserWarning):
    """Emitted when a malformed document is skipped in preview builds."""


__all__ = [
    "ConfigParseError",
    "DanglingReferenceWarning",
    "DuplicatePathError",
    "FrontMatterError",
    "FrontMatterWarning",
    "SiteError",
]
