"""Exceptions raised at the edges of folio.

The content engine itself never raises for data-quality problems; these
cover caller-facing failures such as a missing content directory.
"""


class FolioError(Exception):
    """Base class for folio errors."""


class ContentDirectoryError(FolioError):
    """The configured content directory does not exist."""
