"""Export archive access."""

from . import paths
from .reader import Archive, ArchiveError, ArchiveReader

__all__ = ["Archive", "ArchiveError", "ArchiveReader", "paths"]
