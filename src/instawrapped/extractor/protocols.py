"""
Protocols for pluggable metric extractors.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..archive import Archive
from .models import Identity


@runtime_checkable
class MetricExtractor(Protocol):
    """Reads one fact family out of an export archive."""

    name: str

    def default(self) -> Any:
        """Value reported when the source pages are missing or unusable."""
        ...

    async def extract(self, archive: Archive, identity: Identity) -> Any:
        """Extract the fact family from the archive.

        Args:
            archive: Opened export archive
            identity: Resolved account owner, used to leave the owner out

        Returns:
            The extractor's result fragment, at its default value when the
            source pages are missing
        """
        ...
