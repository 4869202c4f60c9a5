"""
instawrapped - year-in-review statistics from an Instagram data export.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .archive import ArchiveError
from .config import Config
from .extractor.models import ExtractionResult
from .pipeline import ExtractionPipeline, extract, extract_sync

__all__ = ["__version__", "ArchiveError", "Config", "ExtractionPipeline", "ExtractionResult", "extract", "extract_sync"]
