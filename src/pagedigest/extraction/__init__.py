"""Page content extraction."""

from pagedigest.extraction.extractor import ContentExtractor

__all__ = ["ContentExtractor"]
