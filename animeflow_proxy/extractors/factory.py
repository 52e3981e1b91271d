from typing import Dict, Type

from animeflow_proxy.extractors.base import BaseExtractor, ExtractorError
from animeflow_proxy.extractors.allanime import AllAnimeExtractor


class ExtractorFactory:
    """Factory for creating video source extractors."""

    _extractors: Dict[str, Type[BaseExtractor]] = {
        "AllAnime": AllAnimeExtractor,
    }

    @classmethod
    def get_extractor(cls, host: str, request_headers: dict) -> BaseExtractor:
        """Get appropriate extractor instance for the given host."""
        extractor_class = cls._extractors.get(host)
        if not extractor_class:
            raise ExtractorError(f"Unsupported host: {host}")
        return extractor_class(request_headers)
