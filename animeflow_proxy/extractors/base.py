from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import httpx
import logging

from animeflow_proxy.configs import settings
from animeflow_proxy.schemas import VideoSource
from animeflow_proxy.utils.http_utils import request_with_retry, DownloadError

logger = logging.getLogger(__name__)


class ExtractorError(Exception):
    """Base exception for all extractors."""
    pass


class BaseExtractor(ABC):
    """Base class for all video source extractors."""

    def __init__(self, request_headers: dict):
        self.base_headers = {
            "user-agent": settings.user_agent,
        }
        # merge incoming headers (e.g. Referer) with default base headers
        self.base_headers.update(request_headers or {})

    async def _make_request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict] = None,
        **kwargs,
    ) -> httpx.Response:
        """
        Make an HTTP request with the extractor's base headers.

        Raises
        ------
        DownloadError
            On non-2xx responses and timeouts (preserves status code).
        ExtractorError
            On any other failure, e.g. an invalid URL.
        """
        request_headers = self.base_headers.copy()
        if headers:
            request_headers.update(headers)

        try:
            return await request_with_retry(method, url, request_headers, **kwargs)
        except DownloadError:
            raise
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.debug("Request to %s could not be sent: %s", url, e)
            raise ExtractorError(f"Request failed for URL {url}: {str(e)}")

    @abstractmethod
    async def extract(self, url: str, **kwargs) -> List[VideoSource]:
        """Extract playable video sources."""
        pass
