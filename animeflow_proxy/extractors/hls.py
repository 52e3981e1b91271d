import logging
from typing import List, Optional

from animeflow_proxy.const import HLS_SIGNATURE
from animeflow_proxy.extractors.base import BaseExtractor, ExtractorError
from animeflow_proxy.schemas import VideoSource, ProviderKind, MediaType
from animeflow_proxy.utils.hls_utils import parse_hls_playlist
from animeflow_proxy.utils.http_utils import DownloadError

logger = logging.getLogger(__name__)


class HLSManifestExtractor(BaseExtractor):
    """Expands an HLS master manifest into one source per quality variant."""

    async def extract(self, url: str, referer: Optional[str] = None, **kwargs) -> List[VideoSource]:
        """
        Resolve the variants of the master manifest at ``url``.

        An unreachable manifest, or a body that is not an M3U8 playlist,
        yields an empty list.
        """
        headers = {"referer": referer} if referer else None
        try:
            response = await self._make_request(url, headers=headers)
        except (DownloadError, ExtractorError) as e:
            logger.warning(f"Manifest request failed for {url}: {e}")
            return []

        content = response.text
        if HLS_SIGNATURE not in content:
            logger.info(f"Response from {url} is not an HLS playlist")
            return []

        return [
            VideoSource(
                quality=f"{stream['resolution'][1]}p",
                url=stream["url"],
                provider_kind=ProviderKind.M3U8,
                referer=referer,
                media_type=MediaType.HLS,
            )
            for stream in parse_hls_playlist(content, base_url=url)
        ]
