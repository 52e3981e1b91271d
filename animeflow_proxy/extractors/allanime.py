import logging
from typing import List
from urllib.parse import urljoin

from animeflow_proxy.configs import settings
from animeflow_proxy.const import MASTER_MANIFEST_MARKER, WIXMP_MARKER, YOUTUBE_LIKE_MARKER
from animeflow_proxy.extractors.base import BaseExtractor
from animeflow_proxy.extractors.hls import HLSManifestExtractor
from animeflow_proxy.extractors.link_parser import parse_embed_links, expand_wixmp_link
from animeflow_proxy.schemas import VideoSource, ProviderKind, MediaType
from animeflow_proxy.utils.path_decoder import decode_source_path

logger = logging.getLogger(__name__)


class AllAnimeExtractor(BaseExtractor):
    """Resolves one AllAnime provider's encoded path into playable sources."""

    def __init__(self, request_headers: dict):
        super().__init__({"referer": settings.embed_referer, **(request_headers or {})})
        self.referer = self.base_headers["referer"]

    @staticmethod
    def embed_url(path: str) -> str:
        return urljoin(f"https://{settings.embed_base_host}", path)

    async def fetch_embed(self, path: str) -> str:
        """Fetch the raw embed payload served at a decoded path."""
        url = self.embed_url(path)
        logger.debug(f"Fetching embed URL: {url}")
        response = await self._make_request(url)
        return response.text

    async def extract(self, url: str, **kwargs) -> List[VideoSource]:
        """
        Decode the provider path in ``url``, fetch its payload and return its sources.

        Raises DownloadError or ExtractorError when the payload cannot be fetched.
        """
        path = decode_source_path(url)
        logger.debug(f"Decoded source path: {path}")
        body = await self.fetch_embed(path)

        candidates = parse_embed_links(body, referer=self.referer)
        logger.debug(f"Extracted {len(candidates)} candidate links from {len(body)} bytes")
        return await self.expand_links(candidates, body)

    async def expand_links(self, candidates: List[VideoSource], body: str) -> List[VideoSource]:
        """Classify candidate links by host shape and expand the multi-quality ones."""
        sources = []
        for candidate in candidates:
            if WIXMP_MARKER in candidate.url:
                sources.extend(expand_wixmp_link(candidate.url, body, referer=candidate.referer))
            elif MASTER_MANIFEST_MARKER in candidate.url:
                sources.extend(await self.resolve_master_manifest(candidate))
            elif YOUTUBE_LIKE_MARKER in candidate.url:
                sources.append(candidate.model_copy(update={"provider_kind": ProviderKind.YOUTUBE}))
            else:
                sources.append(candidate)
        return sources

    async def resolve_master_manifest(self, candidate: VideoSource) -> List[VideoSource]:
        master = candidate.model_copy(update={"provider_kind": ProviderKind.M3U8, "media_type": MediaType.HLS})
        if not settings.resolve_hls_variants:
            return [master]

        variants = await HLSManifestExtractor({}).extract(master.url, referer=master.referer)
        if not variants:
            logger.info(f"No variants resolved from {master.url}, keeping the master manifest")
            return [master]
        return variants
