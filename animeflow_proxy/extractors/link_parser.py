"""
Parsers for the embed payloads served behind decoded provider paths.

The payloads look like JSON but are not guaranteed to be valid JSON, so
they are cut into object fragments on ``{``/``}`` and every fragment is
offered to a fixed, ordered list of recognizers. The first recognizer that
matches wins; fragments nobody recognizes are dropped.
"""

import logging
import re
from typing import Callable, List, Optional, Sequence

from animeflow_proxy.const import AUTO_QUALITY, DEFAULT_QUALITY, WIXMP_MARKER
from animeflow_proxy.schemas import VideoSource, ProviderKind, MediaType

logger = logging.getLogger(__name__)

FragmentRecognizer = Callable[[str, Optional[str]], Optional[VideoSource]]

_fragment_delimiters = re.compile(r"[{}]")
_direct_link_pattern = re.compile(r'"link":"([^"]*)".*"resolutionStr":"([^"]*)"')
_hls_link_pattern = re.compile(r'"hls","url":"([^"]*)".*"hardsub_lang":"en-US"')

_wixmp_quality_group_pattern = re.compile(r",([^/]*),/mp4")
_wixmp_quality_token_pattern = re.compile(r"\d+p?")
_wixmp_template_slot_pattern = re.compile(r",[^/]*")
_wixmp_urlset_pattern = re.compile(r"\.urlset.*")


def unescape_link(raw: str) -> str:
    """Undo the slash escaping used in embed payloads."""
    return raw.replace("\\u002F", "/").replace("\\", "")


def recognize_direct_link(fragment: str, referer: Optional[str] = None) -> Optional[VideoSource]:
    match = _direct_link_pattern.search(fragment)
    if not match:
        return None
    url = unescape_link(match.group(1))
    if not url:
        return None
    return VideoSource(
        quality=match.group(2) or DEFAULT_QUALITY,
        url=url,
        provider_kind=ProviderKind.DIRECT,
        referer=referer,
        media_type=MediaType.MP4,
    )


def recognize_hls_link(fragment: str, referer: Optional[str] = None) -> Optional[VideoSource]:
    match = _hls_link_pattern.search(fragment)
    if not match:
        return None
    url = unescape_link(match.group(1))
    if not url:
        return None
    return VideoSource(
        quality=AUTO_QUALITY,
        url=url,
        provider_kind=ProviderKind.M3U8,
        referer=referer,
        media_type=MediaType.HLS,
    )


# Tried in this order for every fragment.
FRAGMENT_RECOGNIZERS: Sequence[FragmentRecognizer] = (recognize_direct_link, recognize_hls_link)


def parse_embed_links(body: str, referer: Optional[str] = None) -> List[VideoSource]:
    """
    Extract candidate sources from an embed payload.

    Args:
        body (str): Raw payload text.
        referer (str, optional): Referer recorded on every extracted source.

    Returns:
        List[VideoSource]: One source per recognized fragment, in payload order.
    """
    sources = []
    for fragment in _fragment_delimiters.split(body):
        for recognizer in FRAGMENT_RECOGNIZERS:
            source = recognizer(fragment, referer)
            if source is not None:
                sources.append(source)
                break
    return sources


def wixmp_quality_tokens(body: str) -> List[str]:
    """Distinct rendition tokens (``480p``, ``1080``...) listed next to ``/mp4`` containers."""
    tokens = []
    for group in _wixmp_quality_group_pattern.findall(unescape_link(body)):
        for token in group.split(","):
            if _wixmp_quality_token_pattern.fullmatch(token) and token not in tokens:
                tokens.append(token)
    return tokens


def expand_wixmp_link(link: str, body: str, referer: Optional[str] = None) -> List[VideoSource]:
    """
    Synthesize one mp4 source per rendition of a multi-quality wixmp link.

    The repackager host is dropped from the link and the ``.urlset`` tail
    cut off; every comma-separated rendition slot left in the template is
    then replaced by each quality token found in the payload. A link whose
    shape does not match yields no sources.
    """
    template = _wixmp_urlset_pattern.sub("", link.replace(f"{WIXMP_MARKER}/", ""), count=1)
    sources = []
    for token in wixmp_quality_tokens(body):
        url = _wixmp_template_slot_pattern.sub(token, template)
        if not url:
            logger.debug(f"Wixmp link {link} left an empty template")
            continue
        sources.append(
            VideoSource(
                quality=token if token.endswith("p") else f"{token}p",
                url=url,
                provider_kind=ProviderKind.WIXMP,
                referer=referer,
                media_type=MediaType.MP4,
            )
        )
    return sources
