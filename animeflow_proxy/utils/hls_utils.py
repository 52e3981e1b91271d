import logging
import re
from typing import List, Dict, Any, Optional
from urllib.parse import urljoin

logger = logging.getLogger(__name__)

STREAM_INF_TAG = "#EXT-X-STREAM-INF"
_resolution_pattern = re.compile(r"RESOLUTION=(\d+)x(\d+)")


def parse_hls_playlist(playlist_content: str, base_url: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Parses an HLS master playlist to extract stream information.

    Only variants whose ``#EXT-X-STREAM-INF`` line carries a ``RESOLUTION``
    attribute and is immediately followed by a URI line are returned, in
    file order.

    Args:
        playlist_content (str): The content of the M3U8 master playlist.
        base_url (str, optional): The URL of the playlist for resolving relative stream URLs. Defaults to None.

    Returns:
        List[Dict[str, Any]]: A list of dictionaries with ``resolution`` as (width, height) and ``url``.
    """
    streams = []
    lines = [line.strip() for line in playlist_content.splitlines()]

    for i, line in enumerate(lines):
        if not line.startswith(STREAM_INF_TAG):
            continue

        match = _resolution_pattern.search(line)
        if not match:
            logger.debug(f"Skipping stream without resolution: {line}")
            continue

        # The next line should be the stream URL
        next_line = lines[i + 1] if i + 1 < len(lines) else ""
        if not next_line or next_line.startswith("#"):
            logger.debug(f"Dropping stream info line without URI: {line}")
            continue

        streams.append(
            {
                "resolution": (int(match.group(1)), int(match.group(2))),
                "url": urljoin(base_url, next_line) if base_url else next_line,
            }
        )

    return streams
