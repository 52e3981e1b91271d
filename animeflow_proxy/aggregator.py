import re
from typing import Iterable, List

from animeflow_proxy.schemas import VideoSource

_quality_pattern = re.compile(r"([0-9]+)p?")


def quality_rank(quality: str) -> int:
    """
    Numeric rank of a quality label: ``"1080p"`` -> 1080.

    Labels that are not a number with an optional trailing ``p`` (``"auto"``,
    the empty string) rank 0.
    """
    match = _quality_pattern.fullmatch(quality)
    return int(match.group(1)) if match else 0


def aggregate_sources(per_provider: Iterable[Iterable[VideoSource]]) -> List[VideoSource]:
    """
    Merge per-provider results into the final source list.

    Sources are concatenated in provider order, only the first source per
    URL is kept, and the result is stably sorted by descending quality rank
    so that ties keep their provider order.
    """
    seen = set()
    merged = []
    for sources in per_provider:
        for source in sources:
            if source.url in seen:
                continue
            seen.add(source.url)
            merged.append(source)
    return sorted(merged, key=lambda source: quality_rank(source.quality), reverse=True)
