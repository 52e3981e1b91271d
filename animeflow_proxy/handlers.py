import asyncio
import logging
from typing import List, Optional, Sequence

from animeflow_proxy.aggregator import aggregate_sources
from animeflow_proxy.catalog import CatalogClient, poster_url
from animeflow_proxy.configs import settings
from animeflow_proxy.extractors.base import ExtractorError
from animeflow_proxy.extractors.factory import ExtractorFactory
from animeflow_proxy.schemas import CatalogShow, EpisodeListItem, SourceDescriptor, VideoSource, VideoSourceItem
from animeflow_proxy.utils.http_utils import DownloadError

logger = logging.getLogger(__name__)


async def resolve_provider_sources(descriptor: SourceDescriptor, semaphore: asyncio.Semaphore) -> List[VideoSource]:
    """
    Run the decode, fetch and extract sequence for one provider.

    Failures are logged and turned into an empty contribution so sibling
    providers are unaffected.
    """
    async with semaphore:
        extractor = ExtractorFactory.get_extractor("AllAnime", {})
        try:
            sources = await extractor.extract(descriptor.encoded_path)
        except DownloadError as e:
            logger.warning(f"Provider {descriptor.provider_name}: embed fetch failed ({e.status_code}): {e.message}")
            return []
        except ExtractorError as e:
            logger.warning(f"Provider {descriptor.provider_name}: extraction failed: {e}")
            return []
        except Exception:
            logger.exception(f"Provider {descriptor.provider_name}: unexpected error while resolving sources")
            return []

    logger.info(f"Provider {descriptor.provider_name}: {len(sources)} sources")
    return sources


async def collect_video_sources(descriptors: Sequence[SourceDescriptor]) -> List[VideoSource]:
    """Resolve every provider concurrently and aggregate the results in provider order."""
    semaphore = asyncio.Semaphore(max(settings.max_concurrent_providers, 1))
    # gather returns results in argument order, independent of completion order
    per_provider = await asyncio.gather(
        *(resolve_provider_sources(descriptor, semaphore) for descriptor in descriptors)
    )
    return aggregate_sources(per_provider)


async def get_video_sources(show_id: str, episode_number: str) -> List[VideoSourceItem]:
    """
    Resolve the playable sources of one episode.

    Returns an empty list when the catalog lists no providers or none of
    them yields a source; upstream failures are never raised.
    """
    logger.info(f"Fetching video sources for anime {show_id}, episode {episode_number}")
    descriptors = await CatalogClient().episode_sources(show_id, episode_number)
    sources = await collect_video_sources(descriptors)
    logger.info(f"Final sources count: {len(sources)}")
    return [source.to_item() for source in sources]


async def search_shows(query: str) -> List[CatalogShow]:
    return await CatalogClient().search(query)


async def get_show_detail(show_id: str) -> Optional[CatalogShow]:
    """Show detail, falling back to the matching search entry when the detail query fails."""
    client = CatalogClient()
    show = await client.show_detail(show_id)
    if show is not None:
        return show

    for result in await client.search(show_id):
        if result.id == show_id:
            logger.info(f"Using search result as detail for show {show_id}")
            return result.model_copy(
                update={"year": "Unknown", "genres": "Unknown", "description": "Description unavailable"}
            )
    return None


async def get_episode_list(show_id: str) -> List[EpisodeListItem]:
    episode_numbers = await CatalogClient().episode_list(show_id)
    thumbnail = poster_url(show_id)
    return [
        EpisodeListItem(
            id=f"{show_id}-{episode_number}",
            episode_number=episode_number,
            title=f"Episode {episode_number}",
            duration="24 min",
            description=f"Episode {episode_number} description",
            thumbnail=thumbnail,
        )
        for episode_number in episode_numbers
    ]
