import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from animeflow_proxy.handlers import get_video_sources, search_shows, get_show_detail, get_episode_list
from animeflow_proxy.schemas import CatalogShow, EpisodeListItem, VideoSourceItem

api_router = APIRouter()
logger = logging.getLogger(__name__)


@api_router.get("/search", response_model=List[CatalogShow], response_model_exclude_none=True)
async def search(q: Optional[str] = Query(None, description="Search query, at least 2 characters.")):
    """Search the catalog by title."""
    if not q or len(q.strip()) < 2:
        raise HTTPException(status_code=400, detail="Query must be at least 2 characters long")
    return await search_shows(q)


@api_router.get("/anime/{anime_id}", response_model=CatalogShow, response_model_exclude_none=True)
async def anime_details(anime_id: str):
    """Get the details of a show."""
    show = await get_show_detail(anime_id)
    if show is None:
        raise HTTPException(status_code=404, detail="Anime not found")
    return show


@api_router.get("/anime/{anime_id}/episodes", response_model=List[EpisodeListItem])
async def anime_episodes(anime_id: str):
    """List the episodes of a show."""
    return await get_episode_list(anime_id)


@api_router.get("/episode/{episode_id}/sources", response_model=List[VideoSourceItem], response_model_exclude_none=True)
async def episode_sources(
    episode_id: str,
    anime_id: Optional[str] = Query(None, alias="animeId", description="The show the episode belongs to."),
    episode_number: Optional[str] = Query(None, alias="episodeNumber", description="The episode number."),
):
    """
    Resolve the playable video sources of an episode.

    An empty list means no video sources are available.
    """
    if not anime_id or not episode_number:
        raise HTTPException(status_code=400, detail="animeId and episodeNumber are required")
    logger.debug(f"Resolving sources for episode {episode_id}")
    return await get_video_sources(anime_id, episode_number)
