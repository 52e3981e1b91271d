import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from animeflow_proxy.configs import settings
from animeflow_proxy.const import (
    SEARCH_GQL,
    SHOW_DETAIL_GQL,
    EPISODE_LIST_GQL,
    EPISODE_SOURCES_GQL,
    POSTER_URL_TEMPLATE,
    TITLE_ABBREVIATIONS,
)
from animeflow_proxy.schemas import CatalogQuery, CatalogQueryKind, CatalogShow, SourceDescriptor
from animeflow_proxy.utils.http_utils import request_with_retry, DownloadError

logger = logging.getLogger(__name__)

# GraphQL operation and HTTP method per query kind.
_OPERATIONS: Dict[CatalogQueryKind, Tuple[str, str]] = {
    CatalogQueryKind.SEARCH: (SEARCH_GQL, "GET"),
    CatalogQueryKind.SHOW_DETAIL: (SHOW_DETAIL_GQL, "POST"),
    CatalogQueryKind.EPISODE_LIST: (EPISODE_LIST_GQL, "GET"),
    CatalogQueryKind.EPISODE_SOURCES: (EPISODE_SOURCES_GQL, "GET"),
}


def normalize_title(title: str) -> str:
    """Expand the handful of abbreviated titles the catalog uses."""
    return TITLE_ABBREVIATIONS.get(title, title)


def poster_url(show_id: str) -> str:
    return POSTER_URL_TEMPLATE.format(show_id=show_id)


def _dig(payload: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(payload, dict):
            return None
        payload = payload.get(key)
    return payload


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _episode_count(show: dict) -> int:
    count = _dig(show, "availableEpisodes", settings.translation_type)
    try:
        return int(count or 0)
    except (TypeError, ValueError):
        return 0


def _text(value: Any, default: Optional[str] = None) -> Optional[str]:
    return value if isinstance(value, str) and value else default


def _release_year(start_date: Any) -> str:
    if isinstance(start_date, dict) and start_date.get("year"):
        return str(start_date["year"])
    if isinstance(start_date, str) and start_date[:4].isdigit():
        return start_date[:4]
    return "Unknown"


class CatalogClient:
    """
    Client for the upstream GraphQL catalog.

    Every operation swallows upstream failures: list operations return an
    empty list and single-entity operations return None. Failures are only
    logged.
    """

    def __init__(self, request_headers: Optional[dict] = None):
        self.base_headers = {
            "user-agent": settings.user_agent,
            "referer": settings.catalog_referer,
        }
        self.base_headers.update(request_headers or {})
        self.api_url = f"{settings.catalog_api_url.rstrip('/')}/api"

    async def _query(self, query: CatalogQuery, referer: Optional[str] = None) -> Optional[dict]:
        """Run a catalog query and return the ``data`` member of its envelope."""
        operation, method = _OPERATIONS[query.kind]
        headers = self.base_headers.copy()
        if referer:
            headers["referer"] = referer

        if method == "GET":
            kwargs = {
                "params": {
                    "variables": json.dumps(query.variables, separators=(",", ":")),
                    "query": operation,
                }
            }
        else:
            kwargs = {"json": {"query": operation, "variables": query.variables}}

        try:
            response = await request_with_retry(method, self.api_url, headers, **kwargs)
            payload = response.json()
        except DownloadError as e:
            logger.error(f"Catalog {query.kind.value} query failed: {e}")
            return None
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Catalog {query.kind.value} query could not be sent: {e}")
            return None
        except ValueError as e:
            logger.error(f"Catalog {query.kind.value} query returned malformed JSON: {e}")
            return None

        data = _dig(payload, "data")
        if not isinstance(data, dict):
            logger.error(f"Catalog {query.kind.value} response has no data envelope")
            return None
        return data

    async def search(self, query: str) -> List[CatalogShow]:
        catalog_query = CatalogQuery(
            kind=CatalogQueryKind.SEARCH,
            variables={
                "search": {"allowAdult": False, "allowUnknown": False, "query": query},
                "limit": settings.search_limit,
                "page": 1,
                "translationType": settings.translation_type,
                "countryOrigin": "ALL",
            },
        )
        data = await self._query(catalog_query)
        edges = _as_list(_dig(data, "shows", "edges"))

        results = []
        for show in edges:
            show_id = _text(show.get("_id")) if isinstance(show, dict) else None
            if not show_id:
                logger.debug(f"Skipping search entry without a usable id: {show!r}")
                continue
            results.append(
                CatalogShow(
                    id=show_id,
                    title=normalize_title(_text(show.get("name"), "Unknown Title")),
                    episodes=_episode_count(show),
                    poster=poster_url(show_id),
                    status=_text(show.get("status"), "Unknown"),
                )
            )
        return results

    async def show_detail(self, show_id: str) -> Optional[CatalogShow]:
        catalog_query = CatalogQuery(kind=CatalogQueryKind.SHOW_DETAIL, variables={"showId": show_id})
        show = _dig(await self._query(catalog_query), "show")
        if not isinstance(show, dict):
            logger.info(f"Show {show_id} not found in catalog")
            return None

        genres = show.get("genres")
        return CatalogShow(
            id=show_id,
            title=normalize_title(_text(show.get("name")) or _text(show.get("englishName"), "Unknown Title")),
            episodes=_episode_count(show),
            poster=poster_url(show_id),
            status=_text(show.get("status"), "Unknown"),
            year=_release_year(show.get("startDate")),
            genres=", ".join(str(genre) for genre in genres) if isinstance(genres, list) else "Unknown",
            description=_text(show.get("description"), "No description available"),
        )

    async def episode_list(self, show_id: str) -> List[str]:
        catalog_query = CatalogQuery(kind=CatalogQueryKind.EPISODE_LIST, variables={"showId": show_id})
        data = await self._query(catalog_query)
        episodes = _as_list(_dig(data, "show", "availableEpisodesDetail", settings.translation_type))
        return [str(episode) for episode in episodes]

    async def episode_sources(self, show_id: str, episode_number: str) -> List[SourceDescriptor]:
        catalog_query = CatalogQuery(
            kind=CatalogQueryKind.EPISODE_SOURCES,
            variables={
                "showId": show_id,
                "translationType": settings.translation_type,
                "episodeString": episode_number,
            },
        )
        data = await self._query(catalog_query, referer=settings.embed_referer)
        source_urls = _as_list(_dig(data, "episode", "sourceUrls"))

        descriptors = []
        for source in source_urls:
            if not isinstance(source, dict) or not source.get("sourceUrl") or not source.get("sourceName"):
                continue
            descriptors.append(
                SourceDescriptor(provider_name=str(source["sourceName"]), encoded_path=str(source["sourceUrl"]))
            )
        return descriptors
