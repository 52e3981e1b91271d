from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderKind(str, Enum):
    DIRECT = "direct"
    WIXMP = "wixmp"
    M3U8 = "m3u8"
    YOUTUBE = "youtube"


class MediaType(str, Enum):
    MP4 = "mp4"
    HLS = "hls"
    UNKNOWN = "unknown"


class CatalogQueryKind(str, Enum):
    SEARCH = "search"
    SHOW_DETAIL = "show_detail"
    EPISODE_LIST = "episode_list"
    EPISODE_SOURCES = "episode_sources"


class CatalogQuery(BaseModel):
    """A single GraphQL operation against the upstream catalog."""

    model_config = ConfigDict(frozen=True)

    kind: CatalogQueryKind
    variables: Dict[str, Any] = Field(default_factory=dict)


class CatalogShow(BaseModel):
    id: str
    title: str
    episodes: int = 0
    poster: Optional[str] = None
    status: str = "Unknown"
    year: Optional[str] = None
    genres: Optional[str] = None
    description: Optional[str] = None


class SourceDescriptor(BaseModel):
    """One upstream provider offering an encoded path for an episode."""

    model_config = ConfigDict(frozen=True)

    provider_name: str
    encoded_path: str


class VideoSource(BaseModel):
    """A playable source as produced by the resolution pipeline."""

    model_config = ConfigDict(frozen=True)

    quality: str
    url: str
    provider_kind: ProviderKind = ProviderKind.DIRECT
    referer: Optional[str] = None
    media_type: MediaType = MediaType.UNKNOWN

    @field_validator("url")
    def validate_url(cls, value: str):
        if not value:
            raise ValueError("url must not be empty")
        return value

    def to_item(self) -> "VideoSourceItem":
        return VideoSourceItem(
            quality=self.quality,
            url=self.url,
            provider=self.provider_kind.value,
            referer=self.referer,
            type=None if self.media_type is MediaType.UNKNOWN else self.media_type.value,
        )


class VideoSourceItem(BaseModel):
    quality: str = Field(..., description="Quality label, e.g. 1080p or auto.")
    url: str = Field(..., description="Absolute URL of the media.")
    provider: str = Field(..., description="Provider kind the source was resolved through.")
    referer: Optional[str] = Field(None, description="Referer header the media host expects.")
    type: Optional[str] = Field(None, description="Media type: hls or mp4.")


class EpisodeListItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    episode_number: str = Field(..., alias="episodeNumber")
    title: str
    duration: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
