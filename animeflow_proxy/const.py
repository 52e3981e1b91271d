SEARCH_GQL = (
    "query( $search: SearchInput $limit: Int $page: Int "
    "$translationType: VaildTranslationTypeEnumType $countryOrigin: VaildCountryOriginEnumType ) "
    "{ shows( search: $search limit: $limit page: $page translationType: $translationType "
    "countryOrigin: $countryOrigin ) { edges { _id name availableEpisodes __typename } }}"
)

SHOW_DETAIL_GQL = """
query ($showId: String!) {
  show(_id: $showId) {
    _id
    name
    englishName
    nativeLanguageName
    thumbnail
    thumbnails
    description
    status
    score
    startDate
    endDate
    genres
    studios
    availableEpisodes {
      sub
      dub
    }
  }
}
"""

EPISODE_LIST_GQL = "query ($showId: String!) { show( _id: $showId ) { _id availableEpisodesDetail }}"

EPISODE_SOURCES_GQL = (
    "query ($showId: String!, $translationType: VaildTranslationTypeEnumType!, $episodeString: String!) "
    "{ episode( showId: $showId translationType: $translationType episodeString: $episodeString ) "
    "{ episodeString sourceUrls }}"
)

POSTER_URL_TEMPLATE = "https://wp.youtube-anime.com/aln.youtube-anime.com/images/{show_id}.jpg"

# Display names for shows the catalog only lists by abbreviation.
TITLE_ABBREVIATIONS = {
    "1P": "One Piece",
    "OP": "One Piece",
    "AOT": "Attack on Titan",
    "DS": "Demon Slayer",
    "JJK": "Jujutsu Kaisen",
    "MHA": "My Hero Academia",
}

# Markers used to classify extracted links.
WIXMP_MARKER = "repackager.wixmp.com"
MASTER_MANIFEST_MARKER = "master.m3u8"
YOUTUBE_LIKE_MARKER = "tools.fast4speed.rsvp"
HLS_SIGNATURE = "EXTM3U"

DEFAULT_QUALITY = "720p"
AUTO_QUALITY = "auto"
