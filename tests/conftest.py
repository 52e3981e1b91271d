"""
Pytest configuration and shared upstream payloads.

Settings are read from the environment, so a local .env file can override
the upstream hosts. The payload fixtures below assume the defaults.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

from animeflow_proxy.configs import settings  # noqa: E402

CATALOG_API = f"{settings.catalog_api_url}/api"
EMBED_ROOT = f"https://{settings.embed_base_host}"

# "--" + encoded "/apivtwo/clock?id=abc" and "/apivtwo/clock?id=xyz"
ENCODED_PATH_ABC = "--175948514e4c4f57175b54575b5307515c05595a5b"
ENCODED_PATH_XYZ = "--175948514e4c4f57175b54575b5307515c05404142"
EMBED_URL_ABC = f"{EMBED_ROOT}/apivtwo/clock.json?id=abc"
EMBED_URL_XYZ = f"{EMBED_ROOT}/apivtwo/clock.json?id=xyz"


def pytest_configure(config):
    """Configure pytest-asyncio mode."""
    config.addinivalue_line("markers", "asyncio: mark test as async")


def episode_sources_payload(*providers: tuple) -> dict:
    return {
        "data": {
            "episode": {
                "episodeString": "1",
                "sourceUrls": [
                    {"sourceName": name, "sourceUrl": path, "priority": 7.5, "type": "iframe"}
                    for name, path in providers
                ],
            }
        }
    }


def embed_payload(*links: tuple) -> str:
    entries = ",".join(f'{{"link":"{link}","resolutionStr":"{quality}","src":"embed"}}' for link, quality in links)
    return f'{{"links":[{entries}]}}'


@pytest.fixture
def master_manifest():
    return "\n".join(
        [
            "#EXTM3U",
            "#EXT-X-VERSION:3",
            "#EXT-X-STREAM-INF:BANDWIDTH=800000,RESOLUTION=640x360",
            "360p.m3u8",
            "#EXT-X-STREAM-INF:BANDWIDTH=2800000,RESOLUTION=1280x720",
            "720p.m3u8",
            "#EXT-X-STREAM-INF:BANDWIDTH=5000000,RESOLUTION=1920x1080",
            "https://mirror.example.net/hls/1080p.m3u8",
            "#EXT-X-STREAM-INF:BANDWIDTH=100000,RESOLUTION=1920x1080",
        ]
    )
