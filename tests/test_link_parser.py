from animeflow_proxy.extractors.link_parser import (
    expand_wixmp_link,
    parse_embed_links,
    recognize_direct_link,
    recognize_hls_link,
    unescape_link,
    wixmp_quality_tokens,
)
from animeflow_proxy.schemas import MediaType, ProviderKind

WIXMP_LINK = "https://repackager.wixmp.com/video.wixstatic.com/video/abc/,480p,720p,1080,/mp4/file.mp4.urlset/master.m3u8"


class TestRecognizers:
    def test_direct_link_fragment(self):
        sources = parse_embed_links('{"link":"foo.mp4","resolutionStr":"480p"}')
        assert len(sources) == 1
        assert sources[0].quality == "480p"
        assert sources[0].url == "foo.mp4"
        assert sources[0].media_type is MediaType.MP4
        assert sources[0].provider_kind is ProviderKind.DIRECT

    def test_hls_fragment(self):
        sources = parse_embed_links('{"hls","url":"bar.m3u8","hardsub_lang":"en-US"}')
        assert len(sources) == 1
        assert sources[0].quality == "auto"
        assert sources[0].url == "bar.m3u8"
        assert sources[0].media_type is MediaType.HLS
        assert sources[0].provider_kind is ProviderKind.M3U8

    def test_hls_fragment_requires_english_subtitles(self):
        assert parse_embed_links('{"hls","url":"bar.m3u8","hardsub_lang":"ja-JP"}') == []

    def test_empty_resolution_defaults_to_720p(self):
        source = recognize_direct_link('"link":"foo.mp4","resolutionStr":""')
        assert source.quality == "720p"

    def test_empty_link_is_discarded(self):
        assert recognize_direct_link('"link":"","resolutionStr":"480p"') is None

    def test_direct_rule_wins_over_hls_rule(self):
        fragment = '"link":"foo.mp4","hls","url":"bar.m3u8","resolutionStr":"480p","hardsub_lang":"en-US"'
        sources = parse_embed_links(fragment)
        assert [source.url for source in sources] == ["foo.mp4"]

    def test_hls_recognizer_ignores_direct_fragments(self):
        assert recognize_hls_link('"link":"foo.mp4","resolutionStr":"480p"') is None

    def test_referer_is_recorded(self):
        sources = parse_embed_links('{"link":"foo.mp4","resolutionStr":"480p"}', referer="https://allanime.to")
        assert sources[0].referer == "https://allanime.to"


class TestParseEmbedLinks:
    def test_keeps_fragment_order_and_skips_unrecognized_fragments(self):
        body = (
            '{"links":[{"link":"https://cdn.example.net/a.mp4","resolutionStr":"480p","src":"x"},'
            '{"note":"nothing here"},'
            '{"link":"https://cdn.example.net/b.mp4","resolutionStr":"1080p","src":"y"}]}'
        )
        sources = parse_embed_links(body)
        assert [(s.url, s.quality) for s in sources] == [
            ("https://cdn.example.net/a.mp4", "480p"),
            ("https://cdn.example.net/b.mp4", "1080p"),
        ]

    def test_unescapes_slashes(self):
        body = '{"link":"https:\\u002F\\u002Fcdn.example.net\\u002Fep\\/1.mp4","resolutionStr":"720p"}'
        sources = parse_embed_links(body)
        assert sources[0].url == "https://cdn.example.net/ep/1.mp4"

    def test_garbage_body(self):
        assert parse_embed_links("") == []
        assert parse_embed_links("<html>not found</html>") == []

    def test_unescape_link(self):
        assert unescape_link("a\\u002Fb\\\\c") == "a/bc"


class TestWixmp:
    def test_quality_tokens(self):
        body = f'{{"link":"{WIXMP_LINK}","resolutionStr":"Mp4"}}'
        assert wixmp_quality_tokens(body) == ["480p", "720p", "1080"]

    def test_expands_one_source_per_rendition(self):
        body = f'{{"link":"{WIXMP_LINK}","resolutionStr":"Mp4"}}'
        sources = expand_wixmp_link(WIXMP_LINK, body, referer="https://allanime.to")
        assert [(s.quality, s.url) for s in sources] == [
            ("480p", "https://video.wixstatic.com/video/abc/480p/mp4/file.mp4"),
            ("720p", "https://video.wixstatic.com/video/abc/720p/mp4/file.mp4"),
            ("1080p", "https://video.wixstatic.com/video/abc/1080/mp4/file.mp4"),
        ]
        assert all(s.provider_kind is ProviderKind.WIXMP for s in sources)
        assert all(s.media_type is MediaType.MP4 for s in sources)
        assert all(s.referer == "https://allanime.to" for s in sources)

    def test_empty_template_is_skipped(self):
        link = "repackager.wixmp.com/.urlset/master.m3u8"
        body = f'{{"link":"{link}","resolutionStr":"Mp4"}}{{"link":"{WIXMP_LINK}"}}'
        assert expand_wixmp_link(link, body) == []

    def test_unexpected_shape_yields_nothing(self):
        link = "https://repackager.wixmp.com/video.wixstatic.com/video/abc/file.mp4"
        assert expand_wixmp_link(link, f'{{"link":"{link}"}}') == []
