"""Tests for metadata resolution and the share cover heuristic."""
import logging

import pytest

from tentcard.core.classifier import classify
from tentcard.core.resolver import MetadataResolver, share_cover_path
from tentcard.errors import MetadataProviderError
from tentcard.models.reference import ReferenceKind

from conftest import FailingImageLoader, FakeImageLoader, FakeProvider, NoImageProvider


def make_resolver(config, provider=None, image_loader=None):
    return MetadataResolver(config, provider=provider, image_loader=image_loader or FakeImageLoader())


class TestShareCoverPath:
    def test_strips_mount_prefix(self):
        assert share_cover_path("/srv/share", "/mnt/music/A/B") == "/srv/share/music/A/B/cover.jpg"

    def test_slash_at_index_four_is_kept(self):
        # "smb:/" has its first slash at index 4
        assert share_cover_path("/srv", "smb://nas/a") == "/srv//nas/a/cover.jpg"

    def test_custom_file_name(self):
        assert share_cover_path("S", "/mnt/x", "folder.png") == "S/x/folder.png"

    def test_no_slash_after_index_four(self):
        assert share_cover_path("/srv/share", "/mnt") is None
        assert share_cover_path("/srv/share", "") is None

    def test_no_share_root(self):
        assert share_cover_path("", "/mnt/music/A") is None


class TestStreamReferences:
    def test_album(self, config, provider, image_loader):
        card = make_resolver(config, provider, image_loader).resolve(classify("spotify:album:AL1"))
        assert card.title == "Album AL1"
        assert card.artist == "First Artist"
        assert card.has_cover
        assert image_loader.urls == ["https://img.example/AL1.jpg"]
        assert card.code_payload == "spotify:album:AL1"
        assert card.source_kind is ReferenceKind.STREAM_ALBUM

    def test_track_uses_parent_album_image(self, config, provider, image_loader):
        card = make_resolver(config, provider, image_loader).resolve(classify("spotify:track:TR1"))
        assert card.title == "Track TR1"
        assert card.artist == "Track Artist"
        assert image_loader.urls == ["https://img.example/album-of-TR1.jpg"]

    def test_playlist_description_fills_artist(self, config, provider, image_loader):
        card = make_resolver(config, provider, image_loader).resolve(classify("spotify:playlist:PL1"))
        assert card.title == "Playlist PL1"
        assert card.artist == "Songs for a rainy day"
        assert image_loader.urls == ["https://img.example/pl-PL1.jpg"]

    def test_annotated_line_looks_up_bare_id(self, config, provider):
        make_resolver(config, provider).resolve(classify("spotify:album:XYZ this is a comment"))
        assert provider.calls == [("album", "XYZ")]

    def test_provider_error_propagates(self, config):
        resolver = make_resolver(config, FakeProvider(fail_on="BAD"))
        with pytest.raises(MetadataProviderError):
            resolver.resolve(classify("spotify:album:BAD"))

    def test_missing_provider_is_fatal(self, config):
        with pytest.raises(MetadataProviderError):
            make_resolver(config).resolve(classify("spotify:track:T"))

    def test_resolve_all_stops_at_first_failure(self, config):
        provider = FakeProvider(fail_on="B")
        refs = [classify(f"spotify:album:{x}") for x in ("A", "B", "C")]
        with pytest.raises(MetadataProviderError):
            make_resolver(config, provider).resolve_all(refs)
        assert provider.calls == [("album", "A"), ("album", "B")]


class TestWebAndLocalReferences:
    def test_web_url(self, config, image_loader):
        card = make_resolver(config, image_loader=image_loader).resolve(classify("https://radio.example.org/live"))
        assert card.cover is None
        assert card.title == "https://radio.example.org/live"
        assert card.artist == ""
        assert image_loader.urls == []

    def test_local_path_title_and_share_cover(self, config):
        loader = FakeImageLoader(existing_paths={"/srv/share/music/Rock/Nevermind/cover.jpg"})
        card = make_resolver(config, image_loader=loader).resolve(classify("/mnt/music/Rock/Nevermind"))
        assert card.title == "Nevermind"
        assert card.artist == ""
        assert card.has_cover

    def test_local_path_without_share_cover_is_silent(self, config, caplog):
        with caplog.at_level(logging.WARNING):
            result = make_resolver(config).resolve_all([classify("/mnt/music/Rock/Nevermind")])
        assert result.cards[0].cover is None
        assert result.warnings == []
        assert not caplog.records

    def test_empty_target_gives_empty_title(self, config):
        card = make_resolver(config).resolve(classify("cover.jpg|"))
        assert card.title == ""
        assert card.artist == ""


class TestCoverTaggedReferences:
    def test_payload_keeps_full_line(self, config):
        loader = FakeImageLoader(existing_paths={"covers/jazz.jpg"})
        line = "covers/jazz.jpg|/mnt/music/Jazz/Kind of Blue"
        card = make_resolver(config, image_loader=loader).resolve(classify(line))
        assert card.code_payload == line
        assert card.title == "Kind of Blue"
        assert card.has_cover
        # hint found, so the share heuristic is not consulted
        assert loader.paths == ["covers/jazz.jpg"]

    def test_url_hint_is_downloaded(self, config, image_loader):
        line = "https://img.example/c.jpg|https://radio.example.org/live"
        card = make_resolver(config, image_loader=image_loader).resolve(classify(line))
        assert image_loader.urls == ["https://img.example/c.jpg"]
        assert card.has_cover
        assert card.title == "https://radio.example.org/live"
        assert card.code_payload == line

    def test_missing_cover_file_is_a_warning(self, config, caplog):
        line = "missing.jpg|/mnt/music/Jazz/Album"
        with caplog.at_level(logging.WARNING):
            result = make_resolver(config).resolve_all([classify(line)])
        card = result.cards[0]
        assert card.cover is None
        assert card.title == "Album"
        assert len(result.warnings) == 1
        assert result.warnings[0].reference == line
        assert "missing.jpg" in result.warnings[0].message
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_missing_cover_falls_back_to_share_cover(self, config):
        loader = FakeImageLoader(existing_paths={"/srv/share/music/Jazz/Album/cover.jpg"})
        card = make_resolver(config, image_loader=loader).resolve(classify("missing.jpg|/mnt/music/Jazz/Album"))
        assert card.has_cover


class TestRecoverableCoverProblems:
    def test_failed_hint_download_is_a_warning(self, config):
        loader = FailingImageLoader()
        line = "https://img.example/gone.jpg|https://radio.example.org/live"
        result = make_resolver(config, image_loader=loader).resolve_all([classify(line)])
        card = result.cards[0]
        assert card.cover is None
        assert card.title == "https://radio.example.org/live"
        assert card.code_payload == line
        assert len(result.warnings) == 1
        assert "gone.jpg" in result.warnings[0].message

    def test_empty_cover_hint_is_a_warning(self, config, image_loader):
        result = make_resolver(config, image_loader=image_loader).resolve_all([classify("|/mnt/music/Jazz/Album")])
        card = result.cards[0]
        assert card.title == "Album"
        assert [w.message for w in result.warnings] == ["Empty cover hint"]
        # the share heuristic still runs, the empty hint is never loaded
        assert image_loader.paths == ["/srv/share/music/Jazz/Album/cover.jpg"]

    def test_stream_without_images_is_a_warning(self, config, image_loader):
        resolver = make_resolver(config, NoImageProvider(), image_loader)
        result = resolver.resolve_all([classify("spotify:album:AL1")])
        card = result.cards[0]
        assert card.title == "Album AL1"
        assert card.cover is None
        assert [w.message for w in result.warnings] == ["Spotify returned no cover image"]
        assert image_loader.urls == []


def test_failed_stream_cover_download_is_fatal(config, provider):
    resolver = make_resolver(config, provider, FailingImageLoader())
    with pytest.raises(MetadataProviderError):
        resolver.resolve_all([classify("spotify:track:TR1")])
