"""Tests for HostClassifier."""

from __future__ import annotations

import pytest

from resolvarr.domain.entities.streams import HostId, Server
from resolvarr.infrastructure.extractors.classifier import HostClassifier


class TestClassify:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://pixeldrain.com/u/abc", HostId.PIXELDRAIN),
            ("https://streamtape.com/e/xyz", HostId.STREAMTAPE),
            ("https://dood.wf/e/abc", HostId.DOODSTREAM),
            ("https://doodstream.com/e/abc", HostId.DOODSTREAM),
            ("https://filemoon.sx/e/abc", HostId.FILEMOON),
            ("https://mixdrop.ag/e/abc", HostId.MIXDROP),
            ("https://new.gdflix.dad/file/abc", HostId.GDFLIX),
            ("https://nexdrive.lol/abc", HostId.GDFLIX),
            ("https://hubcloud.one/drive/abc", HostId.HUBCLOUD),
            ("https://vcloud.lol/abc", HostId.HUBCLOUD),
        ],
    )
    def test_known_hosts(self, url: str, expected: HostId) -> None:
        assert HostClassifier().classify(url) is expected

    def test_case_insensitive(self) -> None:
        assert HostClassifier().classify("https://PixelDrain.com/u/A") is HostId.PIXELDRAIN

    def test_first_marker_wins(self) -> None:
        # contains both "pixeldrain" and "hubcloud"
        url = "https://hubcloud.one/go?to=pixeldrain.com/u/abc"
        assert HostClassifier().classify(url) is HostId.PIXELDRAIN

    def test_unknown_host(self) -> None:
        assert HostClassifier().classify("https://unknown.example/x") is None

    def test_custom_markers(self) -> None:
        classifier = HostClassifier(markers=(("mirror", HostId.MIXDROP),))
        assert classifier.classify("https://mirror.site/e/1") is HostId.MIXDROP
        assert classifier.classify("https://mixdrop.ag/e/1") is None


class TestEmbedServer:
    def test_embed_hosts(self) -> None:
        c = HostClassifier()
        assert c.embed_server("https://streamtape.com/e/1") is Server.STREAMTAPE
        assert c.embed_server("https://dood.li/e/1") is Server.DOODSTREAM
        assert c.embed_server("https://filemoon.sx/e/1") is Server.FILEMOON
        assert c.embed_server("https://mixdrop.ag/e/1") is Server.MIXDROP

    def test_non_embed_hosts(self) -> None:
        c = HostClassifier()
        assert c.embed_server("https://pixeldrain.com/u/1") is None
        assert c.embed_server("https://hubcloud.one/drive/1") is None
        assert c.embed_server("https://example.org/") is None
