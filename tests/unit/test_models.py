"""Unit tests for the typed site and sitemap settings models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sitemaphandler.models.http import SitemapRequest, SitemapResponse
from sitemaphandler.models.settings import SitemapMode, SitemapSettings
from sitemaphandler.models.site import SiteConfig


class TestSitemapModeParse:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Inactive", SitemapMode.INACTIVE),
            ("StoredInCache", SitemapMode.STORED_IN_CACHE),
            ("storedinfile", SitemapMode.STORED_IN_FILE),
            ("  StoredInFile ", SitemapMode.STORED_IN_FILE),
            ("", SitemapMode.INACTIVE),
        ],
    )
    def test_known_values(self, raw: str, expected: SitemapMode) -> None:
        assert SitemapMode.parse(raw) is expected

    def test_unknown_value_is_returned_unchanged(self) -> None:
        assert SitemapMode.parse("StoredInRedis") == "StoredInRedis"
        assert not isinstance(SitemapMode.parse("StoredInRedis"), SitemapMode)


class TestSitemapSettingsFromFields:
    def test_external_sitemaps_keep_order_and_decode(self) -> None:
        settings = SitemapSettings.from_fields(
            {
                "mode": "StoredInCache",
                "external_sitemaps": (
                    "b=https%3A%2F%2Fb.example.com%2Fs.xml&a=https%3A%2F%2Fa.example.com%2Fs.xml"
                ),
            }
        )
        assert settings.external_sitemaps == [
            "https://b.example.com/s.xml",
            "https://a.example.com/s.xml",
        ]

    def test_blank_values_are_skipped(self) -> None:
        settings = SitemapSettings.from_fields({"external_sitemaps": "a=&b=https%3A%2F%2Fb.io"})
        assert settings.external_sitemaps == ["https://b.io"]

    @pytest.mark.parametrize(("raw", "expected"), [("1", True), ("0", False), ("", False)])
    def test_index_flag(self, raw: str, expected: bool) -> None:
        assert SitemapSettings.from_fields({"sitemap_index": raw}).is_index is expected

    def test_missing_fields_default_to_inactive(self) -> None:
        settings = SitemapSettings.from_fields({})
        assert settings.mode == SitemapMode.INACTIVE
        assert settings.external_sitemaps == []
        assert settings.is_index is False


class TestSiteConfig:
    @pytest.mark.parametrize(
        ("host_name", "unique"),
        [
            ("a.example.com", True),
            ("*.example.com", False),
            ("a.example.com|b.example.com", False),
            ("", False),
        ],
    )
    def test_host_name_uniqueness(self, host_name: str, unique: bool) -> None:
        site = SiteConfig(name="s", root_path="/content/s", host_name=host_name)
        assert site.is_host_name_unique() is unique

    @pytest.mark.parametrize("name", ["../etc", "a/b", "", ".hidden"])
    def test_rejects_names_unsafe_for_file_paths(self, name: str) -> None:
        with pytest.raises(ValidationError):
            SiteConfig(name=name, root_path="/content/s")

    def test_is_immutable(self) -> None:
        site = SiteConfig(name="s", root_path="/content/s")
        with pytest.raises(ValidationError):
            site.name = "other"  # type: ignore[misc]


class TestSitemapRequest:
    def test_path_and_query(self) -> None:
        request = SitemapRequest(url="https://a.example.com/en/sitemap.xml?x=1", host="a.example.com")
        assert request.scheme == "https"
        assert request.path == "/en/sitemap.xml"
        assert request.path_and_query == "/en/sitemap.xml?x=1"


class TestSitemapResponse:
    def test_xml_utf8_defaults(self) -> None:
        response = SitemapResponse(content="<urlset>ü</urlset>")
        assert response.status_code == 200
        assert response.content_type == "application/xml; charset=utf-8"
        assert response.body == "<urlset>ü</urlset>".encode()
