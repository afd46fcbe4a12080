"""
Unit tests for the routing helpers of the site resolver.

These run without a database: candidates are plain transient Site objects
listed in the order the store would return them.
"""
import pytest

from sitecms.config import Settings
from sitecms.models.site import Site
from sitecms.services.site_resolver import (
    RoutingConfig,
    real_host_from_aliases,
    select_site,
    strip_public_path,
)
from tests.fixtures.sample_sites import HOSTNAME_ALIASES


def site(identifier: str, path: str | None = "", hostname: str = "a.com") -> Site:
    return Site(identifier=identifier, hostname=hostname, path=path, label=identifier)


class TestRealHostFromAliases:
    """Test hostname alias resolution."""

    def test_alias_maps_to_canonical(self):
        assert real_host_from_aliases("a-alias.com", HOSTNAME_ALIASES) == "a.com"
        assert real_host_from_aliases("www.b.com", HOSTNAME_ALIASES) == "b.com"

    def test_unaliased_host_unchanged(self):
        assert real_host_from_aliases("c.com", HOSTNAME_ALIASES) == "c.com"
        assert real_host_from_aliases("a.com", HOSTNAME_ALIASES) == "a.com"

    def test_no_aliases_configured(self):
        assert real_host_from_aliases("a.com", None) == "a.com"
        assert real_host_from_aliases("a.com", {}) == "a.com"

    def test_first_matching_entry_wins(self):
        """Overlapping alias sets resolve to the first entry listing the host."""
        aliases = {"first.com": ["shared.com"], "second.com": ["shared.com"]}

        assert real_host_from_aliases("shared.com", aliases) == "first.com"


class TestStripPublicPath:
    """Test making the request path relative to the CMS mount point."""

    def test_root_mount_leaves_path(self):
        assert strip_public_path("/blog/post", "/") == "/blog/post"

    def test_prefix_is_stripped(self):
        assert strip_public_path("/cms/blog/post", "/cms") == "/blog/post"

    def test_path_outside_mount_unchanged(self):
        assert strip_public_path("/other/page", "/cms") == "/other/page"

    def test_missing_path(self):
        assert strip_public_path(None, "/cms") is None


class TestSelectSite:
    """Test path-prefix disambiguation among sites sharing a hostname."""

    def test_root_site_is_fallback(self):
        root, blog = site("root"), site("blog", "blog")

        assert select_site([root, blog], "/about") is root
        assert select_site([blog, root], "/about") is root

    def test_prefix_match(self):
        root, blog = site("root"), site("blog", "blog")

        assert select_site([root, blog], "/blog/post-1") is blog
        assert select_site([root, blog], "/blog") is blog
        assert select_site([root, blog], "/blog/") is blog

    def test_prefix_must_end_at_segment(self):
        """``/blogger`` is not under the ``blog`` mount."""
        root, blog = site("root"), site("blog", "blog")

        assert select_site([root, blog], "/blogger") is root

    def test_query_string_is_ignored(self):
        root, blog = site("root"), site("blog", "blog")

        assert select_site([root, blog], "/blog?page=2") is blog
        assert select_site([root, blog], "/?next=/blog/") is root

    def test_missing_path_matches_root_only(self):
        root, blog = site("root"), site("blog", "blog")

        assert select_site([root, blog], None) is root
        assert select_site([blog], None) is None

    def test_no_candidates(self):
        assert select_site([], "/") is None

    def test_first_prefix_match_wins(self):
        """Scanning stops at the first matching prefix, not the longest."""
        v1, v1_api = site("v1", "v1"), site("v1-api", "v1/api")

        assert select_site([v1, v1_api], "/v1/api/users") is v1
        assert select_site([v1_api, v1], "/v1/api/users") is v1_api

    def test_root_after_prefix_match_is_not_considered(self):
        blog, root = site("blog", "blog"), site("root")

        assert select_site([blog, root], "/blog/x") is blog

    def test_later_root_replaces_earlier_root(self):
        first, second = site("first"), site("second", None)

        assert select_site([first, second], "/x") is second

    @pytest.mark.parametrize("path", ["/docs.v2/x", "/docs.v2"])
    def test_special_characters_in_site_path(self, path):
        dotted = site("dotted", "docs.v2")

        assert select_site([dotted], path) is dotted
        assert select_site([dotted], "/docsXv2/x") is None


class TestRoutingConfig:
    """Test building routing options from settings."""

    def test_defaults(self):
        config = RoutingConfig()

        assert config.public_cms_path == "/"
        assert config.hostname_aliases == {}

    def test_from_settings(self):
        settings = Settings(
            PUBLIC_CMS_PATH="/cms",
            HOSTNAME_ALIASES={"a.com": ["www.a.com"]},
        )

        config = RoutingConfig.from_settings(settings)

        assert config.public_cms_path == "/cms"
        assert config.hostname_aliases == {"a.com": ["www.a.com"]}

    def test_empty_public_path_means_root(self):
        config = RoutingConfig.from_settings(Settings(PUBLIC_CMS_PATH=""))

        assert config.public_cms_path == "/"
