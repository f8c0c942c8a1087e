"""Unit tests for remote path helpers."""

import pytest

from hotfix.domain.remote import InputError
from hotfix.domain.remote.paths import (
    ancestor_prefixes,
    build_remote_target,
    canonical_dir,
    has_allowed_extension,
    join_remote,
    normalize_extensions,
    normalize_relative_name,
    remote_parent,
)


class TestJoinRemote:

    def test_join_under_root(self):
        assert join_remote("/", "a") == "/a"

    def test_join_under_directory(self):
        assert join_remote("/site", "a.html") == "/site/a.html"

    def test_join_keeps_single_separator(self):
        assert join_remote("/site/", "a.html") == "/site/a.html"


class TestBuildRemoteTarget:
    """Remote target is base + "/" + name with one separator on each side"""

    @pytest.mark.parametrize("base,name,expected", [
        ("/root", "a/b/style.css", "/root/a/b/style.css"),
        ("/root/", "a/b/style.css", "/root/a/b/style.css"),
        ("root", "/a.css", "/root/a.css"),
        ("/", "index.html", "/index.html"),
        ("", "index.html", "/index.html"),
        ("/var/www/", "//x.js", "/var/www/x.js"),
    ])
    def test_targets(self, base, name, expected):
        assert build_remote_target(base, name) == expected


class TestAncestorPrefixes:

    def test_every_prefix_from_root_down(self):
        assert ancestor_prefixes("/root/a/b") == ["/root", "/root/a", "/root/a/b"]

    def test_root_has_no_prefixes(self):
        assert ancestor_prefixes("/") == []

    def test_duplicate_separators_ignored(self):
        assert ancestor_prefixes("/root//a/") == ["/root", "/root/a"]


class TestRemoteParent:

    def test_nested(self):
        assert remote_parent("/root/a/b/style.css") == "/root/a/b"

    def test_top_level(self):
        assert remote_parent("/index.html") == "/"


class TestCanonicalDir:

    @pytest.mark.parametrize("path,expected", [
        ("/", "/"),
        ("", "/"),
        ("/site/", "/site"),
        ("site//css/./", "/site/css"),
    ])
    def test_canonical(self, path, expected):
        assert canonical_dir(path) == expected


class TestNormalizeRelativeName:

    def test_plain_name_unchanged(self):
        assert normalize_relative_name("a/b/style.css") == "a/b/style.css"

    def test_leading_slash_and_dot_segments_removed(self):
        assert normalize_relative_name("/./a//b/style.css") == "a/b/style.css"

    def test_backslashes_become_separators(self):
        assert normalize_relative_name("css\\site.css") == "css/site.css"

    def test_parent_segment_rejected(self):
        with pytest.raises(InputError, match="path escape"):
            normalize_relative_name("../etc/passwd")

    def test_embedded_parent_segment_rejected(self):
        with pytest.raises(InputError):
            normalize_relative_name("a/../../b.css")

    @pytest.mark.parametrize("name", ["", "/", "./"])
    def test_empty_name_rejected(self, name):
        with pytest.raises(InputError):
            normalize_relative_name(name)


class TestExtensionFilter:

    @pytest.mark.parametrize("name", ["index.html", "INDEX.HTM", "site.Css", "app.min.js"])
    def test_allowed(self, name):
        assert has_allowed_extension(name)

    @pytest.mark.parametrize("name", ["logo.png", "README", "style.css.map", "html", "data.json"])
    def test_rejected(self, name):
        assert not has_allowed_extension(name)

    def test_custom_extensions_are_normalized(self):
        extensions = normalize_extensions([".PHP", "txt", ""])
        assert extensions == frozenset({"php", "txt"})
        assert has_allowed_extension("index.php", extensions)
        assert not has_allowed_extension("index.html", extensions)
