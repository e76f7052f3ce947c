"""Tests for htmlgroups.sources — discovery on disk and in embedded bundles."""

from __future__ import annotations

import logging
import os

import pytest

from htmlgroups import (
    Config,
    DiscoveryError,
    EmbeddedSource,
    NoEmbeddedSource,
    OnDiskSource,
    discover,
    list_embedded_files,
    source_for,
)

BUNDLE_PREFIX = "bundle/templates"


class TestDiscoverOnDisk:
    def test_base_files(self, template_dir):
        paths = discover(str(template_dir), OnDiskSource(), "html")
        assert paths == [
            os.path.join(str(template_dir), "footer.html"),
            os.path.join(str(template_dir), "header.html"),
        ]

    def test_exact_extension_match(self, template_dir):
        names = [os.path.basename(p) for p in discover(str(template_dir), OnDiskSource(), "html")]
        assert "report.html.bak" not in names
        assert "notes.txt" not in names

    def test_other_extension(self, template_dir):
        paths = discover(str(template_dir), OnDiskSource(), "txt")
        assert [os.path.basename(p) for p in paths] == ["notes.txt"]

    def test_not_recursive(self, template_dir):
        paths = discover(os.path.join(str(template_dir), "app"), OnDiskSource(), "html")
        assert [os.path.basename(p) for p in paths] == ["index.html", "users.html"]

    def test_directories_skipped(self, template_dir):
        (template_dir / "app" / "folder.html").mkdir()
        paths = discover(os.path.join(str(template_dir), "app"), OnDiskSource(), "html")
        assert all(not os.path.isdir(p) for p in paths)

    def test_no_matches_is_empty(self, template_dir):
        assert discover(os.path.join(str(template_dir), "help"), OnDiskSource(), "html") == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DiscoveryError) as excinfo:
            discover(str(tmp_path / "missing"), OnDiskSource(), "html")
        assert isinstance(excinfo.value.__cause__, OSError)


class TestDiscoverEmbedded:
    def test_base_files(self, bundle):
        paths = discover(BUNDLE_PREFIX, EmbeddedSource(bundle), "html")
        assert paths == [
            f"{BUNDLE_PREFIX}/footer.html",
            f"{BUNDLE_PREFIX}/header.html",
        ]

    def test_backslashes_normalised(self, bundle):
        paths = discover("bundle\\templates\\app", EmbeddedSource(bundle), "html")
        assert paths == [
            f"{BUNDLE_PREFIX}/app/index.html",
            f"{BUNDLE_PREFIX}/app/users.html",
        ]
        assert not any("\\" in p for p in paths)

    def test_no_matches_is_empty(self, bundle):
        assert discover(f"{BUNDLE_PREFIX}/help", EmbeddedSource(bundle), "html") == []

    def test_missing_directory(self, bundle):
        with pytest.raises(DiscoveryError):
            discover(f"{BUNDLE_PREFIX}/missing", EmbeddedSource(bundle), "html")

    def test_directory_bundle(self, template_dir):
        source = EmbeddedSource(template_dir.parent)
        paths = discover("templates/docs", source, "html")
        assert paths == ["templates/docs/index.html"]

    def test_read_text(self, bundle):
        source = EmbeddedSource(bundle)
        text = source.read_text(f"{BUNDLE_PREFIX}/docs/index.html")
        assert "<main>docs</main>" in text

    def test_requires_bundle(self):
        with pytest.raises(NoEmbeddedSource):
            EmbeddedSource(None)


class TestSourceFor:
    def test_on_disk(self, template_dir):
        assert isinstance(source_for(Config.on_disk(template_dir)), OnDiskSource)

    def test_embedded(self, bundle):
        source = source_for(Config.embedded(bundle, BUNDLE_PREFIX))
        assert isinstance(source, EmbeddedSource)
        assert source.bundle is bundle


class TestListEmbeddedFiles:
    def test_lists_all_entries(self, bundle_factory, caplog):
        bundle = bundle_factory({"a.html": "a", "sub/b.html": "b"}, prefix="t")
        with caplog.at_level(logging.INFO, logger="htmlgroups.sources"):
            paths = list_embedded_files(bundle)
        assert paths == ["t", "t/a.html", "t/sub", "t/sub/b.html"]
        assert "t/sub/b.html" in caplog.text
