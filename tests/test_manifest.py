"""
Tests for version manifest parsing.
"""

import textwrap
from pathlib import Path

import pytest

from install_tool.core.manifest import ArtifactManifest, read_manifest
from install_tool.errors import ManifestNotFound, ManifestUnreadable, StructuralError


def write_manifest(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "versions"
    path.write_text(textwrap.dedent(content))
    return path


class TestReadManifest:

    def test_entries_sorted_ascending_without_comments(self, tmp_path: Path):
        path = write_manifest(tmp_path, """\
            # VERSION  LOCATION
            11.0.20.1  https://example.com/jdk-11.0.20.1.tgz

            8u382      https://example.com/jdk-8u382.tgz
               # indented comment
            1.10       https://example.com/one-ten.tgz
            1.9        https://example.com/one-nine.tgz
        """)

        entries = read_manifest(path)

        assert [e.version for e in entries] == ["1.9", "1.10", "8u382", "11.0.20.1"]
        assert entries[2].location == "https://example.com/jdk-8u382.tgz"
        assert all(not e.version.startswith("#") for e in entries)

    def test_tabs_and_extra_spaces(self, tmp_path: Path):
        path = write_manifest(tmp_path, "17\t\thttps://example.com/17.tgz   \n")
        entries = read_manifest(path)
        assert [(e.version, e.location) for e in entries] == [("17", "https://example.com/17.tgz")]

    def test_line_numbers_recorded(self, tmp_path: Path):
        path = write_manifest(tmp_path, "# header\n2 b\n1 a\n")
        entries = read_manifest(path)
        assert [(e.version, e.line_number) for e in entries] == [("1", 3), ("2", 2)]

    def test_empty_manifest(self, tmp_path: Path):
        path = write_manifest(tmp_path, "# nothing yet\n\n")
        assert read_manifest(path) == []


class TestMalformedLines:

    def test_malformed_lines_skipped_and_recorded(self, tmp_path: Path):
        path = write_manifest(tmp_path, """\
            1.0 https://example.com/1.0.tgz
            1.1
            1.2 https://example.com/1.2.tgz extra
            1.3 https://example.com/1.3.tgz
        """)
        manifest = ArtifactManifest(path)

        entries = manifest.parse()

        assert [e.version for e in entries] == ["1.0", "1.3"]
        assert [n for n, _ in manifest.malformed] == [2, 3]

    def test_malformed_lines_logged(self, tmp_path: Path, caplog):
        path = write_manifest(tmp_path, "onlyversion\n")
        read_manifest(path)
        assert "expected VERSION and LOCATION" in caplog.text

    def test_version_must_be_a_plain_name(self, tmp_path: Path):
        path = write_manifest(tmp_path, "../escape loc\n.. loc\n1.0 loc\n")
        manifest = ArtifactManifest(path)

        assert manifest.versions() == ["1.0"]
        assert [n for n, _ in manifest.malformed] == [1, 2]

    def test_duplicate_version_keeps_first(self, tmp_path: Path):
        path = write_manifest(tmp_path, "1.0 first\n1.0 second\n")
        manifest = ArtifactManifest(path)

        entries = manifest.parse()

        assert [(e.version, e.location) for e in entries] == [("1.0", "first")]
        assert manifest.malformed == [(2, "1.0 second")]


class TestPlaceholder:

    def test_resolved_substitutes_version(self, tmp_path: Path):
        path = write_manifest(tmp_path, "1.2.3 https://example.com/tool-${VERSION}/tool-${VERSION}.tgz\n")
        manifest = ArtifactManifest(path)

        [(entry, location)] = list(manifest.resolved())

        assert entry.location == "https://example.com/tool-${VERSION}/tool-${VERSION}.tgz"
        assert location == "https://example.com/tool-1.2.3/tool-1.2.3.tgz"

    def test_custom_placeholder(self, tmp_path: Path):
        path = write_manifest(tmp_path, "2.0 https://example.com/@V@.zip\n")
        [(_, location)] = list(ArtifactManifest(path, placeholder="@V@").resolved())
        assert location == "https://example.com/2.0.zip"


class TestRestartable:

    def test_iterating_twice_yields_same_sequence(self, tmp_path: Path):
        path = write_manifest(tmp_path, "2 b\n1 a\n3 c\n")
        manifest = ArtifactManifest(path)
        assert list(manifest) == list(manifest)
        assert manifest.versions() == ["1", "2", "3"]

    def test_iteration_rereads_file(self, tmp_path: Path):
        path = write_manifest(tmp_path, "1 a\n")
        manifest = ArtifactManifest(path)
        assert manifest.versions() == ["1"]

        path.write_text("1 a\n2 b\n")
        assert manifest.versions() == ["1", "2"]


class TestManifestErrors:

    def test_missing(self, tmp_path: Path):
        with pytest.raises(ManifestNotFound):
            ArtifactManifest(tmp_path / "versions")

    def test_not_a_regular_file(self, tmp_path: Path):
        (tmp_path / "versions").mkdir()
        with pytest.raises(ManifestNotFound):
            ArtifactManifest(tmp_path / "versions")

    def test_undecodable_content(self, tmp_path: Path):
        path = tmp_path / "versions"
        path.write_bytes(b"1.0 \xff\xfe\n")
        with pytest.raises(ManifestUnreadable):
            read_manifest(path)

    def test_errors_are_structural(self, tmp_path: Path):
        with pytest.raises(StructuralError):
            ArtifactManifest(tmp_path / "nope")
