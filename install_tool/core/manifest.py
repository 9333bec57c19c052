"""
Reader for per-tool version manifests.

A manifest is a two-column text table::

    # VERSION   LOCATION
    8u382       https://example.com/jdk-${VERSION}.tar.gz
    11.0.20.1   https://example.com/jdk-${VERSION}.tar.gz

Comment lines (``#``, leading whitespace allowed) and blank lines are ignored.
Entries come back in ascending natural version order regardless of the order
in the file.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Tuple

from .versions import version_key
from ..errors import ManifestNotFound, ManifestUnreadable
from ..models.tool import ManifestEntry

DEFAULT_PLACEHOLDER = "${VERSION}"

logger = logging.getLogger(__name__)


class ArtifactManifest:
    """A version manifest on disk.

    Construction checks that the file can be read. Each iteration re-reads the
    file, so the manifest can be walked again and yields the same entries as
    long as the file does not change.
    """

    def __init__(self, path: Path, placeholder: str = DEFAULT_PLACEHOLDER):
        self.path = Path(path)
        self.placeholder = placeholder
        self.malformed: List[Tuple[int, str]] = []
        self._check()

    def _check(self) -> None:
        if not self.path.exists():
            raise ManifestNotFound(f"Manifest not found: {self.path}", self.path)
        if not self.path.is_file():
            raise ManifestNotFound(f"Manifest is not a regular file: {self.path}", self.path)
        if not os.access(self.path, os.R_OK):
            raise ManifestUnreadable(f"Manifest is not readable: {self.path}", self.path)

    def _read_lines(self) -> List[str]:
        try:
            return self.path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestUnreadable(f"Failed to read manifest {self.path}: {e}", self.path) from e

    def parse(self) -> List[ManifestEntry]:
        """Read the file and return its entries sorted by version."""
        malformed: List[Tuple[int, str]] = []
        entries: List[ManifestEntry] = []
        seen = set()

        for line_number, raw in enumerate(self._read_lines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            fields = line.split()
            if len(fields) != 2:
                logger.warning(
                    f"{self.path}:{line_number}: expected VERSION and LOCATION, "
                    f"got {len(fields)} field(s); skipping"
                )
                malformed.append((line_number, raw))
                continue

            version, location = fields
            if "/" in version or version in (".", ".."):
                logger.warning(f"{self.path}:{line_number}: version {version!r} is not a valid directory name; skipping")
                malformed.append((line_number, raw))
                continue
            if version in seen:
                logger.warning(f"{self.path}:{line_number}: duplicate version {version}; skipping")
                malformed.append((line_number, raw))
                continue
            seen.add(version)

            entries.append(ManifestEntry(version=version, location=location, line_number=line_number))

        self.malformed = malformed
        return sorted(entries, key=lambda e: (version_key(e.version), e.version))

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(self.parse())

    def versions(self) -> List[str]:
        return [entry.version for entry in self.parse()]

    def resolved(self) -> Iterator[Tuple[ManifestEntry, str]]:
        """Yield each entry with its artifact location resolved for its version."""
        for entry in self.parse():
            yield entry, entry.resolve(self.placeholder)


def read_manifest(path: Path, placeholder: str = DEFAULT_PLACEHOLDER) -> List[ManifestEntry]:
    """Read a manifest file and return its entries in ascending version order."""
    return ArtifactManifest(path, placeholder).parse()
