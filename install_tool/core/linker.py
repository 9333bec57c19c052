"""
Version alias links.

Installing ``11.0.20.1`` into a tool directory produces the chain::

    11.0.20 -> 11.0.20.1
    11.0    -> 11.0.20
    11      -> 11.0

and ``latest`` points at the highest version installed in the run. Links are
replaced atomically (a temporary link renamed over the old one). Anything at
an alias name that is not a symlink, such as a concrete version directory, is
left untouched.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .versions import max_version
from ..models.tool import VersionAlias

DEFAULT_LATEST_ALIAS = "latest"


def truncations(version: str) -> Iterator[str]:
    """Yield the version with its last ``.`` component removed, repeatedly.

    ``11.0.20.1`` yields ``11.0.20``, ``11.0``, ``11``. Versions without a dot
    yield nothing.
    """
    current = version
    while "." in current:
        shorter = current.rsplit(".", 1)[0]
        if not shorter or shorter == current:
            return
        yield shorter
        current = shorter


class AliasLinker:
    """Creates and refreshes alias symlinks inside a tool directory."""

    def __init__(self, latest_alias: str = DEFAULT_LATEST_ALIAS, dry_run: bool = False):
        self.logger = logging.getLogger(__name__)
        self.latest_alias = latest_alias
        self.dry_run = dry_run

    def replace_link(self, tool_path: Path, name: str, target: str) -> Optional[VersionAlias]:
        """
        Point ``tool_path/name`` at ``target``.

        Args:
            tool_path: Tool directory holding the link
            name: Alias name
            target: Relative link target (a sibling version or alias)

        Returns:
            The alias, or None if a non-link already occupies ``name``
        """
        link = Path(tool_path) / name

        if link.exists() and not link.is_symlink():
            self.logger.warning(f"Not linking {link} -> {target}: a real file or directory is in the way")
            return None

        alias = VersionAlias(name=name, target=target)
        if self.dry_run:
            self.logger.info(f"[dry-run] would link {link} -> {target}")
            return alias

        if link.is_symlink() and os.readlink(link) == target:
            self.logger.debug(f"Alias {link} -> {target} already up to date")
            return alias

        temp_link = link.with_name(f".{name}.{uuid.uuid4().hex[:8]}.tmp")
        os.symlink(target, temp_link)
        try:
            os.replace(temp_link, link)
        except OSError:
            temp_link.unlink()
            raise

        self.logger.info(f"Linked {link} -> {target}")
        return alias

    def link_aliases(self, tool_path: Path, version: str) -> List[VersionAlias]:
        """Create the truncated-version alias chain for an installed version."""
        aliases: List[VersionAlias] = []
        previous = version
        for name in truncations(version):
            if name != previous:
                alias = self.replace_link(tool_path, name, previous)
                if alias:
                    aliases.append(alias)
            previous = name
        return aliases

    def select_latest(self, tool_path: Path, versions: Iterable[str]) -> Optional[VersionAlias]:
        """
        Point the latest alias at the highest of ``versions``.

        Only the versions passed in are considered, not whatever else is on
        disk. With no versions nothing is linked and a warning is logged.
        """
        latest = max_version(versions)
        if latest is None:
            self.logger.warning(f"No versions installed under {tool_path}; not linking {self.latest_alias}")
            return None
        return self.replace_link(tool_path, self.latest_alias, latest)
