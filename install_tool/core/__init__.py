"""
Core modules for the multi-version tool installer.
"""

from .driver import InstallationDriver
from .hooks import HookRunner
from .linker import AliasLinker, truncations
from .manifest import ArtifactManifest, read_manifest
from .versions import compare_versions, max_version, sort_versions, version_key

__all__ = [
    "InstallationDriver",
    "HookRunner",
    "AliasLinker",
    "truncations",
    "ArtifactManifest",
    "read_manifest",
    "compare_versions",
    "max_version",
    "sort_versions",
    "version_key"
]
