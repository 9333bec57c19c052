"""
Data models for the multi-version tool installer.
"""

from .tool import ToolDirectory, ToolStatus, ManifestEntry, VersionAlias
from .installation import HookResult, InstallationResult, BatchResult

__all__ = [
    "ToolDirectory",
    "ToolStatus",
    "ManifestEntry",
    "VersionAlias",
    "HookResult",
    "InstallationResult",
    "BatchResult"
]
