"""
Error taxonomy for the multi-version tool installer.
"""

from enum import Enum
from pathlib import Path
from typing import Optional


class ErrorKind(str, Enum):
    """Kind of problem recorded on an installation result."""
    STRUCTURAL = "structural"
    HOOK_EXECUTION = "hook_execution"
    LINKING = "linking"
    LINKING_WARNING = "linking_warning"


class InstallToolError(Exception):
    """Base class for installer errors."""

    kind: ErrorKind = ErrorKind.STRUCTURAL


class StructuralError(InstallToolError):
    """A tool directory is not laid out the way the installer expects.

    The offending tool is skipped; the batch continues.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class ToolDirectoryError(StructuralError):
    """Tool directory is missing, not a directory, or not accessible."""


class ManifestNotFound(StructuralError):
    """Manifest file is missing or is not a regular file."""


class ManifestUnreadable(StructuralError):
    """Manifest file exists but cannot be read."""


class HookNotExecutable(StructuralError):
    """Installer hook is missing or lacks execute permission."""


class HookExecutionError(InstallToolError):
    """Installer hook failed for one version of a tool."""

    kind = ErrorKind.HOOK_EXECUTION

    def __init__(self, tool: str, version: str, reason: str):
        super().__init__(f"Failed to install {tool} version {version}: {reason}")
        self.tool = tool
        self.version = version
        self.reason = reason


class LinkingError(InstallToolError):
    """A version directory or alias link could not be prepared or written."""

    kind = ErrorKind.LINKING

    def __init__(self, tool: str, version: Optional[str], reason: str):
        target = f"{tool} version {version}" if version else tool
        super().__init__(f"Failed to link {target}: {reason}")
        self.tool = tool
        self.version = version
        self.reason = reason
