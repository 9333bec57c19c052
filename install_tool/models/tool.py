"""
Tool-related data models.
"""

from enum import Enum
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field


class ToolStatus(str, Enum):
    """Status of a tool directory within one installer run."""
    PENDING = "pending"
    VALIDATING = "validating"
    INSTALLING = "installing"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class ToolDirectory(BaseModel):
    """A validated tool namespace: one directory holding every version of a tool."""
    path: Path = Field(..., description="Canonical tool directory")
    manifest_path: Path = Field(..., description="Canonical path to the version manifest")
    hook_path: Path = Field(..., description="Path to the installer hook")

    @property
    def name(self) -> str:
        return self.path.name

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "path": "/tools/jdk",
                "manifest_path": "/tools/jdk/versions",
                "hook_path": "/tools/jdk/install"
            }
        }


class ManifestEntry(BaseModel):
    """One line of a version manifest."""
    version: str = Field(..., description="Literal version string")
    location: str = Field(..., description="Artifact location, possibly templated")
    line_number: Optional[int] = Field(None, description="Line in the manifest file")

    class Config:
        frozen = True

    def resolve(self, placeholder: str) -> str:
        """Return the artifact location with the placeholder replaced by the version."""
        if not placeholder:
            return self.location
        return self.location.replace(placeholder, self.version)


class VersionAlias(BaseModel):
    """A symbolic link ``<tool>/<name> -> <target>``."""
    name: str = Field(..., description="Alias link name")
    target: str = Field(..., description="Version or alias the link points to")

    class Config:
        frozen = True

    def __str__(self) -> str:
        return f"{self.name} -> {self.target}"
