"""
Installation and hook result models.
"""

from typing import Optional, Dict, Any, List, Tuple
from datetime import datetime
from pydantic import BaseModel, Field

from .tool import ToolStatus, VersionAlias
from ..errors import ErrorKind


class HookResult(BaseModel):
    """Result of one installer hook invocation."""
    version: str = Field(..., description="Version passed to the hook")
    location: str = Field(..., description="Resolved artifact location passed to the hook")
    success: bool = Field(..., description="Whether the hook reported success")
    exit_code: Optional[int] = Field(None, description="Hook exit status, if it ran")
    output: Optional[str] = Field(None, description="Tail of the hook output")
    error: Optional[str] = Field(None, description="Error message if failed")
    duration_seconds: Optional[float] = Field(None, description="Hook run time")

    class Config:
        json_schema_extra = {
            "example": {
                "version": "11.0.20.1",
                "location": "https://example.com/jdk-11.0.20.1.tar.gz",
                "success": True,
                "exit_code": 0,
                "duration_seconds": 12.4
            }
        }


class InstallationResult(BaseModel):
    """Outcome of processing one tool directory."""
    tool_name: str = Field(..., description="Tool name (directory basename)")
    tool_path: str = Field(..., description="Tool directory as given")
    status: ToolStatus = Field(default=ToolStatus.PENDING)

    error_kind: Optional[ErrorKind] = Field(None, description="Kind of error, if any")
    error: Optional[str] = Field(None, description="Error message if skipped or failed")
    failed_version: Optional[str] = Field(None, description="Version whose hook or links failed")

    installed_versions: List[str] = Field(default_factory=list)
    aliases: List[VersionAlias] = Field(default_factory=list)
    latest: Optional[str] = Field(None, description="Target of the latest alias")
    planned: List[Tuple[str, str]] = Field(
        default_factory=list,
        description="(version, location) pairs resolved in dry-run mode"
    )
    malformed_lines: List[Tuple[int, str]] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    started_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    def fail(self, kind: ErrorKind, message: str, version: Optional[str] = None) -> None:
        """Record an error and move to the matching terminal status."""
        self.error_kind = kind
        self.error = message
        self.failed_version = version
        if kind == ErrorKind.STRUCTURAL:
            self.complete(ToolStatus.SKIPPED)
        else:
            self.complete(ToolStatus.FAILED)

    def warn(self, kind: ErrorKind, message: str) -> None:
        """Record a non-fatal condition."""
        self.warnings.append(message)
        if self.error_kind is None:
            self.error_kind = kind

    def complete(self, status: ToolStatus = ToolStatus.COMPLETED) -> None:
        """Mark processing of this tool as finished."""
        self.status = status
        self.completed_at = datetime.utcnow()
        if self.started_at:
            self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    class Config:
        json_schema_extra = {
            "example": {
                "tool_name": "jdk",
                "tool_path": "/tools/jdk",
                "status": "completed",
                "installed_versions": ["8u382", "11.0.20.1"],
                "aliases": [
                    {"name": "11.0.20", "target": "11.0.20.1"},
                    {"name": "11.0", "target": "11.0.20"},
                    {"name": "11", "target": "11.0"}
                ],
                "latest": "11.0.20.1"
            }
        }


class BatchResult(BaseModel):
    """Outcome of one installer run over a list of tool directories."""
    results: List[InstallationResult] = Field(default_factory=list)
    dry_run: bool = Field(default=False)
    started_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    def _count(self, status: ToolStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def completed(self) -> int:
        return self._count(ToolStatus.COMPLETED)

    @property
    def failed(self) -> int:
        return self._count(ToolStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self._count(ToolStatus.SKIPPED)

    @property
    def all_succeeded(self) -> bool:
        return all(r.status == ToolStatus.COMPLETED for r in self.results)

    def complete(self) -> None:
        self.completed_at = datetime.utcnow()
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    def summary(self) -> Dict[str, Any]:
        """Counters and per-tool status, suitable for logging or a JSON report."""
        return {
            "total_tools": len(self.results),
            "completed": self.completed,
            "failed": self.failed,
            "skipped": self.skipped,
            "dry_run": self.dry_run,
            "duration_seconds": self.duration_seconds or 0,
            "tools": [
                r.model_dump(mode="json", include={
                    "tool_name", "status", "error_kind", "error", "failed_version",
                    "installed_versions", "latest", "warnings"
                })
                for r in self.results
            ]
        }
