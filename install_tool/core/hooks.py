"""
Runs a tool's installer hook for one manifest entry.

The hook is an executable inside the tool directory, called as
``<hook> <version> <location>`` with the tool directory as working directory.
It fetches and unpacks the artifact into ``<tool>/<version>`` (or installs a
system package) and must exit 0 on success. Nothing else about its output is
interpreted.
"""

import logging
import subprocess
import time
from typing import Optional

from ..models.installation import HookResult
from ..models.tool import ToolDirectory, ManifestEntry

OUTPUT_TAIL_CHARS = 2000


class HookRunner:
    """Invokes installer hooks synchronously."""

    def __init__(self, timeout: Optional[float] = None, echo_output: bool = False):
        """
        Initialize the hook runner.

        Args:
            timeout: Seconds before a hook is killed and reported as failed
            echo_output: If True, log the full hook output at DEBUG level
        """
        self.logger = logging.getLogger(__name__)
        self.timeout = timeout
        self.echo_output = echo_output

    def run(self, tool: ToolDirectory, entry: ManifestEntry, location: str) -> HookResult:
        """
        Install one version of a tool.

        Args:
            tool: Validated tool directory
            entry: Manifest entry being installed
            location: Artifact location with the version substituted

        Returns:
            Hook result; failures are reported in the result, not raised
        """
        cmd = [str(tool.hook_path), entry.version, location]
        self.logger.info(f"Installing {tool.name} {entry.version} from {location}")

        start = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                cwd=str(tool.path),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            return HookResult(
                version=entry.version,
                location=location,
                success=False,
                error=f"Hook timed out after {self.timeout} seconds",
                duration_seconds=time.monotonic() - start
            )
        except OSError as e:
            return HookResult(
                version=entry.version,
                location=location,
                success=False,
                error=f"Could not run hook {tool.hook_path}: {e}",
                duration_seconds=time.monotonic() - start
            )

        duration = time.monotonic() - start
        output = (result.stdout or "") + (result.stderr or "")

        if self.echo_output and output:
            for line in output.splitlines():
                self.logger.debug(f"[{tool.name} {entry.version}] {line}")

        if result.returncode == 0:
            return HookResult(
                version=entry.version,
                location=location,
                success=True,
                exit_code=0,
                output=output[-OUTPUT_TAIL_CHARS:],
                duration_seconds=duration
            )

        return HookResult(
            version=entry.version,
            location=location,
            success=False,
            exit_code=result.returncode,
            output=output[-OUTPUT_TAIL_CHARS:],
            error=f"Hook exited with status {result.returncode}",
            duration_seconds=duration
        )
