"""
Installation driver: installs every manifest version of every tool directory.
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from config.settings import Settings
from .hooks import HookRunner
from .linker import AliasLinker
from .manifest import ArtifactManifest
from .versions import max_version
from ..errors import (
    ErrorKind,
    HookExecutionError,
    HookNotExecutable,
    LinkingError,
    StructuralError,
    ToolDirectoryError,
)
from ..models.installation import BatchResult, InstallationResult
from ..models.tool import ToolDirectory, ToolStatus
from ..utils.logging import get_logger


class InstallationDriver:
    """Processes tool directories one after another.

    A tool that is badly laid out is skipped. A tool whose hook fails for one
    version stops there and is reported as failed. Neither stops the batch.
    """

    def __init__(self,
                 settings: Settings,
                 hook_runner: Optional[HookRunner] = None,
                 linker: Optional[AliasLinker] = None):
        """
        Initialize the driver.

        Args:
            settings: Installer settings
            hook_runner: Hook runner (built from settings if not given)
            linker: Alias linker (built from settings if not given)
        """
        self.logger = get_logger(__name__)
        self.settings = settings
        self.hook_runner = hook_runner or HookRunner(
            timeout=settings.hook_timeout,
            echo_output=settings.debug
        )
        self.linker = linker or AliasLinker(
            latest_alias=settings.latest_alias,
            dry_run=settings.dry_run
        )

    def run(self) -> BatchResult:
        """
        Install all configured tool directories.

        Returns:
            Batch result with one entry per tool directory, in order
        """
        batch = BatchResult(dry_run=self.settings.dry_run)
        tool_paths = self.settings.tool_directories
        self.logger.info(f"Processing {len(tool_paths)} tool director{'y' if len(tool_paths) == 1 else 'ies'}")

        for tool_path in tool_paths:
            batch.results.append(self.install_tool(Path(tool_path)))

        batch.complete()
        self.logger.info(
            f"Run complete: {batch.completed} completed, {batch.failed} failed, "
            f"{batch.skipped} skipped"
        )

        if self.settings.report_path:
            self.save_report(batch, self.settings.report_path)

        return batch

    def validate_tool_directory(self, path: Path) -> ToolDirectory:
        """
        Check that a tool directory holds a readable manifest and an executable hook.

        Returns:
            The tool directory with canonical paths

        Raises:
            StructuralError: if anything is missing or inaccessible
        """
        if not path.exists():
            raise ToolDirectoryError(f"Tool directory not found: {path}", path)
        if not path.is_dir():
            raise ToolDirectoryError(f"Not a directory: {path}", path)
        if not os.access(path, os.R_OK | os.X_OK):
            raise ToolDirectoryError(f"Tool directory is not accessible: {path}", path)
        if not self.settings.dry_run and not os.access(path, os.W_OK):
            raise ToolDirectoryError(f"Tool directory is not writable: {path}", path)

        tool_path = path.resolve()
        manifest_path = (tool_path / self.settings.manifest_name).resolve()
        hook_path = tool_path / self.settings.hook_name

        # Raises ManifestNotFound / ManifestUnreadable
        ArtifactManifest(manifest_path, self.settings.placeholder)

        if not hook_path.is_file():
            raise HookNotExecutable(f"Installer hook not found: {hook_path}", hook_path)
        if not os.access(hook_path, os.X_OK):
            raise HookNotExecutable(f"Installer hook is not executable: {hook_path}", hook_path)

        return ToolDirectory(path=tool_path, manifest_path=manifest_path, hook_path=hook_path)

    def install_tool(self, path: Path) -> InstallationResult:
        """Validate one tool directory and install every version in its manifest."""
        result = InstallationResult(tool_name=path.name, tool_path=str(path))
        self.logger.info(f"Processing tool directory {path}")

        result.status = ToolStatus.VALIDATING
        try:
            tool = self.validate_tool_directory(path)
            manifest = ArtifactManifest(tool.manifest_path, self.settings.placeholder)
            entries = list(manifest.resolved())
        except StructuralError as e:
            self.logger.warning(f"Skipping {path}: {e}")
            result.fail(ErrorKind.STRUCTURAL, str(e))
            return result

        result.tool_name = tool.name
        result.malformed_lines = list(manifest.malformed)
        for line_number, _ in manifest.malformed:
            result.warnings.append(f"{tool.manifest_path}:{line_number}: malformed line skipped")

        if not entries:
            self.logger.warning(f"Manifest {tool.manifest_path} lists no versions")

        result.status = ToolStatus.INSTALLING
        try:
            if not self._install_entries(tool, entries, result):
                return result
            self._link_latest(tool, result)
        except LinkingError as e:
            self.logger.error(str(e))
            result.fail(ErrorKind.LINKING, str(e), version=e.version)
            return result

        result.complete()
        self.logger.info(
            f"Finished {tool.name}: installed {len(result.installed_versions)} version(s)"
            + (f", {self.settings.latest_alias} -> {result.latest}" if result.latest else "")
        )
        return result

    def _install_entries(self, tool: ToolDirectory, entries, result: InstallationResult) -> bool:
        """Run the hook and link aliases for each entry. Returns False if a hook failed."""
        for entry, location in entries:
            if self.settings.dry_run:
                self.logger.info(f"[dry-run] would install {tool.name} {entry.version} from {location}")
                result.planned.append((entry.version, location))
                result.aliases.extend(self._link_aliases(tool, entry.version))
                continue

            self._clear_stale_alias(tool, entry.version)

            hook_result = self.hook_runner.run(tool, entry, location)
            if not hook_result.success:
                error = HookExecutionError(tool.name, entry.version, hook_result.error or "unknown error")
                self.logger.error(str(error))
                if hook_result.output:
                    self.logger.error(f"Hook output for {tool.name} {entry.version}:\n{hook_result.output}")
                result.fail(ErrorKind.HOOK_EXECUTION, str(error), version=entry.version)
                return False

            result.installed_versions.append(entry.version)
            version_path = tool.path / entry.version
            try:
                is_real_dir = version_path.is_dir() and not version_path.is_symlink()
            except OSError as e:
                raise LinkingError(tool.name, entry.version, str(e)) from e
            if not is_real_dir:
                message = f"Hook succeeded but {version_path} is not a directory"
                self.logger.warning(message)
                result.warnings.append(message)

            result.aliases.extend(self._link_aliases(tool, entry.version))
        return True

    def _clear_stale_alias(self, tool: ToolDirectory, version: str) -> None:
        """Remove an alias link left by an earlier run where a concrete version is about to go."""
        version_path = tool.path / version
        try:
            if version_path.is_symlink():
                self.logger.info(f"Removing alias {version_path} -> {os.readlink(version_path)} before installing {version}")
                version_path.unlink()
        except OSError as e:
            raise LinkingError(tool.name, version, str(e)) from e

    def _link_aliases(self, tool: ToolDirectory, version: str):
        try:
            return self.linker.link_aliases(tool.path, version)
        except OSError as e:
            raise LinkingError(tool.name, version, str(e)) from e

    def _link_latest(self, tool: ToolDirectory, result: InstallationResult) -> None:
        if self.settings.dry_run:
            versions = [version for version, _ in result.planned]
        else:
            versions = result.installed_versions

        try:
            latest = self.linker.select_latest(tool.path, versions)
        except OSError as e:
            raise LinkingError(tool.name, None, str(e)) from e

        if latest is not None:
            result.aliases.append(latest)
            result.latest = latest.target
        elif not versions:
            result.warn(ErrorKind.LINKING_WARNING, f"No versions installed for {tool.name}; {self.settings.latest_alias} not linked")
        else:
            result.warn(
                ErrorKind.LINKING_WARNING,
                f"{tool.path / self.settings.latest_alias} is not a symlink; "
                f"{self.settings.latest_alias} not linked to {max_version(versions)}"
            )

    def save_report(self, batch: BatchResult, report_path: Path) -> Optional[Path]:
        """Write the batch summary as JSON. Returns None if it could not be written."""
        report_path = Path(report_path)
        data = batch.summary()
        data['timestamp'] = datetime.utcnow().isoformat()

        try:
            report_path.parent.mkdir(parents=True, exist_ok=True)
            with open(report_path, 'w') as f:
                json.dump(data, f, indent=2, default=str)
        except OSError as e:
            self.logger.error(f"Failed to write run report {report_path}: {e}")
            return None

        self.logger.info(f"Saved run report to {report_path}")
        return report_path
