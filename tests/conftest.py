"""
Shared test fixtures and configuration.
"""

import os
import textwrap
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from config.settings import Settings

# Records "<version> <location>" per call, creates ./<version>, and fails for
# any version listed in ./fail_versions.
RECORDING_HOOK = textwrap.dedent("""\
    #!/bin/sh
    set -e
    echo "$1 $2" >> calls.log
    if [ -f fail_versions ] && grep -qx "$1" fail_versions; then
        echo "download of $2 failed" >&2
        exit 3
    fi
    mkdir -p "$1"
    echo "installed $1"
""")


def write_hook(tool_dir: Path, script: str = RECORDING_HOOK, name: str = "install") -> Path:
    hook = tool_dir / name
    hook.write_text(script)
    hook.chmod(0o755)
    return hook


@pytest.fixture
def make_tool(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory creating tool directories under tmp_path/tools."""

    def _make_tool(name: str,
                   manifest: Optional[str] = None,
                   hook: Optional[str] = RECORDING_HOOK,
                   fail_versions: tuple = ()) -> Path:
        tool_dir = tmp_path / "tools" / name
        tool_dir.mkdir(parents=True)
        if manifest is not None:
            (tool_dir / "versions").write_text(textwrap.dedent(manifest))
        if hook is not None:
            write_hook(tool_dir, hook)
        if fail_versions:
            (tool_dir / "fail_versions").write_text("\n".join(fail_versions) + "\n")
        return tool_dir

    return _make_tool


@pytest.fixture
def make_settings(monkeypatch, tmp_path: Path) -> Callable[..., Settings]:
    """Return a factory for Settings isolated from the caller's environment."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("INSTALL_TOOL_"):
            monkeypatch.delenv(key)

    def _make_settings(*tool_dirs: Path, **kwargs) -> Settings:
        return Settings(tool_directories=tuple(tool_dirs), **kwargs)

    return _make_settings


@pytest.fixture
def hook_calls() -> Callable[[Path], List[str]]:
    """Return a reader for the calls recorded by RECORDING_HOOK."""

    def _hook_calls(tool_dir: Path) -> List[str]:
        log = tool_dir / "calls.log"
        if not log.exists():
            return []
        return log.read_text().splitlines()

    return _hook_calls
