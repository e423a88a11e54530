"""Pytest configuration and shared fixtures."""

import tempfile
from collections.abc import Iterable
from pathlib import Path
from unittest.mock import patch

import pytest

# ============================================================================
# Fake Filesystem
# ============================================================================
# The resolver and notifier only ask "is this a file / a directory". A fake
# answering from fixed sets lets tests cover colon-heavy names that some
# platforms cannot create on disk.


class FakeFileSystem:
    """PathInspector answering from fixed sets of files and directories."""

    def __init__(
        self,
        files: Iterable[str | Path] = (),
        dirs: Iterable[str | Path] = (),
    ) -> None:
        self.files = {Path(p) for p in files}
        self.dirs = {Path(p) for p in dirs}
        self.checked: list[Path] = []

    def is_file(self, path: Path) -> bool:
        self.checked.append(path)
        return Path(path) in self.files

    def is_dir(self, path: Path) -> bool:
        return Path(path) in self.dirs


@pytest.fixture
def fake_fs() -> type[FakeFileSystem]:
    """Provide the FakeFileSystem class for building fakes inline."""
    return FakeFileSystem


# ============================================================================
# Working Directory Helpers
# ============================================================================


@pytest.fixture
def in_tmp_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with tmp_path as the current working directory.

    Returns:
        The temporary working directory.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def no_global_config(tmp_path: Path):
    """Point the global config path at a file that doesn't exist.

    Keeps tests isolated from the user's ~/.config/openat/config.toml.
    """
    nonexistent_global = tmp_path / "nonexistent_global" / "config.toml"
    with patch(
        "openat.adapters.config.toml_config_provider.get_global_config_path",
        return_value=nonexistent_global,
    ):
        yield nonexistent_global


# ============================================================================
# Socket Helpers
# ============================================================================


@pytest.fixture
def temp_socket_path():
    """Temporary socket path for testing.

    Uses a short base path (/tmp) to avoid AF_UNIX path length limits
    (~104 chars on macOS). The pytest tmp_path can be too long.
    """
    short_tmp = tempfile.mkdtemp(prefix="oat_", dir="/tmp")
    socket_path = Path(short_tmp) / "l.sock"
    yield socket_path
    if socket_path.exists():
        socket_path.unlink()
    Path(short_tmp).rmdir()
