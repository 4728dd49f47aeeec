from datetime import datetime
import errno
import os
import stat
from typing import Any

import pytest

from firmpath import is_not_found, override, Path


@pytest.mark.parametrize(
    "name",
    ["does-not-exist", "does-not-exist/", "a/missing/deeper", "notes.txt/child"],
)
def test_missing_paths_are_data_not_errors(mock_fs: Path, name: str) -> None:
    p = mock_fs / name

    assert p.exists() is False
    assert p.is_file() is False
    assert p.is_dir() is False
    assert p.is_symlink() is False


def test_regular_file(mock_fs: Path) -> None:
    p = mock_fs / "notes.txt"

    assert p.exists()
    assert p.is_file()
    assert not p.is_dir()
    assert not p.is_symlink()


def test_directory(mock_fs: Path) -> None:
    p = mock_fs / "a" / "b"

    assert p.exists()
    assert p.is_dir()
    assert not p.is_file()
    assert not p.is_symlink()


def test_symlink_to_file(mock_fs: Path) -> None:
    p = mock_fs / "symlink-to-file"

    assert p.is_symlink()
    assert p.is_file()
    assert not p.is_dir()


def test_symlink_to_dir(mock_fs: Path) -> None:
    p = mock_fs / "symlink-to-dir"

    assert p.is_symlink()
    assert p.is_dir()


def test_broken_symlink(mock_fs: Path) -> None:
    p = mock_fs / "broken-symlink"

    assert not p.exists()
    assert p.exists(follow_symlinks=False)
    assert p.is_symlink()
    assert not p.is_file()


def test_size(mock_fs: Path) -> None:
    assert (mock_fs / "notes.txt").size() == 5
    assert (mock_fs / "no-extension").size() == 0


def test_size_missing(mock_fs: Path) -> None:
    with pytest.raises(FileNotFoundError) as info:
        (mock_fs / "does-not-exist").size()

    assert is_not_found(info.value)


def test_modified_time(mock_fs: Path) -> None:
    p = mock_fs / "notes.txt"
    timestamp = datetime(2025, 10, 13, 15, 14, 28).timestamp()
    os.utime(p, (timestamp, timestamp))

    assert p.modified_time() == datetime(2025, 10, 13, 15, 14, 28)


def test_modified_time_missing(mock_fs: Path) -> None:
    with pytest.raises(FileNotFoundError):
        (mock_fs / "does-not-exist").modified_time()


def test_stat_follows_symlinks_by_default(mock_fs: Path) -> None:
    p = mock_fs / "symlink-to-file"

    assert p.stat().st_size == len("contents of b/file.txt")
    assert stat.S_ISLNK(p.stat(follow_symlinks=False).st_mode)


@pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="Requires POSIX permissions as a non-root user")
def test_exists_reports_permission_errors(mock_fs: Path) -> None:
    locked = mock_fs / "a" / "c"
    locked.chmod(0)

    try:
        with pytest.raises(PermissionError):
            (locked / "file.txt").exists()
    finally:
        locked.chmod(0o700)


@pytest.fixture
def denied(mock_fs: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A path whose stat calls fail with EACCES, whoever runs the tests."""
    locked = os.fspath(mock_fs / "a" / "c")
    original_stat = os.stat

    def stat_denied(path: Any, *args: Any, **kwargs: Any) -> os.stat_result:
        if os.fspath(path).startswith(locked):
            raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))
        return original_stat(path, *args, **kwargs)

    monkeypatch.setattr(os, "stat", stat_denied)
    return mock_fs / "a" / "c" / "file.txt"


@pytest.mark.parametrize("predicate", ["exists", "is_file", "is_dir", "is_symlink"])
def test_predicates_raise_permission_errors(denied: Path, predicate: str) -> None:
    with pytest.raises(PermissionError) as info:
        getattr(denied, predicate)()

    assert not is_not_found(info.value)


def test_type_raises_permission_errors(denied: Path) -> None:
    with pytest.raises(PermissionError):
        denied.type  # noqa: B018


def test_must_routes_permission_errors(denied: Path) -> None:
    failures: list[BaseException] = []

    with override(on_failure=failures.append):
        assert denied.must.exists() is False
        assert denied.must.is_file() is False

    assert [type(e) for e in failures] == [PermissionError, PermissionError]
