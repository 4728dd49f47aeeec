from collections.abc import Iterator
import io
import os
import pathlib
import shutil
import stat
import sys

import pytest

from firmpath import override, Path, UnsupportedDataError


@pytest.fixture
def umask_zero() -> Iterator[None]:
    previous = os.umask(0)
    yield
    os.umask(previous)


def test_make_write_read_scenario(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    Path("a/b/c").mkdir_all()
    assert Path("a/b/c/f.txt").write("hello") == 5

    assert Path("a/b/c/f.txt").read_all() == b"hello"
    assert Path("a/b/c/f.txt").size() == 5


def test_copy_into_directory_scenario(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    Path("a/b/c").mkdir_all()
    Path("a/b/c/f.txt").write("hello")

    copied = Path("a/b/c/f.txt").copy("a")

    assert copied == Path(os.path.join("a", "f.txt"))
    assert Path("a/f.txt").read_all() == b"hello"


def test_copy_to_literal_destination(mock_fs: Path) -> None:
    copied = (mock_fs / "notes.txt").copy(mock_fs / "a" / "renamed.txt")

    assert copied == mock_fs / "a" / "renamed.txt"
    assert copied.read_text() == "hello"


def test_copy_truncates_existing_destination(mock_fs: Path) -> None:
    (mock_fs / "notes.txt").copy(mock_fs / "a" / "b" / "file.txt")
    assert (mock_fs / "a" / "b" / "file.txt").read_text() == "hello"


def test_copy_missing_source_creates_nothing(mock_fs: Path) -> None:
    with pytest.raises(FileNotFoundError):
        (mock_fs / "does-not-exist").copy(mock_fs / "a")

    assert not (mock_fs / "a" / "does-not-exist").exists()


@pytest.mark.skipif(sys.platform == "win32", reason="Opening a directory raises PermissionError on Windows")
def test_copy_directory_source(mock_fs: Path) -> None:
    with pytest.raises(IsADirectoryError):
        (mock_fs / "a" / "b").copy(mock_fs / "copy")


def test_mkdir_all_is_idempotent(tmp_path: pathlib.Path) -> None:
    p = Path(tmp_path / "x" / "y" / "z")

    assert p.mkdir_all() == p
    assert p.mkdir_all() == p
    assert p.is_dir()


def test_mkdir_all_over_file(mock_fs: Path) -> None:
    with pytest.raises(FileExistsError):
        (mock_fs / "notes.txt").mkdir_all()


def test_mkdir(mock_fs: Path) -> None:
    p = mock_fs / "new"

    assert p.mkdir() == p
    assert p.is_dir()


def test_mkdir_existing(mock_fs: Path) -> None:
    with pytest.raises(FileExistsError):
        (mock_fs / "a").mkdir()


def test_mkdir_missing_parent(mock_fs: Path) -> None:
    with pytest.raises(FileNotFoundError):
        (mock_fs / "missing" / "new").mkdir()


@pytest.mark.skipif(sys.platform == "win32", reason="Requires POSIX permissions")
def test_creation_uses_policy_modes(mock_fs: Path, umask_zero: None) -> None:
    assert (mock_fs / "default-dir").mkdir().stat().st_mode & 0o777 == 0o700

    (mock_fs / "default-file").write("contents")
    assert (mock_fs / "default-file").stat().st_mode & 0o777 == 0o600

    with override(file_mode=0o640, dir_mode=0o750):
        assert (mock_fs / "custom-dir").mkdir().stat().st_mode & 0o777 == 0o750

        (mock_fs / "custom-file").write("contents")
        assert (mock_fs / "custom-file").stat().st_mode & 0o777 == 0o640


@pytest.mark.skipif(sys.platform == "win32", reason="Requires POSIX permissions")
def test_chmod(mock_fs: Path) -> None:
    p = mock_fs / "notes.txt"

    assert p.chmod(0o604) == p
    assert stat.S_IMODE(p.stat().st_mode) == 0o604


def test_chmod_missing(mock_fs: Path) -> None:
    with pytest.raises(FileNotFoundError):
        (mock_fs / "does-not-exist").chmod(0o600)


def test_chdir(mock_fs: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(mock_fs)

    (mock_fs / "a").chdir()

    assert os.path.samefile(os.getcwd(), mock_fs / "a")


def test_chdir_to_file(mock_fs: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(mock_fs)

    with pytest.raises(NotADirectoryError):
        (mock_fs / "notes.txt").chdir()


def test_symlink_into_directory(mock_fs: Path) -> None:
    source = mock_fs / "notes.txt"

    link = source.symlink(mock_fs / "a")

    assert link == mock_fs / "a" / "notes.txt"
    assert link.is_symlink()
    assert os.readlink(link) == str(source)
    assert link.read_text() == "hello"


def test_symlink_to_literal_path(mock_fs: Path) -> None:
    link = (mock_fs / "notes.txt").symlink(mock_fs / "a" / "link-to-notes")

    assert link.is_symlink()
    assert link.read_text() == "hello"


def test_symlink_occupied(mock_fs: Path) -> None:
    with pytest.raises(FileExistsError):
        (mock_fs / "notes.txt").symlink(mock_fs / "no-extension")


@pytest.mark.parametrize(
    "data, expected",
    [
        ("héllo", "héllo".encode()),
        (b"\x00\x01binary", b"\x00\x01binary"),
        (bytearray(b"array"), b"array"),
        (memoryview(b"view"), b"view"),
    ],
)
def test_write_payloads(mock_fs: Path, data: object, expected: bytes) -> None:
    p = mock_fs / "out"

    assert p.write(data) == len(expected)  # type: ignore[arg-type]
    assert p.read_all() == expected


def test_write_stream(mock_fs: Path) -> None:
    p = mock_fs / "out"
    payload = os.urandom(200_000)

    assert p.write(io.BytesIO(payload)) == len(payload)
    assert p.read_all() == payload


def test_write_replaces_content(mock_fs: Path) -> None:
    p = mock_fs / "notes.txt"

    p.write("bye")

    assert p.read_text() == "bye"


@pytest.mark.parametrize("data", [42, None, ["a"], io.StringIO("text")])
def test_write_unsupported_data(mock_fs: Path, data: object) -> None:
    with pytest.raises(UnsupportedDataError):
        (mock_fs / "out").write(data)  # type: ignore[arg-type]

    assert not (mock_fs / "out").exists()


class _FailingStream(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        raise OSError("device went away")


def test_write_stream_failure_is_reported(mock_fs: Path) -> None:
    p = mock_fs / "out"

    with pytest.raises(OSError, match="device went away"):
        p.write(_FailingStream())

    # created before streaming; no rollback
    assert p.exists()


def test_read_all_missing(mock_fs: Path) -> None:
    with pytest.raises(FileNotFoundError):
        (mock_fs / "does-not-exist").read_all()


def test_regexp_replace(mock_fs: Path) -> None:
    p = mock_fs / "version.txt"
    p.write("version = 1.2\nother = 3.4\n")

    assert p.regexp_replace(r"(\d+)\.(\d+)", r"\1.\2.0") == p

    assert p.read_text() == "version = 1.2.0\nother = 3.4.0\n"


def test_regexp_replace_missing(mock_fs: Path) -> None:
    with pytest.raises(FileNotFoundError):
        (mock_fs / "does-not-exist").regexp_replace("a", "b")


def test_open_and_create(mock_fs: Path) -> None:
    with (mock_fs / "created").create() as f:
        f.write(b"raw")

    with (mock_fs / "created").open() as f:
        assert f.read() == b"raw"


def test_copy_onto_itself(mock_fs: Path) -> None:
    with pytest.raises(shutil.SameFileError):
        (mock_fs / "notes.txt").copy(mock_fs)

    with pytest.raises(shutil.SameFileError):
        (mock_fs / "a" / "b" / "file.txt").copy(mock_fs / "symlink-to-file")

    assert (mock_fs / "notes.txt").read_text() == "hello"
    assert (mock_fs / "a" / "b" / "file.txt").read_text() == "contents of b/file.txt"
