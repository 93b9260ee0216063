"""Tests for pidclaim.core.fileutil."""

import errno
import platform
import stat
from pathlib import Path

import pytest

from pidclaim.core.fileutil import (
    PID_FILE_MODE,
    ReadErrorKind,
    atomic_write,
    classify_read_error,
    read_text,
)


class TestPidFileMode:
    def test_is_0644(self):
        assert PID_FILE_MODE == 0o644


class TestClassifyReadError:
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(OSError) as exc_info:
            read_text(tmp_path / "missing.pid")
        assert classify_read_error(exc_info.value) is ReadErrorKind.NOT_FOUND

    def test_parent_is_a_file(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(OSError) as exc_info:
            read_text(blocker / "app.pid")
        assert classify_read_error(exc_info.value) is ReadErrorKind.NOT_FOUND

    def test_directory_is_other(self, tmp_path: Path):
        with pytest.raises(OSError) as exc_info:
            read_text(tmp_path)
        assert classify_read_error(exc_info.value) is ReadErrorKind.OTHER

    def test_permission_denied_is_other(self):
        err = PermissionError(errno.EACCES, "Permission denied")
        assert classify_read_error(err) is ReadErrorKind.OTHER


class TestAtomicWrite:
    def test_creates_file(self, tmp_path: Path):
        target = tmp_path / "app.pid"
        atomic_write(target, "1234")
        assert target.read_text() == "1234"

    def test_overwrites_existing(self, tmp_path: Path):
        target = tmp_path / "app.pid"
        atomic_write(target, "1")
        atomic_write(target, "2")
        assert target.read_text() == "2"

    def test_no_temp_files_left(self, tmp_path: Path):
        target = tmp_path / "app.pid"
        atomic_write(target, "1234")
        assert [p.name for p in tmp_path.iterdir()] == ["app.pid"]

    @pytest.mark.skipif(platform.system() == "Windows", reason="POSIX permissions")
    def test_sets_mode(self, tmp_path: Path):
        target = tmp_path / "app.pid"
        target.write_text("old")
        target.chmod(0o600)
        atomic_write(target, "1234")
        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    def test_missing_directory_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            atomic_write(tmp_path / "nope" / "app.pid", "1234")
