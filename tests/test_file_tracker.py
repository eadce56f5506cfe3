import os

import pytest

from syswrap.file_tracker import FileTracker, UntrackedDescriptorError

FLAGS = os.O_CREAT | os.O_WRONLY


def _is_open(fd):
    try:
        os.fstat(fd)
    except OSError:
        return False
    return True


def test_open_tracks_descriptor(tmp_path):
    tracker = FileTracker()
    fd1 = tracker.open(tmp_path / "file1.txt", FLAGS, 0o644)
    fd2 = tracker.open(tmp_path / "file2.txt", FLAGS, 0o644)
    assert len(tracker) == 2
    assert fd1 in tracker and fd2 in tracker
    assert (tmp_path / "file1.txt").exists()
    tracker.close_all()


def test_close_untracks_and_closes(tmp_path):
    tracker = FileTracker()
    fd1 = tracker.open(tmp_path / "file1.txt", FLAGS, 0o644)
    fd2 = tracker.open(tmp_path / "file2.txt", FLAGS, 0o644)
    tracker.close(fd2)
    assert fd2 not in tracker
    assert fd1 in tracker
    assert not _is_open(fd2)
    tracker.close_all()


def test_close_unknown_descriptor_raises(tmp_path):
    tracker = FileTracker()
    tracker.open(tmp_path / "file1.txt", FLAGS, 0o644)
    with pytest.raises(UntrackedDescriptorError) as info:
        tracker.close(100)
    assert info.value.fd == 100
    assert "File descriptor not found in the file manager : 100." in str(info.value)
    assert len(tracker) == 1
    tracker.close_all()


def test_close_all_closes_everything(tmp_path):
    tracker = FileTracker()
    fds = [tracker.open(tmp_path / f"f{n}.txt", FLAGS, 0o644) for n in range(12)]
    tracker.close_all()
    assert len(tracker) == 0
    assert not any(_is_open(fd) for fd in fds)


def test_double_close_raises(tmp_path):
    tracker = FileTracker()
    fd = tracker.open(tmp_path / "file1.txt", FLAGS, 0o644)
    tracker.close(fd)
    with pytest.raises(UntrackedDescriptorError):
        tracker.close(fd)


def test_failed_open_is_not_tracked(tmp_path):
    tracker = FileTracker()
    with pytest.raises(FileNotFoundError):
        tracker.open(tmp_path / "missing" / "file.txt", os.O_RDONLY, 0o644)
    assert len(tracker) == 0


def test_context_manager_closes_files(tmp_path):
    with FileTracker() as tracker:
        fd = tracker.open(tmp_path / "file1.txt", FLAGS, 0o644)
        assert _is_open(fd)
    assert not _is_open(fd)
    assert len(tracker) == 0


def test_written_data_reaches_file(tmp_path):
    path = tmp_path / "data.txt"
    with FileTracker() as tracker:
        fd = tracker.open(path, FLAGS, 0o644)
        os.write(fd, b"hello")
    assert path.read_bytes() == b"hello"