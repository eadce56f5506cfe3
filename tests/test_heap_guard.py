import pytest

from syswrap.heap_guard import HeapCorruptionError, HeapGuard


@pytest.fixture
def guard(tmp_path):
    return HeapGuard(tmp_path / "heap.log")


def test_alloc_updates_size_and_checksum(guard):
    guard.on_alloc(100)
    assert guard.heap_size == 100
    assert guard.checksum == guard.calculate_checksum()


def test_free_round_trip(guard):
    guard.on_alloc(100)
    guard.on_free(100)
    assert guard.heap_size == 0
    assert guard.checksum == 0


def test_calloc_counts_elements(guard):
    guard.on_calloc(4, 25)
    guard.on_free(100)
    assert guard.heap_size == 0


def test_realloc_replaces_old_size(guard):
    guard.on_alloc(10)
    guard.on_realloc(10, 50)
    assert guard.heap_size == 50
    guard.on_free(50)
    assert guard.heap_size == 0


def test_checksum_is_unsigned_int(guard):
    guard.on_alloc(2**32 + 5)
    assert guard.calculate_checksum() == 5
    assert guard.checksum == 5


def test_tampered_checksum_detected(guard):
    guard.on_alloc(64)
    guard.checksum = guard.calculate_checksum() + 1
    with pytest.raises(HeapCorruptionError) as info:
        guard.validate()
    assert info.value.expected == guard.calculate_checksum()
    assert info.value.actual == guard.checksum
    text = guard.log_path.read_text()
    assert text.startswith("Heap corruption detected! Expected checksum:")


def test_valid_heap_writes_no_log(guard):
    guard.on_alloc(8)
    guard.validate()
    assert not guard.log_path.exists()


def test_unwritable_log_still_raises(tmp_path):
    guard = HeapGuard(tmp_path / "missing" / "heap.log")
    guard.checksum = guard.calculate_checksum() + 1
    with pytest.raises(HeapCorruptionError):
        guard.validate()