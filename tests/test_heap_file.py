import pytest

from ducklingdb.buffer_manager import BufferPoolFullError, BufferPoolManager
from ducklingdb.disk_manager import PAGE_SIZE, DiskManager
from ducklingdb.heap_file import HeapFile, TupleId
from ducklingdb.slotted_page import PageFullError


@pytest.fixture
def disk(tmp_path):
    dm = DiskManager(str(tmp_path / "heap.db"))
    yield dm
    dm.close()


def test_insert_and_read_round_trip(disk):
    hf = HeapFile(BufferPoolManager(8, disk))
    r1 = hf.insert_tuple(b"alice")
    r2 = hf.insert_tuple(b"bob")
    r3 = hf.insert_tuple(b"carol")
    assert hf.read_tuple(r1) == b"alice"
    assert hf.read_tuple(r2) == b"bob"
    assert hf.read_tuple(r3) == b"carol"


def test_small_tuples_share_a_page(disk):
    hf = HeapFile(BufferPoolManager(8, disk))
    ids = [hf.insert_tuple(name) for name in (b"alice", b"bob", b"carol")]
    assert len({tid.page_id for tid in ids}) == 1
    assert len({tid.slot_id for tid in ids}) == 3


def test_tuple_id_is_value_object():
    assert TupleId(3, 4) == TupleId(3, 4)
    assert {TupleId(3, 4), TupleId(3, 4)} == {TupleId(3, 4)}


def test_spills_onto_new_page(disk):
    hf = HeapFile(BufferPoolManager(8, disk))
    payloads = [bytes([i]) * 1000 for i in range(6)]
    ids = [hf.insert_tuple(p) for p in payloads]
    assert len({tid.page_id for tid in ids}) >= 2
    assert [hf.read_tuple(tid) for tid in ids] == payloads


def test_works_with_single_frame_pool(disk):
    hf = HeapFile(BufferPoolManager(1, disk))
    payloads = [bytes([i + 1]) * 1500 for i in range(7)]
    ids = [hf.insert_tuple(p) for p in payloads]
    assert [hf.read_tuple(tid) for tid in ids] == payloads


def test_oversized_tuple_rejected(disk):
    hf = HeapFile(BufferPoolManager(4, disk))
    with pytest.raises(PageFullError):
        hf.insert_tuple(b"x" * PAGE_SIZE)


def test_pages_unpinned_after_operations(disk):
    bpm = BufferPoolManager(4, disk)
    hf = HeapFile(bpm)
    tid = hf.insert_tuple(b"alice")
    hf.read_tuple(tid)
    frame = bpm.fetch_page(tid.page_id)
    assert frame.pin_count == 1


def test_read_missing_slot_raises_and_unpins(disk):
    bpm = BufferPoolManager(4, disk)
    hf = HeapFile(bpm)
    tid = hf.insert_tuple(b"bob")
    with pytest.raises(KeyError):
        hf.read_tuple(TupleId(tid.page_id, tid.slot_id + 5))
    assert bpm.fetch_page(tid.page_id).pin_count == 1


def test_insert_fails_when_pool_exhausted(disk):
    bpm = BufferPoolManager(1, disk)
    pinned = bpm.new_page()
    hf = HeapFile(bpm)
    with pytest.raises(BufferPoolFullError):
        hf.insert_tuple(b"carol")
    assert pinned.pin_count == 1


def test_data_reaches_disk_after_eviction(disk):
    bpm = BufferPoolManager(1, disk)
    hf = HeapFile(bpm)
    first = hf.insert_tuple(b"a" * 3000)
    hf.insert_tuple(b"b" * 3000)
    assert disk.read_page(first.page_id).count(b"a" * 3000) == 1