import pytest

from ducklingdb.disk_manager import PAGE_SIZE, DiskManager


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "test.db")


def test_write_then_read_round_trip(db_path):
    with DiskManager(db_path) as dm:
        dm.write_page(0, bytes([2]) * PAGE_SIZE)
        dm.write_page(1, bytes([1]) * PAGE_SIZE)
        assert dm.read_page(0) == bytes([2]) * PAGE_SIZE
        assert dm.read_page(1) == bytes([1]) * PAGE_SIZE


def test_read_returns_full_page(db_path):
    with DiskManager(db_path) as dm:
        dm.write_page(0, bytes(range(256)) * (PAGE_SIZE // 256))
        page = dm.read_page(0)
        assert len(page) == PAGE_SIZE
        assert page[:4] == bytes([0, 1, 2, 3])


def test_read_past_end_raises(db_path):
    with DiskManager(db_path) as dm:
        with pytest.raises(EOFError):
            dm.read_page(0)


def test_write_wrong_size_raises(db_path):
    with DiskManager(db_path) as dm:
        with pytest.raises(ValueError):
            dm.write_page(0, b"short")


def test_negative_page_id_raises(db_path):
    with DiskManager(db_path) as dm:
        with pytest.raises(ValueError):
            dm.read_page(-1)


def test_write_updates_num_pages(db_path):
    with DiskManager(db_path) as dm:
        assert dm.num_pages == 0
        dm.write_page(4, bytes(PAGE_SIZE))
        assert dm.num_pages == 5
        dm.write_page(2, bytes(PAGE_SIZE))
        assert dm.num_pages == 5


def test_allocate_page_ids_are_distinct_and_zeroed(db_path):
    with DiskManager(db_path) as dm:
        first = dm.allocate_page()
        second = dm.allocate_page()
        third = dm.allocate_page()
        assert first == 1
        assert first < second < third
        for page_id in (first, second, third):
            assert dm.read_page(page_id) == bytes(PAGE_SIZE)
            assert dm.num_pages > page_id


def test_allocate_does_not_clobber_written_pages(db_path):
    with DiskManager(db_path) as dm:
        dm.write_page(0, bytes([7]) * PAGE_SIZE)
        new_id = dm.allocate_page()
        assert new_id != 0
        assert dm.read_page(0) == bytes([7]) * PAGE_SIZE


def test_data_persists_across_reopen(db_path):
    with DiskManager(db_path) as dm:
        dm.write_page(3, bytes([9]) * PAGE_SIZE)
    with DiskManager(db_path) as dm:
        assert dm.read_page(3) == bytes([9]) * PAGE_SIZE


def test_closed_manager_rejects_io(db_path):
    dm = DiskManager(db_path)
    dm.close()
    with pytest.raises(ValueError):
        dm.read_page(0)