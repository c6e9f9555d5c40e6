"""Tests for the JSON file record store."""

import json
import random
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from che_shortener.shortcode import ShortCodeGenerator
from che_shortener.store.json_file import JSONFileURLStore
from che_shortener.store.exceptions import (
    DuplicateShortCodeError,
    StoreLoadError,
    StorePersistenceError,
)


def _fail_write(data):
    raise OSError("disk full")


class TestLoad:
    """Test loading the backing file."""
    
    def test_missing_file_is_created(self, tmp_path, logger):
        """An absent file is created containing an empty array."""
        path = tmp_path / "data" / "urls.json"
        store = JSONFileURLStore(str(path), logger=logger)
        
        store.load()
        
        assert path.read_text() == "[]"
        assert store.snapshot() == []
    
    def test_load_existing_records(self, store_path, logger):
        """Records load in file order with their counts and timestamps."""
        store_path.write_text(json.dumps([
            {
                "short_code": "happy-fox",
                "long_url": "https://example.com/1",
                "created_at": "2024-05-01T10:00:00Z",
                "usage_count": 3,
            },
            {
                "short_code": "calm-owl",
                "long_url": "https://example.com/2",
                "created_at": "2024-05-02T11:30:00Z",
                "usage_count": 0,
            },
        ]))
        store = JSONFileURLStore(str(store_path), logger=logger)
        
        store.load()
        records = store.snapshot()
        
        assert [r.short_code for r in records] == ["happy-fox", "calm-owl"]
        assert records[0].usage_count == 3
        assert records[0].to_dict()["created_at"] == "2024-05-01T10:00:00Z"
    
    @pytest.mark.parametrize("contents", [
        "{not json",
        '{"short_code": "happy-fox"}',
        '[{"short_code": "happy-fox"}]',
        '[{"short_code": "happy-fox", "long_url": "https://a.com", "created_at": "yesterday"}]',
        '[{"short_code": "happy-fox", "long_url": "https://a.com", '
        '"created_at": "2024-05-01T10:00:00Z", "usage_count": -1}]',
        '[1, 2, 3]',
    ])
    def test_unparseable_file(self, store_path, logger, contents):
        """Malformed files are fatal."""
        store_path.write_text(contents)
        store = JSONFileURLStore(str(store_path), logger=logger)
        
        with pytest.raises(StoreLoadError):
            store.load()
    
    def test_duplicate_codes_in_file(self, store_path, logger, make_record):
        """A file breaking code uniqueness is rejected."""
        record = make_record().to_dict()
        store_path.write_text(json.dumps([record, record]))
        store = JSONFileURLStore(str(store_path), logger=logger)
        
        with pytest.raises(StoreLoadError, match="Duplicate"):
            store.load()
    
    @pytest.mark.parametrize("short_code", ["Bad Code", "api/urls", "happy-fox-", "happy"])
    def test_malformed_short_code_in_file(self, store_path, logger, make_record, short_code):
        """Codes that could never be generated or routed are rejected."""
        store_path.write_text(json.dumps([make_record(short_code).to_dict()]))
        store = JSONFileURLStore(str(store_path), logger=logger)
        
        with pytest.raises(StoreLoadError, match="Malformed short code"):
            store.load()
    
    def test_suffixed_code_in_file(self, store_path, logger, make_record):
        store_path.write_text(json.dumps([make_record("happy-fox-2").to_dict()]))
        store = JSONFileURLStore(str(store_path), logger=logger)
        
        store.load()
        
        assert store.contains("happy-fox-2")
    
    def test_unreadable_path(self, tmp_path, logger):
        """A directory in place of the file is fatal."""
        path = tmp_path / "urls.json"
        path.mkdir()
        store = JSONFileURLStore(str(path), logger=logger)
        
        with pytest.raises(StoreLoadError):
            store.load()


class TestMutations:
    """Test append, increment and snapshot."""
    
    def test_append_persists_pretty_printed(self, store, store_path, make_record):
        """The whole collection is rewritten with indentation."""
        store.append(make_record())
        
        text = store_path.read_text()
        assert text.startswith("[\n  {")
        assert json.loads(text) == [{
            "short_code": "test-code",
            "long_url": "https://example.com/redirect-target",
            "created_at": "2024-01-01T12:00:00Z",
            "usage_count": 0,
        }]
    
    def test_append_duplicate(self, store, make_record):
        """Appending an existing code is refused."""
        store.append(make_record())
        
        with pytest.raises(DuplicateShortCodeError):
            store.append(make_record(long_url="https://example.com/other"))
        assert store.count() == 1
    
    def test_increment_usage(self, store, store_path, make_record):
        """Incrementing updates memory and file."""
        store.append(make_record())
        
        updated = store.increment_usage("test-code")
        
        assert updated.usage_count == 1
        assert json.loads(store_path.read_text())[0]["usage_count"] == 1
    
    def test_increment_unknown_code(self, store):
        """Unknown codes are reported as None."""
        assert store.increment_usage("missing-code") is None
    
    def test_snapshot_is_a_copy(self, store, make_record):
        """Mutating a snapshot never touches the stored records."""
        store.append(make_record())
        
        snapshot = store.snapshot()
        snapshot[0].usage_count = 99
        snapshot.clear()
        
        assert store.snapshot()[0].usage_count == 0
    
    def test_appended_record_is_copied(self, store, make_record):
        """The caller's record object is not shared with the store."""
        record = make_record()
        store.append(record)
        record.usage_count = 42
        
        assert store.snapshot()[0].usage_count == 0
    
    def test_create_record(self, store):
        """Created records get a fresh code, a UTC timestamp and zero usage."""
        generator = ShortCodeGenerator(rng=random.Random(5))
        
        record = store.create_record("https://example.com/x", generator)
        
        assert ShortCodeGenerator.is_valid_format(record.short_code)
        assert record.usage_count == 0
        assert record.created_at.utcoffset().total_seconds() == 0
        assert record.created_at.microsecond == 0
        assert store.contains(record.short_code)
    
    def test_contains(self, store, make_record):
        store.append(make_record())
        
        assert store.contains("test-code")
        assert not store.contains("other-code")


class TestWriteFailures:
    """A failed write rolls the in-memory change back."""
    
    def test_append_rolls_back(self, store, store_path, make_record, monkeypatch):
        monkeypatch.setattr(store, "_write_file", _fail_write)
        
        with pytest.raises(StorePersistenceError):
            store.append(make_record())
        
        assert store.count() == 0
        assert store_path.read_text() == "[]"
    
    def test_create_rolls_back(self, store, monkeypatch):
        monkeypatch.setattr(store, "_write_file", _fail_write)
        
        with pytest.raises(StorePersistenceError):
            store.create_record("https://example.com/x", ShortCodeGenerator())
        
        assert store.snapshot() == []
    
    def test_increment_rolls_back(self, store, store_path, make_record, monkeypatch):
        store.append(make_record(usage_count=4))
        monkeypatch.setattr(store, "_write_file", _fail_write)
        
        with pytest.raises(StorePersistenceError):
            store.increment_usage("test-code")
        
        assert store.snapshot()[0].usage_count == 4
        assert json.loads(store_path.read_text())[0]["usage_count"] == 4
    
    def test_no_temp_files_left_behind(self, store, store_path, make_record):
        store.append(make_record())
        store.increment_usage("test-code")
        
        assert [p.name for p in store_path.parent.iterdir()] == ["urls.json"]


class TestRoundTrip:
    """Reloading the file reproduces the collection."""
    
    def test_reload_reproduces_collection(self, store, store_path, logger, make_record):
        store.append(make_record("happy-fox", "https://example.com/1"))
        store.append(make_record("calm-owl", "https://example.com/2"))
        store.create_record("https://example.com/3", ShortCodeGenerator(rng=random.Random(9)))
        store.increment_usage("calm-owl")
        store.increment_usage("calm-owl")
        
        reloaded = JSONFileURLStore(str(store_path), logger=logger)
        reloaded.load()
        
        assert reloaded.snapshot() == store.snapshot()


class TestConcurrency:
    """All operations serialize on one lock."""
    
    def test_concurrent_creates_are_unique(self, store):
        generator = ShortCodeGenerator(rng=random.Random(11))
        
        with ThreadPoolExecutor(max_workers=16) as pool:
            records = list(pool.map(
                lambda i: store.create_record(f"https://example.com/{i}", generator),
                range(200),
            ))
        
        codes = [record.short_code for record in records]
        assert len(set(codes)) == 200
        assert store.count() == 200
    
    def test_concurrent_increments_are_exact(self, store, store_path, make_record):
        store.append(make_record("happy-fox", "https://example.com/1"))
        store.append(make_record("calm-owl", "https://example.com/2"))
        barrier = threading.Barrier(8)
        
        def worker(code):
            barrier.wait()
            for _ in range(25):
                store.increment_usage(code)
        
        threads = [
            threading.Thread(target=worker, args=("happy-fox" if i % 2 else "calm-owl",))
            for i in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        
        counts = {r.short_code: r.usage_count for r in store.snapshot()}
        assert counts == {"happy-fox": 100, "calm-owl": 100}
        persisted = {r["short_code"]: r["usage_count"] for r in json.loads(store_path.read_text())}
        assert persisted == counts


def test_health_check(store, tmp_path, logger):
    assert store.health_check()
    assert not JSONFileURLStore(str(tmp_path / "never-loaded.json"), logger=logger).health_check()
