"""
Tests for the storage backend
"""

import pytest
import threading

from unified_payments.storage import InMemoryStorage, StorageInterface


class TestInMemoryStorage:
    """Test InMemoryStorage implementation"""
    
    def setup_method(self):
        self.storage = InMemoryStorage()
    
    def test_save_and_load(self):
        """Test saving and loading a record"""
        self.storage.save("transactions", "txn_001", {"id": "txn_001", "amount": "100.50"})
        
        assert self.storage.load("transactions", "txn_001") == {"id": "txn_001", "amount": "100.50"}
        assert self.storage.load("transactions", "missing") is None
    
    def test_records_are_copied(self):
        """Test that callers cannot mutate stored records"""
        data = {"id": "txn_001", "tags": ["a"]}
        self.storage.save("transactions", "txn_001", data)
        data["tags"].append("b")
        
        loaded = self.storage.load("transactions", "txn_001")
        loaded["id"] = "changed"
        
        assert self.storage.load("transactions", "txn_001") == {"id": "txn_001", "tags": ["a"]}
    
    def test_load_all_in_insertion_order(self):
        for record_id in ["c", "a", "b"]:
            self.storage.save("accounts", record_id, {"id": record_id})
        
        assert [r["id"] for r in self.storage.load_all("accounts")] == ["c", "a", "b"]
    
    def test_exists_and_count(self):
        assert self.storage.count("accounts") == 0
        assert not self.storage.exists("accounts", "a")
        
        self.storage.save("accounts", "a", {"id": "a"})
        self.storage.save("accounts", "a", {"id": "a", "name": "updated"})
        
        assert self.storage.exists("accounts", "a")
        assert self.storage.count("accounts") == 1
    
    def test_tables_are_separate(self):
        self.storage.save("accounts", "x", {"id": "x"})
        assert not self.storage.exists("transactions", "x")
    
    def test_atomic_blocks_other_writers(self):
        """Test that atomic() holds the storage exclusively"""
        writer_done = threading.Event()
        
        def writer():
            self.storage.save("transactions", "late", {"id": "late"})
            writer_done.set()
        
        with self.storage.atomic():
            thread = threading.Thread(target=writer)
            thread.start()
            assert not writer_done.wait(timeout=0.1)
            assert self.storage.count("transactions") == 0
        
        thread.join()
        assert self.storage.exists("transactions", "late")


class TestStorageInterface:
    """Test the abstract interface"""
    
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            StorageInterface()
    
    def test_default_atomic_is_noop(self):
        class DictStorage(StorageInterface):
            def __init__(self):
                self.data = {}
            
            def save(self, table, record_id, data):
                self.data[(table, record_id)] = data
            
            def load(self, table, record_id):
                return self.data.get((table, record_id))
            
            def load_all(self, table):
                return [v for (t, _), v in self.data.items() if t == table]
            
            def exists(self, table, record_id):
                return (table, record_id) in self.data
            
            def count(self, table):
                return len(self.load_all(table))
        
        storage = DictStorage()
        with storage.atomic():
            storage.save("t", "1", {"id": "1"})
        assert storage.count("t") == 1
