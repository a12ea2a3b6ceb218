from slidepuzzle.backend.storage.store import JsonFileStore, KeyValueStore, MemoryStore, read_json, write_json

__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "read_json", "write_json"]
