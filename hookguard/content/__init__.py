from hookguard.content.stores import (
    ContentStore,
    FilesystemContentStore,
    GitIndexContentStore,
    InMemoryContentStore,
    parse_name_status,
)

__all__ = [
    "ContentStore",
    "FilesystemContentStore",
    "GitIndexContentStore",
    "InMemoryContentStore",
    "parse_name_status",
]
