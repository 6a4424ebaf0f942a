"""Storage layer for notevault - JSON documents and repositories."""

from notevault.storage.documents import JsonDocument, ReadResult, read_text, write_text
from notevault.storage.repos import (
    ContentsRepo,
    PluginsRepo,
    PreferencesRepo,
    TreesRepo,
    VaultsRepo,
)

__all__ = [
    "JsonDocument",
    "ReadResult",
    "read_text",
    "write_text",
    "ContentsRepo",
    "PluginsRepo",
    "PreferencesRepo",
    "TreesRepo",
    "VaultsRepo",
]
