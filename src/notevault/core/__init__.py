"""notevault core - configuration, errors, identifiers and shared types."""

from notevault.core.errors import (
    ConfigError,
    InvalidPathError,
    MalformedDocumentError,
    NodeExistsError,
    NodeNotFoundError,
    NotFoundError,
    StorageError,
    StorageIOError,
    UnsupportedVaultError,
    VaultNotFoundError,
)
from notevault.core.node_id import NodeId, decode, encode
from notevault.core.types import (
    AppManaged,
    Node,
    NodeKind,
    PathBacked,
    VaultDescriptor,
    VaultKind,
)

__all__ = [
    # Identifiers
    "NodeId",
    "decode",
    "encode",
    # Types
    "AppManaged",
    "Node",
    "NodeKind",
    "PathBacked",
    "VaultDescriptor",
    "VaultKind",
    # Errors
    "ConfigError",
    "InvalidPathError",
    "MalformedDocumentError",
    "NodeExistsError",
    "NodeNotFoundError",
    "NotFoundError",
    "StorageError",
    "StorageIOError",
    "UnsupportedVaultError",
    "VaultNotFoundError",
]
