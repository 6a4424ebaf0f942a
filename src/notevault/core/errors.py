"""Error taxonomy for the storage core.

Reads convert a missing file into an empty result; everything below is what
is left over and reaches the caller.
"""

from pathlib import Path


class StorageError(Exception):
    """Base error for storage and indexing failures."""


class ConfigError(StorageError):
    """Raised when notevault.yaml is invalid."""


class NotFoundError(StorageError):
    """Raised when an addressed vault or node does not exist."""


class VaultNotFoundError(NotFoundError):
    """Raised when a vault id is not in the registry."""

    def __init__(self, vault_id: str):
        super().__init__(f"Vault not found: {vault_id}")
        self.vault_id = vault_id


class NodeNotFoundError(NotFoundError):
    """Raised when a node id does not map to an existing entry."""

    def __init__(self, node_id: str, path: Path | None = None):
        detail = f" ({path})" if path else ""
        super().__init__(f"Node not found: {node_id}{detail}")
        self.node_id = node_id
        self.path = path


class StorageIOError(StorageError):
    """Raised when the filesystem refuses an operation."""

    def __init__(self, message: str, path: Path | str | None = None):
        detail = f": {path}" if path is not None else ""
        super().__init__(f"{message}{detail}")
        self.path = Path(path) if path is not None else None


class NodeExistsError(StorageIOError):
    """Raised when the target of a create or rename already exists."""


class MalformedDocumentError(StorageError):
    """Raised when a JSON document cannot be parsed into its expected shape."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Malformed document {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class UnsupportedVaultError(StorageError):
    """Raised when a node mutation targets a vault without a live directory."""


class InvalidPathError(StorageError, ValueError):
    """Raised when a name or relative path would leave the vault root."""
