"""Node mutator - create, delete and rename entries of a path-backed vault.

Each operation maps node ids to real paths with the same codec the scanner
uses, so a returned id is exactly what the next load will produce.
"""

import logging
import os
import shutil
from pathlib import Path

from notevault.core.config import DEFAULT_SETTINGS, StorageSettings
from notevault.core.errors import (
    InvalidPathError,
    NodeExistsError,
    NodeNotFoundError,
    StorageIOError,
    UnsupportedVaultError,
)
from notevault.core.node_id import NodeId, normalize_path
from notevault.core.types import NodeKind, PathBacked
from notevault.storage.repos import VaultsRepo
from notevault.vault.content import ensure_within

logger = logging.getLogger(__name__)


def validate_name(name: str) -> str:
    """Check that `name` is a single path component."""
    if not name or name in (".", ".."):
        raise InvalidPathError(f"Invalid node name: {name!r}")
    if "/" in name or "\\" in name or "\0" in name:
        raise InvalidPathError(f"Node name must not contain separators: {name!r}")
    return name


class NodeMutator:
    """Filesystem mutations for path-backed vaults.

    App-managed vaults are edited wholesale through TreeResolver.save, so
    they are rejected here. Hidden entries (metadata) cannot be addressed.
    """

    def __init__(
        self, vaults: VaultsRepo, settings: StorageSettings = DEFAULT_SETTINGS
    ):
        self.vaults = vaults
        self.settings = settings

    def _root(self, vault_id: str) -> Path:
        kind = self.vaults.resolve(vault_id).kind
        if not isinstance(kind, PathBacked):
            raise UnsupportedVaultError(
                f"Vault {vault_id} has no backing directory; edit its tree instead"
            )
        if not kind.available:
            raise UnsupportedVaultError(
                f"Vault {vault_id} directory does not exist: {kind.root}"
            )
        return kind.root

    def _relative(self, node_id: str) -> str:
        # Legacy ids are taken as paths relative to the vault root
        relative = normalize_path(NodeId.parse(node_id).path)
        if self.settings.hides(relative):
            raise NodeNotFoundError(node_id)
        return relative

    def _target(self, root: Path, relative: str) -> Path:
        return ensure_within(root, relative)

    def create(
        self,
        vault_id: str,
        parent_id: str | None,
        name: str,
        kind: NodeKind | str,
    ) -> str:
        """
        Create a folder or an empty file.

        Folders are idempotent. Files are created exclusively, so existing
        content is never truncated.

        Args:
            vault_id: Vault to create the entry in
            parent_id: Folder to create it under, None for the vault root
            name: Entry name (single path component)
            kind: FOLDER creates a directory, anything else an empty file

        Returns:
            Node id of the new entry
        """
        root = self._root(vault_id)
        kind = NodeKind(kind)
        validate_name(name)
        if self.settings.is_hidden(name):
            raise InvalidPathError(f"Name is reserved for vault metadata: {name!r}")

        parent = NodeId(vault_id, self._relative(parent_id) if parent_id else "")
        created = parent.child(name)
        target = self._target(root, created.path)

        try:
            if kind is NodeKind.FOLDER:
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                with open(target, "xb"):
                    pass
        except FileExistsError as e:
            raise NodeExistsError(f"Entry already exists ({e})", target) from e
        except OSError as e:
            raise StorageIOError(f"Failed to create node ({e})", target) from e

        new_id = str(created)
        logger.info("Created %s %s", kind.value, new_id)
        return new_id

    def delete(self, vault_id: str, node_id: str) -> None:
        """Remove a file, or a folder with everything in it. Not reversible."""
        root = self._root(vault_id)
        relative = self._relative(node_id)
        if not relative:
            raise InvalidPathError("Refusing to delete the vault root")
        target = self._target(root, relative)

        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except FileNotFoundError as e:
            raise NodeNotFoundError(node_id, target) from e
        except OSError as e:
            raise StorageIOError(f"Failed to delete node ({e})", target) from e

        logger.info("Deleted %s", node_id)

    def rename(self, vault_id: str, node_id: str, new_name: str) -> str:
        """
        Rename an entry within its folder.

        Returns:
            Node id for the new name

        Raises:
            NodeNotFoundError: If the entry does not exist
            NodeExistsError: If the new name is already taken
            StorageIOError: If the filesystem rejects the rename
        """
        root = self._root(vault_id)
        validate_name(new_name)
        if self.settings.is_hidden(new_name):
            raise InvalidPathError(f"Name is reserved for vault metadata: {new_name!r}")
        relative = self._relative(node_id)
        if not relative:
            raise InvalidPathError("Refusing to rename the vault root")

        old_path = self._target(root, relative)
        renamed = NodeId(vault_id, relative).with_name(new_name)
        new_path = self._target(root, renamed.path)

        if not os.path.lexists(old_path):
            raise NodeNotFoundError(node_id, old_path)
        if new_path != old_path and os.path.lexists(new_path):
            raise NodeExistsError("Rename target already exists", new_path)

        try:
            os.rename(old_path, new_path)
        except FileExistsError as e:
            raise NodeExistsError(f"Rename target exists ({e})", new_path) from e
        except OSError as e:
            raise StorageIOError(f"Failed to rename {old_path} ({e})", new_path) from e

        new_id = str(renamed)
        logger.info("Renamed %s to %s", node_id, new_id)
        return new_id
