"""VaultService - one object exposing every storage operation.

Interfaces (CLI, desktop bridge) talk to this facade instead of wiring
repositories themselves. Tree documents cross this boundary as JSON-shaped
lists of dicts; node ids cross it as their text form.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from notevault.core.errors import InvalidPathError, MalformedDocumentError
from notevault.core.types import Node, NodeKind, VaultDescriptor
from notevault.storage.documents import ReadResult
from notevault.storage.repos import (
    ContentsRepo,
    PluginsRepo,
    PreferencesRepo,
    TreesRepo,
    VaultsRepo,
)
from notevault.vault.content import ContentStore
from notevault.vault.layout import DataLayout
from notevault.vault.mutator import NodeMutator
from notevault.vault.resolver import TreeResolver
from notevault.vault.scanner import DirectoryScanner

logger = logging.getLogger(__name__)

_TREE = TypeAdapter(list[Node])


class VaultService:
    """Storage facade over vaults, trees, content, preferences and plugins."""

    def __init__(self, layout: DataLayout):
        """
        Initialize the service and all of its components.

        Args:
            layout: Data directory layout (and storage settings) to operate on
        """
        self.layout = layout
        settings = layout.settings

        self.vaults = VaultsRepo(layout)
        self.trees = TreesRepo(layout)
        self.contents = ContentsRepo(layout)
        self.preferences = PreferencesRepo(layout)
        self.plugins = PluginsRepo(layout)

        self.scanner = DirectoryScanner(settings)
        self.resolver = TreeResolver(self.vaults, self.trees, self.scanner)
        self.content = ContentStore(self.vaults, self.trees, self.contents, settings)
        self.mutator = NodeMutator(self.vaults, settings)

    # --- Vaults ---

    def list_vaults(self) -> list[VaultDescriptor]:
        return self.vaults.list()

    def create_vault(self, name: str, path: str | Path | None = None) -> str:
        """Register a vault; `path` should be absolute to make it path-backed."""
        if not name.strip():
            raise InvalidPathError("Vault name must not be empty")
        backing = str(path) if path is not None else None
        if backing is not None and not Path(backing).is_absolute():
            logger.warning(
                "Vault path %s is not absolute, vault %s will be app-managed",
                backing,
                name,
            )
        return self.vaults.create(name, backing)

    def get_vault(self, vault_id: str) -> VaultDescriptor:
        return self.vaults.resolve(vault_id)

    def delete_vault(self, vault_id: str) -> bool:
        return self.vaults.delete(vault_id)

    def save_vaults(self, vaults: list[VaultDescriptor]) -> None:
        self.vaults.save_all(vaults)

    # --- Trees ---

    def load_tree(self, vault_id: str) -> list[Node]:
        return self.resolver.load(vault_id)

    def save_tree(self, vault_id: str, tree: list[Node] | list[dict[str, Any]]) -> bool:
        return self.resolver.save(vault_id, self._coerce_tree(tree))

    def load_snapshot(self, vault_id: str) -> list[Node]:
        """Tree snapshot stored inside a path-backed vault; empty otherwise."""
        root = self.vaults.resolve(vault_id).root
        return self.trees.load_snapshot(root) if root is not None else []

    def save_snapshot(self, vault_id: str) -> list[Node]:
        """Scan a path-backed vault and store the result as its snapshot."""
        root = self.vaults.resolve(vault_id).root
        if root is None or not root.is_dir():
            raise InvalidPathError(f"Vault {vault_id} has no available directory")
        tree = self.scanner.scan(root, vault_id)
        self.trees.save_snapshot(root, tree)
        return tree

    # --- Content ---

    def load_content(self, node_id: str) -> str:
        return self.content.load(node_id)

    def read_content(self, node_id: str) -> ReadResult:
        return self.content.read(node_id)

    def save_content(self, node_id: str, text: str) -> Path:
        return self.content.save(node_id, text)

    # --- Nodes ---

    def create_node(
        self,
        vault_id: str,
        parent_id: str | None,
        name: str,
        kind: NodeKind | str = NodeKind.FILE,
    ) -> str:
        return self.mutator.create(vault_id, parent_id, name, kind)

    def delete_node(self, vault_id: str, node_id: str) -> None:
        self.mutator.delete(vault_id, node_id)

    def rename_node(self, vault_id: str, node_id: str, new_name: str) -> str:
        return self.mutator.rename(vault_id, node_id, new_name)

    # --- Preferences ---

    def get_preference(self, key: str) -> str:
        return self.preferences.get(key)

    def save_preference(self, key: str, value: str) -> None:
        self.preferences.set(key, value)

    def _coerce_tree(self, tree: list[Node] | list[dict[str, Any]]) -> list[Node]:
        try:
            return _TREE.validate_python(tree)
        except ValidationError as e:
            raise MalformedDocumentError("<tree>", str(e)) from e
