"""Tree resolver - picks between scanning a directory and loading a document.

For a path-backed vault whose directory exists, the filesystem is the only
source of truth and the tree is re-derived on every load. In every other case
(app-managed vault, unknown vault, or a path-backed vault whose directory is
currently unavailable) the persisted tree document is authoritative.
"""

import logging

from notevault.core.types import AppManaged, Node, PathBacked, VaultKind
from notevault.storage.repos import TreesRepo, VaultsRepo
from notevault.vault.scanner import DirectoryScanner

logger = logging.getLogger(__name__)


class TreeResolver:
    """Loads and saves vault trees."""

    def __init__(
        self, vaults: VaultsRepo, trees: TreesRepo, scanner: DirectoryScanner
    ):
        self.vaults = vaults
        self.trees = trees
        self.scanner = scanner

    def kind_of(self, vault_id: str) -> VaultKind:
        """Backing mode of a vault; unknown ids count as app-managed."""
        vault = self.vaults.get(vault_id)
        if vault is None:
            logger.debug("Vault %s not registered, using app-managed tree", vault_id)
            return AppManaged()
        return vault.kind

    def load(self, vault_id: str) -> list[Node]:
        kind = self.kind_of(vault_id)
        if isinstance(kind, PathBacked):
            if kind.available:
                return self.scanner.scan(kind.root, vault_id)
            logger.warning(
                "Vault %s directory %s is unavailable, using persisted tree",
                vault_id,
                kind.root,
            )
        return self.trees.get(vault_id)

    def save(self, vault_id: str, tree: list[Node]) -> bool:
        """
        Persist a tree document.

        Returns:
            False when skipped because the vault's directory is authoritative
        """
        kind = self.kind_of(vault_id)
        if isinstance(kind, PathBacked) and kind.available:
            logger.debug("Vault %s is path-backed, not saving tree", vault_id)
            return False
        self.trees.save(vault_id, tree)
        return True
