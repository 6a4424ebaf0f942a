"""Content store - maps node ids to where their content lives.

Resolution order for a node id:

1. "<vault_id>:<path>" where the vault is path-backed: the real file at
   <root>/<path>.
2. Any other id found in the persisted tree of a path-backed vault: a side
   document at <root>/<metadata_dir>/contents/<id>.json.
3. Otherwise: a side document at <data_dir>/contents/<id>.json.
"""

import logging
from pathlib import Path

from notevault.core.config import DEFAULT_SETTINGS, StorageSettings
from notevault.core.errors import InvalidPathError, UnsupportedVaultError
from notevault.core.node_id import NodeId, normalize_path
from notevault.core.types import Node, PathBacked, VaultDescriptor, find_node
from notevault.storage.documents import ReadResult, read_text, write_text
from notevault.storage.repos import ContentsRepo, TreesRepo, VaultsRepo

logger = logging.getLogger(__name__)


def ensure_within(root: Path, relative: str) -> Path:
    """Join a vault-relative posix path onto `root` without leaving it.

    Checked lexically, so symlinked entries inside the vault stay
    addressable like any other entry the scanner lists.
    """
    segments = [s for s in normalize_path(relative).split("/") if s]
    if ".." in segments:
        raise InvalidPathError(f"Path escapes vault root: {relative}")
    target = root.joinpath(*segments)
    if not target.is_relative_to(root):
        raise InvalidPathError(f"Path escapes vault root: {relative}")
    return target


class ContentStore:
    """Reads and writes node content."""

    def __init__(
        self,
        vaults: VaultsRepo,
        trees: TreesRepo,
        contents: ContentsRepo,
        settings: StorageSettings = DEFAULT_SETTINGS,
    ):
        self.vaults = vaults
        self.trees = trees
        self.contents = contents
        self.settings = settings

    def _direct_path(self, node_id: NodeId) -> Path | None:
        if node_id.is_legacy:
            return None
        vault = self.vaults.get(node_id.vault_id)
        if vault is None or not isinstance(vault.kind, PathBacked):
            return None
        if self.settings.hides(node_id.path):
            raise InvalidPathError(f"Hidden entries have no content: {node_id}")
        return ensure_within(vault.root, node_id.path)

    def _persisted_trees(self, vault: VaultDescriptor) -> list[list[Node]]:
        trees = [self.trees.get(vault.id)]
        if vault.root is not None and vault.root.is_dir():
            trees.insert(0, self.trees.load_snapshot(vault.root))
        return trees

    def find_owning_root(self, node_id: str) -> Path | None:
        """
        Find the path-backed vault whose persisted tree holds `node_id`.

        Walks every registered vault's persisted tree and stops at the first
        match, so cost grows with vault count and tree size.
        """
        for vault in self.vaults.list():
            if vault.root is None:
                continue
            trees = self._persisted_trees(vault)
            if any(find_node(t, node_id) is not None for t in trees):
                logger.debug("Legacy id %s belongs to vault %s", node_id, vault.id)
                return vault.root
        return None

    def locate(self, node_id: str) -> Path:
        """Physical location of the content for `node_id`."""
        direct = self._direct_path(NodeId.parse(node_id))
        if direct is not None:
            return direct
        return self.contents.location(node_id, self.find_owning_root(node_id))

    def read(self, node_id: str) -> ReadResult:
        """Read content, keeping a missing file distinct from empty text."""
        direct = self._direct_path(NodeId.parse(node_id))
        if direct is not None:
            return read_text(direct)
        return self.contents.read(node_id, self.find_owning_root(node_id))

    def load(self, node_id: str) -> str:
        """Read content; empty string when nothing has been saved yet."""
        return self.read(node_id).text_or_empty()

    def save(self, node_id: str, text: str) -> Path:
        """Write content, overwriting whatever is there.

        Raises:
            UnsupportedVaultError: If the content belongs under the directory
                of a path-backed vault that is currently missing
        """
        parsed = NodeId.parse(node_id)
        direct = self._direct_path(parsed)
        if direct is not None:
            self._require_available(self.vaults.resolve(parsed.vault_id).root)
            write_text(direct, text)
            logger.debug("Saved content for %s at %s", node_id, direct)
            return direct

        owning_root = self.find_owning_root(node_id)
        if owning_root is not None:
            self._require_available(owning_root)
        return self.contents.write(node_id, text, owning_root)

    def _require_available(self, root: Path) -> None:
        # A missing root is never recreated by a content write
        if not root.is_dir():
            raise UnsupportedVaultError(f"Vault directory does not exist: {root}")
