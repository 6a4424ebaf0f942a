"""Directory scanner - builds an ordered node tree from a live directory."""

import logging
import os
from pathlib import Path

from notevault.core.config import DEFAULT_SETTINGS, StorageSettings
from notevault.core.errors import StorageIOError
from notevault.core.node_id import NodeId
from notevault.core.types import Node, NodeKind

logger = logging.getLogger(__name__)


def sort_key(node: Node) -> tuple[int, str]:
    """Folders first, then case-sensitive name order."""
    return (0 if node.kind is NodeKind.FOLDER else 1, node.name)


class DirectoryScanner:
    """Walks a vault root and produces its node tree.

    Read-only: nothing under the root is created or modified. Content is never
    loaded during a scan.
    """

    def __init__(self, settings: StorageSettings = DEFAULT_SETTINGS):
        self.settings = settings

    def classify(self, name: str, is_dir: bool) -> NodeKind:
        if is_dir:
            return NodeKind.FOLDER
        if name.endswith(self.settings.canvas_extension):
            return NodeKind.CANVAS
        return NodeKind.FILE

    def scan(self, root: Path, vault_id: str) -> list[Node]:
        """
        Scan `root` recursively.

        Args:
            root: Absolute path of the vault directory
            vault_id: Vault id embedded in every node id

        Returns:
            Top-level nodes, each folder carrying its sorted children

        Raises:
            StorageIOError: If any directory in the tree cannot be listed
        """
        nodes = self._scan_dir(root, root, None, vault_id)
        logger.debug("Scanned %s for vault %s", root, vault_id)
        return nodes

    def _scan_dir(
        self, root: Path, current: Path, parent_id: str | None, vault_id: str
    ) -> list[Node]:
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            raise StorageIOError(f"Failed to list directory ({e})", current) from e

        nodes: list[Node] = []
        for entry in entries:
            if self.settings.is_hidden(entry.name):
                continue

            path = Path(entry.path)
            node_id = str(NodeId.from_path(vault_id, root, path))
            try:
                is_dir = entry.is_dir()
            except OSError as e:
                raise StorageIOError(f"Failed to stat entry ({e})", path) from e

            kind = self.classify(entry.name, is_dir)
            children = self._scan_dir(root, path, node_id, vault_id) if is_dir else None
            nodes.append(
                Node(
                    id=node_id,
                    name=entry.name,
                    kind=kind,
                    children=children,
                    parent_id=parent_id,
                )
            )

        nodes.sort(key=sort_key)
        return nodes
