"""Tree repository - persisted tree documents for app-managed vaults.

Also reads and writes the optional snapshot kept inside a path-backed vault's
metadata directory.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from notevault.core.errors import MalformedDocumentError
from notevault.core.types import Node, tree_to_json
from notevault.storage.documents import JsonDocument, remove_file
from notevault.vault.layout import DataLayout

logger = logging.getLogger(__name__)

_TREE = TypeAdapter(list[Node])


class TreesRepo:
    """Repository for whole-tree JSON documents."""

    def __init__(self, layout: DataLayout):
        self.layout = layout

    def _document(self, path: Path) -> JsonDocument:
        return JsonDocument(path, indent=self.layout.settings.json_indent)

    def _read(self, path: Path) -> list[Node]:
        raw: Any = self._document(path).read(default=[])
        try:
            return _TREE.validate_python(raw)
        except ValidationError as e:
            raise MalformedDocumentError(path, str(e)) from e

    def get(self, vault_id: str) -> list[Node]:
        """Load the app-managed tree for a vault; empty when none was saved."""
        return self._read(self.layout.tree_file(vault_id))

    def save(self, vault_id: str, tree: list[Node]) -> None:
        """Overwrite the app-managed tree for a vault."""
        path = self.layout.tree_file(vault_id)
        self._document(path).write(tree_to_json(tree))
        logger.debug("Saved tree for vault %s (%d nodes)", vault_id, len(tree))

    def delete(self, vault_id: str) -> bool:
        return remove_file(self.layout.tree_file(vault_id))

    def load_snapshot(self, vault_root: Path) -> list[Node]:
        """Load <vault_root>/<metadata_dir>/tree.json; empty when missing."""
        return self._read(self.layout.snapshot_file(vault_root))

    def save_snapshot(self, vault_root: Path, tree: list[Node]) -> None:
        """Write a tree snapshot next to the user's files."""
        path = self.layout.snapshot_file(vault_root)
        self._document(path).write(tree_to_json(tree))
        logger.debug("Saved tree snapshot at %s", path)
