"""Contents repository - JSON side documents keyed by node id."""

import logging
from pathlib import Path

from notevault.storage.documents import ReadResult, read_text, write_text
from notevault.vault.layout import DataLayout

logger = logging.getLogger(__name__)


class ContentsRepo:
    """Side documents for node content that has no real file of its own.

    Stored either in the data directory or inside a path-backed vault's
    metadata directory. The payload is opaque text supplied by the caller.
    """

    def __init__(self, layout: DataLayout):
        self.layout = layout

    def location(self, node_id: str, vault_root: Path | None = None) -> Path:
        """Side document path for a node, in the vault when a root is given."""
        if vault_root is not None:
            return self.layout.vault_content_file(vault_root, node_id)
        return self.layout.content_file(node_id)

    def read(self, node_id: str, vault_root: Path | None = None) -> ReadResult:
        return read_text(self.location(node_id, vault_root))

    def write(self, node_id: str, text: str, vault_root: Path | None = None) -> Path:
        path = self.location(node_id, vault_root)
        write_text(path, text)
        logger.debug("Wrote side document for %s at %s", node_id, path)
        return path
