"""Vault registry repository - the ordered list of vault descriptors."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from pydantic import ValidationError

from notevault.core.errors import MalformedDocumentError, VaultNotFoundError
from notevault.core.types import VaultDescriptor
from notevault.storage.documents import JsonDocument, expect_type, remove_file
from notevault.vault.layout import DataLayout

logger = logging.getLogger(__name__)


class VaultsRepo:
    """Repository for the vault registry (vaults.json).

    The registry is one flat JSON array, rewritten wholesale on every change.
    """

    def __init__(self, layout: DataLayout):
        """
        Initialize vault registry.

        Args:
            layout: Data directory layout holding vaults.json
        """
        self.layout = layout
        self.document = JsonDocument(
            layout.vaults_file, indent=layout.settings.json_indent
        )

    def _parse(self, raw: Any) -> list[VaultDescriptor]:
        items = expect_type(self.document.path, raw, list, "a JSON array")
        try:
            return [VaultDescriptor.model_validate(item) for item in items]
        except ValidationError as e:
            raise MalformedDocumentError(self.document.path, str(e)) from e

    def list(self) -> list[VaultDescriptor]:
        """Return all vaults in registry order; empty when none exist yet."""
        return self._parse(self.document.read(default=[]))

    def get(self, vault_id: str) -> VaultDescriptor | None:
        """Get a vault by id, or None if not registered."""
        return next((v for v in self.list() if v.id == vault_id), None)

    def resolve(self, vault_id: str) -> VaultDescriptor:
        """Get a vault by id.

        Raises:
            VaultNotFoundError: If the id is not registered.
        """
        vault = self.get(vault_id)
        if vault is None:
            raise VaultNotFoundError(vault_id)
        return vault

    def create(self, name: str, path: str | None = None) -> str:
        """Register a new vault and return its id.

        Nothing is created inside `path`; the tree is derived on load.
        """
        vault = VaultDescriptor(id=str(uuid.uuid4()), name=name, backing_path=path)
        with self.document.update(default=[]) as items:
            self._parse(items)
            items.append(vault.to_dict())
        logger.info("Created vault %s (%s) at %s", vault.id, name, path)
        return vault.id

    def save_all(self, vaults: list[VaultDescriptor]) -> None:
        """Overwrite the registry with the given descriptors."""
        self.document.write([v.to_dict() for v in vaults])

    def delete(self, vault_id: str) -> bool:
        """
        Remove a vault and its derived state.

        Drops the registry entry, the app-managed tree document and the
        workspace plugin list. A backing directory is never touched.

        Returns:
            True if the vault was registered
        """
        removed = False
        with self.document.update(default=[]) as items:
            self._parse(items)
            kept = [item for item in items if item.get("id") != vault_id]
            removed = len(kept) != len(items)
            items[:] = kept

        remove_file(self.layout.tree_file(vault_id))
        remove_file(self.layout.workspace_plugins_file(vault_id))

        if removed:
            logger.info("Deleted vault %s", vault_id)
        else:
            logger.debug("Delete requested for unknown vault %s", vault_id)
        return removed
