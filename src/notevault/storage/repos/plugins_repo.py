"""Plugins repository - enabled plugin ids and installed remote plugins."""

import logging
from typing import Any

from notevault.core.errors import MalformedDocumentError
from notevault.storage.documents import JsonDocument, expect_type, remove_file
from notevault.vault.layout import DataLayout

logger = logging.getLogger(__name__)


class PluginsRepo:
    """Repository for plugin id lists (global and per vault) and remote plugins.

    Remote plugin records are JSON objects with at least an "id" key
    (typically also "code" and "manifestUrl").
    """

    def __init__(self, layout: DataLayout):
        self.layout = layout
        self._indent = layout.settings.json_indent

    def _ids(self, document: JsonDocument) -> list[str]:
        raw = document.read(default=[])
        items = expect_type(document.path, raw, list, "a JSON array")
        return [str(item) for item in items]

    def get_global_ids(self) -> list[str]:
        return self._ids(JsonDocument(self.layout.global_plugins_file))

    def save_global_ids(self, ids: list[str]) -> None:
        JsonDocument(self.layout.global_plugins_file, self._indent).write(list(ids))

    def get_workspace_ids(self, vault_id: str) -> list[str]:
        return self._ids(JsonDocument(self.layout.workspace_plugins_file(vault_id)))

    def save_workspace_ids(self, vault_id: str, ids: list[str]) -> None:
        document = JsonDocument(
            self.layout.workspace_plugins_file(vault_id), self._indent
        )
        document.write(list(ids))

    def delete_workspace_ids(self, vault_id: str) -> bool:
        return remove_file(self.layout.workspace_plugins_file(vault_id))

    def _remote(self) -> JsonDocument:
        return JsonDocument(self.layout.remote_plugins_file, self._indent)

    def get_remote_plugins(self) -> list[dict[str, Any]]:
        document = self._remote()
        raw = document.read(default=[])
        return list(expect_type(document.path, raw, list, "a JSON array"))

    def save_remote_plugin(self, plugin: dict[str, Any]) -> None:
        """Insert a remote plugin record, replacing any record with the same id.

        Raises:
            MalformedDocumentError: If the record has no string "id".
        """
        document = self._remote()
        plugin_id = plugin.get("id") if isinstance(plugin, dict) else None
        if not isinstance(plugin_id, str):
            raise MalformedDocumentError(
                document.path, "plugin json must include an 'id' field"
            )

        with document.update(default=[]) as records:
            expect_type(document.path, records, list, "a JSON array")
            for index, record in enumerate(records):
                if isinstance(record, dict) and record.get("id") == plugin_id:
                    records[index] = plugin
                    break
            else:
                records.append(plugin)
        logger.info("Saved remote plugin %s", plugin_id)

    def remove_remote_plugin(self, plugin_id: str) -> None:
        document = self._remote()
        if not document.read(default=[]):
            return
        with document.update(default=[]) as records:
            expect_type(document.path, records, list, "a JSON array")
            records[:] = [
                r
                for r in records
                if not (isinstance(r, dict) and r.get("id") == plugin_id)
            ]
