"""Vault package - scanning, tree resolution, content and node mutations.

A vault is either a real directory chosen by the user (path-backed) or a
tree document kept in the application data directory (app-managed). Import
components from their modules, e.g. notevault.vault.service.VaultService.
"""

from notevault.vault.layout import DataLayout, document_name

__all__ = ["DataLayout", "document_name"]
