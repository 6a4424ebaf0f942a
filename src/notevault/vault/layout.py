"""Data directory layout and vault metadata path helpers.

Application data directory:

    vaults.json                 vault registry
    trees/<vault_id>.json       app-managed tree documents
    contents/<node_id>.json     side documents for opaque node ids
    workspace_plugins/<vault_id>.json
    global_plugins.json
    remote_plugins.json
    preferences.json

Inside a path-backed vault, the metadata directory (".notevault" by default)
holds an optional tree.json snapshot and contents/<node_id>.json side
documents for legacy ids.
"""

from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote

from notevault.core.config import DEFAULT_SETTINGS, NOTEVAULT_DATA_DIR, StorageSettings
from notevault.core.errors import StorageIOError


def document_name(key: str) -> str:
    """File name for a JSON document keyed by an arbitrary id.

    Plain ids (uuids, slugs) map to "<id>.json" unchanged; separators and
    other unsafe characters are percent-encoded so the key stays one file.
    """
    return f"{quote(key, safe='-_.~')}.json"


@dataclass(frozen=True)
class DataLayout:
    """Paths inside the application data directory."""

    data_dir: Path = NOTEVAULT_DATA_DIR
    settings: StorageSettings = field(default=DEFAULT_SETTINGS)

    @property
    def vaults_file(self) -> Path:
        return self.data_dir / "vaults.json"

    @property
    def trees_dir(self) -> Path:
        return self.data_dir / "trees"

    @property
    def contents_dir(self) -> Path:
        return self.data_dir / "contents"

    @property
    def workspace_plugins_dir(self) -> Path:
        return self.data_dir / "workspace_plugins"

    @property
    def global_plugins_file(self) -> Path:
        return self.data_dir / "global_plugins.json"

    @property
    def remote_plugins_file(self) -> Path:
        return self.data_dir / "remote_plugins.json"

    @property
    def preferences_file(self) -> Path:
        return self.data_dir / "preferences.json"

    def tree_file(self, vault_id: str) -> Path:
        return self.trees_dir / document_name(vault_id)

    def content_file(self, node_id: str) -> Path:
        return self.contents_dir / document_name(node_id)

    def workspace_plugins_file(self, vault_id: str) -> Path:
        return self.workspace_plugins_dir / document_name(vault_id)

    # --- Inside a path-backed vault ---

    def metadata_dir(self, vault_root: Path) -> Path:
        return vault_root / self.settings.metadata_dir

    def snapshot_file(self, vault_root: Path) -> Path:
        return self.metadata_dir(vault_root) / "tree.json"

    def vault_content_file(self, vault_root: Path, node_id: str) -> Path:
        return self.metadata_dir(vault_root) / "contents" / document_name(node_id)

    def ensure(self) -> None:
        """Create the data directory. Safe to call multiple times."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(
                f"Failed to create data directory ({e})", self.data_dir
            ) from e
