"""Factory for building the VaultService with all dependencies wired.

Every interface should call build_storage() so they agree on the data
directory and storage settings.
"""

from pathlib import Path

from notevault.core.config import NOTEVAULT_DATA_DIR, StorageSettings, load_settings
from notevault.vault.layout import DataLayout
from notevault.vault.service import VaultService


def build_storage(
    data_dir: Path | str | None = None,
    settings: StorageSettings | None = None,
) -> VaultService:
    """
    Build a fully configured VaultService.

    Args:
        data_dir: Application data directory (defaults to config)
        settings: Storage settings (defaults to notevault.yaml in data_dir)

    Returns:
        VaultService bound to the data directory
    """
    actual_data_dir = Path(data_dir).expanduser() if data_dir else NOTEVAULT_DATA_DIR
    layout = DataLayout(
        data_dir=actual_data_dir,
        settings=settings or load_settings(actual_data_dir),
    )
    layout.ensure()
    return VaultService(layout)
