"""Shared test fixtures and configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from notevault.core.config import StorageSettings
from notevault.vault.layout import DataLayout
from notevault.vault.service import VaultService


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Application data directory for a test."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    """Empty directory to back a path-backed vault."""
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def layout(data_dir: Path) -> DataLayout:
    return DataLayout(data_dir=data_dir, settings=StorageSettings())


@pytest.fixture
def service(layout: DataLayout) -> VaultService:
    return VaultService(layout)


@pytest.fixture
def vault_id(service: VaultService, vault_dir: Path) -> str:
    """Id of a registered path-backed vault over vault_dir."""
    return service.create_vault("Notes", vault_dir)


@pytest.fixture
def app_vault_id(service: VaultService) -> str:
    """Id of a registered app-managed vault."""
    return service.create_vault("Scratch")


@pytest.fixture
def sample_tree() -> list[dict]:
    """App-managed tree document in wire format."""
    return [
        {
            "id": "folder-1",
            "name": "Projects",
            "type": "FOLDER",
            "parentId": None,
            "children": [
                {
                    "id": "note-1",
                    "name": "Plan",
                    "type": "FILE",
                    "parentId": "folder-1",
                    "content": "{\"text\":\"draft\"}",
                },
                {
                    "id": "canvas-1",
                    "name": "Board",
                    "type": "CANVAS",
                    "parentId": "folder-1",
                },
            ],
        },
        {"id": "note-2", "name": "Inbox", "type": "FILE", "parentId": None},
    ]


def write_files(root: Path, files: dict[str, str]) -> None:
    """Create files (and parent folders) below root. Keys ending in / are folders."""
    for relative, content in files.items():
        path = root / relative
        if relative.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def write_json(path: Path, value) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(value))


@pytest.fixture
def make_files():
    """Helper for laying out a directory tree."""
    return write_files


@pytest.fixture
def dump_json():
    """Helper for writing a JSON document to disk."""
    return write_json
