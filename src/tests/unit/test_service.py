"""Tests for the VaultService facade."""

import json
from pathlib import Path

import pytest

from notevault.core.errors import (
    InvalidPathError,
    MalformedDocumentError,
    VaultNotFoundError,
)
from notevault.core.factory import build_storage
from notevault.core.types import AppManaged, Node, NodeKind, PathBacked
from notevault.vault.service import VaultService


class TestBuildStorage:
    """Tests for the build_storage factory."""

    def test_creates_data_directories(self, tmp_path: Path):
        data_dir = tmp_path / "fresh"

        service = build_storage(data_dir)

        assert isinstance(service, VaultService)
        assert data_dir.is_dir()
        assert service.layout.data_dir == data_dir

    def test_reads_settings_file(self, tmp_path: Path):
        data_dir = tmp_path / "data"
        data_dir.mkdir()
        (data_dir / "notevault.yaml").write_text("json_indent: 4\n")

        service = build_storage(data_dir)

        assert service.layout.settings.json_indent == 4


class TestVaultOperations:
    """Vault registry through the facade."""

    def test_create_path_backed(self, service, vault_dir: Path):
        vault_id = service.create_vault("Notes", vault_dir)

        vault = service.get_vault(vault_id)
        assert vault.name == "Notes"
        assert vault.kind == PathBacked(vault_dir)

    def test_create_app_managed(self, service):
        vault_id = service.create_vault("Scratch")

        assert service.get_vault(vault_id).kind == AppManaged()

    def test_relative_path_degrades_to_app_managed(self, service, caplog):
        vault_id = service.create_vault("Rel", "notes/here")

        assert service.get_vault(vault_id).kind == AppManaged()
        assert "not absolute" in caplog.text

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, service, name):
        with pytest.raises(InvalidPathError):
            service.create_vault(name)

        assert service.list_vaults() == []

    def test_ids_are_unique(self, service):
        ids = {service.create_vault(f"V{i}") for i in range(5)}

        assert len(ids) == 5

    def test_get_unknown_vault(self, service):
        with pytest.raises(VaultNotFoundError):
            service.get_vault("missing")

    def test_list_keeps_registration_order(self, service):
        first = service.create_vault("B")
        second = service.create_vault("A")

        assert [v.id for v in service.list_vaults()] == [first, second]

    def test_delete_vault(self, service, app_vault_id, sample_tree):
        service.save_tree(app_vault_id, sample_tree)
        service.plugins.save_workspace_ids(app_vault_id, ["p1"])

        assert service.delete_vault(app_vault_id) is True

        assert service.list_vaults() == []
        assert service.load_tree(app_vault_id) == []
        assert service.plugins.get_workspace_ids(app_vault_id) == []

    def test_delete_unknown_vault(self, service):
        assert service.delete_vault("missing") is False

    def test_save_vaults_overwrites(self, service):
        service.create_vault("A")
        keep = service.create_vault("B")
        vaults = [v for v in service.list_vaults() if v.id == keep]

        service.save_vaults(vaults)

        assert [v.id for v in service.list_vaults()] == [keep]


class TestTreeOperations:
    """Tree load and save through the facade."""

    def test_app_managed_round_trip(self, service, app_vault_id, sample_tree):
        assert service.save_tree(app_vault_id, sample_tree) is True

        loaded = service.load_tree(app_vault_id)

        assert [n.id for n in loaded] == ["folder-1", "note-2"]
        plan, board = loaded[0].children
        assert plan.content == "{\"text\":\"draft\"}"
        assert board.kind is NodeKind.CANVAS
        assert board.parent_id == "folder-1"

    def test_accepts_node_models(self, service, app_vault_id):
        tree = [Node(id="n", name="N", kind=NodeKind.FILE)]

        service.save_tree(app_vault_id, tree)

        assert service.load_tree(app_vault_id)[0].id == "n"

    def test_invalid_tree_rejected(self, service, app_vault_id):
        with pytest.raises(MalformedDocumentError):
            service.save_tree(app_vault_id, [{"id": "x", "type": "FILE"}])

    def test_path_backed_save_is_noop(self, service, vault_id, sample_tree):
        assert service.save_tree(vault_id, sample_tree) is False

        assert not service.layout.tree_file(vault_id).exists()

    def test_path_backed_load_scans(self, service, vault_id, vault_dir, make_files):
        make_files(vault_dir, {"b.md": "", "a/": "", ".hidden": ""})

        tree = service.load_tree(vault_id)

        assert [(n.name, n.kind) for n in tree] == [
            ("a", NodeKind.FOLDER),
            ("b.md", NodeKind.FILE),
        ]


class TestSnapshot:
    """Snapshot stored inside a path-backed vault."""

    def test_save_and_load(self, service, vault_id, vault_dir, make_files):
        make_files(vault_dir, {"docs/a.md": "", "b.canvas": ""})

        saved = service.save_snapshot(vault_id)

        snapshot_file = vault_dir / ".notevault" / "tree.json"
        assert snapshot_file.is_file()
        assert json.loads(snapshot_file.read_text())[0]["name"] == "docs"
        assert [n.to_dict() for n in service.load_snapshot(vault_id)] == [
            n.to_dict() for n in saved
        ]

    def test_snapshot_not_in_scanned_tree(self, service, vault_id, make_files, vault_dir):
        make_files(vault_dir, {"a.md": ""})
        service.save_snapshot(vault_id)

        assert [n.name for n in service.load_tree(vault_id)] == ["a.md"]

    def test_load_without_snapshot(self, service, vault_id):
        assert service.load_snapshot(vault_id) == []

    def test_app_managed_has_no_snapshot(self, service, app_vault_id):
        assert service.load_snapshot(app_vault_id) == []

        with pytest.raises(InvalidPathError):
            service.save_snapshot(app_vault_id)


class TestContentOperations:
    """Content through the facade."""

    def test_direct_content(self, service, vault_id, vault_dir):
        node_id = service.create_node(vault_id, None, "a.md")

        path = service.save_content(node_id, "# Title")

        assert path == vault_dir / "a.md"
        assert service.load_content(node_id) == "# Title"

    def test_missing_and_empty_are_distinct(self, service, vault_id):
        node_id = f"{vault_id}:later.md"

        assert service.read_content(node_id).found is False
        assert service.load_content(node_id) == ""

        service.save_content(node_id, "")

        assert service.read_content(node_id).found is True
        assert service.read_content(node_id).blank is True

    def test_legacy_content_in_data_dir(self, service, data_dir):
        path = service.save_content("note-1", "{\"ops\":[]}")

        assert path.parent == data_dir / "contents"
        assert service.load_content("note-1") == "{\"ops\":[]}"


class TestNodeOperations:
    """Create, rename and delete through the facade."""

    def test_lifecycle(self, service, vault_id, vault_dir):
        folder = service.create_node(vault_id, None, "docs", NodeKind.FOLDER)
        note = service.create_node(vault_id, folder, "a.md")
        renamed = service.rename_node(vault_id, note, "b.md")

        assert renamed == f"{vault_id}:docs/b.md"
        assert [n.id for n in service.load_tree(vault_id)[0].children] == [renamed]

        service.delete_node(vault_id, folder)

        assert service.load_tree(vault_id) == []
        assert list(vault_dir.iterdir()) == []


class TestPreferences:
    """Preferences through the facade."""

    def test_unset_is_empty(self, service):
        assert service.get_preference("theme") == ""

    def test_set_then_get(self, service):
        service.save_preference("theme", "dark")
        service.save_preference("theme", "light")

        assert service.get_preference("theme") == "light"
