"""Preferences repository - a flat string-to-string JSON map."""

from notevault.storage.documents import JsonDocument, expect_type
from notevault.vault.layout import DataLayout


class PreferencesRepo:
    """Repository for free-form user preferences."""

    def __init__(self, layout: DataLayout):
        self.document = JsonDocument(
            layout.preferences_file, indent=layout.settings.json_indent
        )

    def all(self) -> dict[str, str]:
        raw = self.document.read(default={})
        return dict(expect_type(self.document.path, raw, dict, "a JSON object"))

    def get(self, key: str) -> str:
        """Get a preference value; empty string when unset."""
        return str(self.all().get(key, ""))

    def set(self, key: str, value: str) -> None:
        with self.document.update(default={}) as prefs:
            expect_type(self.document.path, prefs, dict, "a JSON object")
            prefs[key] = value
