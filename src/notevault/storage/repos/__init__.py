"""Repositories - one per persisted document kind."""

from notevault.storage.repos.contents_repo import ContentsRepo
from notevault.storage.repos.plugins_repo import PluginsRepo
from notevault.storage.repos.preferences_repo import PreferencesRepo
from notevault.storage.repos.trees_repo import TreesRepo
from notevault.storage.repos.vaults_repo import VaultsRepo

__all__ = [
    "ContentsRepo",
    "PluginsRepo",
    "PreferencesRepo",
    "TreesRepo",
    "VaultsRepo",
]
