"""notevault - storage and indexing core for a hierarchical note vault."""

__version__ = "0.1.0"
