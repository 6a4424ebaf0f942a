"""User-facing interfaces for notevault."""
