"""Unified entry point for notevault."""

from notevault.core.config import setup_logging


def main():
    """Configure logging and hand over to the CLI."""
    setup_logging()

    from notevault.interfaces.cli.app import app

    app()


if __name__ == "__main__":
    main()
