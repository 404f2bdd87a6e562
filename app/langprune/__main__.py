"""Allow running langprune with ``python -m langprune``."""

from langprune.cli.main import app

if __name__ == "__main__":
    app()
