"""Command-line interface for normkit."""

from normkit.cli.main import app

__all__ = ["app"]
