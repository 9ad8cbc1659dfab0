"""Command-line interface for forbidden-bands."""

from forbidden_bands.cli.app import create_app

__all__ = ["create_app"]
